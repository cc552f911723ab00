import pytest
from pydantic import ValidationError

from quotecraft.models import ProductLineItem, Quote


def test_quote_reads_camel_case_documents():
    q = Quote.model_validate({
        "customerName": "Acme",
        "projectName": "Lobby",
        "products": [{"productDescription": "Clear", "lengthFeet": 1, "lengthInches": 0,
                      "widthFeet": 1, "widthInches": 0, "price": 2}],
        "total": 2,
        "quoteNumber": "0101250900",
    })
    assert q.customer_name == "Acme"
    assert q.products[0].length_feet == 1
    assert q.description is None


@pytest.mark.parametrize("field", ["customer_name", "project_name"])
def test_names_need_two_characters(field):
    data = {"customer_name": "Acme", "project_name": "Lobby", field: "A"}
    with pytest.raises(ValidationError):
        Quote(**data)


def test_negative_dimensions_rejected():
    with pytest.raises(ValidationError):
        ProductLineItem(product_description="Clear", length_feet=-1, price=1)
    with pytest.raises(ValidationError):
        ProductLineItem(product_description="Clear", price=-0.01)
