import streamlit as st
from pydantic import ValidationError

from quotecraft import config
from quotecraft.catalog import (
    add_product,
    import_products,
    load_products,
    load_sales_tax,
    products_frame,
    remove_product,
    replace_product,
    save_products,
    save_sales_tax,
)
from quotecraft.models import CatalogProduct

config.configure_logging()
st.set_page_config(page_title="Configure Products", page_icon="🧱", layout="wide")
st.title("Configure Product List")
st.caption("Add, manage, and update product details.")

if st.button("Main Menu"):
    st.switch_page("app.py")

# ---- Sales tax --------------------------------------------------------------------
with st.form("tax_form"):
    rate = st.number_input("Sales Tax Rate (%)", min_value=0.0, value=float(load_sales_tax()), step=0.25)
    if st.form_submit_button("Save Sales Tax Rate"):
        try:
            save_sales_tax(rate)
            st.success(f"Sales Tax Rate updated to {rate:g}%")
        except OSError as e:
            st.error(f"Error saving sales tax rate: {e}")

# ---- Product list -----------------------------------------------------------------
try:
    products = load_products()
except (OSError, ValueError) as e:
    st.error(f"Could not load product list: {e}")
    st.stop()

def _persist(updated, ok_msg: str) -> None:
    try:
        save_products(updated)
    except OSError as e:
        st.error(f"Could not save product list: {e}")
        return
    st.success(ok_msg)

editing = st.session_state.get("editing_product")
current = products[editing] if editing is not None and editing < len(products) else None

with st.form("product_form", clear_on_submit=True):
    st.subheader("Edit product" if current else "Add product")
    desc = st.text_input("Description", value=current.description if current else "")
    price = st.number_input("Price per Sq. Ft.", min_value=0.0,
                            value=float(current.square_footage_price) if current else 0.0, step=0.5)
    dims = st.text_input("Dimensions (optional)", value=(current.dimensions or "") if current else "")
    if st.form_submit_button("Update Product" if current else "Add Product"):
        try:
            prod = CatalogProduct(description=desc.strip(), square_footage_price=price, dimensions=dims or None)
        except ValidationError:
            st.error("Description must be at least 2 characters and price must be a positive number.")
        else:
            if current:
                _persist(replace_product(products, editing, prod), "Product updated successfully!")
                st.session_state.editing_product = None
            else:
                _persist(add_product(products, prod), "Product added successfully!")
            products = load_products()

if not products:
    st.info("No products configured.")
else:
    st.dataframe(products_frame(products), use_container_width=True)
    sel = st.selectbox("Product", range(len(products)), format_func=lambda i: products[i].description)
    b1, b2 = st.columns(2)
    if b1.button("✏️ Edit"):
        st.session_state.editing_product = sel
        st.rerun()
    if b2.button("🗑️ Delete"):
        _persist(remove_product(products, sel), "Product deleted successfully!")
        st.session_state.editing_product = None
        st.rerun()

# ---- Import -----------------------------------------------------------------------
with st.sidebar:
    st.subheader("Import / Replace Product List")
    up = st.file_uploader("Spreadsheet (.xlsx or .csv)", type=["xlsx", "csv"])
    if up is not None and st.button("Replace product list"):
        try:
            imported = import_products(up.read(), up.name)
        except ValueError as e:
            st.error(f"Could not import {up.name}: {e}")
        else:
            _persist(imported, f"Imported {len(imported)} products.")
