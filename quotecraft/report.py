from __future__ import annotations
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Table, TableStyle, Spacer

from quotecraft.models import Quote
from quotecraft.pricing import line_total, price_quote


def money(v: float) -> str:
    return f"${v:,.2f}"

def _fmt_num(v: float) -> str:
    return f"{v:g}"

def quote_pdf(quote: Quote, tax_rate: Optional[float] = None, tax_exempt: bool = False) -> bytes:
    """Printable version of a quote: header, line items, totals.

    Without a tax rate only the stored total is shown.
    """
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=letter, title=f"Quote {quote.quote_number or ''}".strip())
    styles = getSampleStyleSheet()
    elems = []

    header = "Quote"
    if quote.quote_number:
        header += f" #{quote.quote_number}"
    elems.append(Paragraph(header, styles["Title"]))
    elems.append(Paragraph(f"Customer: {escape(quote.customer_name)}", styles["Normal"]))
    elems.append(Paragraph(f"Project: {escape(quote.project_name)}", styles["Normal"]))
    if quote.description:
        elems.append(Paragraph(escape(quote.description), styles["Normal"]))
    elems.append(Spacer(1, 8))

    if not quote.products:
        elems.append(Paragraph("No products on this quote.", styles["Normal"]))
    else:
        data = [["Description", "Length (Ft)", "Length (In)", "Width (Ft)", "Width (In)", "Price/Sq. Ft.", "Total"]]
        for item in quote.products:
            data.append([
                item.product_description,
                _fmt_num(item.length_feet),
                _fmt_num(item.length_inches),
                _fmt_num(item.width_feet),
                _fmt_num(item.width_inches),
                money(item.price),
                money(line_total(item)),
            ])

        t = Table(data, hAlign="LEFT")
        t.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
        ]))
        elems.append(t)
    elems.append(Spacer(1, 8))

    if tax_rate is None:
        elems.append(Paragraph(f"<b>Total: {money(quote.total)}</b>", styles["Normal"]))
    else:
        priced = price_quote(quote.products, tax_rate, tax_exempt)
        elems.append(Paragraph(f"Subtotal: {money(priced['subtotal'])}", styles["Normal"]))
        tax_label = "Sales tax (exempt)" if tax_exempt else f"Sales tax ({_fmt_num(tax_rate)}%)"
        elems.append(Paragraph(f"{tax_label}: {money(priced['tax'])}", styles["Normal"]))
        elems.append(Paragraph(f"<b>Total: {money(priced['total'])}</b>", styles["Normal"]))

    doc.build(elems)
    pdf = buf.getvalue()
    buf.close()
    return pdf
