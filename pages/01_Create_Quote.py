import streamlit as st
import pandas as pd

from quotecraft import config
from quotecraft.catalog import find_product, load_products, load_sales_tax
from quotecraft.customers import find_customer, load_customers
from quotecraft.pricing import line_total, price_quote
from quotecraft.report import quote_pdf
from quotecraft.store import QuoteStore
from quotecraft.workflow import (
    DIMENSION_FIELDS,
    add_product,
    build_quote,
    new_draft,
    remove_product,
    submit,
    update_product,
)

config.configure_logging()
st.set_page_config(page_title="Quote", page_icon="📝", layout="wide")

if "draft" not in st.session_state:
    st.session_state.draft = new_draft()
if "draft_rev" not in st.session_state:
    st.session_state.draft_rev = 0

draft = st.session_state.draft
rev = st.session_state.draft_rev
store = QuoteStore()

if draft.read_only:
    st.title(f"Quote #{draft.quote_number}")
elif draft.is_saved:
    st.title(f"Edit Quote #{draft.quote_number}")
else:
    st.title("Create New Quote")
    st.caption("Enter the details for your new quote.")

c1, c2 = st.columns([1, 5])
with c1:
    if st.button("Main Menu"):
        st.switch_page("app.py")
with c2:
    if st.button("New Quote"):
        st.session_state.draft = new_draft()
        st.session_state.draft_rev += 1
        st.rerun()

try:
    available = load_products()
except Exception as e:
    st.error(f"Could not load product list: {e}")
    available = []
try:
    customers = load_customers()
except (OSError, ValueError) as e:
    st.error(f"Could not load customer list: {e}")
    customers = []

# ---- Quote fields ---------------------------------------------------------------
ro = draft.read_only
draft.customer_name = st.text_input("Customer Name", value=draft.customer_name, key=f"cust_{rev}", disabled=ro)
draft.project_name = st.text_input("Project Name", value=draft.project_name, key=f"proj_{rev}", disabled=ro)
draft.description = st.text_area("Description", value=draft.description, key=f"desc_{rev}", disabled=ro)

# ---- Products -------------------------------------------------------------------
if not ro:
    st.markdown("### Products")
    p1, p2 = st.columns([3, 1])
    with p1:
        choice = st.selectbox(
            "Select a product",
            [p.description for p in available],
            index=None,
            placeholder="Select a product",
        )
    with p2:
        st.write("")
        if st.button("Add Product"):
            product = find_product(available, choice) if choice else None
            if product is None:
                st.warning("Please select a product")
            else:
                add_product(draft, product)
                st.session_state.draft_rev += 1
                st.rerun()

labels = {"length_feet": "Length (Ft)", "length_inches": "Length (In)",
          "width_feet": "Width (Ft)", "width_inches": "Width (In)"}

if not draft.products:
    st.info("No products on this quote yet.")
elif ro:
    rows = [{
        "Description": it.product_description,
        **{labels[f]: getattr(it, f) for f in DIMENSION_FIELDS},
        "Price/Sq. Ft.": f"${it.price:.2f}",
        "Total": f"${line_total(it):.2f}",
    } for it in draft.products]
    st.dataframe(pd.DataFrame(rows), use_container_width=True)
else:
    for i, item in enumerate(list(draft.products)):
        cols = st.columns([3, 1, 1, 1, 1, 1, 1, 1])
        cols[0].write(item.product_description)
        for j, f in enumerate(DIMENSION_FIELDS, start=1):
            val = cols[j].number_input(labels[f], min_value=0.0, value=float(getattr(item, f)),
                                       step=1.0, key=f"{f}_{i}_{rev}")
            if val != getattr(item, f):
                update_product(draft, i, f, val)
        cols[5].write(f"${item.price:.2f}/sq ft")
        cols[6].write(f"${line_total(draft.products[i]):.2f}")
        if cols[7].button("🗑️", key=f"rm_{i}_{rev}"):
            remove_product(draft, i)
            st.session_state.draft_rev += 1
            st.rerun()

# ---- Totals ---------------------------------------------------------------------
tax_rate = load_sales_tax()
customer = find_customer(customers, draft.customer_name)
tax_exempt = bool(customer and customer.tax_exempt)
priced = price_quote(draft.products, tax_rate, tax_exempt)
t1, t2, t3 = st.columns(3)
t1.metric("Subtotal", f"${priced['subtotal']:.2f}")
t2.metric("Sales tax" + (" (exempt)" if tax_exempt else f" ({tax_rate:g}%)"), f"${priced['tax']:.2f}")
t3.metric("Total", f"${priced['total']:.2f}")

# ---- Save / print ---------------------------------------------------------------
flash = st.session_state.pop("draft_flash", None)
if flash:
    st.success(flash)

if not ro:
    label = "Save Changes" if draft.is_saved else "Create Quote"
    if st.button(label, type="primary"):
        result = submit(draft, store)
        if result:
            st.session_state.pop("quote_index", None)
            st.session_state.draft_flash = result.message
            st.rerun()
        else:
            st.error(f"Error saving quote: {result.message}")

if draft.is_saved:
    try:
        pdf = quote_pdf(build_quote(draft), tax_rate=tax_rate, tax_exempt=tax_exempt)
    except ValueError as e:
        st.warning(f"Cannot print quote: {e}")
    else:
        st.download_button("📄 Print Quote (PDF)", data=pdf,
                           file_name=f"quote-{draft.quote_number}.pdf", mime="application/pdf")
