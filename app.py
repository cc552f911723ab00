import streamlit as st

from quotecraft import config
from quotecraft.catalog import load_products, load_sales_tax
from quotecraft.customers import load_customers
from quotecraft.store import QuoteStore
from quotecraft.workflow import new_draft

# ----------------- UI CONFIG -----------------
config.configure_logging()
st.set_page_config(page_title="QuoteCraft", page_icon="🪟", layout="wide")
st.title("🪟 QuoteCraft")
st.caption("Price quotes for glass fabrication.")

# ----------------- STATE -----------------
if "draft" not in st.session_state:
    st.session_state.draft = new_draft()
if "draft_rev" not in st.session_state:
    st.session_state.draft_rev = 0

# ----------------- MAIN MENU -----------------
c1, c2 = st.columns(2)
with c1:
    if st.button("📝 Create New Quote", use_container_width=True):
        st.session_state.draft = new_draft()
        st.session_state.draft_rev += 1
        st.switch_page("pages/01_Create_Quote.py")
    if st.button("📂 Open Existing Quote", use_container_width=True):
        st.session_state.pop("quote_index", None)
        st.switch_page("pages/02_Open_Quote.py")
with c2:
    if st.button("🧱 Configure Products", use_container_width=True):
        st.switch_page("pages/03_Configure_Products.py")
    if st.button("👥 Manage Customers", use_container_width=True):
        st.switch_page("pages/04_Manage_Customers.py")

st.markdown("---")
try:
    products = load_products()
    customers = load_customers()
except Exception as e:
    st.error(f"Error reading data files: {e}")
    st.stop()

m1, m2, m3, m4 = st.columns(4)
m1.metric("Saved quotes", len(QuoteStore().list()))
m2.metric("Products", len(products))
m3.metric("Customers", len(customers))
m4.metric("Sales tax", f"{load_sales_tax():.2f} %")
st.caption(f"Data directory: `{config.DATA_DIR}`")
