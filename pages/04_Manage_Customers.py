import streamlit as st

from quotecraft import config
from quotecraft.customers import (
    CustomerNotFoundError,
    add_customer,
    customers_frame,
    delete_customer,
    load_customers,
    update_customer,
)

config.configure_logging()
st.set_page_config(page_title="Manage Customers", page_icon="👥", layout="wide")
st.title("Manage Customers")

if st.button("Main Menu"):
    st.switch_page("app.py")

def _customer_fields(prefix: str, cust=None) -> dict:
    return {
        "company_name": st.text_input("Company Name", value=cust.company_name if cust else "", key=f"{prefix}_co"),
        "representative_name": st.text_input("Representative Name", value=cust.representative_name if cust else "", key=f"{prefix}_rep"),
        "address": st.text_input("Address", value=cust.address if cust else "", key=f"{prefix}_addr"),
        "phone": st.text_input("Phone", value=cust.phone if cust else "", key=f"{prefix}_phone"),
        "email": st.text_input("Email", value=cust.email if cust else "", key=f"{prefix}_email"),
        "tax_exempt": st.checkbox("Tax Exempt", value=cust.tax_exempt if cust else False, key=f"{prefix}_tax"),
    }

flash = st.session_state.pop("customer_flash", None)
if flash:
    st.success(flash)

with st.form("add_customer", clear_on_submit=True):
    st.subheader("Add customer")
    fields = _customer_fields("new")
    if st.form_submit_button("Add Customer"):
        try:
            add_customer(fields)
            st.success("Customer added.")
        except (OSError, ValueError) as e:
            st.error(f"Error adding customer: {e}")

try:
    customers = load_customers()
except (OSError, ValueError) as e:
    st.error(f"Could not load customer list: {e}")
    st.stop()
if not customers:
    st.info("No customers yet.")
    st.stop()

st.dataframe(customers_frame(customers).rename(columns={"tax_exempt": "Tax Exempt"}), use_container_width=True)

sel = st.selectbox("Customer", range(len(customers)),
                   format_func=lambda i: f"{customers[i].company_name} ({customers[i].representative_name})")
cust = customers[sel]

with st.form(f"edit_{cust.id}"):
    st.subheader("Edit customer")
    fields = _customer_fields(f"edit_{cust.id}", cust)
    c1, c2 = st.columns(2)
    save = c1.form_submit_button("Save")
    remove = c2.form_submit_button("Delete")

try:
    if save:
        update_customer(cust.model_copy(update=fields))
        st.session_state.customer_flash = "Customer updated."
        st.rerun()
    if remove:
        delete_customer(cust.id)
        st.session_state.customer_flash = "Customer deleted."
        st.rerun()
except CustomerNotFoundError as e:
    st.error(str(e))
except OSError as e:
    st.error(f"Error saving customers: {e}")
