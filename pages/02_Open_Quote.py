import streamlit as st

from quotecraft import config
from quotecraft.numbering import number_from_filename
from quotecraft.store import QuoteStore
from quotecraft.workflow import delete_quote, load_index, open_for_edit, open_for_view

config.configure_logging()
st.set_page_config(page_title="Open Quote", page_icon="📂", layout="wide")
st.title("Open Existing Quote")
st.caption("View, edit, and manage existing quotes.")

store = QuoteStore()

if st.button("Main Menu"):
    st.switch_page("app.py")

# Listed once per visit; deletes patch the index instead of re-listing.
reload = st.button("🔄 Reload")
if reload or "quote_index" not in st.session_state:
    st.session_state.quote_index = load_index(store)
index = st.session_state.quote_index

flash = st.session_state.pop("quote_flash", None)
if flash:
    ok, msg = flash
    if ok:
        st.success(f"Quote deleted successfully! {msg}")
    else:
        st.error(f"Error deleting quote: {msg}")

for name in index.failed:
    st.error(f"Could not parse file {name}.")

def _open(filename: str, read_only: bool) -> None:
    draft = open_for_view(store, filename) if read_only else open_for_edit(store, filename)
    if draft is None:
        st.error(f"Could not open {filename}.")
        return
    st.session_state.draft = draft
    st.session_state.draft_rev = st.session_state.get("draft_rev", 0) + 1
    st.switch_page("pages/01_Create_Quote.py")

if not index.entries:
    st.info("No quotes found.")
    st.stop()

h = st.columns([2, 3, 3, 1, 1, 1])
for col, title in zip(h, ["Quote #", "Customer", "Project", "", "", ""]):
    col.markdown(f"**{title}**")

for filename, quote in list(index.entries):
    c = st.columns([2, 3, 3, 1, 1, 1])
    c[0].write(number_from_filename(filename) or filename)
    c[1].write(quote.customer_name)
    c[2].write(quote.project_name)
    if c[3].button("View", key=f"view_{filename}"):
        _open(filename, read_only=True)
    if c[4].button("Edit", key=f"edit_{filename}"):
        _open(filename, read_only=False)
    if c[5].button("Delete", key=f"del_{filename}"):
        st.session_state.pending_delete = filename

pending = st.session_state.get("pending_delete")
if pending:
    st.warning(f"This will permanently delete {pending}. This action cannot be undone.")
    d1, d2 = st.columns(2)
    if d1.button("Continue", type="primary"):
        result = delete_quote(store, index, pending)
        st.session_state.pending_delete = None
        st.session_state.quote_flash = (bool(result), result.message)
        st.rerun()
    if d2.button("Cancel"):
        st.session_state.pending_delete = None
        st.rerun()
