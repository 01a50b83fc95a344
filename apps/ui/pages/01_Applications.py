import streamlit as st

from apps.ui.client import PortalAPIError, PortalClient
from core.config import settings
from services.query.pagination import paginate

st.set_page_config(page_title="Applications", layout="wide")

st.title("Applications – Review")

STATUSES = ["all", "Pending", "Approved", "Rejected"]


def _login_form() -> None:
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        try:
            with PortalClient() as api:
                res = api.login(email, password)
        except PortalAPIError as e:
            st.error(e.message)
            return
        st.session_state.token = res["token"]
        st.session_state.user = res["user"]
        st.rerun()


if not st.session_state.get("token"):
    st.info("Staff sign-in required.")
    _login_form()
    st.stop()

user = st.session_state.get("user") or {}
col_user, col_out = st.columns([4, 1])
col_user.caption(f"Signed in as {user.get('name')} ({user.get('role')})")
if col_out.button("Sign out"):
    st.session_state.pop("token", None)
    st.session_state.pop("user", None)
    st.rerun()

f1, f2, f3 = st.columns([1, 2, 1])
status = f1.selectbox("Filter by status", STATUSES)
search = f2.text_input("Search name, course, centre, NIC or email")
show_disabled = f3.checkbox("Show disabled")

# back to the first page whenever the filters change
filters = (status, search, show_disabled)
if st.session_state.get("filters") != filters:
    st.session_state.filters = filters
    st.session_state.page = 1


@st.cache_resource
def _client(token: str) -> PortalClient:
    # one httpx pool per signed-in token, reused across reruns
    return PortalClient(token=token)


api = _client(st.session_state.token)
try:
    students = api.list_students(status=status, search=search, show_disabled=show_disabled)
except PortalAPIError as e:
    if e.status_code == 401:
        st.session_state.pop("token", None)
    st.error(e.message)
    st.stop()

page = paginate(students, st.session_state.get("page", 1), settings.PAGE_SIZE)
st.session_state.page = page.page
st.caption(f"{page.total} application(s)")


def _act(fn, *args) -> None:
    try:
        fn(*args)
    except PortalAPIError as e:
        st.error(e.message)
        return
    st.rerun()


for s in page.items:
    sid = s["_id"]
    with st.expander(f"{s.get('fullName')} · {s.get('selectedCourse')} · {s.get('status')}"):
        left, right = st.columns(2)
        left.write(
            {
                "NIC": s.get("nic"),
                "Email": s.get("email"),
                "Phone": s.get("phoneNumber"),
                "Date of birth": s.get("dateOfBirth"),
                "Address": s.get("address"),
            }
        )
        right.write(
            {
                "Category": s.get("selectedCategory"),
                "Subcategory": s.get("selectedSubcategory"),
                "Study centre": s.get("preferredStudyCenter"),
                "Middle school": s.get("middleSchoolResults"),
                "High school": s.get("highSchoolResults"),
                "Applied": s.get("appliedDate"),
                "Disabled": s.get("disabled", False),
            }
        )
        b1, b2, b3, b4 = st.columns(4)
        if s.get("status") == "Pending":
            if b1.button("Approve", key=f"approve-{sid}"):
                _act(api.update_status, sid, "Approved")
            if b2.button("Reject", key=f"reject-{sid}"):
                _act(api.update_status, sid, "Rejected")
        toggle = "Enable" if s.get("disabled") else "Disable"
        if b3.button(toggle, key=f"toggle-{sid}"):
            _act(api.set_disabled, sid, not s.get("disabled", False))
        if b4.button("Delete", key=f"delete-{sid}", type="secondary"):
            _act(api.delete_student, sid)

prev_col, info_col, next_col = st.columns([1, 2, 1])
if prev_col.button("Previous", disabled=not page.has_prev):
    st.session_state.page = page.page - 1
    st.rerun()
info_col.write(f"Page {page.page} of {max(page.total_pages, 1)}")
if next_col.button("Next", disabled=not page.has_next):
    st.session_state.page = page.page + 1
    st.rerun()
