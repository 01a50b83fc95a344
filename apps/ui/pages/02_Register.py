import streamlit as st

from apps.ui.client import PortalAPIError, PortalClient

st.set_page_config(page_title="Register", layout="wide")

st.title("Course Registration")

STUDY_CENTERS = ["Main Campus", "City Center"]

try:
    with PortalClient() as api:
        categories = api.list_categories()
except PortalAPIError as e:
    st.error(e.message)
    st.stop()

if not categories:
    st.warning("No courses are open for registration yet.")
    st.stop()

# course pickers sit outside the form so the choices cascade
by_name = {c["name"]: c for c in categories}
category = by_name[st.selectbox("Category", list(by_name))]
subcategory = None
courses = category.get("courses") or []
if category.get("subcategories"):
    subs = {s["name"]: s for s in category["subcategories"]}
    subcategory = subs[st.selectbox("Subcategory", list(subs))]
    courses = subcategory.get("courses") or []
course_names = [c["name"] for c in courses]
course = st.selectbox("Course", course_names) if course_names else None
if course:
    chosen = next(c for c in courses if c["name"] == course)
    st.caption(f"Qualification required: {chosen['qualification']} · Duration: {chosen['duration']}")

with st.form("register"):
    full_name = st.text_input("Full name")
    dob = st.date_input("Date of birth", value=None)
    address = st.text_area("Address")
    phone = st.text_input("Phone number")
    email = st.text_input("Email")
    nic = st.text_input("National ID (NIC)")
    middle = st.text_area("Middle school results")
    high = st.text_area("High school results")
    certs = st.text_area("Other certifications (optional)")
    center = st.selectbox("Preferred study centre", STUDY_CENTERS)
    submitted = st.form_submit_button("Submit registration")

if submitted:
    if not course or dob is None:
        st.error("Pick a course and a date of birth.")
        st.stop()
    fields = {
        "fullName": full_name,
        "dateOfBirth": dob.isoformat(),
        "address": address,
        "phoneNumber": phone,
        "email": email,
        "nic": nic,
        "middleSchoolResults": middle,
        "highSchoolResults": high,
        "certifications": certs or None,
        "preferredStudyCenter": center,
        "selectedCategory": category["name"],
        "selectedSubcategory": subcategory["name"] if subcategory else None,
        "selectedCourse": course,
    }
    try:
        with PortalClient() as api:
            api.register_student(fields)
    except PortalAPIError as e:
        st.error(e.message)
    else:
        st.success("Registration submitted successfully. You will be contacted after review.")
