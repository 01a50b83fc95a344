import streamlit as st

from apps.ui.client import PortalAPIError, PortalClient
from core.config import settings

st.set_page_config(page_title="Certificates", layout="wide")

st.title("Certificate Upload")

st.caption(f"Accepted formats: PDF, JPG, PNG (max {settings.MAX_UPLOAD_MB}MB)")

with st.form("certificate"):
    student_id = st.text_input("Student ID")
    nic = st.text_input("National ID (NIC)")
    cert_type = st.text_input("Certificate type")
    institution = st.text_input("Issuing institution (optional)")
    issue_date = st.date_input("Issue date (optional)", value=None)
    cert_no = st.text_input("Certificate number (optional)")
    comments = st.text_area("Comments (optional)")
    upload = st.file_uploader("Certificate file", type=["pdf", "jpg", "jpeg", "png"])
    submitted = st.form_submit_button("Upload")

if submitted:
    if not (student_id and nic and cert_type and upload):
        st.error("Student ID, NIC, certificate type and a file are required.")
        st.stop()
    # only metadata goes to the API; the binary is stored by the upload gateway
    fields = {
        "studentId": student_id,
        "nic": nic,
        "certificateType": cert_type,
        "issuingInstitution": institution or None,
        "issueDate": issue_date.isoformat() if issue_date else None,
        "certificateId": cert_no or None,
        "comments": comments or None,
        "fileName": upload.name,
        "fileSize": upload.size,
        "fileType": upload.type,
    }
    try:
        with PortalClient() as api:
            cert = api.upload_certificate(fields)
    except PortalAPIError as e:
        st.error(e.message)
    else:
        st.success(f"Certificate uploaded. Reference: {cert['_id']}")
