import streamlit as st

st.set_page_config(page_title="Student Portal", layout="wide")

st.title("Student Portal")

st.markdown(
    """
Welcome to the student portal.

Use the sidebar to:

- Register for a course
- Upload a certificate for verification
- Review applications (staff sign-in required)
"""
)
