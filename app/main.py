# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout
from ui.symptoms import symptoms_page
from ui.profile import profile_page
from ui.admin import admin_page


load_dotenv()


st.set_page_config(page_title="Symptom Tracker", layout="wide")


def sign_out():
    logout()
    st.session_state.clear()
    st.rerun()


def main_page():
    user = st.session_state["user"]
    st.sidebar.markdown(f"## Hello, {user['name']}!")

    if st.sidebar.button("🩺 Symptoms"):
        st.session_state["page"] = "symptoms"
    if st.sidebar.button("👤 Profile"):
        st.session_state["page"] = "profile"
    if user["role"] == "ADMIN" and st.sidebar.button("🛠️ Users"):
        st.session_state["page"] = "admin"
    if st.sidebar.button("🔓 Sign out"):
        sign_out()

    page = st.session_state.get("page", "symptoms")
    if page == "profile":
        profile_page(on_account_deleted=sign_out)
    elif page == "admin" and user["role"] == "ADMIN":
        admin_page()
    else:
        symptoms_page()


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
