# app/ui/login.py

import os
import json
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import login_user, register_user

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD")

cookies = EncryptedCookieManager(password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def remember(result):
    st.session_state["access_token"] = result["token"]
    st.session_state["user"] = result["user"]
    cookies["access_token"] = result["token"]
    cookies["user"] = json.dumps(result["user"])
    cookies.save()


def logout():
    cookies.clear()
    cookies.save()


def login_page():
    st.title("🔐 Sign in")

    if "access_token" not in st.session_state:
        if cookies.get("access_token") and cookies.get("user"):
            st.session_state["access_token"] = cookies["access_token"]
            st.session_state["user"] = json.loads(cookies["user"])
            st.rerun()

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        with st.spinner("Signing in..."):
            result = login_user(email, password)
        if result.get("error"):
            st.error(f"❌ Sign in failed: {result['error']}")
        else:
            remember(result)
            st.success("✅ Signed in!")
            st.rerun()

    if st.button("Create an account"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Create an account")

    email = st.text_input("Email", key="new_email")
    name = st.text_input("Name", key="new_name")
    password = st.text_input("Password (6+ characters)", type="password", key="new_pass")

    if st.button("Register"):
        with st.spinner("Creating account..."):
            result = register_user(email, name, password)
        if result.get("error"):
            st.error(f"❌ Registration failed: {result['error']}")
        else:
            remember(result)
            st.session_state["show_register"] = False
            st.success("🎉 Account created!")
            st.rerun()

    if st.button("← Back to sign in"):
        st.session_state["show_register"] = False
        st.rerun()
