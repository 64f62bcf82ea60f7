# app/ui/profile.py

import streamlit as st
from services.api import update_me, delete_me


def profile_page(on_account_deleted):
    token = st.session_state["access_token"]
    user = st.session_state["user"]

    st.markdown("# 👤 Profile")
    st.caption(f"{user['email']} · {user['role']}")

    with st.form("profile_form"):
        name = st.text_input("Name", value=user["name"])
        new_password = st.text_input("New password", type="password")
        current_password = st.text_input("Current password (required to change password)", type="password")
        submitted = st.form_submit_button("Save")

    if submitted:
        result = update_me(
            token,
            name=name if name != user["name"] else None,
            password=new_password or None,
            current_password=current_password or None,
        )
        if result.get("error"):
            st.error(result["error"])
        else:
            st.session_state["user"] = result
            st.success("✅ Profile updated")

    st.markdown("---")
    confirm = st.checkbox("I understand my account and history will be removed")
    if st.button("🗑️ Delete account", disabled=not confirm):
        result = delete_me(token)
        if result.get("error"):
            st.error(result["error"])
        else:
            on_account_deleted()
