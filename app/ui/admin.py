# app/ui/admin.py

import streamlit as st
from services.api import list_users, change_role, delete_user

ROLES = ["USER", "ADMIN"]


def admin_page():
    token = st.session_state["access_token"]
    me = st.session_state["user"]

    st.markdown("# 🛠️ User management")

    users = list_users(token)
    if isinstance(users, dict) and users.get("error"):
        st.error(users["error"])
        return

    for user in users:
        cols = st.columns([4, 2, 1])
        with cols[0]:
            st.markdown(f"**{user['name']}**  \n{user['email']}")
        with cols[1]:
            role = st.selectbox(
                "Role",
                ROLES,
                index=ROLES.index(user["role"]),
                key=f"role_{user['id']}",
                label_visibility="collapsed",
            )
            if role != user["role"]:
                result = change_role(token, user["id"], role)
                if result.get("error"):
                    st.error(result["error"])
                else:
                    st.rerun()
        with cols[2]:
            if user["id"] != me["id"] and st.button("🗑️", key=f"del_{user['id']}"):
                result = delete_user(token, user["id"])
                if result.get("error"):
                    st.error(result["error"])
                else:
                    st.rerun()
