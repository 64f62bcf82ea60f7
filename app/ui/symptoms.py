# app/ui/symptoms.py

import streamlit as st
from services.api import log_symptoms, get_logs, get_analytics


def symptoms_page():
    token = st.session_state["access_token"]

    st.markdown("# 🩺 Symptom check")

    with st.form("symptom_form", clear_on_submit=True):
        text = st.text_area("Describe how you feel (at least 10 characters)")
        submitted = st.form_submit_button("Get summary")

    if submitted:
        with st.spinner("Analyzing..."):
            result = log_symptoms(token, text)
        if result.get("error"):
            st.error(result["error"])
        else:
            st.info(result["summary"])

    st.markdown("## 📈 This year")
    analytics = get_analytics(token)
    if isinstance(analytics, dict) and analytics.get("error"):
        st.error(analytics["error"])
    else:
        st.dataframe(analytics, hide_index=True, use_container_width=True)

    st.markdown("## 🗂️ History")
    filter_by_day = st.checkbox("Only show one day")
    day = st.date_input("Day") if filter_by_day else None

    logs = get_logs(token, day)
    if isinstance(logs, dict) and logs.get("error"):
        st.error(logs["error"])
        return
    if not logs:
        st.info("No symptom logs yet.")
        return

    for log in logs:
        with st.expander(f"{log['createdAt'][:16].replace('T', ' ')} · {log['input'][:40]}"):
            st.markdown(f"**You wrote:** {log['input']}")
            st.markdown(log["aiResponse"])
