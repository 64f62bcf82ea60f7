# app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the FastAPI backend
API_URL = os.getenv("API_URL", "http://localhost:5000")

REQUEST_TIMEOUT = 10


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def _handle(response):
    """
    Returns the decoded body on success, or {"error": message} on failure.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if response.ok:
        return data
    if isinstance(data, dict) and data.get("error"):
        return {"error": data["error"]}
    return {"error": f"Request failed with status {response.status_code}"}


def _call(method, path, token=None, **kwargs):
    headers = _auth(token) if token else {}
    try:
        response = requests.request(
            method,
            f"{API_URL}{path}",
            headers=headers,
            timeout=REQUEST_TIMEOUT,
            **kwargs,
        )
    except requests.RequestException as e:
        return {"error": str(e)}
    return _handle(response)


# -------------------------------
# Authentication
# -------------------------------

def register_user(email, name, password):
    """
    Creates an account. Returns {"token", "user"} on success.
    """
    return _call("POST", "/api/auth/register", json={"email": email, "name": name, "password": password})


def login_user(email, password):
    """
    Logs in a user. Returns {"token", "user"} on success.
    """
    return _call("POST", "/api/auth/login", json={"email": email, "password": password})


# -------------------------------
# Profile
# -------------------------------

def get_me(token):
    return _call("GET", "/api/users/me", token)


def update_me(token, name=None, password=None, current_password=None):
    payload = {}
    if name:
        payload["name"] = name
    if password:
        payload["password"] = password
    if current_password:
        payload["currentPassword"] = current_password
    return _call("PATCH", "/api/users/me", token, json=payload)


def delete_me(token):
    return _call("DELETE", "/api/users/me", token)


# -------------------------------
# Symptoms
# -------------------------------

def log_symptoms(token, text):
    return _call("POST", "/api/symptoms", token, json={"input": text})


def get_logs(token, day=None):
    """
    Lists the user's logs, optionally for a single day (datetime.date or YYYY-MM-DD).
    """
    params = {"date": str(day)} if day else None
    return _call("GET", "/api/symptoms/logs", token, params=params)


def get_analytics(token):
    return _call("GET", "/api/symptoms/analytics", token)


# -------------------------------
# Administration
# -------------------------------

def list_users(token):
    return _call("GET", "/api/users", token)


def change_role(token, user_id, role):
    return _call("PATCH", f"/api/users/{user_id}/role", token, json={"role": role})


def delete_user(token, user_id):
    return _call("DELETE", f"/api/users/{user_id}", token)
