# tests/utils.py


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}
