# core/deps.py

from fastapi import Depends, HTTPException, Request, status
from core.security import Identity, TokenError, TokenService


BEARER_PREFIX = "Bearer "


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Auth gate for protected routes.
    Identity comes only from a verified bearer token, never from the body or other headers.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header[len(BEARER_PREFIX):].strip()
    try:
        return token_service.verify(token)
    except TokenError:
        # Invalid and expired tokens share one outcome.
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid or expired token",
        )


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return identity
