# server/api/auth.py

import logging
from pydantic import BaseModel, EmailStr, Field
from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from database import get_db
from models.user import Role, User as UserModel
from core.deps import get_token_service
from core.security import TokenService, get_password_hash, verify_password


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# -------------------------------
# Request schemas
# -------------------------------

class RegisterRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


def auth_response(user: UserModel, token_service: TokenService) -> dict:
    token = token_service.issue(user.id, user.role)
    return {"token": token, "user": user.to_public()}


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Creates a USER account and signs the caller in.
    Returns 409 if the email is already registered.
    """
    user_exists = db.query(UserModel).filter(UserModel.email == req.email).first()
    if user_exists:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    new_user = UserModel(
        email=req.email,
        name=req.name,
        password_hash=get_password_hash(req.password),
        role=Role.USER,
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for %s", req.email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Registration failed")

    logger.info("Registered user %s", new_user.id)
    return auth_response(new_user, token_service)


@router.post("/login")
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Exchanges email and password for a token.
    Unknown email and wrong password produce the same response.
    """
    invalid_credentials = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials"
    )

    try:
        user = db.query(UserModel).filter(UserModel.email == req.email).first()
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Login failed")

    if not user or not user.password_hash:
        raise invalid_credentials
    if not verify_password(req.password, user.password_hash):
        raise invalid_credentials

    return auth_response(user, token_service)
