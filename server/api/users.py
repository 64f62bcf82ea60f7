# server/api/users.py

import logging
from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from database import get_db
from models.user import Role, User as UserModel
from core.deps import get_identity, require_admin
from core.security import Identity, get_password_hash, verify_password


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class RoleUpdateRequest(BaseModel):
    role: Role


class UpdateMeRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, min_length=6)
    current_password: str | None = Field(default=None, alias="currentPassword")


def _server_error(message: str = "Server error") -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


# -------------------------------
# Admin endpoints
# -------------------------------

@router.get("")
def list_users(_: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    try:
        users = db.query(UserModel).order_by(UserModel.created_at.asc()).all()
    except SQLAlchemyError:
        logger.exception("Error fetching users")
        raise _server_error()
    return [u.to_public() for u in users]


# -------------------------------
# Self-service endpoints
# -------------------------------
# Registered before the /{user_id} routes so "me" is never taken as an id.

@router.get("/me")
def read_me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    try:
        user = db.get(UserModel, identity.user_id)
    except SQLAlchemyError:
        logger.exception("Error fetching profile for %s", identity.user_id)
        raise _server_error()
    if user is None:
        raise _user_not_found()
    return user.to_public()


@router.patch("/me")
def update_me(
    req: UpdateMeRequest | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """
    Updates the caller's name and/or password.
    A password change needs the current password and must actually change it.
    """
    req = req or UpdateMeRequest()

    try:
        existing_user = db.get(UserModel, identity.user_id)
    except SQLAlchemyError:
        logger.exception("Error loading profile for %s", identity.user_id)
        raise HTTPException(status_code=400, detail="Failed to update profile")
    if existing_user is None:
        raise _user_not_found()

    updates = {}

    if req.name and req.name != existing_user.name:
        updates["name"] = req.name

    if req.password:
        if not req.current_password:
            raise HTTPException(status_code=400, detail="Current password is required")
        if not verify_password(req.current_password, existing_user.password_hash):
            raise HTTPException(status_code=400, detail="Invalid current password")
        if req.password == req.current_password:
            raise HTTPException(
                status_code=400,
                detail="New password must be different from the current one"
            )
        updates["password_hash"] = get_password_hash(req.password)

    if not updates:
        raise HTTPException(status_code=400, detail="No changes to update")

    try:
        for field, value in updates.items():
            setattr(existing_user, field, value)
        db.commit()
        db.refresh(existing_user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating profile for %s", identity.user_id)
        raise HTTPException(status_code=400, detail="Failed to update profile")

    return existing_user.to_public()


@router.delete("/me")
def delete_me(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    try:
        user = db.get(UserModel, identity.user_id)
        if user is None:
            logger.info("User %s not found for deletion", identity.user_id)
            raise _user_not_found()
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete account %s", identity.user_id)
        raise _server_error("Failed to delete account")

    logger.info("User %s deleted their account", identity.user_id)
    return {"message": "Account deleted"}


# -------------------------------
# Admin endpoints on a specific user
# -------------------------------

@router.patch("/{user_id}/role")
def update_role(
    user_id: str,
    req: RoleUpdateRequest,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        user = db.get(UserModel, user_id)
        if user is None:
            raise _user_not_found()
        user.role = req.role
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating role for %s", user_id)
        raise _server_error("Failed to update role")

    logger.info("Admin %s set role of %s to %s", admin.user_id, user_id, req.role.value)
    return user.to_public()


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        user = db.get(UserModel, user_id)
        if user is None:
            raise _user_not_found()
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting user %s", user_id)
        raise _server_error()

    logger.info("Admin %s deleted user %s", admin.user_id, user_id)
    return {"message": "User deleted successfully"}
