# server/models/user.py

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from . import Base


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for application users.
    A null password_hash means the account cannot sign in with a password.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=True)
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.USER)
    created_at = Column(DateTime, default=datetime.now)

    symptom_logs = relationship(
        "SymptomLog",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_public(self) -> dict:
        """Fields safe to return to clients. Never includes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }
