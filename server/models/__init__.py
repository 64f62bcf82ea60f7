# server/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()

from .user import Role, User  # noqa: E402,F401
from .symptom import SymptomLog  # noqa: E402,F401
