# server/models/symptom.py

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from . import Base


class SymptomLog(Base):
    """
    One free-text symptom submission and the summary returned for it.
    Rows are written once and never updated.
    """
    __tablename__ = "symptom_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    input = Column(Text, nullable=False)
    ai_response = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.now, index=True)

    user = relationship("User", back_populates="symptom_logs")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "input": self.input,
            "aiResponse": self.ai_response,
            "createdAt": self.created_at.isoformat(),
        }
