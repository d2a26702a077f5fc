"""Activity log model definitions."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ecotrack.database import Base


class LogEntry(Base):
    """One logged activity and the emission computed when it was written."""
    __tablename__ = "log_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    activity = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    carbon_emission = Column(Float, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="log_entries")
