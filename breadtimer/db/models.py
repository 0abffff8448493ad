"""
SQLAlchemy ORM models for the Bread Timer database.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, DateTime, JSON

from breadtimer.db.database import Base


class CustomRecipe(Base):
    """User-authored recipe. Built-in recipes are never stored here."""
    __tablename__ = "custom_recipes"

    id = Column(String(255), primary_key=True)  # slug derived from the name
    name = Column(String(255), nullable=False)
    steps = Column(JSON, nullable=False)  # List[{"name", "duration", "type"}]
    total_time = Column(Float, nullable=False)  # hours
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)
