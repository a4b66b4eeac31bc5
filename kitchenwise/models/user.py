"""User model."""

from sqlalchemy import JSON, Column, DateTime, Integer, String

from kitchenwise.database import Base
from kitchenwise.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and pantry ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=True)
    preferred_cuisines = Column(JSON, nullable=False, default=list)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def pantry_item_count(self) -> int:
        """Number of pantry items the user currently holds."""
        return len(self.pantry_items)
