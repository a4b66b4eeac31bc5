"""Pantry item model for tracking ingredient quantities at home."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from kitchenwise.database import Base
from kitchenwise.models.mixins import TimestampMixin


class PantryItem(Base, TimestampMixin):
    """Pantry item owned by a single user."""

    __tablename__ = "pantry_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(20), nullable=False, default="piece")
    category = Column(String(50), nullable=False, default="Other")
    added_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    # Optimistic concurrency token, bumped by SQLAlchemy on every UPDATE
    version = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", backref="pantry_items")

    __mapper_args__ = {"version_id_col": version}
