from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from search_portal.database import Base

ROLES = ("viewer", "analyst", "admin")


class User(Base):
    """Portal account. Analysts curate strings and brands; admins also manage users."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="viewer")
    is_active = Column(Boolean, default=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    buckets = relationship("StringBucket", back_populates="user", passive_deletes=True)
    search_history = relationship("SearchHistory", back_populates="user", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def can_curate(self) -> bool:
        return self.role in ("analyst", "admin")
