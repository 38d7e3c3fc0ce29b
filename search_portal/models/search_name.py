from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from search_portal.database import Base


class SearchName(Base):
    """Append-only log of names used in executed searches."""

    __tablename__ = "search_names"

    id = Column(String, primary_key=True, index=True)
    name_value = Column(String, nullable=False)
    user_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
