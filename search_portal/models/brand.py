from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from search_portal.database import Base

RISK_LEVELS = ("low", "medium", "high")


class Brand(Base):
    __tablename__ = "brands"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    industry = Column(String, nullable=True)
    keywords = Column(JSONB, nullable=False, default=list)
    risk_level = Column(String, nullable=False, default="medium")  # low | medium | high
    is_active = Column(Boolean, default=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
