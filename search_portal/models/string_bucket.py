from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from search_portal.database import Base


class StringBucket(Base):
    """
    Named selection of search strings.
    string_ids are plain ids with no foreign key: deleting a string leaves the id
    in place and it is dropped when the bucket is resolved.
    """

    __tablename__ = "string_buckets"

    id = Column(String, primary_key=True, index=True)
    bucket_name = Column(String, nullable=False)
    string_ids = Column(JSONB, nullable=False, default=list)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="buckets")
