from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from ..db.base import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    user_name = Column(String(100), nullable=False)
    stars = Column(Integer, nullable=False, default=5)
    approved = Column(Boolean, nullable=False, default=False)  # модерация админом
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
