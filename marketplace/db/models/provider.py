# marketplace/db/models/provider.py
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from marketplace.db.base import Base


class ServiceProvider(Base):
    """
    Public profile of a user with role "provider".
    rating / review_count are maintained by services.review_service only.
    """
    __tablename__ = "service_providers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    category_id = Column(Integer, ForeignKey("service_categories.id"), nullable=False, index=True)

    company_name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    location = Column(String, nullable=True)
    experience = Column(Integer, nullable=True)  # years
    contact_info = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    image_url = Column(String, nullable=True)

    rating = Column(Float, nullable=False, default=0.0, server_default="0")
    review_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="provider_profile")
    category = relationship("ServiceCategory", back_populates="providers")
