# marketplace/db/models/event_request.py
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from marketplace.db.base import Base


class RequestStatus:
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = (PENDING, ACCEPTED, COMPLETED, CANCELLED)


class EventRequest(Base):
    __tablename__ = "event_requests"

    id = Column(Integer, primary_key=True, index=True)

    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("service_categories.id"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    event_date = Column(DateTime, nullable=False)

    status = Column(String, nullable=False, default=RequestStatus.PENDING)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # relationships
    customer = relationship("User", foreign_keys=[customer_id])
    provider = relationship("ServiceProvider", foreign_keys=[provider_id])
    category = relationship("ServiceCategory", foreign_keys=[category_id])
