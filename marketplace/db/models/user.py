# marketplace/db/models/user.py
from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from marketplace.db.base import Base


class Role:
    CUSTOMER = "customer"
    PROVIDER = "provider"

    ALL = (CUSTOMER, PROVIDER)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    # "customer" or "provider"; dispatch on this field, there are no subclasses
    role = Column(String, nullable=False, default=Role.CUSTOMER, server_default=Role.CUSTOMER)

    phone = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    profile_picture = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # only set for role == "provider"
    provider_profile = relationship("ServiceProvider", back_populates="user", uselist=False)

    @property
    def is_customer(self) -> bool:
        return self.role == Role.CUSTOMER

    @property
    def is_provider(self) -> bool:
        return self.role == Role.PROVIDER
