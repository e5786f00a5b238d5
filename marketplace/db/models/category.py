# marketplace/db/models/category.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from marketplace.db.base import Base


class ServiceCategory(Base):
    __tablename__ = "service_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=False)
    image_url = Column(String, nullable=False)

    providers = relationship("ServiceProvider", back_populates="category")
