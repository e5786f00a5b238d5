# marketplace/services/catalog_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from marketplace.core.errors import InvalidInput, NotFound
from marketplace.db.models.category import ServiceCategory
from marketplace.db.models.provider import ServiceProvider

DEFAULT_TOP_RATED_LIMIT = 3


def list_categories(db: Session) -> List[ServiceCategory]:
    return db.query(ServiceCategory).order_by(ServiceCategory.id).all()


def get_category(db: Session, category_id: int) -> ServiceCategory:
    category = db.query(ServiceCategory).filter(ServiceCategory.id == category_id).first()
    if not category:
        raise NotFound("Category not found")
    return category


def list_providers(db: Session, category_id: Optional[int] = None) -> List[ServiceProvider]:
    q = db.query(ServiceProvider)
    if category_id is not None:
        q = q.filter(ServiceProvider.category_id == category_id)
    return q.order_by(ServiceProvider.id).all()


def top_rated_providers(db: Session, limit: int = DEFAULT_TOP_RATED_LIMIT) -> List[ServiceProvider]:
    """Providers by rating, highest first; equal ratings keep insertion order."""
    if limit < 1:
        raise InvalidInput("limit must be at least 1")
    return (
        db.query(ServiceProvider)
        .order_by(ServiceProvider.rating.desc(), ServiceProvider.id.asc())
        .limit(limit)
        .all()
    )


def get_provider(db: Session, provider_id: int) -> ServiceProvider:
    provider = db.query(ServiceProvider).filter(ServiceProvider.id == provider_id).first()
    if not provider:
        raise NotFound("Provider not found")
    return provider


def get_provider_by_user(db: Session, user_id: int) -> ServiceProvider:
    provider = db.query(ServiceProvider).filter(ServiceProvider.user_id == user_id).first()
    if not provider:
        raise NotFound("Provider profile not found")
    return provider
