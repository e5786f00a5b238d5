# marketplace/services/review_service.py
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from marketplace.core.errors import Forbidden, InvalidInput, NotFound
from marketplace.db.models.provider import ServiceProvider
from marketplace.db.models.review import Review
from marketplace.db.models.user import User
from marketplace.schemas.review import COMMENT_MAX, COMMENT_MIN, RATING_MAX, RATING_MIN

logger = logging.getLogger(__name__)


def recalculate_provider_rating(db: Session, provider: ServiceProvider) -> None:
    """Recompute rating and review_count from the reviews table.

    Pending review rows must be flushed first. Does not commit.
    """
    total, average = (
        db.query(func.count(Review.id), func.avg(Review.rating))
        .filter(Review.provider_id == provider.id)
        .one()
    )
    provider.review_count = int(total)
    provider.rating = float(average) if total else 0.0


def submit_review(db: Session, customer: User, provider_id: int, rating: int, comment: str) -> Review:
    """Store a review and update the provider's aggregate in the same transaction.

    The provider row is locked (FOR UPDATE) before the insert. On SQLite,
    where that clause is dropped, the insert itself takes the database
    write lock, so the aggregate query below always sees every committed
    review for the provider.
    """
    if not customer.is_customer:
        raise Forbidden("Only customers can submit reviews")
    if isinstance(rating, bool) or not isinstance(rating, int) or not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidInput(f"rating must be an integer between {RATING_MIN} and {RATING_MAX}")
    if comment is None or not COMMENT_MIN <= len(comment) <= COMMENT_MAX:
        raise InvalidInput(f"comment must be between {COMMENT_MIN} and {COMMENT_MAX} characters")

    try:
        provider = (
            db.query(ServiceProvider)
            .filter(ServiceProvider.id == provider_id)
            .with_for_update()
            .first()
        )
        if not provider:
            raise NotFound("Provider not found")

        review = Review(
            customer_id=customer.id,
            provider_id=provider.id,
            rating=rating,
            comment=comment,
        )
        db.add(review)
        db.flush()

        recalculate_provider_rating(db, provider)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(review)
    logger.info(
        "Customer %s reviewed provider %s (rating=%s); aggregate now %.2f over %s reviews",
        customer.id, provider.id, rating, provider.rating, provider.review_count,
    )
    return review


def list_by_provider(db: Session, provider_id: int) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.provider_id == provider_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
