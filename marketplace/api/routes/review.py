# marketplace/api/routes/review.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from marketplace.core.security import require_role
from marketplace.db.base import get_db
from marketplace.db.models.user import Role, User
from marketplace.schemas.review import ReviewCreate, ReviewResponse
from marketplace.services import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


# Create review (customer); also updates the provider's rating
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(Role.CUSTOMER)),
):
    return review_service.submit_review(
        db,
        current_user,
        provider_id=review_in.provider_id,
        rating=review_in.rating,
        comment=review_in.comment,
    )


# List reviews for a provider (public)
@router.get("/provider/{provider_id}", response_model=List[ReviewResponse])
def list_provider_reviews(provider_id: int, db: Session = Depends(get_db)):
    return review_service.list_by_provider(db, provider_id)
