# marketplace/schemas/review.py
from pydantic import BaseModel, Field, conint
from typing import Optional
from datetime import datetime

RATING_MIN, RATING_MAX = 1, 5
COMMENT_MIN, COMMENT_MAX = 10, 500


class ReviewCreate(BaseModel):
    provider_id: int
    rating: conint(strict=True, ge=RATING_MIN, le=RATING_MAX) = Field(..., description="Rating 1-5")
    comment: str = Field(..., min_length=COMMENT_MIN, max_length=COMMENT_MAX)


class ReviewResponse(BaseModel):
    id: int
    customer_id: int
    provider_id: int
    rating: int
    comment: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
