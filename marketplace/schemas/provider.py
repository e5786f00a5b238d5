# marketplace/schemas/provider.py
from pydantic import BaseModel
from typing import List, Optional


class ProviderResponse(BaseModel):
    id: int
    user_id: int
    category_id: int
    company_name: str
    description: Optional[str]
    location: Optional[str]
    experience: Optional[int]
    contact_info: Optional[str]
    tags: List[str]
    image_url: Optional[str]

    rating: float
    review_count: int

    class Config:
        from_attributes = True
