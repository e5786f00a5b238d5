# marketplace/schemas/event_request.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

TITLE_MIN, TITLE_MAX = 5, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 20, 1000


# --- CREATE ---
class EventRequestCreate(BaseModel):
    provider_id: int
    category_id: int
    title: str = Field(..., min_length=TITLE_MIN, max_length=TITLE_MAX)
    description: str = Field(..., min_length=DESCRIPTION_MIN, max_length=DESCRIPTION_MAX)
    event_date: datetime


# --- STATUS CHANGE (customer or provider) ---
class EventRequestStatusUpdate(BaseModel):
    status: str = Field(
        ...,
        description="Target status: accepted, completed or cancelled"
    )


# --- RESPONSE ---
class EventRequestResponse(BaseModel):
    id: int
    customer_id: int
    provider_id: int
    category_id: int
    title: str
    description: str
    event_date: datetime
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
