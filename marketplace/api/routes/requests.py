# marketplace/api/routes/requests.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from marketplace.core.security import get_current_user, require_role
from marketplace.db.base import get_db
from marketplace.db.models.user import Role, User
from marketplace.schemas.event_request import (
    EventRequestCreate,
    EventRequestResponse,
    EventRequestStatusUpdate,
)
from marketplace.services import catalog_service, request_service

router = APIRouter(prefix="/requests", tags=["requests"])


# Customer creates an event request

@router.post("", response_model=EventRequestResponse, status_code=status.HTTP_201_CREATED)
def create_request(
    request_in: EventRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(Role.CUSTOMER)),
):
    return request_service.create_request(
        db,
        current_user,
        provider_id=request_in.provider_id,
        category_id=request_in.category_id,
        title=request_in.title,
        description=request_in.description,
        event_date=request_in.event_date,
    )


# Caller's own requests as a customer

@router.get("/customer", response_model=List[EventRequestResponse])
def customer_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return request_service.list_by_customer(db, current_user.id)


# Requests addressed to the caller's provider profile

@router.get("/provider", response_model=List[EventRequestResponse])
def provider_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(Role.PROVIDER)),
):
    provider = catalog_service.get_provider_by_user(db, current_user.id)
    return request_service.list_by_provider(db, provider.id)


# Accept / complete / cancel

@router.patch("/{request_id}/status", response_model=EventRequestResponse)
def update_request_status(
    request_id: int,
    update: EventRequestStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return request_service.transition(db, request_id, current_user, update.status)
