# marketplace/services/request_service.py
"""
Event request lifecycle.

    pending  --accept (provider)-->            accepted
    pending  --cancel (customer | provider)--> cancelled
    accepted --complete (provider)-->          completed
    accepted --cancel (customer | provider)--> cancelled

completed and cancelled are terminal.  ``TRANSITIONS`` maps each legal
(from, to) edge to the parties allowed to take it.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from marketplace.core.errors import Forbidden, InvalidInput, InvalidTransition, NotFound
from marketplace.db.models.category import ServiceCategory
from marketplace.db.models.event_request import EventRequest, RequestStatus
from marketplace.db.models.provider import ServiceProvider
from marketplace.db.models.user import Role, User
from marketplace.schemas.event_request import DESCRIPTION_MAX, DESCRIPTION_MIN, TITLE_MAX, TITLE_MIN

logger = logging.getLogger(__name__)

TRANSITIONS = {
    (RequestStatus.PENDING, RequestStatus.ACCEPTED): {Role.PROVIDER},
    (RequestStatus.PENDING, RequestStatus.CANCELLED): {Role.CUSTOMER, Role.PROVIDER},
    (RequestStatus.ACCEPTED, RequestStatus.COMPLETED): {Role.PROVIDER},
    (RequestStatus.ACCEPTED, RequestStatus.CANCELLED): {Role.CUSTOMER, Role.PROVIDER},
}


def _to_naive_utc(value: datetime) -> datetime:
    # event dates are stored as naive UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_length(field: str, value: str, lower: int, upper: int):
    if not lower <= len(value) <= upper:
        raise InvalidInput(f"{field} must be between {lower} and {upper} characters")


def create_request(
    db: Session,
    customer: User,
    provider_id: int,
    category_id: int,
    title: str,
    description: str,
    event_date: datetime,
) -> EventRequest:
    if not customer.is_customer:
        raise Forbidden("Only customers can create event requests")

    _check_length("title", title, TITLE_MIN, TITLE_MAX)
    _check_length("description", description, DESCRIPTION_MIN, DESCRIPTION_MAX)
    event_date = _to_naive_utc(event_date)
    if event_date < datetime.utcnow():
        raise InvalidInput("event_date must not be in the past")

    provider = db.query(ServiceProvider).filter(ServiceProvider.id == provider_id).first()
    if not provider:
        raise NotFound("Provider not found")
    category = db.query(ServiceCategory).filter(ServiceCategory.id == category_id).first()
    if not category:
        raise NotFound("Category not found")

    request = EventRequest(
        customer_id=customer.id,
        provider_id=provider.id,
        category_id=category.id,
        title=title,
        description=description,
        event_date=event_date,
        status=RequestStatus.PENDING,
    )
    db.add(request)
    db.commit()
    db.refresh(request)

    logger.info("Customer %s created event request %s for provider %s", customer.id, request.id, provider.id)
    return request


def get_request(db: Session, request_id: int) -> EventRequest:
    request = db.query(EventRequest).filter(EventRequest.id == request_id).first()
    if not request:
        raise NotFound("Request not found")
    return request


def transition(db: Session, request_id: int, actor: User, target_status: str) -> EventRequest:
    """Move a request to ``target_status`` on behalf of ``actor``.

    Checks run in order: the request exists (NotFound), the status is
    known (InvalidInput), the actor is its customer or the provider's
    owning user (Forbidden), the edge exists (InvalidTransition), the
    actor's side may take that edge (Forbidden).
    """
    request = get_request(db, request_id)
    if target_status not in RequestStatus.ALL:
        raise InvalidInput(f"Unknown status: {target_status}")

    provider = db.query(ServiceProvider).filter(ServiceProvider.id == request.provider_id).first()
    if actor.id == request.customer_id:
        party = Role.CUSTOMER
    elif provider is not None and actor.id == provider.user_id:
        party = Role.PROVIDER
    else:
        logger.warning("User %s tried to change request %s they are not party to", actor.id, request.id)
        raise Forbidden("You don't have permission to update this request")

    allowed = TRANSITIONS.get((request.status, target_status))
    if allowed is None:
        raise InvalidTransition(f"Cannot change status from {request.status} to {target_status}")
    if party not in allowed:
        raise Forbidden(f"Only the provider can mark a request as {target_status}")

    previous = request.status
    request.status = target_status
    db.commit()
    db.refresh(request)

    logger.info("Request %s: %s -> %s by user %s", request.id, previous, target_status, actor.id)
    return request


def list_by_customer(db: Session, customer_id: int) -> List[EventRequest]:
    return db.query(EventRequest).filter(EventRequest.customer_id == customer_id).order_by(EventRequest.id).all()


def list_by_provider(db: Session, provider_id: int) -> List[EventRequest]:
    return db.query(EventRequest).filter(EventRequest.provider_id == provider_id).order_by(EventRequest.id).all()
