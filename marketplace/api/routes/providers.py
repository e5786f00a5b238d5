# marketplace/api/routes/providers.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from marketplace.db.base import get_db
from marketplace.schemas.provider import ProviderResponse
from marketplace.services import catalog_service

router = APIRouter(prefix="/providers", tags=["providers"])


# List providers, optionally for one category
@router.get("", response_model=List[ProviderResponse])
def list_providers(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    db: Session = Depends(get_db),
):
    return catalog_service.list_providers(db, category_id=category_id)


# Top rated (declared before /{provider_id} so "top" isn't parsed as an id)
@router.get("/top", response_model=List[ProviderResponse])
def top_rated_providers(
    limit: int = Query(catalog_service.DEFAULT_TOP_RATED_LIMIT, ge=1),
    db: Session = Depends(get_db),
):
    return catalog_service.top_rated_providers(db, limit)


@router.get("/category/{category_id}", response_model=List[ProviderResponse])
def providers_by_category(category_id: int, db: Session = Depends(get_db)):
    return catalog_service.list_providers(db, category_id=category_id)


# Provider profile of a user (used by a logged-in provider to find their own)
@router.get("/user/{user_id}", response_model=ProviderResponse)
def provider_by_user(user_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_provider_by_user(db, user_id)


@router.get("/{provider_id}", response_model=ProviderResponse)
def get_provider(provider_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_provider(db, provider_id)
