# marketplace/api/routes/categories.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from marketplace.db.base import get_db
from marketplace.schemas.category import CategoryResponse
from marketplace.services import catalog_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return catalog_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_category(db, category_id)
