# marketplace/schemas/category.py
from pydantic import BaseModel


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str
    image_url: str

    class Config:
        from_attributes = True
