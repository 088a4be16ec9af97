# blomsterlan/models/items.py

from typing import Optional

from pydantic import Field

from blomsterlan.models.base import ApiModel, InputModel


class ItemOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None


class ItemCreate(InputModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None


class ItemUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
