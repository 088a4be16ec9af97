# blomsterlan/models/customers.py

from typing import Optional

from pydantic import EmailStr, Field

from blomsterlan.models.base import ApiModel, InputModel


class CustomerOut(ApiModel):
    id: int
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerCreate(InputModel):
    name: str = Field(..., min_length=1)
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None


class CustomerUpdate(InputModel):
    name: Optional[str] = Field(default=None, min_length=1)
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
