from pydantic import BaseModel, Field, constr
from typing import List, Optional

from app.schemas.store import Price


class MerchantRegisterRequest(BaseModel):
    email: constr(pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
    name: constr(strip_whitespace=True, min_length=1)
    business_name: constr(strip_whitespace=True, min_length=1)
    business_type: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    logo: Optional[str] = None


class MerchantLoginRequest(BaseModel):
    email: constr(pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class MerchantProfileUpdateRequest(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1)] = None
    business_name: Optional[constr(strip_whitespace=True, min_length=1)] = None
    business_type: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[constr(strip_whitespace=True, max_length=20)] = None
    logo: Optional[str] = None


class ProductRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    price: Price
    description: Optional[str] = ""
    category: Optional[str] = None
    image: Optional[str] = None
    is_available: bool = True


class ProductUpdateRequest(BaseModel):
    name: Optional[constr(strip_whitespace=True, min_length=1)] = None
    price: Optional[Price] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    is_available: Optional[bool] = None


class OrderStatusRequest(BaseModel):
    status: str


class OrderItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class SubmitOrderRequest(BaseModel):
    merchant_id: int
    items: List[OrderItemRequest] = Field(min_length=1)
    delivery_address: Optional[str] = None
    order_number: Optional[str] = None
