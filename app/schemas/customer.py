from pydantic import BaseModel, Field
from typing import List, Optional

from app.schemas.store import FavoriteItem


class AddToCartRequest(BaseModel):
    product_id: str
    selected_options: List[str] = Field(default_factory=list)


class QuickAddRequest(BaseModel):
    shop_id: str
    item_name: str


class ChangeQuantityRequest(BaseModel):
    delta: int


class PlaceOrderRequest(BaseModel):
    order_type: str = "delivery"
    address_id: Optional[str] = None
    payment_method_id: Optional[str] = None


class AddressRequest(BaseModel):
    label: Optional[str] = ""
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    instructions: Optional[str] = None
    is_default: bool = False


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None


class SignInRequest(BaseModel):
    token: str
    user: dict


class FavoriteRequest(FavoriteItem):
    pass
