"""Shapes of the JSON blobs kept in a device's key-value store."""
import enum
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, BeforeValidator, PlainSerializer
from pydantic.alias_generators import to_camel

from app.services import errors
from app.services.pricing import parse_money, parse_price, format_money


def _money(value) -> Decimal:
    try:
        return parse_money(value)
    except errors.ValidationError as e:
        raise ValueError(str(e))


Money = Annotated[
    Decimal,
    BeforeValidator(_money),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]


def _price(value) -> Decimal:
    try:
        return parse_price(value)
    except errors.ValidationError as e:
        raise ValueError(str(e))


Price = Annotated[
    Decimal,
    BeforeValidator(_price),
    PlainSerializer(format_money, return_type=str, when_used="json"),
]


class StoredModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class CartLineItem(StoredModel):
    id: str
    product_id: Optional[str] = None
    name: str
    price: Price
    quantity: int = Field(default=1, ge=1)
    restaurant: str = ""
    selected_options: List[str] = Field(default_factory=list)


class SavedItem(CartLineItem):
    saved_at: datetime


class DeliveryAddress(StoredModel):
    id: str
    label: str = ""
    street: str
    city: str
    state: str
    zip_code: str
    instructions: Optional[str] = None
    is_default: bool = False

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}"


class PaymentType(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    GCASH = "gcash"
    MAYA = "maya"


class PaymentMethod(StoredModel):
    id: str
    type: PaymentType
    is_default: bool = False


class CustomerOrderStatus(str, enum.Enum):
    """What the customer sees on the tracking timeline."""
    PENDING = "pending"
    PROCESSING = "processing"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    DELIVERING = "delivering"
    COMPLETED = "completed"


CUSTOMER_STATUS_FLOW = (
    CustomerOrderStatus.PENDING,
    CustomerOrderStatus.PROCESSING,
    CustomerOrderStatus.CONFIRMED,
    CustomerOrderStatus.PREPARING,
    CustomerOrderStatus.DELIVERING,
    CustomerOrderStatus.COMPLETED,
)


class Order(StoredModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    items: List[CartLineItem]
    order_type: str
    delivery_address: Optional[DeliveryAddress] = None
    payment_method: PaymentMethod
    subtotal: Money
    delivery_fee: Money
    total: Money
    status: CustomerOrderStatus = CustomerOrderStatus.PENDING
    created_at: datetime


class UserProfile(StoredModel):
    id: str
    name: str
    email: str
    phone: str = ""
    address: str = ""
    avatar: Optional[str] = None


class FavoriteItem(StoredModel):
    """Snapshot of a product at the time it was favorited."""
    id: str
    name: str
    price: Price
    restaurant: str = ""
    shop_id: Optional[str] = None
    description: str = ""
