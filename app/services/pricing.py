from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Sequence
from app.services.errors import ValidationError

TWOPLACES = Decimal("0.01")
CURRENCY_SYMBOL = "₱"
ZERO = Decimal("0.00")

DELIVERY = "delivery"
PICKUP = "pickup"
ORDER_TYPES = (DELIVERY, PICKUP)


def _to_money(value) -> Decimal:
    d = Decimal(str(value))
    return d.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def parse_money(value) -> Decimal:
    """Parse "₱89.00", "89", 89 or Decimal("89") into a two-place Decimal."""
    if isinstance(value, str):
        text = value.strip().replace(CURRENCY_SYMBOL, "").replace("$", "").replace(",", "").strip()
    elif isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        text = str(value)
    else:
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}")
    try:
        return _to_money(amount)
    except InvalidOperation:
        raise ValidationError(f"Amount out of range: {value!r}")


def parse_price(value) -> Decimal:
    """Like parse_money, but a price can never be negative."""
    amount = parse_money(value)
    if amount < 0:
        raise ValidationError(f"Price cannot be negative: {value!r}")
    return amount


def format_money(amount, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{_to_money(amount):.2f}"


def find_option_price(option_groups: Sequence[dict], option_name: str):
    """Price of the first option called ``option_name``, groups then items in order."""
    for group in option_groups:
        for option in group.get("items", []):
            if option.get("name") == option_name:
                return parse_money(option.get("price", 0))
    return None


def line_item_unit_price(base_price, option_groups: Sequence[dict], selected_option_names: Iterable[str]) -> Decimal:
    total = parse_money(base_price)
    for name in selected_option_names:
        price = find_option_price(option_groups, name)
        if price is None:
            raise ValidationError(f"Unknown option '{name}'")
        total += price
    return _to_money(total)


def cart_subtotal(lines) -> Decimal:
    """Sum of unit price times quantity; accepts line objects or dicts."""
    total = ZERO
    for line in lines:
        if isinstance(line, dict):
            price, quantity = line["price"], line["quantity"]
        else:
            price, quantity = line.price, line.quantity
        total += parse_money(price) * int(quantity)
    return _to_money(total)


def delivery_fee(order_type: str, fee) -> Decimal:
    if order_type == DELIVERY:
        return parse_money(fee)
    if order_type == PICKUP:
        return ZERO
    raise ValidationError(f"Unknown order type '{order_type}'")


def order_total(subtotal, fee) -> Decimal:
    return _to_money(parse_money(subtotal) + parse_money(fee))


__all__ = [
    "CURRENCY_SYMBOL",
    "DELIVERY",
    "PICKUP",
    "ORDER_TYPES",
    "parse_money",
    "parse_price",
    "format_money",
    "find_option_price",
    "line_item_unit_price",
    "cart_subtotal",
    "delivery_fee",
    "order_total",
]
