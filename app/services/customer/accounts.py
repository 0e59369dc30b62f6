"""Saved delivery addresses and payment methods.

Both collections keep exactly one ``is_default`` entry whenever they are
non-empty. Deleting the default promotes the first remaining entry.
"""
import logging
import time
from typing import List, Optional, Type

from app.schemas.store import DeliveryAddress, PaymentMethod, PaymentType, StoredModel
from app.services.errors import NotFoundError, StorageError, ValidationError
from app.storage.kv import ADDRESSES_KEY, PAYMENT_METHODS_KEY, KeyValueStore, load_list, read_list

logger = logging.getLogger(__name__)

REQUIRED_ADDRESS_FIELDS = ("street", "city", "state", "zip_code")

DEFAULT_PAYMENT_METHODS = [
    {"id": "cash-1", "type": PaymentType.CASH.value, "isDefault": True},
    {"id": "card-1", "type": PaymentType.CARD.value, "isDefault": False},
    {"id": "gcash-1", "type": PaymentType.GCASH.value, "isDefault": False},
    {"id": "maya-1", "type": PaymentType.MAYA.value, "isDefault": False},
]


def _default_methods() -> List[PaymentMethod]:
    return [PaymentMethod.model_validate(raw) for raw in DEFAULT_PAYMENT_METHODS]


def _apply_default(entries: list, entry_id: str) -> None:
    for entry in entries:
        entry.is_default = entry.id == entry_id


class _DefaultCollection:
    key: str
    model: Type[StoredModel]
    label: str

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list(self) -> list:
        return [self.model.model_validate(raw) for raw in read_list(self.store, self.key)]

    def _entries(self) -> list:
        return [self.model.model_validate(raw) for raw in load_list(self.store, self.key)]

    def _write(self, entries: list) -> None:
        self.store.set(self.key, [e.to_store() for e in entries])

    def get(self, entry_id: str):
        for entry in self.list():
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"{self.label} not found")

    def default(self):
        entries = self.list()
        return next((e for e in entries if e.is_default), entries[0] if entries else None)

    def set_default(self, entry_id: str):
        entries = self._entries()
        if not any(e.id == entry_id for e in entries):
            raise NotFoundError(f"{self.label} not found")
        _apply_default(entries, entry_id)
        self._write(entries)
        return next(e for e in entries if e.id == entry_id)

    def delete(self, entry_id: str) -> None:
        entries = self._entries()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            raise NotFoundError(f"{self.label} not found")
        if remaining and not any(e.is_default for e in remaining):
            remaining[0].is_default = True
            logger.info("Promoted %s %s to default", self.label.lower(), remaining[0].id)
        self._write(remaining)


class AddressBook(_DefaultCollection):
    key = ADDRESSES_KEY
    model = DeliveryAddress
    label = "Address"

    @staticmethod
    def _validate(fields: dict) -> None:
        missing = [name for name in REQUIRED_ADDRESS_FIELDS if not str(fields.get(name) or "").strip()]
        if missing:
            raise ValidationError("Please fill in all address fields")

    def add(self, **fields) -> DeliveryAddress:
        self._validate(fields)
        entries = self._entries()
        address = DeliveryAddress(
            id=str(int(time.time() * 1000)),
            label=fields.get("label") or "",
            street=fields["street"],
            city=fields["city"],
            state=fields["state"],
            zip_code=fields["zip_code"],
            instructions=fields.get("instructions"),
            is_default=not entries,
        )
        while any(e.id == address.id for e in entries):
            address.id = str(int(address.id) + 1)
        entries.append(address)
        if fields.get("is_default"):
            _apply_default(entries, address.id)
        self._write(entries)
        return address

    def update(self, address_id: str, **fields) -> DeliveryAddress:
        entries = self._entries()
        for index, current in enumerate(entries):
            if current.id == address_id:
                merged = {**current.model_dump(), **{k: v for k, v in fields.items() if v is not None}}
                self._validate(merged)
                merged["id"] = address_id
                merged["is_default"] = current.is_default
                entries[index] = DeliveryAddress(**merged)
                if fields.get("is_default"):
                    _apply_default(entries, address_id)
                self._write(entries)
                return entries[index]
        raise NotFoundError("Address not found")


class PaymentMethods(_DefaultCollection):
    key = PAYMENT_METHODS_KEY
    model = PaymentMethod
    label = "Payment method"

    def _entries(self) -> List[PaymentMethod]:
        methods = super()._entries()
        if methods:
            return methods
        # nothing stored yet
        methods = _default_methods()
        try:
            self._write(methods)
        except StorageError as e:
            logger.warning("Could not seed payment methods: %s", e)
        return methods

    def list(self) -> List[PaymentMethod]:
        try:
            return self._entries()
        except StorageError as e:
            logger.warning("Payment methods unreadable, showing defaults: %s", e)
            return _default_methods()

    def default(self) -> Optional[PaymentMethod]:
        method = super().default()
        if method is None:
            raise ValidationError("Please select a payment method")
        return method
