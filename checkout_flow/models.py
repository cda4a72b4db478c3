"""Checkout data as delivered by the loader and the consignment subscription.

Payloads arrive as camelCase JSON mappings; ``from_dict`` constructors read
the fields the orchestrator needs and ignore the rest.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LineItem:
    id: str
    name: str = ""
    quantity: int = 1
    brand: str = ""
    category_names: tuple[str, ...] = ()
    added_by_promotion: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LineItem:
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            quantity=int(data.get("quantity", 1)),
            brand=data.get("brand") or "",
            category_names=tuple(data.get("categoryNames") or ()),
            added_by_promotion=bool(data.get("addedByPromotion", False)),
        )


@dataclass(frozen=True)
class LineItems:
    physical_items: tuple[LineItem, ...] = ()
    digital_items: tuple[LineItem, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LineItems:
        return cls(
            physical_items=tuple(LineItem.from_dict(i) for i in data.get("physicalItems") or ()),
            digital_items=tuple(LineItem.from_dict(i) for i in data.get("digitalItems") or ()),
        )


@dataclass(frozen=True)
class Cart:
    id: str
    line_items: LineItems = field(default_factory=LineItems)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Cart:
        return cls(
            id=str(data.get("id", "")),
            line_items=LineItems.from_dict(data.get("lineItems") or {}),
        )

    def has_physical_items(self) -> bool:
        return bool(self.line_items.physical_items)


@dataclass(frozen=True)
class Address:
    first_name: str = ""
    last_name: str = ""
    address1: str = ""
    city: str = ""
    postal_code: str = ""
    country_code: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Address:
        return cls(
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            address1=data.get("address1", ""),
            city=data.get("city", ""),
            postal_code=data.get("postalCode", ""),
            country_code=data.get("countryCode", ""),
        )

    def is_filled(self) -> bool:
        return bool(self.address1 and self.country_code)


@dataclass(frozen=True)
class ShippingOption:
    id: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ShippingOption:
        return cls(id=str(data.get("id", "")), description=data.get("description", ""))


@dataclass(frozen=True)
class Consignment:
    id: str
    line_item_ids: tuple[str, ...] = ()
    shipping_address: Address | None = None
    selected_shipping_option: ShippingOption | None = None
    available_shipping_options: tuple[ShippingOption, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Consignment:
        address = data.get("shippingAddress")
        selected = data.get("selectedShippingOption")
        return cls(
            id=str(data.get("id", "")),
            line_item_ids=tuple(str(i) for i in data.get("lineItemIds") or ()),
            shipping_address=Address.from_dict(address) if address else None,
            selected_shipping_option=ShippingOption.from_dict(selected) if selected else None,
            available_shipping_options=tuple(
                ShippingOption.from_dict(o) for o in data.get("availableShippingOptions") or ()
            ),
        )


@dataclass(frozen=True)
class Customer:
    email: str = ""
    is_guest: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Customer:
        return cls(email=data.get("email", ""), is_guest=bool(data.get("isGuest", True)))


@dataclass(frozen=True)
class FlashMessage:
    type: str
    message: str
    title: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FlashMessage:
        return cls(
            type=data.get("type", ""),
            message=data.get("message", ""),
            title=data.get("title") or "",
        )


@dataclass(frozen=True)
class CheckoutSnapshot:
    """Latest known checkout data.

    ``cart`` and ``consignments`` are None until the store has them, which
    matters for the multi-shipping computation.
    """

    cart: Cart | None = None
    consignments: tuple[Consignment, ...] | None = None
    billing_address: Address | None = None
    customer: Customer | None = None
    flash_messages: tuple[FlashMessage, ...] = ()
    config: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CheckoutSnapshot:
        cart = data.get("cart")
        consignments = data.get("consignments")
        billing = data.get("billingAddress")
        customer = data.get("customer")
        return cls(
            cart=Cart.from_dict(cart) if cart else None,
            consignments=(
                tuple(Consignment.from_dict(c) for c in consignments)
                if consignments is not None
                else None
            ),
            billing_address=Address.from_dict(billing) if billing else None,
            customer=Customer.from_dict(customer) if customer else None,
            flash_messages=tuple(FlashMessage.from_dict(m) for m in data.get("flashMessages") or ()),
            config=data.get("config") or {},
        )

    def get_flash_messages(self, type: str) -> list[FlashMessage]:
        return [m for m in self.flash_messages if m.type == type]
