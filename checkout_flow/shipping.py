"""Consignment predicates used for re-validation and multi-shipping detection."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Consignment, LineItems


def has_selected_shipping_options(consignments: Sequence[Consignment]) -> bool:
    """Return True if every consignment has a chosen shipping option.

    An empty list has nothing left to choose, so it counts as selected.
    """
    return all(c.selected_shipping_option is not None for c in consignments)


def shippable_item_ids(line_items: LineItems) -> set[str]:
    """Ids of physical items the shopper assigns to consignments."""
    return {item.id for item in line_items.physical_items if not item.added_by_promotion}


def is_using_multi_shipping(consignments: Sequence[Consignment], line_items: LineItems) -> bool:
    """Return True if the cart ships to more than one destination.

    That is either several consignments, or a single consignment that does not
    yet hold every shippable item.
    """
    if len(consignments) > 1:
        return True
    if not consignments:
        return False

    assigned = set(consignments[0].line_item_ids)
    return not shippable_item_ids(line_items) <= assigned
