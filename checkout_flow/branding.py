"""Storefront branding for the checkout header.

Branding is presentation only. It is resolved from the cart once per session
and never fetched or shared between sessions.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Cart


@dataclass(frozen=True)
class SiteBranding:
    site: str
    site_url: str
    logo_url: str

    @property
    def cart_link(self) -> str:
        return self.site_url.rstrip("/") + "/cart/"


BESTOP = SiteBranding(
    site="bestop",
    site_url="https://bestop.com",
    logo_url="https://www.bestop.com/wp-content/themes/bestop/images/bestop-logo.svg",
)

_BRANDS: dict[str, SiteBranding] = {}


def _register(branding: SiteBranding, *aliases: str) -> None:
    for alias in aliases:
        _BRANDS[alias] = branding


_register(
    SiteBranding(
        site="softopper",
        site_url="https://softopper.com",
        logo_url="https://softopper.com/wp-content/themes/softopper/images/logo-softopper.svg",
    ),
    "Softopper", "softopper", "softopperstg",
)
_register(BESTOP, "Bestop", "bestop", "bestopstaging")
_register(
    SiteBranding(
        site="tuffy",
        site_url="https://tuffyproducts.com",
        logo_url="https://tuffyproducts.com/wp-content/themes/tuffy/images/tuffy-logo.svg",
    ),
    "Tuffy Security Products", "tuffy", "tuffystg",
)
_register(
    SiteBranding(
        site="baja",
        site_url="https://www.bajadesigns.com",
        logo_url="https://www.bajadesigns.com/wp-content/themes/bajadesigns/images/bajadesigns-logo-white.svg",
    ),
    "Baja Designs", "bajadesigns", "bajadesignsdev",
)
_register(
    SiteBranding(
        site="prpseats",
        site_url="https://new.prpseats.com",
        logo_url="https://prpseats.wpengine.com/wp-content/themes/prpseats/images/prp-logo.svg",
    ),
    "PRP Seats", "prpseats", "prp-seats", "prpseatsdev",
)
_register(
    SiteBranding(
        site="offroadsource",
        site_url="https://offroadsource.com/",
        logo_url="https://offroadsource.com/wp-content/themes/bronco/assets/images/offroad-source-logo.svg",
    ),
    "offroadsourceDEV", "offroadsource",
)


def resolve_branding(brand: str) -> SiteBranding:
    """Map a line-item brand to its storefront. Unknown brands fall back to Bestop."""
    return _BRANDS.get(brand, BESTOP)


def brand_for_cart(cart: Cart) -> str:
    """Brand of the last physical item, else of the last digital item."""
    physical = cart.line_items.physical_items
    if physical:
        return physical[-1].brand
    digital = cart.line_items.digital_items
    if digital:
        return digital[-1].brand
    return ""


def branding_for_cart(cart: Cart | None) -> SiteBranding | None:
    if cart is None:
        return None
    return resolve_branding(brand_for_cart(cart))
