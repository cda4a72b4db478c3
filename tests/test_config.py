"""Tests for checkout settings and session config."""

from checkout_flow.config import CheckoutSettings, SessionConfig, load_options

from .fixtures import config


class TestCheckoutSettings:
    def test_defaults_for_missing_config(self) -> None:
        settings = CheckoutSettings.from_config(None)

        assert settings.has_multi_shipping_enabled is False
        assert settings.checkout_billing_same_as_shipping_enabled is True
        assert settings.is_buy_now_cart_enabled is False
        assert settings.site_link == ""

    def test_reads_flags_and_links(self) -> None:
        settings = CheckoutSettings.from_config(
            config(multi_shipping=True, billing_same_as_shipping=False, buy_now_cart=True, guest_enabled=False)
        )

        assert settings.has_multi_shipping_enabled is True
        assert settings.checkout_billing_same_as_shipping_enabled is False
        assert settings.is_buy_now_cart_enabled is True
        assert settings.is_guest_enabled is False
        assert settings.site_link == "https://store.example.com"
        assert settings.login_url == "https://example.com/login"

    def test_null_billing_flag_defaults_true(self) -> None:
        settings = CheckoutSettings.from_config(
            {"checkoutSettings": {"checkoutBillingSameAsShippingEnabled": None}}
        )
        assert settings.checkout_billing_same_as_shipping_enabled is True


class TestSessionConfig:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "CHECKOUT_EMBEDDED",
            "CHECKOUT_CONTAINER_ID",
            "CHECKOUT_LOGIN_URL",
            "CHECKOUT_CREATE_ACCOUNT_URL",
        ):
            monkeypatch.delenv(name, raising=False)

        session = SessionConfig.from_env()

        assert session.is_embedded is False
        assert session.container_id == "checkout-app"
        assert session.login_url == ""

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CHECKOUT_EMBEDDED", "TRUE")
        monkeypatch.setenv("CHECKOUT_CONTAINER_ID", "frame-1")
        monkeypatch.setenv("CHECKOUT_LOGIN_URL", "https://example.com/login")

        session = SessionConfig.from_env()

        assert session.is_embedded is True
        assert session.container_id == "frame-1"
        assert session.login_url == "https://example.com/login"


def test_load_options_request_category_names() -> None:
    include = load_options()["params"]["include"]
    assert include == [
        "cart.lineItems.physicalItems.categoryNames",
        "cart.lineItems.digitalItems.categoryNames",
    ]
