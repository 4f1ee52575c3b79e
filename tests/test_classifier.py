"""Classifier tests."""

import pytest

from tds.classifier import (
    SEARCH_BOT_SIGNATURES,
    build_context,
    classify_device,
    is_mobile_ua,
    is_search_bot,
    is_tablet_ua,
    normalize_country,
)
from conftest import (
    ANDROID_PHONE_UA,
    ANDROID_TABLET_UA,
    DESKTOP_UA,
    GOOGLEBOT_SMARTPHONE_UA,
    IPAD_UA,
    IPHONE_UA,
    YANDEXBOT_UA,
)


class TestSearchBot:
    """Test crawler detection."""

    @pytest.mark.parametrize("signature", SEARCH_BOT_SIGNATURES)
    def test_every_signature_detected(self, signature):
        """Test each whitelisted signature, in upper case too."""
        assert is_search_bot(f"Mozilla/5.0 (compatible; {signature}/1.0)")
        assert is_search_bot(f"Mozilla/5.0 (compatible; {signature.upper()}/1.0)")

    def test_bot_with_device_tokens(self):
        """Test a crawler stays a bot whatever device it claims."""
        assert is_search_bot(GOOGLEBOT_SMARTPHONE_UA)
        assert is_search_bot(YANDEXBOT_UA)

    def test_regular_browsers_are_not_bots(self):
        """Test browsers are not flagged."""
        for ua in (ANDROID_PHONE_UA, IPHONE_UA, DESKTOP_UA, IPAD_UA):
            assert not is_search_bot(ua)

    def test_empty_user_agent(self):
        """Test empty and missing UA."""
        assert not is_search_bot("")
        assert not is_search_bot(None)


class TestDevice:
    """Test device classification."""

    def test_android_tablet(self):
        """Test Android without Mobile is a tablet, never mobile."""
        assert is_tablet_ua(ANDROID_TABLET_UA)
        assert not is_mobile_ua(ANDROID_TABLET_UA)
        assert classify_device(ANDROID_TABLET_UA) == "tablet"

    def test_android_phone(self):
        """Test Android with Mobile is a phone."""
        assert not is_tablet_ua(ANDROID_PHONE_UA)
        assert is_mobile_ua(ANDROID_PHONE_UA)
        assert classify_device(ANDROID_PHONE_UA) == "mobile"

    def test_iphone(self):
        """Test iPhone is mobile."""
        assert classify_device(IPHONE_UA) == "mobile"
        assert classify_device("some app on iPhone") == "mobile"

    def test_ipad(self):
        """Test iPad is a tablet even though it carries Mobile."""
        assert is_tablet_ua(IPAD_UA)
        assert classify_device(IPAD_UA) == "tablet"

    def test_phone_tokens(self):
        """Test phone-only tokens."""
        for ua in ("Opera/9.80 (J2ME/MIDP; Opera Mini/9.80)", "BlackBerry9700", "iPod touch", "IEMobile/11.0"):
            assert is_mobile_ua(ua)

    def test_generic_mobile_word(self):
        """Test the standalone word mobile."""
        assert is_mobile_ua("SomeBrowser/1.0 Mobile")
        assert not is_mobile_ua("SomeBrowser/1.0 Mobiles")

    def test_generic_tablet(self):
        """Test tablet token."""
        assert classify_device("Mozilla/5.0 (Tablet; rv:26.0) Gecko/26.0 Firefox/26.0") == "tablet"

    def test_desktop(self):
        """Test desktop and empty UA."""
        assert classify_device(DESKTOP_UA) == "desktop"
        assert classify_device("") == "desktop"
        assert not is_mobile_ua("")


class TestContext:
    """Test request context building."""

    def test_normalize_country(self):
        """Test country normalization never raises."""
        assert normalize_country("ru") == "RU"
        assert normalize_country(None) == ""
        assert normalize_country("") == ""

    def test_build_context(self):
        """Test full classification."""
        context = build_context("/casino/x", GOOGLEBOT_SMARTPHONE_UA, "de")
        assert context.pathname == "/casino/x"
        assert context.country == "DE"
        assert context.device == "mobile"
        assert context.is_bot is True
