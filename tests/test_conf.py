import pytest

from eticket.conf import DEFAULTS, RenderOptions


def test_defaults_without_settings(settings):
    settings.ETICKET = {}
    opts = RenderOptions.from_settings()
    assert opts.logo == DEFAULTS["LOGO"]
    assert opts.time_zone == "America/New_York"
    assert opts.per_item_image is False


def test_settings_override_defaults(settings):
    settings.ETICKET = {"TIME_ZONE": "UTC", "IMAGE_TIMEOUT": 2.5}
    opts = RenderOptions.from_settings()
    assert opts.time_zone == "UTC"
    assert opts.image_timeout == 2.5
    assert opts.ios_badge == DEFAULTS["IOS_BADGE"]


def test_keyword_overrides_win(settings):
    settings.ETICKET = {"TIME_ZONE": "UTC"}
    opts = RenderOptions.from_settings(time_zone="Europe/Paris")
    assert opts.time_zone == "Europe/Paris"


def test_unknown_override_raises():
    opts = RenderOptions.from_settings()
    with pytest.raises(TypeError):
        opts.with_overrides({"colour": "red"})


def test_qr_payload_template():
    opts = RenderOptions.from_settings(qr_payload="https://tix.example/{order_id}/{index}")
    assert opts.qr_data(order_id="-O3pZE9", index=2) == "https://tix.example/-O3pZE9/2"

    plain = opts.with_overrides({"qr_payload": "https://example.com"})
    assert plain.qr_data(order_id="x", index=0) == "https://example.com"


def test_qr_payload_keeps_literal_braces():
    opts = RenderOptions.from_settings(qr_payload='{"ticket": 1}')
    assert opts.qr_data(order_id="X", index=0) == '{"ticket": 1}'

    opts = opts.with_overrides({"qr_payload": '{"order": "{order_id}", "n": {index}}'})
    assert opts.qr_data(order_id="X", index=3) == '{"order": "X", "n": 3}'
