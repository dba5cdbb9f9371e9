# conf.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from django.conf import settings


# Built-in values; settings.ETICKET overrides any of them.
DEFAULTS: Dict[str, Any] = {
    "LOGO": "logo.png",
    "IOS_BADGE": "ios.png",
    "ANDROID_BADGE": "android.png",
    "SELLER_IMAGE": "logo.png",
    "QR_PAYLOAD": "https://example.com/order/{order_id}/item/{index}",
    "IOS_STORE_URL": "https://apps.apple.com/us/genre/ios/id36",
    "ANDROID_STORE_URL": "https://play.google.com/store/apps",
    "TIME_ZONE": "America/New_York",
    "IMAGE_TIMEOUT": 10.0,
    "TEMP_DIR": None,
    "PER_ITEM_IMAGE": False,
}


@dataclass(frozen=True)
class RenderOptions:
    """Injected renderer configuration (asset names, URLs, zone, timeouts)."""
    logo: str
    ios_badge: str
    android_badge: str
    seller_image: str
    qr_payload: str
    ios_store_url: str
    android_store_url: str
    time_zone: str
    image_timeout: float
    temp_dir: Optional[str]
    per_item_image: bool

    @classmethod
    def from_settings(cls, **overrides) -> "RenderOptions":
        merged = dict(DEFAULTS)
        merged.update(getattr(settings, "ETICKET", None) or {})
        values = {f.name: merged[f.name.upper()] for f in fields(cls)}
        opts = cls(**values)
        return opts.with_overrides(overrides) if overrides else opts

    def with_overrides(self, overrides: Mapping[str, Any]) -> "RenderOptions":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown render options: {', '.join(sorted(unknown))}")
        return replace(self, **dict(overrides))

    def qr_data(self, order_id: str, index: int) -> str:
        # Only {order_id} and {index} are substituted; other braces are literal.
        return (self.qr_payload
                .replace("{order_id}", str(order_id))
                .replace("{index}", str(index)))
