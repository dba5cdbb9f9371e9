# assets.py
from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from django.conf import settings
from django.contrib.staticfiles import finders
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

log = logging.getLogger("eticket.assets")

# Fonts (registered in ensure_unicode_font)
_FONT_READY = False
FONT_BODY = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def find_static(*filenames: Optional[str]) -> Optional[str]:
    """Try multiple filenames via Django finders and common static dirs."""
    for name in filenames:
        if not name:
            continue
        # absolute
        if os.path.isabs(name) and os.path.exists(name):
            return name

        # finders
        p = finders.find(name)
        if p:
            return p

        # STATIC_ROOT
        sroot = getattr(settings, "STATIC_ROOT", None)
        if sroot:
            cand = os.path.join(sroot, name)
            if os.path.exists(cand):
                return cand

        # STATICFILES_DIRS
        for base in getattr(settings, "STATICFILES_DIRS", []):
            cand = os.path.join(base, name)
            if os.path.exists(cand):
                return cand

        # relative to this file
        here = os.path.dirname(__file__)
        cand = os.path.join(here, name)
        if os.path.exists(cand):
            return cand
    return None


def ensure_unicode_font() -> bool:
    """
    Register the bundled DejaVu Sans Regular/Bold (eticket/static/fonts) so customer
    names outside Latin-1 render. Returns True iff DejaVu regular is in use.
    """
    global _FONT_READY, FONT_BODY, FONT_BOLD
    if _FONT_READY:
        return FONT_BODY.startswith("DejaVu")

    reg = find_static("DejaVuSans.ttf", "fonts/DejaVuSans.ttf", "static/fonts/DejaVuSans.ttf")
    bold = find_static("DejaVuSans-Bold.ttf", "fonts/DejaVuSans-Bold.ttf", "static/fonts/DejaVuSans-Bold.ttf")

    ok = False
    try:
        if reg:
            pdfmetrics.registerFont(TTFont("DejaVuSans", reg))
            FONT_BODY = "DejaVuSans"
            ok = True
        if bold:
            pdfmetrics.registerFont(TTFont("DejaVuSans-Bold", bold))
            FONT_BOLD = "DejaVuSans-Bold"
        elif ok:
            FONT_BOLD = "DejaVuSans"
    except Exception as e:
        log.warning("Could not register DejaVu fonts, using Helvetica: %s", e)
        FONT_BODY, FONT_BOLD = "Helvetica", "Helvetica-Bold"
        ok = False

    _FONT_READY = True
    return ok


def fonts() -> tuple:
    ensure_unicode_font()
    return FONT_BODY, FONT_BOLD


def is_remote(ref: Optional[str]) -> bool:
    return bool(ref) and ref.lower().startswith(("http://", "https://"))


def download_image(url: str, path: str, *, timeout: float) -> None:
    """Stream `url` into `path`. Raises on HTTP or network errors."""
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        with open(path, "wb") as fh:
            for chunk in resp.iter_content(chunk_size=64 * 1024):
                if chunk:
                    fh.write(chunk)


@contextmanager
def downloaded_image(url: str, *, timeout: float, temp_dir: Optional[str] = None) -> Iterator[str]:
    """
    Yield a temp file holding the image at `url`; the file is removed on exit,
    including when the caller's drawing code raises.
    """
    fd, path = tempfile.mkstemp(prefix="eticket_", suffix=".img", dir=temp_dir)
    os.close(fd)
    try:
        download_image(url, path, timeout=timeout)
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)


@contextmanager
def local_image(ref: Optional[str], *, timeout: float, temp_dir: Optional[str] = None) -> Iterator[Optional[str]]:
    """Remote refs are downloaded; anything else is resolved as a static asset (None if missing)."""
    if is_remote(ref):
        with downloaded_image(ref, timeout=timeout, temp_dir=temp_dir) as path:
            yield path
    else:
        yield find_static(ref) if ref else None
