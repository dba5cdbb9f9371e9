# layout.py
"""
Top-down flow cursor over a reportlab canvas.

Renderers think in "distance from the top of the page" and let the cursor
advance after each text block; FlowCanvas converts to reportlab's
bottom-left origin and keeps track of the current page geometry.
"""
from __future__ import annotations

from typing import BinaryIO, List, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from . import assets

LEADING = 1.2     # line height as a multiple of font size
ASCENT = 0.8      # baseline offset below the top of a text line


def hex_color(rgb: str) -> colors.Color:
    rgb = rgb.lstrip("#")
    r, g, b = tuple(int(rgb[i:i+2], 16) / 255 for i in (0, 2, 4))
    return colors.Color(r, g, b)


def wrap_text(text: str, max_w: float, font: str, size: float) -> List[str]:
    """Word-wrap avoiding mid-word breaks; explicit newlines start new lines."""
    lines: List[str] = []
    for para in (text or "").split("\n"):
        cur = ""
        for w in para.split():
            cand = (cur + " " + w).strip()
            if stringWidth(cand, font, size) <= max_w or not cur:
                cur = cand
            else:
                lines.append(cur)
                cur = w
        if cur:
            lines.append(cur)
    return lines


class FlowCanvas:
    def __init__(self, target: Union[str, BinaryIO], pagesize: Tuple[float, float] = A4, margin: float = 50):
        self.c = canvas.Canvas(target, pagesize=pagesize)
        self.page_w, self.page_h = pagesize
        self.margin = margin
        self.pages = 1
        self.x = margin
        self.y = margin
        self.font, self.bold = assets.fonts()
        self.size = 12.0
        self.fill = colors.black

    # ---- pages ----

    def new_page(self, pagesize: Optional[Tuple[float, float]] = None, margin: Optional[float] = None):
        self.c.showPage()
        if pagesize:
            self.c.setPageSize(pagesize)
            self.page_w, self.page_h = pagesize
        if margin is not None:
            self.margin = margin
        self.pages += 1
        self.x = self.margin
        self.y = self.margin

    def save(self):
        self.c.save()

    def pdf_y(self, y: float) -> float:
        return self.page_h - y

    # ---- text ----

    def set_font(self, size: Optional[float] = None, bold: Optional[bool] = None, color=None):
        if size is not None:
            self.size = size
        if bold is not None:
            self.font = self.bold if bold else assets.fonts()[0]
        if color is not None:
            self.fill = color

    def line_height(self, size: Optional[float] = None) -> float:
        return (size or self.size) * LEADING

    def move_down(self, lines: float = 1.0):
        self.y += lines * self.line_height()

    def height_of_string(self, text: str, width: float, size: Optional[float] = None) -> float:
        size = size or self.size
        return len(wrap_text(text, width, self.font, size)) * self.line_height(size)

    def text(self, text, x: Optional[float] = None, y: Optional[float] = None, *,
             width: Optional[float] = None, align: str = "left") -> float:
        """Draw wrapped text with its top at (x, y); the cursor ends below it."""
        x = self.x if x is None else x
        y = self.y if y is None else y
        width = width if width is not None else self.page_w - x - self.margin
        lines = wrap_text(str(text), width, self.font, self.size)

        self.c.setFont(self.font, self.size)
        self.c.setFillColor(self.fill)
        lh = self.line_height()
        for i, line in enumerate(lines):
            base = self.pdf_y(y + i * lh + self.size * ASCENT)
            if align == "right":
                self.c.drawRightString(x + width, base, line)
            elif align == "center":
                self.c.drawCentredString(x + width / 2.0, base, line)
            else:
                self.c.drawString(x, base, line)

        self.x = x
        self.y = y + len(lines) * lh
        return len(lines) * lh

    # ---- shapes ----

    def hr(self, y: float, x1: float, x2: float, width: float = 1, color=colors.black):
        self.c.saveState()
        self.c.setStrokeColor(color)
        self.c.setLineWidth(width)
        self.c.line(x1, self.pdf_y(y), x2, self.pdf_y(y))
        self.c.restoreState()

    def rect(self, x: float, y: float, w: float, h: float):
        self.c.saveState()
        self.c.setStrokeColor(colors.black)
        self.c.rect(x, self.pdf_y(y + h), w, h, stroke=1, fill=0)
        self.c.restoreState()

    def image(self, path: str, x: float, y: float, w: float, h: Optional[float] = None,
              keep_aspect: bool = False) -> float:
        """
        Draw an image with its top-left at (x, y). Height follows the aspect
        ratio when omitted; with keep_aspect the image is fitted and centered
        in the w x h box.
        """
        img = ImageReader(path)
        iw, ih = img.getSize()
        if h is None:
            h = w * ih / float(iw)
        elif keep_aspect:
            r = min(w / iw, h / ih)
            rw, rh = iw * r, ih * r
            self.c.drawImage(img, x + (w - rw) / 2.0, self.pdf_y(y + (h + rh) / 2.0), rw, rh, mask="auto")
            return h
        self.c.drawImage(img, x, self.pdf_y(y + h), w, h, mask="auto")
        return h

    def link(self, x: float, y: float, w: float, h: float, url: str):
        self.c.linkURL(url, (x, self.pdf_y(y + h), x + w, self.pdf_y(y)), relative=0)
