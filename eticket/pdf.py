# pdf.py
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import qr
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4

from . import records
from .assets import local_image
from .conf import RenderOptions
from .formatting import (
    date_range_text,
    format_datetime,
    from_epoch,
    invoice_rows,
    order_id_tail,
    parse_order_date,
    truncate_email,
)
from .layout import FlowCanvas, hex_color

log = logging.getLogger("eticket.pdf")


# =====================================================================
# DESIGN TOKENS & LAYOUT SYSTEM
# =====================================================================

# Page + margins
PAGE_W, PAGE_H = A4
MARGIN = 50
TICKET_PAGE = (PAGE_W, PAGE_H * 1.2)

# Summary page geometry
RULE_X1, RULE_X2 = 50, 550
TABLE_ROW_H = 30
FOOTER_Y = 750
COL_ITEM, COL_UNIT, COL_QTY, COL_TOTAL = 50, 170, 290, 410
COL_W = 120

# Ticket page geometry
RECORD_X = MARGIN * 1.2
RECORD_W = 300
IMAGE_W = 100
IMAGE_RIGHT = 40
QR_SIZE = 75
SELLER_D = 75
SELLER_SHIFT = 120
TERMS_TOP_MARGIN = 100
TERMS_SECTION_GAP = 10
APP_X = 30
APP_LOGO = 70
BADGE_W, BADGE_H = 90, 35

TEXT = hex_color("#444444")
RULE = colors.gray
PEACH = hex_color("#FFDDC1")
PANEL_BORDER = hex_color("#E5E7EB")
MUTE = hex_color("#4B5563")

DATE_CAPTION = "Start Date" + " " * 23 + "End Date"
APP_BLURB = "This piece of paper will not give you tasty love\nThe Yurplan app does"

TERMS_HEADING = "E-ticket Terms and Conditions"
TERMS_SECTIONS = (
    (
        None,
        "This E-Ticket is a contract, under French law, to the exclusion of all others legislation. "
        "This contract is a translation of its French version, which shall be the only authoritative "
        "text in the event of a dispute. This contract and the following Terms and Conditions binds "
        "yourself with the organiser of the event you attend to (hereafter \"The Event\"). The details "
        "of this contract appear on the E-Ticket. By buying this E-Ticket you chose to agree to the "
        "organiser's specific conditions, to the rules of procedure of the place where the event is "
        "hosted, to the rules of good behaviour established by the organiser, and to the dealer's "
        "general terms and conditions of sale if the E-Ticket was purchased from a dealer.",
    ),
    (
        "Validity of E-Tickets and access to the Event",
        "Except with the express agreement of the organiser, this E-Ticket cannot be refunded, is "
        "personal and cannot be given nor traded. Access to the Event is subject to the validity check "
        "of your E-Ticket. This E-Ticket is only valid for the specific place, session, date and time "
        "of the Event written on the entrance pass. For any event starting at a specific time, the "
        "organiser could refuse the access to the event after official opening time, which does not "
        "necessarily create an entitlement to refund. Each E-Ticket has a unique barcode, allowing one "
        "single person to access the event. This E-Ticket is also printable on plain white A4 size "
        "two-sided paper, and this without alteration to its print format and quality. Partially "
        "printed, dirty, damaged or unreadable E-Tickets can be considered as invalid and refused by "
        "the organiser. In case of bad print quality, you will need to print again your .pdf file. To "
        "verify the print quality, please make sure that every information on the E-Ticket and the "
        "barcode are legible. The distributor and the organiser disclaim all responsibility for "
        "anomalies that can occur while ordering, processing or printing the pass, since they did not "
        "do these actions; likewise they disclaim all responsibility in case of loss, theft or illicit "
        "use of the E-Ticket. During access control, you must have an official and valid ID with a "
        "photograph matching with the name written on the E-Ticket, when there is one: ID, passport, "
        "drivers' licence, or residence permit. Family record book can be accepted for children. "
        "Access can be denied if no valid ID is shown. This ID and the E-Ticket must be kept until the "
        "end of the event. In some cases, the organiser can give you a 2-stub ticket (showing or not "
        "commissions). That ticket also has to be kept until the end of the event. Unless instructed "
        "otherwise by the organiser, if you decide to leave the event, exit is definitive and your "
        "E-Ticket will not be valid anymore.",
    ),
    (
        "Counterfeit, illicit payment",
        "It is forbidden to reproduce, use a copy, duplicate, counterfeit this E-Ticket in any way, "
        "subject to prosecution. As far as this goes, getting an E-Ticket with an illicit or stolen "
        "payment, or without the owner's agreement will lead to lawsuits and the invalidity of the "
        "E-Ticket. To be valid, this E-Ticket must not have been appealed against or unpaid on the "
        "credit card used for the order. In these cases this E-Ticket will be considered as invalid. "
        "Finally, it is forbidden to film, photograph or record the event without the consent of the "
        "organiser, or this will be considered as an author and/or organiser rights counterfeit.",
    ),
    (
        "Event progress",
        "Events lie under the responsibility of the organiser himself. In case of cancellation or "
        "postponement of an event, the refund or exchange of this E-Ticket (freight charges, hotel, "
        "etc... being in any case excluded) will be submitted to the organiser's conditions.",
    ),
)


# =====================================================================
# ASSET HELPERS (images, qr)
# =====================================================================

def _sanitize_colors(node):
    """Force None fill/stroke colors in a Drawing tree to black to avoid errors."""
    if hasattr(node, "fillColor") and node.fillColor is None:
        node.fillColor = colors.black
    if hasattr(node, "strokeColor") and node.strokeColor is None:
        node.strokeColor = colors.black
    for attr in ("contents", "children", "nodes"):
        kids = getattr(node, attr, None)
        if kids:
            for k in kids:
                _sanitize_colors(k)


def _draw_qr(fc: FlowCanvas, data: str, x: float, y: float, size: float = QR_SIZE):
    """QR square with its top-left corner at (x, y)."""
    widget = qr.QrCodeWidget(data or "")
    bx, by, bw, bh = widget.getBounds()
    d = Drawing(size, size, transform=[size/(bw-bx), 0, 0, size/(bh-by), 0, 0])
    d.add(widget)
    _sanitize_colors(d)
    renderPDF.draw(d, fc.c, x, fc.pdf_y(y + size))


def _safe_img(fc: FlowCanvas, path: Optional[str], x: float, y: float,
              w: float, h: Optional[float] = None, keep_aspect: bool = True) -> bool:
    if not path:
        return False
    try:
        fc.image(path, x, y, w, h, keep_aspect=keep_aspect)
        return True
    except Exception as e:
        log.error("Error placing image %s: %s", path, e)
        return False


def _logo_or_placeholder(fc: FlowCanvas, opts: RenderOptions, filename: Optional[str],
                         x: float, y: float, w: float, h: float, label: str = "LOGO"):
    """Try drawing a logo; if not found, draw a labeled placeholder. Never crash."""
    try:
        with local_image(filename, timeout=opts.image_timeout, temp_dir=opts.temp_dir) as path:
            if _safe_img(fc, path, x, y, w, h):
                return
    except Exception as e:
        log.error("Error downloading image %s: %s", filename, e)
    c = fc.c
    c.saveState()
    c.setStrokeColor(PANEL_BORDER)
    c.roundRect(x, fc.pdf_y(y + h), w, h, 4, stroke=1, fill=0)
    c.setFont(fc.bold, 8)
    c.setFillColor(MUTE)
    c.drawCentredString(x + w/2.0, fc.pdf_y(y + h/2.0) - 3, label)
    c.restoreState()


def _remote_image(fc: FlowCanvas, url: Optional[str], x: float, y: float, w: float,
                  opts: RenderOptions) -> bool:
    """Download `url`, draw it once and drop the temp file. Failures are logged only."""
    if not url:
        log.warning("No image url to draw at (%s, %s)", x, y)
        return False
    try:
        with local_image(url, timeout=opts.image_timeout, temp_dir=opts.temp_dir) as path:
            if not path:
                log.warning("Image %s not found", url)
                return False
            fc.image(path, x, y, w)
            return True
    except Exception as e:
        log.error("Error downloading or placing the image %s: %s", url, e)
        return False


# =====================================================================
# PRIMITIVES
# =====================================================================

def summary_rule(fc: FlowCanvas, y: float):
    """Full-width black rule used on the summary page."""
    fc.hr(y, RULE_X1, RULE_X2, width=1, color=colors.black)


def section_rule(fc: FlowCanvas, x1: float = 55, x2: float = 320):
    """Short gray rule just above the cursor, between ticket page sections."""
    fc.hr(fc.y - 2, x1, x2, width=0.8, color=RULE)
    fc.move_down(0.2)


def _table_row(fc: FlowCanvas, y: float, name: str, unit: str, qty: str, total: str):
    fc.text(name, COL_ITEM, y, width=COL_W)
    fc.text(unit, COL_UNIT, y, width=COL_W, align="center")
    fc.text(qty, COL_QTY, y, width=COL_W, align="center")
    fc.text(total, COL_TOTAL, y, width=fc.page_w - MARGIN - COL_TOTAL, align="right")


def _record_block(fc: FlowCanvas, source: records.RecordSource, order: Mapping, *,
                  x: float, width: float, zone: str, title_prefix: str = ""):
    """Name, address lines and the order/end date pair for an event or product."""
    gap = 5
    fc.set_font(15, bold=True, color=TEXT)
    fc.text(f"{title_prefix}{source.name}", x, fc.y, width=width)
    fc.move_down()

    fc.set_font(9, bold=False)
    for i, line in enumerate(source.address_lines()):
        fc.text(line, x, fc.y + (gap if i else 0), width=width)
    fc.move_down(1)

    hdr = records.header(order)
    fc.move_down(0.3)
    fc.set_font(15)
    fc.text(date_range_text(hdr.get("orderDate"), hdr.get("end"), zone), x, fc.y, width=width)
    fc.move_down(0.2)

    fc.set_font(9)
    fc.text(DATE_CAPTION, x, fc.y + 2, width=width)


# =====================================================================
# SUMMARY PAGE
# =====================================================================

def _summary_header(fc: FlowCanvas, order: Mapping, opts: RenderOptions):
    _logo_or_placeholder(fc, opts, opts.logo, 50, 45, 50, 50)
    fc.set_font(20, bold=False, color=TEXT)
    fc.text(records.header_text(order, "application"), 110, 57)

    fc.set_font(10)
    right_w = fc.page_w - MARGIN - 200
    fc.text(records.header_text(order, "business"), 200, 50, width=right_w, align="right")
    fc.text(records.header_text(order, "businessCity"), 200, 65, width=right_w, align="right")
    fc.text(records.header_text(order, "businessWebsite"), 200, 80, width=right_w, align="right")
    fc.move_down()


def _event_summary(fc: FlowCanvas, order: Mapping, opts: RenderOptions):
    event = records.record_source(order, records.EVENT)
    if event is None:
        log.warning("Order has an 'event' key that is not a record; skipping event summary")
        return
    fc.move_down(3)
    _record_block(fc, event, order, x=MARGIN * 1.2, width=fc.page_w - MARGIN * 2.2,
                  zone=opts.time_zone, title_prefix="Event Name: ")
    fc.move_down(2)

    images = event.images
    if _remote_image(fc, images[0] if images else None,
                     fc.page_w - IMAGE_W - IMAGE_RIGHT, 120, IMAGE_W, opts):
        fc.move_down(0.5)
    fc.move_down(5)


def _customer_information(fc: FlowCanvas, order: Mapping, opts: RenderOptions):
    top = fc.y + 20
    fc.set_font(20, bold=False, color=TEXT)
    fc.text("Order Confirmation", 53, top)
    summary_rule(fc, top + 25)
    top += 40

    hdr = records.header(order)
    order_dt = format_datetime(parse_order_date(hdr.get("orderDate")), opts.time_zone)

    source = records.record_source(order, records.EVENT) or records.record_source(order, records.PRODUCT)
    record_name, record_dt = "", ""
    if source is not None:
        record_name = source.name
        record_dt = format_datetime(from_epoch(source.start), opts.time_zone)

    fc.set_font(10, bold=False)
    fc.text("Order Id:", 50, top, width=95)
    fc.set_font(bold=True)
    fc.text(order_id_tail(hdr.get("orderId")), 150, top, width=145)
    fc.set_font(bold=False)
    fc.text("Order Date:", 50, top + 15, width=95)
    fc.text(order_dt, 150, top + 15, width=145)
    fc.text("Email:", 50, top + 30, width=95)
    fc.text(truncate_email(hdr.get("customerEmail")), 150, top + 30, width=145)
    fc.set_font(bold=True)
    fc.text(records.header_text(order, "seller"), 300, top, width=fc.page_w - MARGIN - 300)
    fc.set_font(bold=False)
    fc.text(record_name, 300, top + 15, width=fc.page_w - MARGIN - 300)
    fc.text(record_dt, 300, top + 30, width=fc.page_w - MARGIN - 300)

    summary_rule(fc, top + 52)
    fc.y = top + 54


def _invoice_table(fc: FlowCanvas, order: Mapping):
    rows, totals = invoice_rows(records.order_items(order), order.get("tax"))
    bottom_limit = FOOTER_Y - 20

    def header_row(y):
        fc.set_font(10, bold=True)
        _table_row(fc, y, "Item", "Unit Cost", "Quantity", "Line Total")
        fc.set_font(bold=False)

    pos = fc.y + 20
    header_row(pos)
    for row in rows:
        pos += TABLE_ROW_H
        if pos + 20 > bottom_limit:
            log.debug("Invoice table continues on page %s", fc.pages + 1)
            fc.new_page(A4, MARGIN)
            pos = MARGIN
            header_row(pos)
            pos += TABLE_ROW_H
        _table_row(fc, pos, *row)
        summary_rule(fc, pos + 20)

    for label in ("Subtotal", "Tax", "Total"):
        pos += TABLE_ROW_H
        if pos + 20 > bottom_limit:
            fc.new_page(A4, MARGIN)
            pos = MARGIN
        _table_row(fc, pos, "", "", label, totals[label])
    fc.y = pos + fc.line_height()


def _summary_footer(fc: FlowCanvas):
    fc.set_font(10, bold=False)
    fc.text("Thank you for your business.", 50, FOOTER_Y, width=500, align="center")


def summary_page(fc: FlowCanvas, order: Mapping, opts: RenderOptions):
    """Page 1: header, optional event summary, customer block, invoice table, footer."""
    _summary_header(fc, order, opts)
    if "event" in order:
        _event_summary(fc, order, opts)
    _customer_information(fc, order, opts)
    _invoice_table(fc, order)
    _summary_footer(fc)


# =====================================================================
# TICKET / PRODUCT PAGES
# =====================================================================

def _ticket_block(fc: FlowCanvas, source: records.RecordSource, index: int):
    ticket = records.ticket_at(source, index)
    if ticket is None:
        return
    f = records.ticket_fields(ticket)

    fc.set_font(12, bold=False)
    fc.text(f"Name: {f['name']}", RECORD_X, fc.y, width=RECORD_W)

    fc.set_font(8)
    for line in (
        f"Details: {f['details']}",
        f"ID: {f['id']}",
        f"Party: {f['party']}",
        f"Price: {f['price']}",
        f"Quantity: {f['quantity']}",
        f"Sale Start: {f['sale_start']}",
    ):
        fc.text(line, RECORD_X, fc.y, width=RECORD_W)

    for i, line in enumerate(records.ticket_response_lines(ticket)):
        fc.set_font(10 if i == 0 else 9)
        fc.text(line, RECORD_X, fc.y, width=RECORD_W)
    fc.move_down(0.3)


def _record_section(fc: FlowCanvas, source: records.RecordSource, order: Mapping,
                    index: int, opts: RenderOptions):
    _record_block(fc, source, order, x=RECORD_X, width=RECORD_W, zone=opts.time_zone)

    url = records.representative_image_url(order, index, per_item=opts.per_item_image)
    _remote_image(fc, url, fc.page_w - IMAGE_W - IMAGE_RIGHT, 40, IMAGE_W, opts)

    fc.move_down(0.3)
    section_rule(fc)
    fc.move_down(0.3)
    _ticket_block(fc, source, index)
    fc.move_down(0.3)
    section_rule(fc)
    fc.move_down(0.3)


def _item_block(fc: FlowCanvas, order: Mapping, index: int):
    item = records.item_at(order, index)
    if item is None:
        return
    f = records.item_fields(item)

    fc.move_down(1)
    fc.set_font(12, bold=False, color=TEXT)
    fc.text(f"Item {index + 1}: {f['name']}", RECORD_X, fc.y)

    fc.set_font(10)
    fc.text(f"Price: ${f['price']}", RECORD_X, fc.y)
    fc.text(f"Quantity: {f['quantity']}", RECORD_X, fc.y)
    fc.text(f"Type: {f['type']}", RECORD_X, fc.y)
    fc.text(f"Details: {f['details']}", RECORD_X, fc.y)
    fc.move_down(1)

    for title, response in records.item_response_pairs(item):
        fc.text(f"Title: {title}", RECORD_X, fc.y)
        fc.text(f"Response: {response}", RECORD_X, fc.y)
        fc.move_down(1)
    fc.move_down(1)


def _qr_block(fc: FlowCanvas, order: Mapping, index: int, opts: RenderOptions):
    try:
        data = opts.qr_data(order_id=records.header_text(order, "orderId"), index=index)
        _draw_qr(fc, data, (fc.page_w - QR_SIZE) / 2, fc.y, QR_SIZE)
    except Exception as e:
        log.error("QR code for item %s could not be drawn: %s", index, e)
    fc.y += QR_SIZE


def _seller_image(fc: FlowCanvas, opts: RenderOptions):
    """Circular seller image on a peach disc, right of center."""
    x = (fc.page_w - SELLER_D) / 2 + SELLER_SHIFT
    y = fc.y
    r = SELLER_D / 2.0
    cx, cy = x + r, fc.pdf_y(y + r)

    c = fc.c
    c.saveState()
    c.setFillColor(PEACH)
    c.circle(cx, cy, r, stroke=0, fill=1)
    c.restoreState()

    c.saveState()
    p = c.beginPath()
    p.circle(cx, cy, r)
    c.clipPath(p, stroke=0, fill=0)
    try:
        with local_image(opts.seller_image, timeout=opts.image_timeout, temp_dir=opts.temp_dir) as path:
            _safe_img(fc, path, x, y, SELLER_D, SELLER_D, keep_aspect=False)
    except Exception as e:
        log.error("Error downloading or placing the seller image: %s", e)
    finally:
        c.restoreState()
    fc.y = y + SELLER_D


def terms_block_overflows(y: float, box_height: float, top_margin: float, page_height: float) -> bool:
    return y + box_height + top_margin > page_height


def static_terms_block(fc: FlowCanvas, order: Mapping, opts: RenderOptions,
                       top_margin: float = TERMS_TOP_MARGIN):
    """
    Usage-tip box on the left, four-part legal column on the right, then the
    app promotion strip. Breaks the page first when the box would not fit.
    """
    title, details = records.usage_box(order)
    box_w = fc.page_w * 0.45

    fc.set_font(12, bold=False)
    title_h = fc.height_of_string(title, box_w - 20)
    fc.set_font(7)
    details_h = fc.height_of_string(details, box_w - 30)
    box_h = title_h + details_h + 20

    if terms_block_overflows(fc.y, box_h, top_margin, fc.page_h):
        fc.new_page()
        fc.y = top_margin

    start_x = fc.page_w * 0.05
    start_y = fc.y + top_margin
    fc.rect(start_x, start_y, box_w, box_h)

    fc.set_font(12)
    fc.text(title, start_x + 10, start_y + 10, width=box_w - 20)
    fc.set_font(7)
    fc.text(details, start_x + 10, start_y + title_h + 15, width=box_w - 20)

    right_x = start_x + box_w + 10
    col_w = fc.page_w - right_x - fc.page_w * 0.05
    bottom = fc.page_h - fc.margin
    continued = False
    ry = start_y
    fc.set_font(10)
    fc.text(TERMS_HEADING, right_x, ry, width=col_w)
    ry += 20
    for heading, body in TERMS_SECTIONS:
        fc.set_font(5)
        need = fc.height_of_string(body, col_w) + (15 if heading else 0)
        if ry + need > bottom:
            log.debug("Terms column continues on page %s", fc.pages + 1)
            fc.new_page()
            ry = fc.margin
            continued = True
        if heading:
            fc.set_font(7)
            fc.text(heading, right_x, ry, width=col_w)
            ry += 15
        fc.set_font(5)
        ry += fc.text(body, right_x, ry, width=col_w) + TERMS_SECTION_GAP

    # the app strip sits on the left, below the box or at the top of a continuation page
    fc.y = fc.margin if continued else start_y + box_h + 10
    app_strip(fc, order, opts)


def app_strip(fc: FlowCanvas, order: Mapping, opts: RenderOptions, x: float = APP_X):
    """Logo, blurb and two store badges, each badge a clickable link."""
    content_w = fc.page_w * 0.4
    strip_h = APP_LOGO + 12 + 2 * fc.line_height(8) + 24 + BADGE_H
    if fc.y + strip_h > fc.page_h - fc.margin:
        fc.new_page()

    _logo_or_placeholder(fc, opts, opts.logo, x + (content_w - APP_LOGO) / 2, fc.y, APP_LOGO, APP_LOGO)
    fc.y += APP_LOGO + 12

    icon = records.app_icon(order)
    fc.set_font(8, bold=False, color=TEXT)
    fc.text(icon.get("description") or APP_BLURB, x + 5, fc.y, width=content_w, align="center")
    fc.move_down(2)

    margin = (content_w - BADGE_W * 2) / 3
    ios_x = x + margin
    android_x = ios_x + BADGE_W + margin
    y = fc.y
    _logo_or_placeholder(fc, opts, opts.ios_badge, ios_x, y, BADGE_W, BADGE_H, label="App Store")
    _logo_or_placeholder(fc, opts, opts.android_badge, android_x, y, BADGE_W, BADGE_H, label="Google Play")
    fc.link(ios_x, y, BADGE_W, BADGE_H, icon.get("iosAppUrl") or opts.ios_store_url)
    fc.link(android_x, y, BADGE_W, BADGE_H, icon.get("androidAppUrl") or opts.android_store_url)
    fc.y = y + BADGE_H
    fc.move_down(2)


def ticket_pages(fc: FlowCanvas, order: Mapping, opts: RenderOptions):
    """
    One page per index up to max(tickets, items). Event and product modes are
    checked independently; a page break follows every index but the last.
    """
    total = records.max_length(order)
    if total == 0:
        log.info("Order has no tickets or items; summary page only")
        return

    sources = [
        records.record_source(order, kind)
        for kind in (records.EVENT, records.PRODUCT)
        if records.has_tickets(order, kind)
    ]
    n_items = len(records.order_items(order))

    fc.new_page(TICKET_PAGE, MARGIN)
    for i in range(total):
        for source in sources:
            if i < len(source.tickets):
                _record_section(fc, source, order, i, opts)

        if i < n_items:
            # item block once per active mode, once when no mode is active
            for _ in sources or [None]:
                _item_block(fc, order, i)

        _qr_block(fc, order, i, opts)
        _seller_image(fc, opts)
        static_terms_block(fc, order, opts)

        if i < total - 1:
            fc.new_page(TICKET_PAGE, MARGIN)


# =====================================================================
# PUBLIC API
# =====================================================================

def _render(order: Mapping, target, opts: RenderOptions) -> int:
    fc = FlowCanvas(target, pagesize=A4, margin=MARGIN)
    order_id = "?"
    try:
        order_id = records.header_text(order, "orderId") or "?"
        log.info(
            "Rendering invoice %s: event %s, products %s",
            order_id,
            "available" if records.event_check(order) else "not available",
            "available" if records.products_check(order) else "not available",
        )
        summary_page(fc, order, opts)
        ticket_pages(fc, order, opts)
    except Exception:
        log.exception("Invoice render failed for order %s; saving partial document", order_id)
    finally:
        fc.save()
    return fc.pages


def _options(options: Optional[RenderOptions], overrides: Mapping[str, Any]) -> RenderOptions:
    opts = options or RenderOptions.from_settings()
    return opts.with_overrides(overrides) if overrides else opts


def render_invoice_pdf(order: Mapping, path: Union[str, Path],
                       options: Optional[RenderOptions] = None, **overrides) -> Path:
    """Write the invoice PDF to `path`. Render errors are logged, never raised."""
    path = Path(path)
    pages = _render(order, str(path), _options(options, overrides))
    log.info("Wrote %s (%s pages)", path, pages)
    return path


def build_invoice_pdf(order: Mapping, options: Optional[RenderOptions] = None, **overrides) -> bytes:
    """Same document as render_invoice_pdf, returned in memory."""
    buf = BytesIO()
    _render(order, buf, _options(options, overrides))
    return buf.getvalue()
