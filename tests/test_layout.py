from io import BytesIO

from reportlab.pdfbase.pdfmetrics import stringWidth

from eticket.layout import FlowCanvas, hex_color, wrap_text


def test_wrap_text_fits_width():
    text = "Except with the express agreement of the organiser, this E-Ticket cannot be refunded"
    lines = wrap_text(text, 120, "Helvetica", 10)
    assert len(lines) > 1
    assert all(stringWidth(line, "Helvetica", 10) <= 120 for line in lines)
    assert " ".join(lines) == text


def test_wrap_text_keeps_newlines():
    assert wrap_text("one\ntwo", 500, "Helvetica", 10) == ["one", "two"]


def test_long_word_is_not_split():
    assert wrap_text("Testingggggggggggggggggggggggg", 20, "Helvetica", 10) == ["Testingggggggggggggggggggggggg"]


def test_hex_color():
    c = hex_color("#FFDDC1")
    assert (round(c.red, 3), round(c.green, 3), round(c.blue, 3)) == (1.0, round(0xDD / 255, 3), round(0xC1 / 255, 3))


def test_text_moves_cursor_below_block():
    fc = FlowCanvas(BytesIO())
    fc.set_font(10)
    h = fc.text("first line\nsecond line", 50, 100, width=300)
    assert h == 2 * fc.line_height()
    assert fc.y == 100 + h
    assert fc.x == 50


def test_new_page_changes_geometry():
    fc = FlowCanvas(BytesIO())
    fc.new_page((595.28, 841.89 * 1.2), 40)
    assert fc.pages == 2
    assert fc.page_h == 841.89 * 1.2
    assert fc.y == 40
