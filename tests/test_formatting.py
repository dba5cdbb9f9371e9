import logging
from datetime import datetime, timezone

from eticket import formatting


def test_format_currency_two_decimals():
    assert formatting.format_currency(3000 * 2) == "$6000.00"
    assert formatting.format_currency(4.5) == "$4.50"


def test_format_currency_non_numbers_print_zero():
    for value in (None, "12", float("nan"), float("inf"), True):
        assert formatting.format_currency(value) == "$0.00"


def test_line_total_defaults():
    assert formatting.line_total(3000, 2) == 6000
    assert formatting.line_total(3000, None) == 3000
    assert formatting.line_total(3000, 0) == 3000
    assert formatting.line_total(None, 4) == 0


def test_invoice_rows_and_totals(event_order):
    rows, totals = formatting.invoice_rows(event_order["items"], event_order["tax"])
    assert rows == [("VIP Ticket", "$4500.00", "3", "$13500.00")]
    assert totals == {"Subtotal": "$13500.00", "Tax": "$810.00", "Total": "$14310.00"}


def test_invoice_rows_missing_tax_is_zero():
    rows, totals = formatting.invoice_rows([{"name": "Pass", "price": 10}], None)
    assert rows == [("Pass", "$10.00", "1", "$10.00")]
    assert totals["Tax"] == "$0.00"
    assert totals["Total"] == "$10.00"


def test_truncate_email():
    assert formatting.truncate_email("dreaminkode@gmail.com") == "dreaminkode@gmail.com"
    long = "a.very.long.customer.address@example.com"
    assert formatting.truncate_email(long) == "a.very.long.customer.addr..."
    assert formatting.truncate_email(None) == ""


def test_order_id_tail():
    assert formatting.order_id_tail("-O3pZE9tDhUtAUO4BA6Q") == "UO4BA6Q"
    assert formatting.order_id_tail("abc") == "abc"


def test_order_date_in_eastern_time():
    dt = formatting.parse_order_date("2024-08-09T05:16:17.000Z")
    assert formatting.format_datetime(dt, "America/New_York") == "Aug 9 at 01:16 AM EDT"


def test_event_start_from_epoch():
    dt = formatting.from_epoch(1723485600)
    assert dt == datetime(2024, 8, 12, 18, 0, tzinfo=timezone.utc)
    assert formatting.format_datetime(dt, "America/New_York") == "Aug 12 at 02:00 PM EDT"


def test_invalid_order_date_falls_back_to_now(caplog):
    before = datetime.now(timezone.utc)
    with caplog.at_level(logging.WARNING, logger="eticket.formatting"):
        dt = formatting.parse_order_date("not a date")
    assert dt >= before
    assert "Invalid orderDate" in caplog.text


def test_naive_order_date_is_utc():
    dt = formatting.parse_order_date("2024-08-09T05:16:17")
    assert dt.utcoffset().total_seconds() == 0


def test_date_range_text():
    text = formatting.date_range_text("2024-08-09T05:16:17.000Z", "2024-08-10T12:00:00Z", "America/New_York")
    assert text == "8/9/2024   >    8/10/2024"


def test_short_date_unreadable_is_na():
    assert formatting.format_short_date(None, "UTC") == "N/A"
    assert formatting.format_short_date("soon", "UTC") == "N/A"


def test_truncate_email_boundary():
    exact = "a" * 13 + "@example.com"
    assert len(exact) == 25
    assert formatting.truncate_email(exact) == exact
    longer = "b" + exact
    assert formatting.truncate_email(longer) == longer[:25] + "..."
