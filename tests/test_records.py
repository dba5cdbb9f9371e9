import logging

import pytest

from eticket import records


def test_mode_checks(event_order, product_order):
    assert records.event_check(event_order)
    assert not records.products_check(event_order)
    assert records.products_check(product_order)
    assert not records.event_check(product_order)


def test_empty_tickets_do_not_count():
    order = {"event": {"tickets": []}, "product": {"tickets": [{"name": "p"}]}}
    assert not records.event_check(order)
    assert records.available_tickets(order) == [{"name": "p"}]


def test_max_length_is_larger_of_tickets_and_items(event_order, product_order):
    assert records.max_length(event_order) == 3
    assert records.max_length(product_order) == 2
    assert records.max_length({}) == 0


def test_record_source_rejects_unknown_kind(event_order):
    with pytest.raises(ValueError):
        records.record_source(event_order, "venue")


def test_address_lines(event_order):
    source = records.record_source(event_order, records.EVENT)
    assert source.address_lines() == [
        "City: Washington",
        "Address Line: 1100 New York Ave NW",
        "Postal Code: 20005",
        "State: DC",
        "Location Name: Hot Topic",
    ]


def test_ticket_field_defaults(event_order):
    free, general, _ = event_order["event"]["tickets"]
    f = records.ticket_fields(free)
    assert f["price"] == 0
    assert f["party"] == 5
    g = records.ticket_fields(general)
    assert g["party"] == "N/A"
    assert g["price"] == 3000

    empty = records.ticket_fields({"party": 0})
    assert empty["name"] == "N/A"
    assert empty["sale_start"] == "N/A"
    assert empty["quantity"] == 0
    assert empty["party"] == 0


def test_response_lines_only_for_answered_options(event_order):
    free, general, vip = event_order["event"]["tickets"]
    assert records.ticket_response_lines(free) == [
        "Responses",
        "Title: How Did You Hear About This Party?",
        "Responses: Testingggggggggg",
    ]
    assert records.ticket_response_lines(general) == []
    assert records.ticket_response_lines(vip) == []


def test_item_fields_and_responses(event_order):
    item = event_order["items"][0]
    assert records.item_fields(item)["type"] == "product"
    assert records.item_fields({})["details"] == ""
    assert records.item_response_pairs(item) == [("What is your Name?", "Shenna Scott ")]


def test_out_of_range_lookups_log_and_return_none(event_order, caplog):
    source = records.record_source(event_order, records.EVENT)
    with caplog.at_level(logging.ERROR, logger="eticket.records"):
        assert records.ticket_at(source, 3) is None
        assert records.item_at(event_order, 1) is None
    assert "Invalid event ticket index 3" in caplog.text
    assert "Item index out of bounds: 1" in caplog.text


def test_representative_image(product_order, event_order):
    # no item in the product sample carries an image
    assert records.representative_image_url(product_order, 1) is None
    url = event_order["items"][0]["image"]
    assert records.representative_image_url(event_order, 2) == url

    order = {"items": [{"image": "a.png"}, {"image": "b.png"}]}
    assert records.representative_image_url(order, 1) == "a.png"
    assert records.representative_image_url(order, 1, per_item=True) == "b.png"


def test_usage_box_and_app_icon(event_order, product_order):
    assert records.usage_box(event_order) == ("Usage tips Yurplan", "Must be presented at the event check")
    assert records.app_icon(product_order) == {}


def test_load_order_rejects_non_object(tmp_path):
    path = tmp_path / "order.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        records.load_order(path)


def test_non_mapping_header_reads_as_empty():
    order = {"header": "not a mapping"}
    assert records.header(order) == {}
    assert records.header_text(order, "orderId") == ""


def test_response_lines_keep_option_order():
    ticket = {
        "options": [
            {"title": "Seat", "response": "A1"},
            {"title": "Diet"},
            {"title": "Shirt", "response": "M"},
            "not an option",
            {"title": "Guest", "response": ""},
        ]
    }
    assert records.ticket_response_lines(ticket) == [
        "Responses",
        "Title: Seat",
        "Responses: A1",
        "Title: Shirt",
        "Responses: M",
        "Title: Guest",
        "Responses: N/A",
    ]
