import pytest
from django.core.management import CommandError, call_command


def test_render_invoice_command_uses_bundled_sample(tmp_path):
    out = tmp_path / "invoice.pdf"
    call_command("render_invoice", str(out))
    assert out.read_bytes().startswith(b"%PDF")


def test_render_invoice_command_with_order_file(tmp_path, settings):
    settings.ETICKET = {"TEMP_DIR": str(tmp_path)}
    order = tmp_path / "order.json"
    order.write_text('{"header": {"orderId": "CLI-1"}, "items": [{"name": "Pass", "price": 5}]}', encoding="utf-8")
    out = tmp_path / "nested" / "cli.pdf"
    call_command("render_invoice", str(out), "--order", str(order), "--time-zone", "UTC")
    assert out.exists()


def test_render_invoice_command_bad_order(tmp_path):
    with pytest.raises(CommandError):
        call_command("render_invoice", str(tmp_path / "x.pdf"), "--order", str(tmp_path / "missing.json"))
