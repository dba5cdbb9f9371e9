import json


def test_health(client):
    resp = client.get("/api/health/")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_render_invoice_returns_pdf(client, event_order):
    resp = client.post("/api/invoices/render.pdf", data=json.dumps(event_order), content_type="application/json")
    assert resp.status_code == 200
    assert resp["Content-Type"] == "application/pdf"
    assert resp["Content-Disposition"].startswith("attachment; filename=invoice_")
    assert resp.content.startswith(b"%PDF")


def test_render_invoice_accepts_pdf_accept_header(client, product_order):
    resp = client.post(
        "/api/invoices/render.pdf",
        data=json.dumps(product_order),
        content_type="application/json",
        HTTP_ACCEPT="application/pdf",
    )
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")


def test_render_invoice_rejects_non_object_body(client):
    resp = client.post("/api/invoices/render.pdf", data=json.dumps([1, 2]), content_type="application/json")
    assert resp.status_code == 400
    assert resp.json() == {"error": "order must be a JSON object"}


def test_render_invoice_rejects_get(client):
    assert client.get("/api/invoices/render.pdf").status_code == 405


def test_render_invoice_error_is_json_when_pdf_requested(client):
    resp = client.post(
        "/api/invoices/render.pdf",
        data=json.dumps("just a string"),
        content_type="application/json",
        HTTP_ACCEPT="application/pdf",
    )
    assert resp.status_code == 400
    assert resp["Content-Type"].startswith("application/json")
    assert resp.json() == {"error": "order must be a JSON object"}
