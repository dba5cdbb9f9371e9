# views.py
import logging

from django.http import HttpResponse
from django.utils.text import slugify
from rest_framework import renderers
from rest_framework.decorators import api_view, parser_classes, permission_classes, renderer_classes
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from . import records
from .pdf import build_invoice_pdf

log = logging.getLogger("eticket.views")


class PassthroughPDFRenderer(renderers.BaseRenderer):
    """
    Accepts Accept: application/pdf so DRF doesn't 406 before our view runs.
    We still return HttpResponse(pdf_bytes), so this is a no-op renderer.
    """
    media_type = "application/pdf"
    format = "pdf"
    charset = None
    render_style = "binary"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        return data


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response({"ok": True})


# ---------- Invoices (PDF) ----------

@api_view(["POST"])
@permission_classes([AllowAny])
@parser_classes([JSONParser])
@renderer_classes([renderers.JSONRenderer, PassthroughPDFRenderer])
def render_invoice(request):
    order = request.data
    if not isinstance(order, dict):
        log.warning("INVOICE:BAD_BODY type=%s", type(order).__name__)
        # errors are always JSON, even when the client asked for a PDF
        request.accepted_renderer = renderers.JSONRenderer()
        request.accepted_media_type = "application/json"
        return Response({"error": "order must be a JSON object"}, status=400)

    order_id = records.header_text(order, "orderId") or "order"
    pdf_bytes = build_invoice_pdf(order)

    resp = HttpResponse(pdf_bytes, content_type="application/pdf")
    resp["Content-Disposition"] = f'attachment; filename=invoice_{slugify(order_id) or "order"}.pdf'
    log.info("INVOICE:SUCCESS order_id=%s bytes=%s", order_id, len(pdf_bytes))
    return resp
