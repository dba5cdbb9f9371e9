from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from eticket import records
from eticket.conf import RenderOptions
from eticket.pdf import render_invoice_pdf


class Command(BaseCommand):
    help = "Render an invoice PDF from an order JSON file (defaults to the bundled event sample)."

    def add_arguments(self, parser):
        parser.add_argument("output", help="Where to write the PDF")
        parser.add_argument(
            "--order",
            default=str(records.SAMPLES_DIR / "event_order.json"),
            help="Path to an order JSON file",
        )
        parser.add_argument("--time-zone", default=None, help="IANA zone for printed dates")
        parser.add_argument(
            "--per-item-image",
            action="store_true",
            help="Show each item's own image beside its ticket block",
        )

    def handle(self, *args, **opts):
        try:
            order = records.load_order(opts["order"])
        except (OSError, ValueError) as e:
            raise CommandError(f"Could not read order: {e}")

        overrides = {}
        if opts["time_zone"]:
            overrides["time_zone"] = opts["time_zone"]
        if opts["per_item_image"]:
            overrides["per_item_image"] = True
        options = RenderOptions.from_settings(**overrides)

        out = Path(opts["output"])
        if out.parent and not out.parent.exists():
            out.parent.mkdir(parents=True, exist_ok=True)

        render_invoice_pdf(order, out, options=options)
        self.stdout.write(self.style.SUCCESS(f"Wrote {out}"))
