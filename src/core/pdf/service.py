"""PDF generation (payments report and payment receipt) from HTML templates."""

import logging
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from src.core.config import settings
from src.core.exceptions import PdfGenerationUnavailableError
from src.shared.utils.formatting import (
    format_currency,
    format_date,
    format_date_long,
    payment_status_label,
)
from src.shared.utils.money import amount_to_words

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates" / "pdf"


class PDFService:
    """Render Jinja2 templates to printable HTML and to PDF with WeasyPrint."""

    def __init__(self) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )
        # Templates format values with the same helpers as the API and CSV/XLSX exports
        self._env.filters["currency"] = format_currency
        self._env.filters["date_short"] = format_date
        self._env.filters["date_long"] = format_date_long
        self._env.filters["status_label"] = payment_status_label

    def render_html(self, template_name: str, context: dict) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context)

    def _write_pdf(self, html_content: str) -> bytes:
        try:
            from weasyprint import HTML
        except (OSError, ImportError) as e:
            raise PdfGenerationUnavailableError(
                f"PDF generation unavailable (WeasyPrint/system libs). On macOS: brew install pango glib. {e!s}"
            ) from e
        try:
            return HTML(string=html_content).write_pdf()
        except Exception as e:
            logger.error("WeasyPrint failed to render PDF", exc_info=e)
            raise PdfGenerationUnavailableError(str(e)) from e

    def generate_payments_report_pdf(self, context: dict) -> bytes:
        """Render payments report template with context and return PDF bytes."""
        return self._write_pdf(self.render_html("payments_report.html", context))

    def generate_receipt_pdf(self, context: dict) -> bytes:
        """Render receipt template with context and return PDF bytes."""
        return self._write_pdf(self.render_html("receipt.html", context))


def business_info(tenant) -> dict[str, str]:
    """Header block for documents: tenant name, falling back to the configured business name."""
    tenant_settings = (tenant.settings or {}) if tenant else {}
    return {
        "name": (tenant.name if tenant else None) or settings.business_name,
        "address": tenant_settings.get("address", ""),
        "phone": tenant_settings.get("phone", ""),
        "email": tenant_settings.get("email", ""),
    }


def build_receipt_context(payment_response, tenant, generated_at: datetime | None = None) -> dict:
    """Build template context for a payment receipt from a flattened payment response."""
    return {
        "payment": payment_response.model_dump(),
        "receipt_number": f"INV-{payment_response.id:06d}",
        "amount_in_words": amount_to_words(payment_response.amount),
        "business": business_info(tenant),
        "generated_at": generated_at or datetime.now(),
    }


pdf_service = PDFService()
