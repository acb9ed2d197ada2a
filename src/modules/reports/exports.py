"""Export payments to CSV, XLSX, HTML and PDF."""

import csv
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from io import BytesIO, StringIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font

from src.core.pdf import pdf_service
from src.modules.reports.schemas import PaymentExportRow, PaymentExportSummary
from src.shared.utils.formatting import format_date, payment_status_label
from src.shared.utils.money import to_amount

# Column order and labels are part of the export format consumers rely on
PAYMENT_EXPORT_HEADERS = ["Student", "Subject", "Amount", "Date", "Status", "Method"]


class ExportFormat(StrEnum):
    CSV = "csv"
    XLSX = "xlsx"
    HTML = "html"
    PDF = "pdf"


MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv; charset=utf-8",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.HTML: "text/html; charset=utf-8",
    ExportFormat.PDF: "application/pdf",
}


def plain_amount(value: Any) -> int:
    """Whole rupiah, no grouping: 500000."""
    return int(to_amount(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _row_values(row: PaymentExportRow) -> list[Any]:
    return [
        row.student,
        row.subject,
        plain_amount(row.amount),
        format_date(row.payment_date),
        payment_status_label(row.status),
        row.method,
    ]


def build_payments_csv(rows: list[PaymentExportRow]) -> str:
    out = StringIO()
    writer = csv.writer(out)
    writer.writerow(PAYMENT_EXPORT_HEADERS)
    for row in rows:
        writer.writerow(_row_values(row))
    return out.getvalue()


def _write_table(ws: Any, rows: list[list[Any]], start_row: int = 1) -> None:
    """Write list of rows to sheet starting at start_row."""
    for i, row in enumerate(rows, start=start_row):
        for j, val in enumerate(row, start=1):
            ws.cell(row=i, column=j, value=val)


def build_payments_xlsx(
    rows: list[PaymentExportRow],
    summary: PaymentExportSummary,
    generated_at: datetime,
) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Payments"
    ws.cell(1, 1, f"Laporan Pembayaran {format_date(generated_at)}")
    ws.cell(1, 1).font = Font(bold=True, size=12)
    _write_table(ws, [PAYMENT_EXPORT_HEADERS], 3)
    for c in range(1, len(PAYMENT_EXPORT_HEADERS) + 1):
        ws.cell(3, c).font = Font(bold=True)
    row = 4
    for r in rows:
        _write_table(ws, [_row_values(r)], row)
        row += 1
    _write_table(ws, [["TOTAL (Lunas)", "", plain_amount(summary.total_revenue), "", "", ""]], row)
    for c in range(1, 4):
        ws.cell(row, c).font = Font(bold=True)
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def payments_report_context(
    rows: list[PaymentExportRow],
    summary: PaymentExportSummary,
    business: dict[str, str],
    generated_at: datetime,
) -> dict:
    return {
        "headers": PAYMENT_EXPORT_HEADERS,
        "rows": rows,
        "summary": summary,
        "business": business,
        "generated_at": generated_at,
    }


def build_payments_html(context: dict) -> str:
    return pdf_service.render_html("payments_report.html", context)


def build_payments_pdf(context: dict) -> bytes:
    return pdf_service.generate_payments_report_pdf(context)


def build_payments_export(
    fmt: ExportFormat,
    rows: list[PaymentExportRow],
    summary: PaymentExportSummary,
    business: dict[str, str],
    generated_at: datetime,
) -> tuple[bytes | str, str, str]:
    """Render payments in `fmt`. Returns (content, media type, filename)."""
    filename = f"laporan-pembayaran-{generated_at:%Y-%m-%d}.{fmt.value}"
    if fmt == ExportFormat.CSV:
        content = build_payments_csv(rows)
    elif fmt == ExportFormat.XLSX:
        content = build_payments_xlsx(rows, summary, generated_at)
    else:
        context = payments_report_context(rows, summary, business, generated_at)
        if fmt == ExportFormat.HTML:
            content = build_payments_html(context)
        else:
            content = build_payments_pdf(context)
    return content, MEDIA_TYPES[fmt], filename
