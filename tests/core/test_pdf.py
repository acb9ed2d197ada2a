"""Tests for PDF rendering (receipt and payments report). WeasyPrint is mocked to avoid system deps."""

import sys
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.exceptions import PdfGenerationUnavailableError
from src.core.pdf import build_receipt_context, business_info, pdf_service
from src.core.tenants.models import Tenant
from src.modules.payments.models import Payment, PaymentStatus
from src.modules.payments.service import PaymentService, payment_to_response
from src.modules.students.models import Student

FAKE_PDF = b"%PDF-1.4 fake pdf content"


async def _setup_payment(db_session: AsyncSession, tenant_id: int) -> Payment:
    student = Student(tenant_id=tenant_id, name="Andi Wijaya", subject="Matematika")
    db_session.add(student)
    await db_session.flush()
    payment = Payment(
        tenant_id=tenant_id,
        student_id=student.id,
        amount=Decimal("500000.00"),
        payment_date=date(2026, 10, 5),
        status=PaymentStatus.PAID.value,
        payment_method="bank_transfer",
    )
    db_session.add(payment)
    await db_session.commit()
    return await PaymentService(db_session).get_payment_by_id(tenant_id, payment.id)


class TestReceiptContext:
    async def test_receipt_context(self, db_session: AsyncSession, owner: dict):
        payment = await _setup_payment(db_session, owner["tenant_id"])
        tenant = await db_session.get(Tenant, owner["tenant_id"])

        context = build_receipt_context(
            payment_to_response(payment), tenant, generated_at=datetime(2026, 10, 19, 10, 0)
        )

        assert context["receipt_number"] == f"INV-{payment.id:06d}"
        assert context["amount_in_words"].endswith("Rupiah")
        assert context["business"]["name"] == "Les Privat Cerdas"
        assert context["payment"]["student_name"] == "Andi Wijaya"

    def test_business_info_without_tenant(self):
        info = business_info(None)
        assert info["name"] == settings.business_name
        assert info["address"] == ""


class TestTemplates:
    def test_receipt_html(self):
        html = pdf_service.render_html(
            "receipt.html",
            {
                "payment": {
                    "id": 7,
                    "student_name": "Andi <b>Wijaya</b>",
                    "subject": "Matematika",
                    "amount": Decimal("500000"),
                    "payment_date": date(2026, 10, 5),
                    "status": "paid",
                    "payment_method": "cash",
                    "notes": None,
                },
                "receipt_number": "INV-000007",
                "amount_in_words": "Lima Ratus Ribu Rupiah",
                "business": business_info(None),
                "generated_at": datetime(2026, 10, 19, 10, 0),
            },
        )
        assert "INV-000007" in html
        assert "Rp 500.000" in html
        assert "Lima Ratus Ribu Rupiah" in html
        # Autoescaped
        assert "Andi &lt;b&gt;Wijaya&lt;/b&gt;" in html

    def test_unavailable_weasyprint_raises(self):
        # A None entry in sys.modules makes the import fail like missing system libraries
        with patch.dict(sys.modules, {"weasyprint": None}):
            with pytest.raises(PdfGenerationUnavailableError):
                pdf_service.generate_receipt_pdf(
                    {
                        "payment": {"id": 1, "amount": 0, "payment_date": date(2026, 1, 1)},
                        "receipt_number": "INV-000001",
                        "amount_in_words": "Nol Rupiah",
                        "business": business_info(None),
                        "generated_at": datetime(2026, 1, 1),
                    }
                )


class TestReceiptEndpoint:
    async def test_download_receipt(
        self, client: AsyncClient, db_session: AsyncSession, owner: dict
    ):
        payment = await _setup_payment(db_session, owner["tenant_id"])

        with patch("src.modules.payments.router.pdf_service") as mock_pdf:
            mock_pdf.generate_receipt_pdf.return_value = FAKE_PDF
            response = await client.get(
                f"/api/v1/payments/{payment.id}/receipt", headers=owner["headers"]
            )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert f"Invoice-INV-{payment.id:06d}.pdf" in response.headers["content-disposition"]
        assert response.content == FAKE_PDF
        context = mock_pdf.generate_receipt_pdf.call_args[0][0]
        assert context["payment"]["amount"] == Decimal("500000.00")

    async def test_receipt_unavailable_returns_503(
        self, client: AsyncClient, db_session: AsyncSession, owner: dict
    ):
        payment = await _setup_payment(db_session, owner["tenant_id"])

        with patch("src.modules.payments.router.pdf_service") as mock_pdf:
            mock_pdf.generate_receipt_pdf.side_effect = PdfGenerationUnavailableError()
            response = await client.get(
                f"/api/v1/payments/{payment.id}/receipt", headers=owner["headers"]
            )

        assert response.status_code == 503
        assert response.json()["success"] is False

    async def test_receipt_of_other_tenant_is_not_found(
        self, client: AsyncClient, db_session: AsyncSession, owner: dict, make_owner
    ):
        other = await make_owner(email="other@example.com", tenant_name="Bimbel Lain")
        payment = await _setup_payment(db_session, other["tenant_id"])

        response = await client.get(
            f"/api/v1/payments/{payment.id}/receipt", headers=owner["headers"]
        )
        assert response.status_code == 404
