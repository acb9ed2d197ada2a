"""Service for Payments module."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config import settings
from src.core.exceptions import NotFoundError
from src.modules.payments.models import Payment, PaymentStatus
from src.modules.payments.schemas import (
    PaymentCreate,
    PaymentResponse,
    PaymentSummaryResponse,
    PaymentUpdate,
)
from src.modules.reports import aggregator
from src.modules.reports.fetcher import RowFetcher
from src.modules.students.models import Student
from src.modules.students.service import StudentService

logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown Student"
UNKNOWN_METHOD = "Unknown"


def payment_to_response(payment: Payment) -> PaymentResponse:
    """Flatten a payment and its student; missing links fall back to placeholder labels."""
    student = payment.student
    return PaymentResponse(
        id=payment.id,
        student_id=payment.student_id,
        student_name=student.name if student else UNKNOWN_STUDENT,
        subject=aggregator.subject_key(
            student.subject if student else None, settings.unknown_subject_label
        ),
        amount=payment.amount,
        payment_date=payment.payment_date,
        due_date=payment.due_date,
        status=payment.status,
        payment_method=payment.payment_method or UNKNOWN_METHOD,
        notes=payment.notes,
        created_at=payment.created_at,
    )


class PaymentService:
    """Service for recording and listing payments of one tenant."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.students = StudentService(db)

    async def create_payment(self, tenant_id: int, data: PaymentCreate) -> Payment:
        await self.students.ensure_active_student(tenant_id, data.student_id)

        payment = Payment(
            tenant_id=tenant_id,
            student_id=data.student_id,
            amount=data.amount,
            payment_date=data.payment_date,
            due_date=data.due_date,
            status=data.status.value,
            payment_method=data.payment_method,
            notes=data.notes,
        )
        self.db.add(payment)
        await self.db.commit()
        logger.info(
            "Recorded payment id=%s tenant=%s status=%s", payment.id, tenant_id, payment.status
        )
        return await self.get_payment_by_id(tenant_id, payment.id)

    async def get_payment_by_id(self, tenant_id: int, payment_id: int) -> Payment:
        result = await self.db.execute(
            select(Payment)
            .where(Payment.id == payment_id, Payment.tenant_id == tenant_id)
            .options(selectinload(Payment.student))
            .execution_options(populate_existing=True)
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise NotFoundError("Payment", payment_id)
        return payment

    async def list_payments(
        self,
        tenant_id: int,
        search: str | None = None,
        status: PaymentStatus | None = None,
    ) -> list[Payment]:
        """Payments newest first. Search matches student name, subject or method."""
        query = (
            select(Payment)
            .outerjoin(Student, Student.id == Payment.student_id)
            .where(Payment.tenant_id == tenant_id)
            .options(selectinload(Payment.student))
            .order_by(Payment.created_at.desc(), Payment.id.desc())
        )
        if status is not None:
            query = query.where(Payment.status == status.value)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Student.name.ilike(pattern),
                    Student.subject.ilike(pattern),
                    Payment.payment_method.ilike(pattern),
                )
            )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_payment(
        self, tenant_id: int, payment_id: int, data: PaymentUpdate
    ) -> Payment:
        payment = await self.get_payment_by_id(tenant_id, payment_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("amount", "payment_date", "status"):
            if changes.get(required, "") is None:
                changes.pop(required)
        if "student_id" in changes:
            await self.students.ensure_active_student(tenant_id, changes["student_id"])
        for field, value in changes.items():
            if isinstance(value, PaymentStatus):
                value = value.value
            setattr(payment, field, value)
        await self.db.commit()
        return await self.get_payment_by_id(tenant_id, payment_id)

    async def delete_payment(self, tenant_id: int, payment_id: int) -> None:
        payment = await self.get_payment_by_id(tenant_id, payment_id)
        await self.db.delete(payment)
        await self.db.commit()

    async def summary(self, tenant_id: int | None) -> PaymentSummaryResponse:
        """Totals over all payments of the tenant; empty when there is no tenant."""
        if tenant_id is None:
            return PaymentSummaryResponse()
        payments = await RowFetcher(self.db).payments(tenant_id)
        return PaymentSummaryResponse(
            total_revenue=aggregator.total_revenue(payments),
            pending_amount=aggregator.amount_by_status(payments, PaymentStatus.PENDING),
            overdue_amount=aggregator.amount_by_status(payments, PaymentStatus.OVERDUE),
            paid_count=aggregator.count_by_status(payments, PaymentStatus.PAID),
            pending_count=aggregator.count_by_status(payments, PaymentStatus.PENDING),
            overdue_count=aggregator.count_by_status(payments, PaymentStatus.OVERDUE),
            transaction_count=len(payments),
        )
