"""Payment model."""

from datetime import date
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import BigInteger, CheckConstraint, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database.base import TenantScopedModel


class PaymentStatus(StrEnum):
    """Payment status options. Only PAID counts as revenue."""

    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class PaymentMethod(StrEnum):
    """Suggested method labels; free text is accepted as well."""

    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    E_WALLET = "e_wallet"


class Payment(TenantScopedModel):
    """Tuition payment recorded for a student."""

    __tablename__ = "payments"
    __table_args__ = (CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),)

    student_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("students.id"), nullable=True, index=True
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.PENDING.value, index=True
    )
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    student: Mapped["Student | None"] = relationship("Student")

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID.value


from src.modules.students.models import Student  # noqa: E402
