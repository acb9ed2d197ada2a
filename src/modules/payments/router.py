"""API endpoints for Payments module."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.pdf import build_receipt_context, pdf_service
from src.core.tenants.dependencies import ManagerScope, OptionalScope, Scope
from src.core.tenants.service import TenantService
from src.modules.payments.models import PaymentStatus
from src.modules.payments.schemas import (
    PaymentCreate,
    PaymentResponse,
    PaymentSummaryResponse,
    PaymentUpdate,
)
from src.modules.payments.service import PaymentService, payment_to_response
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "",
    response_model=ApiResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_payment(
    data: PaymentCreate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Record a payment."""
    payment = await PaymentService(db).create_payment(scope.tenant_id, data)
    return ApiResponse(
        message="Payment recorded successfully",
        data=payment_to_response(payment),
    )


@router.get(
    "",
    response_model=ApiResponse[list[PaymentResponse]],
)
async def list_payments(
    scope: OptionalScope,
    search: str | None = Query(None, description="Search by student, subject or method"),
    status_filter: PaymentStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    """List payments of the current tenant, newest first."""
    if scope is None:
        return ApiResponse(data=[])
    payments = await PaymentService(db).list_payments(
        scope.tenant_id, search=search, status=status_filter
    )
    return ApiResponse(data=[payment_to_response(p) for p in payments])


@router.get(
    "/summary",
    response_model=ApiResponse[PaymentSummaryResponse],
)
async def payments_summary(
    scope: OptionalScope,
    db: AsyncSession = Depends(get_db),
):
    """Revenue, pending and overdue totals of the current tenant."""
    summary = await PaymentService(db).summary(scope.tenant_id if scope else None)
    return ApiResponse(data=summary)


@router.get(
    "/{payment_id}",
    response_model=ApiResponse[PaymentResponse],
)
async def get_payment(
    payment_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Get payment by ID."""
    payment = await PaymentService(db).get_payment_by_id(scope.tenant_id, payment_id)
    return ApiResponse(data=payment_to_response(payment))


@router.get("/{payment_id}/receipt")
async def download_receipt(
    payment_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Download the payment receipt as PDF."""
    payment = await PaymentService(db).get_payment_by_id(scope.tenant_id, payment_id)
    tenant = await TenantService(db).get_tenant(scope.tenant_id)
    context = build_receipt_context(payment_to_response(payment), tenant)
    pdf_bytes = pdf_service.generate_receipt_pdf(context)
    filename = f"Invoice-{context['receipt_number']}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch(
    "/{payment_id}",
    response_model=ApiResponse[PaymentResponse],
)
async def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Update a payment (amount, date, status, method or notes)."""
    payment = await PaymentService(db).update_payment(scope.tenant_id, payment_id, data)
    return ApiResponse(
        message="Payment updated successfully",
        data=payment_to_response(payment),
    )


@router.delete(
    "/{payment_id}",
    response_model=ApiResponse[None],
)
async def delete_payment(
    payment_id: int,
    scope: ManagerScope,
    db: AsyncSession = Depends(get_db),
):
    """Delete a payment. Owner/admin only."""
    await PaymentService(db).delete_payment(scope.tenant_id, payment_id)
    return ApiResponse(message="Payment deleted successfully", data=None)
