from src.core.pdf.service import PDFService, build_receipt_context, business_info, pdf_service

__all__ = ["PDFService", "build_receipt_context", "business_info", "pdf_service"]
