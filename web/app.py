"""
FastAPI application for the invoice PDF service.

Production deployment configuration via environment variables.
"""

import logging
from functools import partial
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from reporting import (
    CanvasSurface,
    InvoiceDocument,
    InvoiceTotals,
    PDFGenerationError,
    PremiumPDFGenerator,
    apply_totals,
    compute_totals,
    parse_line_items,
    pdf_filename,
)
from utils.config import Config

logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

CONFIG = Config.load()

# Development fallback only
LOCAL_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

GENERATE_ERROR = "Failed to generate PDF"


def cors_origins(config: Config) -> List[str]:
    """CORS origins for ``config``. Locked down in production."""
    if config.allowed_origins:
        return list(config.allowed_origins)
    return [] if config.production else list(LOCAL_ORIGINS)


def debug_enabled(config: Config) -> bool:
    """Debug mode is NEVER enabled in production."""
    return config.debug and not config.production


# =============================================================================
# Request Models
# =============================================================================

class TotalsInput(BaseModel):
    """Totals computed by the invoice editor. Override the stored rollup."""
    model_config = ConfigDict(populate_by_name=True)

    subtotal: float = 0.0
    discount_amount: float = Field(0.0, alias="discountAmount")
    tax_amount: float = Field(0.0, alias="taxAmount")
    total: float = 0.0


class GeneratePDFRequest(BaseModel):
    """Request body for PDF generation."""
    invoice: Dict[str, Any]
    totals: Optional[TotalsInput] = None


def build_document(request_data: GeneratePDFRequest) -> InvoiceDocument:
    """
    Turn a request into the document to render.

    Posted totals win. Without them, a record that carries no subtotal gets
    its totals derived from items and rates.
    """
    document = InvoiceDocument.from_dict(request_data.invoice)

    if request_data.totals is not None:
        totals = request_data.totals
        return apply_totals(document, InvoiceTotals(
            subtotal=totals.subtotal,
            discount_amount=totals.discount_amount,
            tax_amount=totals.tax_amount,
            total=totals.total,
        ))

    if "subtotal" not in request_data.invoice:
        return apply_totals(document, compute_totals(
            parse_line_items(document.items),
            tax_rate=document.tax_rate,
            discount_rate=document.discount_rate,
        ))

    return document


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or CONFIG
    is_production = config.production
    allowed_origins = cors_origins(config)

    app = FastAPI(
        title="SmartInvoice PDF Service",
        description="Premium multi-layout invoice PDF rendering",
        version="0.1.0",
        # Production settings: disable docs/redoc for private deployment
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        debug=debug_enabled(config),
    )

    # ==========================================================================
    # Healthcheck endpoints are registered first and perform no IO.
    # ==========================================================================
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    # CORS middleware - locked down for production
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    generator = PremiumPDFGenerator(
        surface_factory=partial(CanvasSurface, invariant=config.deterministic_pdf),
        output_dir=config.output_dir,
    )

    @app.post("/api/invoices/pdf")
    def generate_invoice_pdf_endpoint(request_data: GeneratePDFRequest):
        """
        Render an invoice to PDF and return it as a download.

        Returns:
            - application/pdf with an attachment filename on success
            - 500 with {"error": ...} if rendering fails
        """
        document = build_document(request_data)

        try:
            pdf_bytes = generator.generate(document)
        except PDFGenerationError:
            logger.error("PDF generation failed for invoice %s", document.invoice_number)
            return JSONResponse({"error": GENERATE_ERROR}, status_code=500)

        filename = pdf_filename(document)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/health")
    def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": "0.1.0",
            "environment": "production" if is_production else "development",
        }

    return app


# Create app instance for uvicorn
app = create_app()
