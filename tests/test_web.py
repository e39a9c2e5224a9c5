"""
Tests for the PDF download endpoint.

Tests covering:
1. Healthchecks
2. PDF response body and headers
3. Totals handling in build_document
4. Error responses
"""

import pytest
from fastapi.testclient import TestClient

from reporting.pdf_generator import PremiumPDFGenerator
from utils.config import Config
from web.app import (
    GENERATE_ERROR,
    LOCAL_ORIGINS,
    GeneratePDFRequest,
    build_document,
    cors_origins,
    create_app,
    debug_enabled,
)

INVOICE = {
    "invoiceNumber": "INV-501",
    "invoiceType": "sales",
    "theme": "amazon",
    "date": "2025-05-01",
    "dueDate": "2025-05-31",
    "companyName": "Acme Consulting",
    "clientName": "Jordan Lee",
    "items": [
        {"description": "Strategy session", "quantity": 2, "rate": 150, "amount": 300},
        {"description": "Report", "quantity": 1, "rate": 200, "amount": 200},
    ],
    "taxRate": 10,
    "discountRate": 0,
}


@pytest.fixture
def client():
    return TestClient(create_app())


# =============================================================================
# Test: Health
# =============================================================================


class TestHealth:

    @pytest.mark.parametrize("path", ["/", "/health", "/api/health"])
    def test_health_endpoints(self, client, path):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] in ("ok", "healthy")

    def test_api_health_reports_version(self, client):
        assert client.get("/api/health").json()["version"] == "0.1.0"


# =============================================================================
# Test: PDF Endpoint
# =============================================================================


class TestInvoicePdfEndpoint:

    def test_returns_pdf_download(self, client):
        response = client.post("/api/invoices/pdf", json={"invoice": INVOICE})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="sales-INV-501.pdf"'
        assert response.content.startswith(b"%PDF-")

    def test_same_request_same_bytes(self, client):
        first = client.post("/api/invoices/pdf", json={"invoice": INVOICE}).content
        second = client.post("/api/invoices/pdf", json={"invoice": INVOICE}).content
        assert first == second

    def test_posted_totals_accepted(self, client):
        response = client.post("/api/invoices/pdf", json={
            "invoice": INVOICE,
            "totals": {"subtotal": 500, "discountAmount": 0, "taxAmount": 50, "total": 550},
        })
        assert response.status_code == 200

    def test_malformed_items_still_render(self, client):
        invoice = dict(INVOICE, items="{oops")
        response = client.post("/api/invoices/pdf", json={"invoice": invoice})
        assert response.status_code == 200

    def test_missing_invoice_is_rejected(self, client):
        assert client.post("/api/invoices/pdf", json={}).status_code == 422

    def test_render_failure_returns_500(self, client, monkeypatch):
        def broken(self, document):
            raise RuntimeError("boom")

        monkeypatch.setattr(PremiumPDFGenerator, "_render", broken)
        response = client.post("/api/invoices/pdf", json={"invoice": INVOICE})

        assert response.status_code == 500
        assert response.json() == {"error": GENERATE_ERROR}


# =============================================================================
# Test: build_document
# =============================================================================


class TestBuildDocument:
    """Totals precedence for incoming requests."""

    def test_totals_computed_when_absent(self):
        doc = build_document(GeneratePDFRequest(invoice=INVOICE))

        assert doc.subtotal == pytest.approx(500)
        assert doc.tax_amount == pytest.approx(50)
        assert doc.amount == pytest.approx(550)

    def test_stored_totals_kept(self):
        invoice = dict(INVOICE, subtotal=480, taxAmount=48, amount=528)
        doc = build_document(GeneratePDFRequest(invoice=invoice))

        assert doc.subtotal == 480
        assert doc.amount == 528

    def test_posted_totals_win(self):
        invoice = dict(INVOICE, subtotal=480, amount=528)
        doc = build_document(GeneratePDFRequest(
            invoice=invoice,
            totals={"subtotal": 1, "discountAmount": 2, "taxAmount": 3, "total": 4},
        ))

        assert (doc.subtotal, doc.discount_amount, doc.tax_amount, doc.amount) == (1, 2, 3, 4)

    def test_totals_accept_snake_case(self):
        request = GeneratePDFRequest(
            invoice=INVOICE,
            totals={"subtotal": 1, "discount_amount": 2, "tax_amount": 3, "total": 4},
        )
        assert build_document(request).tax_amount == 3


# =============================================================================
# Test: Explicit Config
# =============================================================================


class TestCreateAppConfig:
    """create_app honours the Config it is given, not the environment."""

    def test_production_hides_docs(self):
        client = TestClient(create_app(Config(production=True, allowed_origins=["https://app.example"])))

        for path in ("/docs", "/redoc", "/openapi.json"):
            assert client.get(path).status_code == 404
        assert client.get("/api/health").json()["environment"] == "production"

    def test_development_serves_docs(self):
        client = TestClient(create_app(Config(production=False)))

        assert client.get("/docs").status_code == 200
        assert client.get("/api/health").json()["environment"] == "development"

    def test_configured_origins_applied(self):
        client = TestClient(create_app(Config(production=True, allowed_origins=["https://app.example"])))

        allowed = client.get("/api/health", headers={"Origin": "https://app.example"})
        blocked = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert allowed.headers["access-control-allow-origin"] == "https://app.example"
        assert "access-control-allow-origin" not in blocked.headers

    def test_cors_origins(self):
        assert cors_origins(Config(production=False, allowed_origins=[])) == LOCAL_ORIGINS
        assert cors_origins(Config(production=True, allowed_origins=[])) == []
        assert cors_origins(Config(production=True, allowed_origins=["https://a.example"])) == [
            "https://a.example",
        ]

    def test_debug_never_in_production(self):
        assert debug_enabled(Config(debug=True, production=False)) is True
        assert debug_enabled(Config(debug=True, production=True)) is False


# =============================================================================
# Test: Deployed Entrypoint
# =============================================================================


class TestServe:

    def test_binds_public_host_on_configured_port(self, monkeypatch):
        import main

        calls = []
        monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        main.serve(Config(port=9123, log_level="WARNING"))

        ((app, kwargs),) = calls
        assert kwargs == {"host": "0.0.0.0", "port": 9123}
        assert app.title == "SmartInvoice PDF Service"
