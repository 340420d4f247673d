"""Pytest configuration and fixtures."""

import io
import os
from pathlib import Path

import pytest

# Set test environment variables before importing modules
os.environ["GOOGLE_API_KEY"] = "test-api-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["LANGCHAIN_TRACING_V2"] = "false"
os.environ["LANGSMITH_TRACING"] = "false"

import fitz  # noqa: E402
from docx import Document as DocxDocument  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from rfq_compliance.api.app import create_app  # noqa: E402
from rfq_compliance.config import Settings  # noqa: E402
from rfq_compliance.llm.client import ModelClient  # noqa: E402
from rfq_compliance.loaders.registry import DocumentExtractor  # noqa: E402
from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator  # noqa: E402
from tests.fakes import FakeGenerativeModel  # noqa: E402


@pytest.fixture
def fake_model() -> FakeGenerativeModel:
    """Fake model returning a short prose answer."""
    return FakeGenerativeModel()


@pytest.fixture
def model_client(fake_model: FakeGenerativeModel) -> ModelClient:
    return ModelClient(fake_model, model_name="test-model", timeout_seconds=5.0)


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Directory where uploads are materialized during a test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(upload_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        google_api_key="test-api-key",
        environment="test",
        upload_temp_dir=upload_dir,
        max_upload_bytes=1024 * 1024,
    )


@pytest.fixture
def extractor(upload_dir: Path) -> DocumentExtractor:
    return DocumentExtractor(temp_dir=upload_dir)


@pytest.fixture
def orchestrator(model_client: ModelClient, extractor: DocumentExtractor) -> ComplianceOrchestrator:
    return ComplianceOrchestrator(model_client, extractor=extractor)


@pytest.fixture
def client(test_settings: Settings, model_client: ModelClient) -> TestClient:
    """Test client wired to the fake model."""
    app = create_app(settings=test_settings, model_client=model_client)
    return TestClient(app)


@pytest.fixture
def pdf_bytes() -> bytes:
    """A one-page PDF containing an RFQ requirement."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Must support TLS 1.2")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes() -> bytes:
    """A DOCX proposal with one paragraph and one table."""
    doc = DocxDocument()
    doc.add_paragraph("We support TLS 1.2 and 1.3")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Encryption"
    table.rows[0].cells[1].text = "AES-256"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def non_compliant_findings() -> list[dict]:
    return [
        {
            "requirement_summary": "Support TLS 1.3 only",
            "proposal_excerpt": "We support TLS 1.2 and 1.3",
            "compliance_status": "NON-COMPLIANT",
            "actionable_insight": "Disable TLS 1.2 to meet the TLS 1.3-only requirement.",
        }
    ]
