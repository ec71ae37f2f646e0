"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - pdf_bytes / blank_pdf_bytes / docx_bytes: generated sample documents
    - document_host: httpx client backed by a fake document server
    - fake_agent_service: stand-in for the LLM-backed AgentService
    - async_client: HTTPX client for API testing with both of the above wired in

Sample documents are generated in memory so the suite needs no binary fixtures.
"""

import io
from collections.abc import AsyncGenerator

import httpx
import pytest
from docx import Document
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from src.api import app
from src.api.dependencies import agent_service, document_config, http_client
from src.documents.config import DocumentConfig
from src.models.schemas import ChatRequest

PDF_URL = "https://files.example.com/reports/annual%20report.pdf"
DOCX_URL = "https://files.example.com/notes.docx"
TEXT_URL = "https://files.example.com/readme.txt"
MISSING_URL = "https://files.example.com/missing.pdf"
GOOGLE_DOC_URL = "https://docs.google.com/document/d/abc123/edit"
GOOGLE_EXPORT_URL = "https://docs.google.com/document/d/abc123/export?format=txt"


def build_pdf(page_texts: list[str], info: dict[str, str] | None = None) -> bytes:
    """Write a minimal PDF with one line of Helvetica text per page."""
    objects: dict[int, bytes] = {}
    page_ids = [4 + 2 * i for i in range(len(page_texts))]

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>".encode()
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"

    for text, page_id in zip(page_texts, page_ids):
        content_id = page_id + 1
        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        ).encode()
        stream = f"BT /F1 18 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects[content_id] = (
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    info_id = None
    if info:
        info_id = max(objects) + 1
        entries = " ".join(f"/{key} ({value})" for key, value in info.items())
        objects[info_id] = f"<< {entries} >>".encode()

    out = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for number in sorted(objects):
        offsets[number] = len(out)
        out += f"{number} 0 obj\n".encode() + objects[number] + b"\nendobj\n"

    xref_position = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode()
    out += b"0000000000 65535 f \n"
    for number in range(1, size):
        out += f"{offsets[number]:010d} 00000 n \n".encode()

    trailer = f"<< /Size {size} /Root 1 0 R"
    if info_id:
        trailer += f" /Info {info_id} 0 R"
    trailer += " >>"
    out += f"trailer\n{trailer}\nstartxref\n{xref_position}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def pdf_bytes() -> bytes:
    """Two-page PDF with text and an info dictionary."""
    return build_pdf(
        ["Information security policy", "Access control rules"],
        info={"Title": "Security Handbook", "Author": "IT Team"},
    )


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Single blank page, no extractable text, no metadata."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def docx_bytes() -> bytes:
    """Word document with two paragraphs and a table."""
    document = Document()
    document.add_paragraph("Quarterly planning notes")
    document.add_paragraph("Budget review is due Friday.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Owner"
    table.rows[0].cells[1].text = "Finance"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def document_routes(pdf_bytes: bytes, docx_bytes: bytes) -> dict[str, tuple[int, bytes, str]]:
    """Fake document host: URL -> (status, body, content type)."""
    return {
        PDF_URL: (200, pdf_bytes, "application/pdf"),
        DOCX_URL: (
            200,
            docx_bytes,
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ),
        TEXT_URL: (200, "Plain notes \u2713".encode(), "text/plain; charset=utf-8"),
        MISSING_URL: (404, b"not found", "text/plain"),
        GOOGLE_EXPORT_URL: (200, b"Exported Google Doc body", "text/plain"),
    }


@pytest.fixture
def requested_urls() -> list[str]:
    return []


@pytest.fixture
async def document_host(
    document_routes: dict[str, tuple[int, bytes, str]], requested_urls: list[str]
) -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client whose requests are answered from ``document_routes``."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested_urls.append(url)
        if url in document_routes:
            status_code, body, content_type = document_routes[url]
            return httpx.Response(
                status_code, content=body, headers={"content-type": content_type}
            )
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
def document_settings() -> DocumentConfig:
    return DocumentConfig(user_agent="test-agent", fetch_timeout=5, max_document_size=1024 * 1024)


class FakeAgentService:
    """Records chat requests and answers without calling an LLM."""

    def __init__(self) -> None:
        self.requests: list[ChatRequest] = []
        self.error: Exception | None = None

    async def get_reply(self, request: ChatRequest) -> str:
        self.requests.append(request)
        if self.error:
            raise self.error
        return f"Echo: {request.messages[-1].content}"

    async def stream_reply(self, request: ChatRequest) -> AsyncGenerator[str]:
        self.requests.append(request)
        for piece in ("Echo: ", request.messages[-1].content):
            yield piece
        if self.error:
            raise self.error


@pytest.fixture
def fake_agent_service() -> FakeAgentService:
    return FakeAgentService()


@pytest.fixture
async def async_client(
    document_host: httpx.AsyncClient,
    document_settings: DocumentConfig,
    fake_agent_service: FakeAgentService,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient whose outbound document fetches and LLM calls are faked.
    """
    app.dependency_overrides[http_client] = lambda: document_host
    app.dependency_overrides[document_config] = lambda: document_settings
    app.dependency_overrides[agent_service] = lambda: fake_agent_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
