import warnings

import pytest
from fastapi.testclient import TestClient

from pdfmark.main import app

from .conftest import csv_text, page_count, page_texts


@pytest.fixture
def client():
    return TestClient(app)


def _post(client, pdf: bytes, csv: str, content_type: str = "application/pdf"):
    return client.post(
        "/pdf/watermark",
        files={
            "file": ("report.pdf", pdf, content_type),
            "instructions": ("marks.csv", csv.encode("utf-8"), "text/csv"),
        },
    )


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_watermark_returns_pdf(client, three_page_pdf):
    response = _post(client, three_page_pdf, csv_text("page,watermark_text", "2,DRAFT"))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="report_wm.pdf"' in response.headers["content-disposition"]
    assert page_count(response.content) == 3
    assert "DRAFT" in page_texts(response.content)[1]


def test_malformed_csv_is_bad_request(client, three_page_pdf):
    response = _post(client, three_page_pdf, "page,watermark_text\nabc,X")

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "malformed_row"


def test_out_of_range_is_unprocessable(client, three_page_pdf):
    response = _post(client, three_page_pdf, "page,watermark_text\n10,BAD")

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "page_out_of_range"


def test_out_of_range_raises_no_deprecation(client, three_page_pdf):
    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*HTTP_422.*")
        response = _post(client, three_page_pdf, "page,watermark_text\n10,BAD")

    assert response.status_code == 422


def test_invalid_pdf(client):
    response = _post(client, b"not a pdf", "page,watermark_text\n1,X")

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "invalid_pdf"


def test_rejects_non_pdf_upload(client, three_page_pdf):
    response = client.post(
        "/pdf/watermark",
        files={
            "file": ("notes.txt", three_page_pdf, "text/plain"),
            "instructions": ("marks.csv", b"page,text\n1,A", "text/csv"),
        },
    )

    assert response.status_code == 400
