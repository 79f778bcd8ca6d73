import pytest
from fastapi.testclient import TestClient

from locums.domain.compliance.schemas import SubmittedDocument
from locums.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def night_shift():
    return {
        "id": "SH-1001",
        "date": "2025-03-01",
        "startTime": "22:00",
        "endTime": "06:00",
        "hourlyRate": "28.50",
        "role": "General Practitioner",
        "status": "booked",
        "practicePostcode": "M1 1AA",
    }


@pytest.fixture
def make_document():
    def _make(document_type, status="approved", **extra):
        return SubmittedDocument(document_type=document_type, status=status, **extra)

    return _make
