import pytest
from fastapi.testclient import TestClient

from api.router import limiter
from main import app
from services import resume_analyzer

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["rulesVersion"]


def test_analyze_ats(strong_resume):
    response = client.post("/api/analyze-ats", json={"resumeText": strong_resume})
    assert response.status_code == 200
    data = response.json()
    assert 75 <= data["score"] <= 90
    assert "overallAssessment" in data
    assert len(data["sectionScores"]) == 7
    assert "contentPresent" in data
    assert "contentAbsent" in data
    assert "jobDescriptionKeywords" not in data
    assert data["detailedScore"]["score"] == 100
    assert data["roadmap"]["targetScore"] == 100


def test_analyze_ats_with_job_description(frontend_resume, frontend_job):
    response = client.post(
        "/api/analyze-ats",
        json={"resumeText": frontend_resume, "jobDescriptionText": frontend_job},
    )
    assert response.status_code == 200
    keywords = {k["word"]: k for k in response.json()["jobDescriptionKeywords"]}
    assert keywords["react"]["found"] is True
    assert keywords["docker"]["found"] is False
    assert keywords["docker"]["importance"] == "critical"


@pytest.mark.parametrize("body", [{}, {"resumeText": ""}, {"resumeText": "   "}, {"jobDescriptionText": "x"}])
def test_analyze_ats_requires_resume_text(body):
    response = client.post("/api/analyze-ats", json=body)
    assert response.status_code == 400


def test_analyze_ats_rejects_oversized_resume():
    response = client.post("/api/analyze-ats", json={"resumeText": "a" * 50001})
    assert response.status_code == 400


def test_analyze_ats_internal_error(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("rules exploded")

    monkeypatch.setattr(resume_analyzer, "analyze", boom)
    response = client.post("/api/analyze-ats", json={"resumeText": "John Doe"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze resume", "message": "rules exploded"}


def test_analyze_ats_options():
    response = client.options("/api/analyze-ats")
    assert response.status_code == 200


def test_analyze_ats_cors_preflight():
    response = client.options(
        "/api/analyze-ats",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


def test_extract_text_txt():
    response = client.post(
        "/api/extract-text",
        files={"file": ("resume.txt", b"John Doe\nEngineer", "text/plain")},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == "John Doe\nEngineer"
    assert data["fileName"] == "resume.txt"
    assert data["wordCount"] == 3


def test_extract_text_rejects_unsupported_type():
    response = client.post(
        "/api/extract-text",
        files={"file": ("resume.exe", b"MZ", "application/octet-stream")},
    )
    assert response.status_code == 400


def test_extract_text_rejects_empty_file():
    response = client.post(
        "/api/extract-text",
        files={"file": ("resume.txt", b"   ", "text/plain")},
    )
    assert response.status_code == 400


def test_extract_text_rejects_bad_pdf():
    response = client.post(
        "/api/extract-text",
        files={"file": ("resume.pdf", b"not a pdf", "application/pdf")},
    )
    assert response.status_code == 400
