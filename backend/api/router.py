import logging

from fastapi import APIRouter, File, HTTPException, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import AnalyzeRequest
from models.responses import AnalysisReport, ExtractTextResponse
from services import resume_analyzer, text_extractor
from services.rules import get_rules
from services.section_parser import count_words

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "rulesVersion": get_rules().version,
    }


@router.options("/api/analyze-ats")
async def analyze_ats_preflight():
    return Response(status_code=200)


@router.post(
    "/api/analyze-ats",
    response_model=AnalysisReport,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
@limiter.limit(settings.rate_limit)
def analyze_ats(request: Request, body: AnalyzeRequest):
    if not body.resume_text or not body.resume_text.strip():
        logger.warning("Rejected analyze request without resumeText")
        raise HTTPException(status_code=400, detail="resumeText is required")

    if len(body.resume_text) > settings.max_resume_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Resume text too long (max {settings.max_resume_chars} chars)",
        )

    job_description = body.job_description_text
    if job_description and len(job_description) > settings.max_job_description_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Job description too long (max {settings.max_job_description_chars} chars)",
        )

    try:
        return resume_analyzer.analyze(body.resume_text, job_description)
    except Exception as exc:
        logger.exception("Error analyzing resume")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to analyze resume", "message": str(exc)},
        )


@router.post("/api/extract-text", response_model=ExtractTextResponse, response_model_by_alias=True)
@limiter.limit(settings.rate_limit)
async def extract_text(request: Request, file: UploadFile = File(...)):
    filename = file.filename or ""
    if not filename.lower().endswith(text_extractor.SUPPORTED_EXTENSIONS):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type. Accepted: {', '.join(text_extractor.SUPPORTED_EXTENSIONS)}",
        )

    # Read and validate size
    content = await file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        text = text_extractor.extract_text(filename, content)
    except Exception:
        logger.warning("Could not parse uploaded file %s", filename, exc_info=True)
        raise HTTPException(status_code=400, detail="Could not parse uploaded file")

    if not text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from file")

    return ExtractTextResponse(text=text, file_name=filename, word_count=count_words(text))
