from typing import Any

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from resume_scorer.core.config import settings
from resume_scorer.core.errors import DecodeError, EncryptedFileError, InputTooShortError
from resume_scorer.core.rate_limit import rate_limit
from resume_scorer.schemas.analysis import AnalysisOptions
from resume_scorer.services.analysis_service import run_file_analysis, run_text_analysis, run_text_report

router = APIRouter()


class AnalyzeRequest(BaseModel):
    text: str = ""
    use_semantic_classifier: bool = True
    semantic_timeout_seconds: float | None = Field(default=None, gt=0.0, le=60.0)

    def options(self) -> AnalysisOptions:
        return AnalysisOptions(
            use_semantic_classifier=self.use_semantic_classifier,
            semantic_timeout_seconds=self.semantic_timeout_seconds,
        )


def _raise_http_error(exc: Exception) -> None:
    if isinstance(exc, InputTooShortError):
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if isinstance(exc, EncryptedFileError):
        raise HTTPException(status_code=status.HTTP_423_LOCKED, detail=str(exc)) from exc
    if isinstance(exc, DecodeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    raise exc


@router.post("/analyze")
@rate_limit()
async def analyze_text(request: Request, payload: AnalyzeRequest) -> dict[str, Any]:
    _ = request
    try:
        result = run_text_analysis(payload.text, payload.options())
    except InputTooShortError as exc:
        _raise_http_error(exc)
    return result.to_payload()


@router.post("/analyze/report", response_class=PlainTextResponse)
@rate_limit()
async def analyze_report(request: Request, payload: AnalyzeRequest) -> PlainTextResponse:
    _ = request
    try:
        report = run_text_report(payload.text, payload.options())
    except InputTooShortError as exc:
        _raise_http_error(exc)
    return PlainTextResponse(report)


@router.post("/analyze/file")
@rate_limit()
async def analyze_file(
    request: Request,
    file: UploadFile = File(...),
    use_semantic_classifier: bool = Form(default=True),
) -> dict[str, Any]:
    _ = request
    filename = file.filename or "uploaded-file"

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(1024 * 64)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)

    options = AnalysisOptions(use_semantic_classifier=use_semantic_classifier)
    try:
        result = run_file_analysis(filename, b"".join(chunks), options)
    except (InputTooShortError, DecodeError) as exc:
        _raise_http_error(exc)
    return result.to_payload()
