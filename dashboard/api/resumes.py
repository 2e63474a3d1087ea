# dashboard/api/resumes.py

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, Body, Response
from fastapi.responses import PlainTextResponse
from functools import lru_cache
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Optional, Any
import json
import logging
from urllib.parse import quote

from dashboard.auth import get_current_identity
from dashboard.config import settings
from database.db_manager import DatabaseManager
from resume.config import get_config
from resume.errors import SchemaViolation, StorageError
from resume.models import (
    Identity,
    RecommendationFilters,
    RecommendationType,
    Level,
    DurationBucket,
    PriceRange,
)
from resume.service import ResumeService
from resume.text_extractor import staged_upload

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def get_resume_service() -> ResumeService:
    """Shared service built from settings"""
    return ResumeService(
        store=DatabaseManager(settings.database_path),
        config=get_config(settings.pipeline_config_path)
    )


# ============= Request Models =============

class PriceRangeModel(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class FiltersModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    types: List[RecommendationType] = Field(default_factory=list)
    levels: List[Level] = Field(default_factory=list)
    price_range: Optional[PriceRangeModel] = Field(default=None, alias="priceRange")
    free: bool = False
    durations: List[DurationBucket] = Field(default_factory=list)
    providers: List[str] = Field(default_factory=list)
    search_query: Optional[str] = Field(default=None, alias="searchQuery")

    def to_filters(self) -> RecommendationFilters:
        return RecommendationFilters(
            types=self.types,
            levels=self.levels,
            price_range=PriceRange(**self.price_range.model_dump()) if self.price_range else None,
            free=self.free,
            durations=self.durations,
            providers=self.providers,
            search_query=self.search_query,
        )


class CareerRecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_ids: List[str] = Field(default_factory=list, alias="resumeIds")
    filters: FiltersModel = Field(default_factory=FiltersModel)


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the RFC 5987 UTF-8 name"""
    fallback = "".join(
        c for c in filename if c.isascii() and c.isprintable() and c not in '"\\'
    ).strip() or "resume"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _read_upload(file: UploadFile) -> bytes:
    try:
        return file.file.read()
    except OSError as e:
        raise StorageError(f"File upload error: {e}") from e


# ============= Extraction =============

@router.post("/extract", response_class=PlainTextResponse)
def extract_text(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> str:
    """Extract plain text from an uploaded document"""
    data = _read_upload(file)
    with staged_upload(data, file.filename) as path:
        return service.extract_text(path, file.filename)


@router.post("/upload-and-process")
def upload_and_process(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> Dict[str, Any]:
    """Extract, structure and store an uploaded resume"""
    data = _read_upload(file)
    with staged_upload(data, file.filename) as path:
        return service.extract_and_parse(
            path,
            identity,
            filename=file.filename,
            content_type=file.content_type
        )


@router.post("/upload", status_code=204)
def upload_resume(
    file: UploadFile = File(...),
    json_content: str = Form(..., alias="jsonContent"),
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
):
    """Store a file together with an already structured profile"""
    try:
        profile = json.loads(json_content)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=422, detail=f"jsonContent is not valid JSON: {e}")

    data = _read_upload(file)
    with staged_upload(data, file.filename) as path:
        try:
            service.save_resume(
                path,
                profile,
                identity,
                filename=file.filename,
                content_type=file.content_type
            )
        except SchemaViolation as e:
            raise HTTPException(status_code=422, detail=f"Invalid profile: {e}")

    return Response(status_code=204)


# ============= Owner-scoped Access =============

@router.get("")
def list_resumes(
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> List[Dict]:
    """List the caller's resumes"""
    return [r.to_summary() for r in service.list_resumes(identity)]


@router.get("/{resume_id}")
def get_resume(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> Dict:
    """Get one resume with its profile"""
    return service.get_resume(resume_id, identity).to_dto()


@router.delete("/{resume_id}", status_code=204)
def delete_resume(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
):
    """Delete a resume owned by the caller"""
    service.delete_resume(resume_id, identity)
    return Response(status_code=204)


@router.get("/{resume_id}/file")
def download_file(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
):
    """Download the original uploaded document"""
    resume = service.get_resume(resume_id, identity)
    return Response(
        content=resume.file_data,
        media_type=resume.content_type,
        headers={"Content-Disposition": _content_disposition(resume.filename)}
    )


# ============= Insights =============

@router.get("/{resume_id}/analysis")
def analyze_resume(
    resume_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> Dict[str, Any]:
    """Score and critique a resume"""
    return service.analyze_resume(resume_id, identity)


@router.post("/career/recommendations")
def career_recommendations(
    request: CareerRecommendationRequest,
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> List[Dict[str, Any]]:
    """Filter-aware career recommendations"""
    return service.recommend(request.resume_ids, identity, request.filters.to_filters())


@router.post("/resumes-comparison")
def compare_resumes(
    resume_ids: List[str] = Body(...),
    identity: Identity = Depends(get_current_identity),
    service: ResumeService = Depends(get_resume_service)
) -> Dict[str, Any]:
    """Compare several resumes"""
    return service.compare(resume_ids, identity)
