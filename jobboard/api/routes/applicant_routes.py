"""
Applicant Routes

POST /applicant/resume - Upload resume (PDF/DOCX), parse it and update profile
GET /applicant/resume/formats - Get supported formats
GET /applicant/profile - Get own resume-derived profile
"""

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File
from fastapi.concurrency import run_in_threadpool

from jobboard.core.auth import get_current_applicant
from jobboard.core.errors import ResumeIngestionError
from jobboard.services.profile_store import ProfileStore, get_profile_store
from jobboard.services.resume_service import ResumeIngestionService, get_resume_service
from jobboard.utils.file_upload import get_supported_formats
from jobboard.schemas.schemas import ResumeUploadResponse, ProfileResponse, ErrorResponse

router = APIRouter(prefix="/applicant", tags=["Applicants"])


@router.post(
    "/resume",
    response_model=ResumeUploadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported format"},
        413: {"model": ErrorResponse, "description": "File too large"},
        500: {"model": ErrorResponse, "description": "Storage, extraction or persistence failure"},
        502: {"model": ErrorResponse, "description": "Resume parser unreachable or rejected the request"},
    }
)
async def upload_resume(
    resume: UploadFile = File(..., description="Resume file (PDF or DOCX)"),
    applicant: dict = Depends(get_current_applicant),
    service: ResumeIngestionService = Depends(get_resume_service)
):
    """
    Upload and parse resume using AI.

    Process:
    1. Validate extension (.pdf / .docx)
    2. Save to uploads/resumes/<user_id>_<filename>
    3. Extract text
    4. AI parses name, email, phone, education, experience, skills
    5. Upsert applicant profile
    """
    if not resume.filename:
        raise HTTPException(status_code=400, detail="Resume file is required")

    content = await resume.read()

    try:
        result = await run_in_threadpool(
            service.ingest, applicant["user_id"], resume.filename, content
        )
    except ResumeIngestionError as e:
        # detail is "<stage>: <message>", e.g. "parsed: Could not reach Gemini API: ..."
        raise HTTPException(status_code=e.status_code, detail=f"{e.stage}: {e.message}")

    return ResumeUploadResponse(
        success=True,
        message="Resume uploaded and processed successfully",
        file_path=result.file_path,
        parsed_data=result.parsed_data
    )


@router.get("/resume/formats")
async def resume_formats():
    """Get supported resume file formats."""
    return get_supported_formats()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    applicant: dict = Depends(get_current_applicant),
    store: ProfileStore = Depends(get_profile_store)
):
    """Get the current applicant's profile."""
    profile = store.get(applicant["user_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found. Upload a resume first.")
    return ProfileResponse(**profile)
