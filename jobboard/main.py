"""
Job Board Backend - Main Application

FastAPI backend with:
- PostgreSQL for users, jobs, applications and profiles
- Gemini completions API for resume parsing
- JWT authentication with Admin / Applicant roles

Run: uvicorn jobboard.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard import __version__
from jobboard.api.routes import api_router
from jobboard.db.schema import init_db
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Board API",
    description="""
    Job board backend with AI-assisted resume ingestion.

    ## Features
    - **Authentication**: JWT-based auth for admins and applicants
    - **Applicants**: Resume upload (PDF/DOCX) parsed into a profile, job applications
    - **Admins**: Job posting, applicant and profile review
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create database tables on startup."""
    init_db()
    logger.info("Job Board API started")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Job Board API", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from jobboard.db.postgres import test_postgres_connection

    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected"
    }
