# dashboard/app.py

from fastapi import FastAPI, Request, HTTPException, Depends, Form
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
import logging

from dashboard.config import settings
from dashboard.auth import authenticate_user, create_access_token
from dashboard.api import resumes
from resume.errors import (
    ExtractionError,
    StorageError,
    NotFoundError,
    AuthorizationError,
    ModelInvocationError,
    ResponseParseError,
    SchemaViolation,
    PromptTemplateError,
)
from resume.service import ResumeService
from resume.utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(Path(settings.log_dir), settings.log_level)
    logger.info(f"{settings.app_name} starting")
    yield


# Initialize FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title=settings.app_name,
    debug=settings.debug,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

app.include_router(resumes.router, prefix="/resume", tags=["resume"])

# ============= Auth Routes =============

@app.post("/auth/token")
async def login(username: str = Form(...), password: str = Form(...)):
    """Exchange credentials for a bearer token"""
    if not authenticate_user(username, password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token = create_access_token(
        data={"sub": username, "name": username},
        expires_delta=timedelta(hours=settings.session_expire_hours)
    )
    return {"access_token": access_token, "token_type": "bearer"}

# ============= Health Check =============

@app.get("/health")
def health_check(service: ResumeService = Depends(resumes.get_resume_service)):
    """Health check endpoint"""
    model_available = service.invoker.is_available() if hasattr(service.invoker, "is_available") else None
    return {
        "status": "healthy",
        "app": settings.app_name,
        "model_available": model_available,
        "version": "1.0.0"
    }

# ============= Error Handlers =============

def _error(status_code: int, code: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "detail": str(exc)}
    )


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError):
    return _error(422, "extraction_failed", exc)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return _error(400, "storage_failed", exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error(404, "not_found", exc)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return _error(403, "forbidden", exc)


@app.exception_handler(ModelInvocationError)
async def model_invocation_error_handler(request: Request, exc: ModelInvocationError):
    logger.error(f"Model unavailable on {request.url.path}: {exc}")
    return _error(500, "model_unavailable", exc)


@app.exception_handler(ResponseParseError)
async def response_parse_error_handler(request: Request, exc: ResponseParseError):
    logger.error(f"Unusable model output on {request.url.path}: {exc}")
    code = "schema_violation" if isinstance(exc, SchemaViolation) else "model_output_unusable"
    return _error(500, code, exc)


@app.exception_handler(PromptTemplateError)
async def prompt_template_error_handler(request: Request, exc: PromptTemplateError):
    logger.error(f"Prompt template error on {request.url.path}: {exc}")
    return _error(500, "internal", exc)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dashboard.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
