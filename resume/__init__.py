"""
Resume extraction and insight pipeline
"""

from resume.errors import (
    ResumeError,
    ExtractionError,
    StorageError,
    NotFoundError,
    AuthorizationError,
    PromptTemplateError,
    ModelInvocationError,
    ResponseParseError,
    SchemaViolation,
)
from resume.models import Identity, StoredResume, ResumeOrigin, ResumeStatus

__all__ = [
    'ResumeError',
    'ExtractionError',
    'StorageError',
    'NotFoundError',
    'AuthorizationError',
    'PromptTemplateError',
    'ModelInvocationError',
    'ResponseParseError',
    'SchemaViolation',
    'Identity',
    'StoredResume',
    'ResumeOrigin',
    'ResumeStatus',
]
