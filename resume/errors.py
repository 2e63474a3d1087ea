# resume/errors.py
from typing import Optional


class ResumeError(Exception):
    """Base class for resume pipeline errors"""


class ExtractionError(ResumeError):
    """Document could not be read or its type is unsupported"""


class StorageError(ResumeError):
    """Upload staging or database I/O failed"""


class NotFoundError(ResumeError):
    """Unknown resume identifier"""


class AuthorizationError(ResumeError):
    """Caller does not own the requested resume"""


class PromptTemplateError(ResumeError):
    """Template parameters do not match the template's declared markers"""


class ModelInvocationError(ResumeError):
    """
    The generative model could not be reached or refused the request

    Attributes:
        status_code: HTTP status returned by the model server, if any
        retryable: Whether a later attempt may succeed (timeouts, 429, 5xx)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: bool = True
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class ResponseParseError(ResumeError):
    """Model output could not be coerced into the target schema"""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class SchemaViolation(ResponseParseError):
    """Parsed JSON breaks an enum or type constraint"""

    def __init__(self, message: str, path: str = "", raw_text: Optional[str] = None):
        super().__init__(f"{path}: {message}" if path else message, raw_text=raw_text)
        self.path = path
