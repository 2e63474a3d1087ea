# resume/service.py
import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, List, Optional

from resume.ai.ollama_client import OllamaClient
from resume.ai.response_validator import ResponseValidator
from resume.ai.retry import RetryPolicy
from resume.ai.schemas import SchemaKind
from resume.config import PipelineConfig
from resume.errors import AuthorizationError, NotFoundError, StorageError
from resume.insights import (
    ExtractionEngine,
    AnalysisEngine,
    RecommendationEngine,
    ComparisonEngine,
)
from resume.models import (
    Identity,
    StoredResume,
    ResumeOrigin,
    ResumeStatus,
    RecommendationFilters,
)
from resume.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class ResumeService:
    """
    Owner-scoped resume operations on top of the store and insight engines

    Every method that touches a stored resume takes the caller's Identity.
    """

    def __init__(
        self,
        store,
        invoker=None,
        config: Optional[PipelineConfig] = None,
        text_extractor: Optional[TextExtractor] = None,
        retry_policy: Optional[RetryPolicy] = None
    ):
        """
        Args:
            store: Profile store (DatabaseManager)
            invoker: Model client; an OllamaClient from config if None
            config: Pipeline configuration
            text_extractor: Document text extractor
            retry_policy: Overrides the policy derived from config
        """
        self.config = config or PipelineConfig()
        self.store = store
        self.invoker = invoker or OllamaClient(
            base_url=self.config.ollama_host,
            model=self.config.ollama_model,
            timeout=self.config.timeout
        )
        self.text_extractor = text_extractor or TextExtractor()
        self.validator = ResponseValidator()

        stage_args = {
            'validator': self.validator,
            'retry_policy': retry_policy or RetryPolicy.from_config(self.config),
            'reprompt_on_parse_error': self.config.reprompt_on_parse_error,
        }
        self.extractor = ExtractionEngine(
            self.invoker,
            temperature=self.config.extraction_temperature,
            max_tokens=self.config.max_tokens,
            max_resume_chars=self.config.max_resume_chars,
            **stage_args
        )
        self.analyzer = AnalysisEngine(
            self.invoker,
            store=self.store,
            temperature=self.config.analysis_temperature,
            max_tokens=self.config.max_tokens,
            **stage_args
        )
        self.recommender = RecommendationEngine(
            self.invoker,
            temperature=self.config.recommendation_temperature,
            max_tokens=self.config.max_tokens,
            **stage_args
        )
        self.comparator = ComparisonEngine(
            self.invoker,
            temperature=self.config.comparison_temperature,
            max_tokens=self.config.max_tokens,
            **stage_args
        )

    # ========== Extraction ==========

    def extract_text(self, path: Path, filename: Optional[str] = None) -> str:
        return self.text_extractor.extract_text(path, filename)

    def extract_and_parse(
        self,
        path: Path,
        identity: Identity,
        filename: Optional[str] = None,
        content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Extract text, structure it with the model and store the result

        Returns:
            The validated profile
        """
        filename = filename or Path(path).name
        resume = self._new_resume(path, identity, filename, content_type, {})
        resume.status = ResumeStatus.UPLOADED
        resume.origin = ResumeOrigin.USER_UPLOADED

        text = self.text_extractor.extract_text(path, filename)
        resume.advance(ResumeStatus.TEXT_EXTRACTED)

        resume.json_content = self.extractor.extract(text)
        resume.advance(ResumeStatus.STRUCTURED)

        self.store.save(resume)
        logger.info(f"Processed upload {filename} -> resume {resume.resume_id}")
        return resume.json_content

    def save_resume(
        self,
        path: Path,
        json_content: Any,
        identity: Identity,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        origin: Optional[ResumeOrigin] = None
    ) -> StoredResume:
        """
        Store a file with an already structured profile

        The profile is validated like model output before it is stored.
        """
        profile = self.validator.validate_document(json_content, SchemaKind.PROFILE)

        resume = self._new_resume(
            path, identity, filename or Path(path).name, content_type, profile
        )
        resume.origin = origin or ResumeOrigin.SYSTEM_GENERATED

        self.store.save(resume)
        return resume

    # ========== Owner-scoped access ==========

    def list_resumes(self, identity: Identity) -> List[StoredResume]:
        return self.store.find_all_by_owner(identity.user_id)

    def get_resume(self, resume_id: str, identity: Identity) -> StoredResume:
        """
        Raises:
            NotFoundError: Unknown id
            AuthorizationError: Resume belongs to someone else
        """
        resume = self.store.find_by_id(resume_id)
        if resume is None:
            raise NotFoundError(f"Resume not found: {resume_id}")
        if not resume.is_owned_by(identity):
            logger.warning(f"User {identity.user_id} denied access to resume {resume_id}")
            raise AuthorizationError("You are not allowed to access this resume")
        return resume

    def delete_resume(self, resume_id: str, identity: Identity):
        resume = self.get_resume(resume_id, identity)
        resume.advance(ResumeStatus.DELETED)
        self.store.delete(resume.resume_id)

    # ========== Insights ==========

    def analyze_resume(self, resume_id: str, identity: Identity) -> Dict[str, Any]:
        resume = self.get_resume(resume_id, identity)
        return self.analyzer.analyze(resume)

    def recommend(
        self,
        resume_ids: List[str],
        identity: Identity,
        filters: Optional[RecommendationFilters] = None
    ) -> List[Dict[str, Any]]:
        resumes = self._resolve_owned(resume_ids, identity)
        return self.recommender.recommend(resumes, filters)

    def compare(self, resume_ids: List[str], identity: Identity) -> Dict[str, Any]:
        resumes = self._resolve_owned(resume_ids, identity)
        return self.comparator.compare(resumes)

    # ========== Helpers ==========

    def _resolve_owned(self, resume_ids: List[str], identity: Identity) -> List[StoredResume]:
        """Load resumes by id, skipping unknown ids and rejecting foreign ones"""
        resumes = self.store.find_all_by_ids(resume_ids)

        foreign = [r.resume_id for r in resumes if not r.is_owned_by(identity)]
        if foreign:
            logger.warning(f"User {identity.user_id} denied access to resumes {foreign}")
            raise AuthorizationError("You are not allowed to access these resumes")

        missing = len(set(resume_ids)) - len(resumes)
        if missing:
            logger.info(f"Skipping {missing} unknown resume ids")
        return resumes

    def _new_resume(
        self,
        path: Path,
        identity: Identity,
        filename: str,
        content_type: Optional[str],
        profile: Dict[str, Any]
    ) -> StoredResume:
        try:
            file_data = Path(path).read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read uploaded file {filename}: {e}") from e

        return StoredResume(
            owner_id=identity.user_id,
            filename=filename,
            content_type=(
                content_type
                or mimetypes.guess_type(filename)[0]
                or "application/octet-stream"
            ),
            size=len(file_data),
            file_data=file_data,
            json_content=profile,
        )
