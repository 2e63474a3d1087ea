# resume/insights/extractor.py
import logging
from typing import Any, Dict

from resume.ai.models import ModelOptions
from resume.ai.schemas import SchemaKind
from resume.ai.templates import EXTRACTION
from resume.insights.base import PipelineStage

logger = logging.getLogger(__name__)


class ExtractionEngine(PipelineStage):
    """
    Turn raw resume text into a structured profile
    """

    def __init__(
        self,
        invoker,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        max_resume_chars: int = 50000,
        **kwargs
    ):
        super().__init__(invoker, **kwargs)
        self.options = ModelOptions(
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )
        self.max_resume_chars = max_resume_chars

    def extract(self, resume_text: str) -> Dict[str, Any]:
        """
        Extract a profile from resume text

        Returns:
            Profile with every section present (empty lists, null scalars)
        """
        if len(resume_text) > self.max_resume_chars:
            logger.warning(
                f"Resume text truncated from {len(resume_text)} to {self.max_resume_chars} chars"
            )
            resume_text = resume_text[:self.max_resume_chars]

        prompt = self.prompts.build(EXTRACTION, {'resume_text': resume_text})
        profile = self.run(prompt, SchemaKind.PROFILE, self.options)

        logger.info(
            f"Extracted profile for {profile['about'].get('name') or 'unknown candidate'}: "
            f"{len(profile['work'])} work, {len(profile['education'])} education, "
            f"{len(profile['skills'])} skills"
        )
        return profile
