# resume/insights/comparator.py
import logging
from typing import Any, Dict, List

from resume.ai.models import ModelOptions
from resume.ai.schemas import SchemaKind
from resume.ai.templates import COMPARISON
from resume.insights.base import PipelineStage
from resume.models import StoredResume

logger = logging.getLogger(__name__)


class ComparisonEngine(PipelineStage):
    """
    Structured side-by-side comparison of several resumes
    """

    def __init__(
        self,
        invoker,
        temperature: float = 0.25,
        max_tokens: int = 4096,
        **kwargs
    ):
        super().__init__(invoker, **kwargs)
        self.options = ModelOptions(
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )

    def compare(self, resumes: List[StoredResume]) -> Dict[str, Any]:
        """
        Compare resumes

        Fewer than two resumes yields the empty report without a model call.
        """
        if len(resumes) < 2:
            logger.info(f"Comparison needs at least 2 resumes, got {len(resumes)}")
            return self.validator.empty(SchemaKind.COMPARISON)

        # Tag each profile so the model can key its report by id
        tagged = [
            {**r.json_content, 'resumeId': r.resume_id}
            for r in resumes
        ]

        prompt = self.prompts.build(COMPARISON, {'resumes_json': tagged})
        report = self.run(prompt, SchemaKind.COMPARISON, self.options)

        logger.info(
            f"Compared {len(resumes)} resumes: "
            f"{len(report['comparison']['commonSkills'])} common skills"
        )
        return report
