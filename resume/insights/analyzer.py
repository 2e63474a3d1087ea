# resume/insights/analyzer.py
import logging
from typing import Any, Dict

from resume.ai.models import ModelOptions
from resume.ai.schemas import SchemaKind
from resume.ai.templates import ANALYSIS
from resume.insights.base import PipelineStage
from resume.models import StoredResume, ResumeStatus

logger = logging.getLogger(__name__)


class AnalysisEngine(PipelineStage):
    """
    Score and critique a stored profile
    """

    def __init__(
        self,
        invoker,
        store=None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        **kwargs
    ):
        """
        Args:
            invoker: Model client
            store: Profile store used to persist the new score (optional)
            temperature: Sampling temperature for the review
        """
        super().__init__(invoker, **kwargs)
        self.store = store
        self.options = ModelOptions(
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True
        )

    def analyze(self, resume: StoredResume) -> Dict[str, Any]:
        """
        Analyze a resume and persist its score

        A report without a score leaves the stored score untouched.

        Returns:
            AnalysisReport with score clamped to 0-100
        """
        prompt = self.prompts.build(ANALYSIS, {'resume_json': resume.json_content})
        report = self.run(prompt, SchemaKind.ANALYSIS, self.options)

        score = report['score']
        if score is None:
            logger.info(f"Analysis of {resume.resume_id} returned no score; keeping {resume.score}")
            return report

        resume.score = score
        resume.advance(ResumeStatus.ANALYZED)
        if self.store is not None:
            self.store.update_score(resume.resume_id, score)

        logger.info(
            f"Analyzed {resume.resume_id}: score {score}, "
            f"{len(report['missingSections'])} missing sections"
        )
        return report
