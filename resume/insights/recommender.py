# resume/insights/recommender.py
import logging
from typing import Any, Dict, List, Optional

from resume.ai.models import ModelOptions
from resume.ai.schemas import SchemaKind
from resume.ai.templates import RECOMMENDATION
from resume.insights.base import PipelineStage
from resume.models import StoredResume, RecommendationFilters

logger = logging.getLogger(__name__)


class RecommendationEngine(PipelineStage):
    """
    Filter-aware career recommendations for one or more resumes

    Filters are passed to the model as instructions. Returned items are
    not re-checked against them.
    """

    def __init__(
        self,
        invoker,
        temperature: float = 0.25,
        max_tokens: int = 4096,
        **kwargs
    ):
        super().__init__(invoker, **kwargs)
        self.options = ModelOptions(temperature=temperature, max_tokens=max_tokens)

    def recommend(
        self,
        resumes: List[StoredResume],
        filters: Optional[RecommendationFilters] = None
    ) -> List[Dict[str, Any]]:
        """
        Generate recommendations

        Args:
            resumes: Profiles to base the recommendations on
            filters: User constraints (none if omitted)

        Returns:
            RecommendationItem list, possibly empty
        """
        if not resumes:
            logger.info("No resumes to base recommendations on")
            return []

        filters = filters or RecommendationFilters()

        prompt = self.prompts.build(RECOMMENDATION, {
            'resumes_json': [r.json_content for r in resumes],
            'filters_json': filters.to_dict(),
        })
        items = self.run(prompt, SchemaKind.RECOMMENDATIONS, self.options)

        logger.info(f"Generated {len(items)} recommendations from {len(resumes)} resumes")
        return items
