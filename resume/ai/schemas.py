# resume/ai/schemas.py
"""
Pydantic models for the JSON documents the model is asked to produce

Absent keys get their defaults (empty lists, null scalars, defaulted
objects). Keys a model does not declare are kept as they are.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from resume.models import RecommendationType, Level, WORK_TYPES

logger = logging.getLogger(__name__)

# Any JSON scalar, stored as given
Scalar = Optional[Union[str, int, float, bool]]
Number = Optional[Union[int, float]]


class Document(BaseModel):
    """Base for model-produced objects"""

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def default_nulls(cls, data: Any) -> Any:
        # null in a list, map or object position means "use the default"
        if data is None:
            return {}
        if isinstance(data, dict):
            return {
                key: value for key, value in data.items()
                if value is not None
                or key not in cls.model_fields
                or cls.model_fields[key].default_factory is None
            }
        return data


# ========== Resume profile ==========

class About(Document):
    name: Scalar = None
    email: Scalar = None
    phone: Scalar = None
    address: Scalar = None
    links: Scalar = None
    linkedin: Scalar = None
    github: Scalar = None
    portfolio: Scalar = None
    role: Scalar = None
    summary: Scalar = None
    otherProfiles: List[Scalar] = Field(default_factory=list)


class Education(Document):
    degree: Scalar = None
    school: Scalar = None
    startYr: Scalar = None
    endYr: Scalar = None
    grade: Scalar = None


class Work(Document):
    position: Scalar = None
    company: Scalar = None
    startDate: Scalar = None
    endDate: Scalar = None
    description: Scalar = None
    type: Optional[Literal[WORK_TYPES]] = None


class Project(Document):
    name: Scalar = None
    description: Scalar = None
    github: Scalar = None
    url: Scalar = None
    technologies: List[Scalar] = Field(default_factory=list)


class SpokenLanguage(Document):
    name: Scalar = None
    level: Scalar = None


class Certification(Document):
    title: Scalar = None
    issuer: Scalar = None
    year: Scalar = None


class SocialActivity(Document):
    role: Scalar = None
    organization: Scalar = None
    description: Scalar = None


class ResumeProfile(Document):
    about: About = Field(default_factory=About)
    education: List[Education] = Field(default_factory=list)
    work: List[Work] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    skills: List[Scalar] = Field(default_factory=list)
    languages: List[SpokenLanguage] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    socialActivities: List[SocialActivity] = Field(default_factory=list)


# ========== Analysis ==========

class AnalysisReport(Document):
    weaknesses: List[Scalar] = Field(default_factory=list)
    improvements: List[Scalar] = Field(default_factory=list)
    missingSections: List[Scalar] = Field(default_factory=list)
    mistakes: List[Scalar] = Field(default_factory=list)
    score: Number = None
    overallFeedback: Scalar = None

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value):
        """Integer score clamped into 0-100"""
        if value is None:
            return None
        if value != value:
            raise ValueError("score is NaN")

        clamped = int(round(min(max(value, 0), 100)))
        if clamped != value:
            logger.warning(f"Score {value} clamped to {clamped}")
        return clamped


# ========== Recommendations ==========

class RecommendationItem(Document):
    title: Scalar = None
    type: RecommendationType
    level: Level
    provider: Scalar = None
    description: Scalar = None
    duration: Scalar = None
    url: Scalar = None
    whyRecommended: Scalar = None
    category: Scalar = None
    matchScore: Number = None
    price: Number = None
    skills: List[Scalar] = Field(default_factory=list)


# ========== Comparison ==========

class ResumeSummary(Document):
    resumeId: Scalar = None
    keyStrengths: List[Scalar] = Field(default_factory=list)
    keyWeaknesses: List[Scalar] = Field(default_factory=list)
    uniqueSkills: List[Scalar] = Field(default_factory=list)
    notableExperiences: List[Scalar] = Field(default_factory=list)


class ExperienceComparison(Document):
    strongerExperienceResumeId: Scalar = None
    summary: Scalar = None


class EducationComparison(Document):
    strongerEducationResumeId: Scalar = None
    summary: Scalar = None


class RoleSuitability(Document):
    role: Scalar = None
    bestResumeId: Scalar = None
    reason: Scalar = None


class SkillComparison(Document):
    commonSkills: List[Scalar] = Field(default_factory=list)
    uniqueSkillsByResume: Dict[str, List[Scalar]] = Field(default_factory=dict)
    experienceComparison: ExperienceComparison = Field(default_factory=ExperienceComparison)
    educationComparison: EducationComparison = Field(default_factory=EducationComparison)
    roleSuitability: List[RoleSuitability] = Field(default_factory=list)


class ComparisonReport(Document):
    resumeSummaries: List[ResumeSummary] = Field(default_factory=list)
    comparison: SkillComparison = Field(default_factory=SkillComparison)
    finalVerdict: Scalar = None


class SchemaKind(Enum):
    PROFILE = "profile"
    ANALYSIS = "analysis"
    RECOMMENDATIONS = "recommendations"
    COMPARISON = "comparison"


SCHEMAS: Dict[SchemaKind, TypeAdapter] = {
    SchemaKind.PROFILE: TypeAdapter(ResumeProfile),
    SchemaKind.ANALYSIS: TypeAdapter(AnalysisReport),
    SchemaKind.RECOMMENDATIONS: TypeAdapter(List[RecommendationItem]),
    SchemaKind.COMPARISON: TypeAdapter(ComparisonReport),
}

# Kinds whose document is a JSON array
ARRAY_KINDS = frozenset({SchemaKind.RECOMMENDATIONS})
