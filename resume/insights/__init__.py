"""
Model-backed insight engines: extraction, analysis, recommendation, comparison
"""

from resume.insights.base import PipelineStage
from resume.insights.extractor import ExtractionEngine
from resume.insights.analyzer import AnalysisEngine
from resume.insights.recommender import RecommendationEngine
from resume.insights.comparator import ComparisonEngine

__all__ = [
    'PipelineStage',
    'ExtractionEngine',
    'AnalysisEngine',
    'RecommendationEngine',
    'ComparisonEngine',
]
