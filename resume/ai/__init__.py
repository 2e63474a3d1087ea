"""
Model access: prompt templates, Ollama client, retry and response validation
"""

from resume.ai.ollama_client import OllamaClient, ModelInvoker
from resume.ai.models import ModelOptions
from resume.ai.prompt_builder import PromptBuilder, PromptTemplate
from resume.ai.response_validator import ResponseValidator
from resume.ai.retry import RetryPolicy
from resume.ai.schemas import SchemaKind

__all__ = [
    'OllamaClient',
    'ModelInvoker',
    'ModelOptions',
    'PromptBuilder',
    'PromptTemplate',
    'ResponseValidator',
    'RetryPolicy',
    'SchemaKind',
]
