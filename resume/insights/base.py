# resume/insights/base.py
import logging
from typing import Any, Optional

from resume.ai.models import ModelOptions
from resume.ai.ollama_client import ModelInvoker
from resume.ai.prompt_builder import PromptBuilder
from resume.ai.response_validator import ResponseValidator
from resume.ai.retry import RetryPolicy
from resume.ai.schemas import SchemaKind
from resume.ai.templates import CORRECTION
from resume.errors import ResponseParseError

logger = logging.getLogger(__name__)


class PipelineStage:
    """
    Build prompt -> invoke model -> validate response

    Engines subclass this and supply the template, schema and options.
    """

    def __init__(
        self,
        invoker: ModelInvoker,
        prompt_builder: Optional[PromptBuilder] = None,
        validator: Optional[ResponseValidator] = None,
        retry_policy: Optional[RetryPolicy] = None,
        reprompt_on_parse_error: bool = True
    ):
        """
        Args:
            invoker: Model client (OllamaClient or a test double)
            prompt_builder: Template registry (default templates if None)
            validator: Response validator (default if None)
            retry_policy: Backoff around ModelInvocationError
            reprompt_on_parse_error: Re-ask once with a correction prompt
                when the reply cannot be parsed
        """
        self.invoker = invoker
        self.prompts = prompt_builder or PromptBuilder()
        self.validator = validator or ResponseValidator()
        self.retry_policy = retry_policy or RetryPolicy()
        self.reprompt_on_parse_error = reprompt_on_parse_error

    def run(self, prompt: str, kind: SchemaKind, options: ModelOptions) -> Any:
        """
        Invoke the model and validate its reply

        Raises:
            ModelInvocationError: Model unreachable after retries
            ResponseParseError: Reply unusable (after one correction attempt)
        """
        raw = self.retry_policy.call(self.invoker.invoke, prompt, options)

        try:
            return self.validator.parse(raw, kind)
        except ResponseParseError as e:
            if not self.reprompt_on_parse_error:
                raise
            logger.warning(f"Unusable {kind.value} response, re-prompting once: {e}")
            problem = str(e)

        correction = self.prompts.build(CORRECTION, {
            'error': problem,
            'original_prompt': prompt,
        })
        raw = self.retry_policy.call(self.invoker.invoke, correction, options)
        return self.validator.parse(raw, kind)
