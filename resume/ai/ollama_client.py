# resume/ai/ollama_client.py
import logging
import requests
from typing import Optional, Protocol

from resume.ai.models import ModelOptions
from resume.errors import ModelInvocationError

logger = logging.getLogger(__name__)


class ModelInvoker(Protocol):
    """Anything that turns a prompt into raw model text"""

    def invoke(self, prompt: str, options: Optional[ModelOptions] = None) -> str:
        ...


class OllamaClient:
    """
    Client for the Ollama chat API
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        timeout: int = 120
    ):
        """
        Initialize Ollama client

        Args:
            base_url: Ollama API endpoint
            model: Model to use (llama3.1:8b, mistral, etc.)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if Ollama is running"""
        try:
            response = requests.get(
                f"{self.base_url}/api/tags",
                timeout=5
            )
            return response.status_code == 200
        except requests.RequestException as e:
            logger.warning(f"Ollama not available: {e}")
            return False

    def invoke(self, prompt: str, options: Optional[ModelOptions] = None) -> str:
        """
        Send a prompt to Ollama and return the raw reply

        Args:
            prompt: User prompt
            options: Sampling and output controls

        Returns:
            Raw response text, untrusted

        Raises:
            ModelInvocationError: Network, timeout, quota or server failure
        """
        options = options or ModelOptions()

        messages = []
        if options.system_prompt:
            messages.append({
                "role": "system",
                "content": options.system_prompt
            })
        messages.append({
            "role": "user",
            "content": prompt
        })

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": options.to_ollama_options()
        }
        if options.json_mode:
            payload["format"] = "json"

        try:
            response = requests.post(
                f"{self.base_url}/api/chat",
                json=payload,
                timeout=self.timeout
            )
        except requests.Timeout as e:
            logger.error(f"Ollama request timed out after {self.timeout}s")
            raise ModelInvocationError(
                f"Model request timed out after {self.timeout}s"
            ) from e
        except requests.RequestException as e:
            logger.error(f"Ollama request failed: {e}")
            raise ModelInvocationError(f"Model unreachable: {e}") from e

        if response.status_code == 429:
            raise ModelInvocationError(
                "Model quota exceeded", status_code=429, retryable=True
            )
        if response.status_code >= 500:
            raise ModelInvocationError(
                f"Model server error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                retryable=True
            )
        if response.status_code >= 400:
            # Bad model name or malformed request; repeating will not help
            raise ModelInvocationError(
                f"Model rejected request {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                retryable=False
            )

        try:
            result = response.json()
        except ValueError as e:
            raise ModelInvocationError(
                "Model server returned a non-JSON envelope",
                status_code=response.status_code
            ) from e

        content = (result.get("message") or {}).get("content")
        if content is None:
            raise ModelInvocationError(
                "Model server response has no message content",
                status_code=response.status_code
            )

        logger.debug(f"Ollama returned {len(content)} chars")
        return content.strip()
