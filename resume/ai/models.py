# resume/ai/models.py
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class ModelOptions:
    """Generation controls for a single model call"""
    temperature: float = 0.7       # 0.0-1.0
    max_tokens: int = 2048
    top_p: Optional[float] = None
    system_prompt: Optional[str] = None
    json_mode: bool = False        # Ask Ollama to constrain output to JSON

    def __post_init__(self):
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be within 0.0-1.0, got {self.temperature}")
        if self.top_p is not None and not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"top_p must be within (0.0, 1.0], got {self.top_p}")

    def to_ollama_options(self) -> Dict[str, Any]:
        options = {
            "temperature": self.temperature,
            "num_predict": self.max_tokens
        }
        if self.top_p is not None:
            options["top_p"] = self.top_p
        return options
