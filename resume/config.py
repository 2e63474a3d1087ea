# resume/config.py
import os
from dataclasses import dataclass
from pathlib import Path
import yaml


@dataclass
class PipelineConfig:
    """Configuration for the extraction and insight pipeline"""

    # Ollama
    ollama_host: str = os.getenv("OLLAMA_HOST", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
    timeout: int = 120

    # Sampling per engine (0.0-1.0)
    extraction_temperature: float = 0.1
    analysis_temperature: float = 0.2
    recommendation_temperature: float = 0.25
    comparison_temperature: float = 0.25
    max_tokens: int = 4096

    # Hardening around the model call
    max_attempts: int = 3
    backoff_multiplier: float = 1.0
    backoff_min: float = 2.0
    backoff_max: float = 30.0
    reprompt_on_parse_error: bool = True

    # Resume text beyond this is truncated before prompting
    max_resume_chars: int = 50000

    def __post_init__(self):
        for name in (
            'extraction_temperature', 'analysis_temperature',
            'recommendation_temperature', 'comparison_temperature'
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within 0.0-1.0, got {value}")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_yaml(cls, path: str):
        """Load configuration from YAML file"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get('pipeline', {}))


def get_config(path: str = None) -> PipelineConfig:
    """Get pipeline configuration"""
    config_path = path or os.getenv('RESUME_CONFIG', 'config/pipeline.yaml')

    if Path(config_path).exists():
        return PipelineConfig.from_yaml(config_path)
    return PipelineConfig()
