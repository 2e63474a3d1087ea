# tests/test_config.py
import pytest

from resume.ai.retry import RetryPolicy
from resume.config import PipelineConfig, get_config


def test_from_yaml(tmp_path):
    path = tmp_path / "pipeline.yaml"
    path.write_text(
        "pipeline:\n"
        "  ollama_model: mistral\n"
        "  analysis_temperature: 0.3\n"
        "  max_attempts: 5\n"
        "  reprompt_on_parse_error: false\n",
        encoding="utf-8",
    )

    config = get_config(str(path))

    assert config.ollama_model == "mistral"
    assert config.analysis_temperature == 0.3
    assert config.max_attempts == 5
    assert config.reprompt_on_parse_error is False
    assert config.extraction_temperature == 0.1


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = get_config(str(tmp_path / "absent.yaml"))

    assert config.max_attempts == 3
    assert config.recommendation_temperature == 0.25


def test_env_selects_config_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("pipeline:\n  max_resume_chars: 1000\n", encoding="utf-8")
    monkeypatch.setenv("RESUME_CONFIG", str(path))

    assert get_config().max_resume_chars == 1000


def test_invalid_temperature():
    with pytest.raises(ValueError):
        PipelineConfig(comparison_temperature=2.0)


def test_retry_policy_from_config():
    policy = RetryPolicy.from_config(PipelineConfig(max_attempts=4, backoff_max=10.0))

    assert policy.max_attempts == 4
    assert policy.wait_max == 10.0
