# tests/test_pipeline_stage.py
import pytest

from resume.ai.models import ModelOptions
from resume.ai.retry import RetryPolicy
from resume.ai.schemas import SchemaKind
from resume.errors import ModelInvocationError, ResponseParseError
from resume.insights import PipelineStage

from tests.conftest import ScriptedInvoker


GOOD_REPORT = '{"score": 80, "weaknesses": []}'


def make_stage(invoker, retry, **kwargs):
    return PipelineStage(invoker, retry_policy=retry, **kwargs)


def run(stage):
    return stage.run("Review this resume", SchemaKind.ANALYSIS, ModelOptions())


def test_transient_errors_are_retried(no_wait_retry):
    invoker = ScriptedInvoker([
        ModelInvocationError("timeout"),
        ModelInvocationError("quota", status_code=429),
        GOOD_REPORT,
    ])

    report = run(make_stage(invoker, no_wait_retry))

    assert report["score"] == 80
    assert invoker.calls == 3


def test_retries_are_bounded(no_wait_retry):
    invoker = ScriptedInvoker([ModelInvocationError("down")] * 5)

    with pytest.raises(ModelInvocationError):
        run(make_stage(invoker, no_wait_retry))

    assert invoker.calls == 3


def test_non_retryable_error_fails_immediately(no_wait_retry):
    invoker = ScriptedInvoker([
        ModelInvocationError("no such model", status_code=404, retryable=False),
        GOOD_REPORT,
    ])

    with pytest.raises(ModelInvocationError):
        run(make_stage(invoker, no_wait_retry))

    assert invoker.calls == 1


def test_no_retry_policy():
    invoker = ScriptedInvoker([ModelInvocationError("timeout"), GOOD_REPORT])

    with pytest.raises(ModelInvocationError):
        run(make_stage(invoker, RetryPolicy.no_retry()))

    assert invoker.calls == 1


def test_unparseable_reply_is_corrected_once(no_wait_retry):
    invoker = ScriptedInvoker(["Sorry, I cannot do that.", GOOD_REPORT])

    report = run(make_stage(invoker, no_wait_retry))

    assert report["score"] == 80
    assert invoker.calls == 2
    assert invoker.prompts[1].startswith("Your previous reply could not be used.")
    assert "Review this resume" in invoker.prompts[1]


def test_second_unparseable_reply_fails(no_wait_retry):
    invoker = ScriptedInvoker(["not json", "still not json", GOOD_REPORT])

    with pytest.raises(ResponseParseError):
        run(make_stage(invoker, no_wait_retry))

    assert invoker.calls == 2


def test_schema_violation_is_corrected(no_wait_retry):
    invoker = ScriptedInvoker(['{"score": "excellent"}', GOOD_REPORT])

    report = run(make_stage(invoker, no_wait_retry))

    assert report["score"] == 80
    assert "score" in invoker.prompts[1]


def test_correction_can_be_disabled(no_wait_retry):
    invoker = ScriptedInvoker(["not json", GOOD_REPORT])

    with pytest.raises(ResponseParseError):
        run(make_stage(invoker, no_wait_retry, reprompt_on_parse_error=False))

    assert invoker.calls == 1
