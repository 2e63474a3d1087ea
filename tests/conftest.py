# tests/conftest.py
import json
from typing import List, Optional, Union

import pytest

from database.db_manager import DatabaseManager
from resume.ai.models import ModelOptions
from resume.ai.retry import RetryPolicy
from resume.config import PipelineConfig
from resume.models import Identity, StoredResume
from resume.service import ResumeService


class ScriptedInvoker:
    """Model double that replays canned replies (or raises canned errors)"""

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None):
        self.responses = list(responses or [])
        self.prompts: List[str] = []
        self.options: List[Optional[ModelOptions]] = []

    def queue(self, *responses):
        self.responses.extend(responses)

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def invoke(self, prompt: str, options: Optional[ModelOptions] = None) -> str:
        self.prompts.append(prompt)
        self.options.append(options)
        if not self.responses:
            raise AssertionError("Unexpected model call")
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def is_available(self) -> bool:
        return True


@pytest.fixture
def invoker():
    return ScriptedInvoker()


@pytest.fixture
def no_wait_retry():
    return RetryPolicy(max_attempts=3, multiplier=0, wait_min=0, wait_max=0)


@pytest.fixture
def store(tmp_path):
    return DatabaseManager(str(tmp_path / "test.db"))


@pytest.fixture
def alice():
    return Identity(user_id="alice", username="alice")


@pytest.fixture
def bob():
    return Identity(user_id="bob", username="bob")


@pytest.fixture
def service(store, invoker, no_wait_retry):
    return ResumeService(
        store=store,
        invoker=invoker,
        config=PipelineConfig(),
        retry_policy=no_wait_retry
    )


@pytest.fixture
def resume_file(tmp_path):
    path = tmp_path / "jane_doe.txt"
    path.write_text("Jane Doe. Skilled in Python.", encoding="utf-8")
    return path


@pytest.fixture
def make_resume(store):
    """Persist a resume with the given owner and profile"""

    def _make(owner: Identity, profile: Optional[dict] = None, **kwargs) -> StoredResume:
        resume = StoredResume(
            owner_id=owner.user_id,
            filename=kwargs.pop("filename", "cv.pdf"),
            json_content=profile if profile is not None else {"skills": []},
            content_type=kwargs.pop("content_type", "application/pdf"),
            file_data=kwargs.pop("file_data", b"%PDF-1.4 fake"),
            **kwargs
        )
        resume.size = len(resume.file_data)
        store.save(resume)
        return resume

    return _make


def as_reply(document) -> str:
    return json.dumps(document)
