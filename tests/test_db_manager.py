# tests/test_db_manager.py
from datetime import datetime, timedelta

import pytest

from database.db_manager import DatabaseManager
from resume.errors import StorageError
from resume.models import ResumeOrigin, ResumeStatus


def test_roundtrip(store, alice, make_resume):
    resume = make_resume(
        alice,
        {"about": {"name": "Zoë"}, "skills": ["Python"]},
        origin=ResumeOrigin.USER_UPLOADED,
    )

    loaded = store.find_by_id(resume.resume_id)

    assert loaded.owner_id == "alice"
    assert loaded.json_content == {"about": {"name": "Zoë"}, "skills": ["Python"]}
    assert loaded.file_data == b"%PDF-1.4 fake"
    assert loaded.origin == ResumeOrigin.USER_UPLOADED
    assert loaded.status == ResumeStatus.STRUCTURED
    assert loaded.score is None
    assert loaded.updated_at is not None


def test_save_updates_existing(store, alice, make_resume):
    resume = make_resume(alice)
    resume.json_content = {"skills": ["Rust"]}

    store.save(resume)

    assert store.find_by_id(resume.resume_id).json_content == {"skills": ["Rust"]}
    assert len(store.find_all_by_owner("alice")) == 1


def test_find_unknown(store):
    assert store.find_by_id("missing") is None


def test_find_all_by_ids_keeps_request_order(store, alice, make_resume):
    first = make_resume(alice)
    second = make_resume(alice)

    found = store.find_all_by_ids([second.resume_id, "missing", first.resume_id, second.resume_id])

    assert [r.resume_id for r in found] == [second.resume_id, first.resume_id]
    assert store.find_all_by_ids([]) == []


def test_find_all_by_owner_newest_first(store, alice, bob, make_resume):
    now = datetime.now()
    older = make_resume(alice, uploaded_at=now - timedelta(days=1))
    newer = make_resume(alice, uploaded_at=now)
    make_resume(bob)

    found = store.find_all_by_owner("alice")

    assert [r.resume_id for r in found] == [newer.resume_id, older.resume_id]


def test_update_score(store, alice, make_resume):
    resume = make_resume(alice)

    store.update_score(resume.resume_id, 64)

    loaded = store.find_by_id(resume.resume_id)
    assert loaded.score == 64
    assert loaded.status == ResumeStatus.ANALYZED


def test_out_of_range_score_is_storage_error(store, alice, make_resume):
    resume = make_resume(alice)

    with pytest.raises(StorageError):
        store.update_score(resume.resume_id, 150)

    assert store.find_by_id(resume.resume_id).score is None


def test_delete(store, alice, make_resume):
    resume = make_resume(alice)

    assert store.delete(resume.resume_id) is True
    assert store.delete(resume.resume_id) is False
    assert store.find_by_id(resume.resume_id) is None


def test_creates_parent_directories(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "resumes.db"

    DatabaseManager(str(db_path))

    assert db_path.exists()
