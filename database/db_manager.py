# database/db_manager.py

import sqlite3
import json
from pathlib import Path
from typing import Optional, List, Iterable
from datetime import datetime
from contextlib import contextmanager
import logging

from resume.errors import StorageError
from resume.models import StoredResume, ResumeOrigin, ResumeStatus

logger = logging.getLogger(__name__)


class DatabaseManager:
    """SQLite-backed profile store"""

    def __init__(self, db_path: str = "data/cvinsight.db"):
        self.db_path = db_path
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist"""
        db_file = Path(self.db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)

        schema_path = Path(__file__).parent / "schema.sql"
        if not schema_path.exists():
            logger.error(f"Schema file not found: {schema_path}")
            raise FileNotFoundError(f"Schema file not found: {schema_path}")

        with open(schema_path, 'r') as f:
            schema = f.read()

        with self.get_connection() as conn:
            conn.executescript(schema)

            # Enable WAL mode for better concurrency
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=30000")

        logger.info(f"Database initialized: {self.db_path}")

    @contextmanager
    def get_connection(self):
        """Context manager for database connections"""
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise StorageError(f"Database error: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ========== Resumes ==========

    def save(self, resume: StoredResume) -> str:
        """Insert or replace a resume"""
        resume.updated_at = datetime.now()
        with self.get_connection() as conn:
            conn.execute("""
                INSERT INTO resumes (
                    resume_id, owner_id, filename, content_type, size,
                    file_data, json_content, origin, status, score,
                    uploaded_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(resume_id) DO UPDATE SET
                    filename = excluded.filename,
                    content_type = excluded.content_type,
                    size = excluded.size,
                    file_data = excluded.file_data,
                    json_content = excluded.json_content,
                    origin = excluded.origin,
                    status = excluded.status,
                    score = excluded.score,
                    updated_at = excluded.updated_at
            """, (
                resume.resume_id,
                resume.owner_id,
                resume.filename,
                resume.content_type,
                resume.size,
                resume.file_data,
                json.dumps(resume.json_content, ensure_ascii=False),
                resume.origin.value,
                resume.status.value,
                resume.score,
                resume.uploaded_at.isoformat(),
                resume.updated_at.isoformat()
            ))

        logger.info(f"Saved resume {resume.resume_id} for owner {resume.owner_id}")
        return resume.resume_id

    def find_by_id(self, resume_id: str) -> Optional[StoredResume]:
        """Get resume by ID"""
        with self.get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM resumes WHERE resume_id = ?", (resume_id,)
            )
            row = cursor.fetchone()
            return self._from_row(row) if row else None

    def find_all_by_ids(self, resume_ids: Iterable[str]) -> List[StoredResume]:
        """Get resumes by ID, in request order, skipping unknown IDs"""
        ids = list(dict.fromkeys(resume_ids))
        if not ids:
            return []

        placeholders = ", ".join("?" for _ in ids)
        with self.get_connection() as conn:
            cursor = conn.execute(
                f"SELECT * FROM resumes WHERE resume_id IN ({placeholders})", ids
            )
            found = {row['resume_id']: self._from_row(row) for row in cursor.fetchall()}

        return [found[i] for i in ids if i in found]

    def find_all_by_owner(self, owner_id: str) -> List[StoredResume]:
        """List an owner's resumes, newest first"""
        with self.get_connection() as conn:
            cursor = conn.execute("""
                SELECT * FROM resumes
                WHERE owner_id = ?
                ORDER BY uploaded_at DESC
            """, (owner_id,))
            return [self._from_row(row) for row in cursor.fetchall()]

    def update_score(self, resume_id: str, score: int):
        """Record an analysis score"""
        with self.get_connection() as conn:
            conn.execute("""
                UPDATE resumes
                SET score = ?, status = ?, updated_at = ?
                WHERE resume_id = ?
            """, (score, ResumeStatus.ANALYZED.value, datetime.now().isoformat(), resume_id))

        logger.info(f"Updated resume {resume_id} score to: {score}")

    def delete(self, resume_id: str) -> bool:
        """Delete a resume; returns False if it did not exist"""
        with self.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM resumes WHERE resume_id = ?", (resume_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted resume {resume_id}")
        return deleted

    def _from_row(self, row: sqlite3.Row) -> StoredResume:
        return StoredResume(
            resume_id=row['resume_id'],
            owner_id=row['owner_id'],
            filename=row['filename'],
            content_type=row['content_type'],
            size=row['size'],
            file_data=bytes(row['file_data']) if row['file_data'] is not None else b"",
            json_content=json.loads(row['json_content']),
            origin=ResumeOrigin(row['origin']),
            status=ResumeStatus(row['status']),
            score=row['score'],
            uploaded_at=datetime.fromisoformat(row['uploaded_at']),
            updated_at=datetime.fromisoformat(row['updated_at']) if row['updated_at'] else None
        )
