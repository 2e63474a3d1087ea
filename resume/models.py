# resume/models.py
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any
from enum import Enum
import uuid


class ResumeOrigin(Enum):
    """Where a stored profile came from"""
    USER_UPLOADED = "USER_UPLOADED"
    SYSTEM_GENERATED = "SYSTEM_GENERATED"


class ResumeStatus(Enum):
    """Lifecycle state of a resume"""
    UPLOADED = "UPLOADED"
    TEXT_EXTRACTED = "TEXT_EXTRACTED"
    STRUCTURED = "STRUCTURED"
    ANALYZED = "ANALYZED"
    DELETED = "DELETED"


# ANALYZED may be re-entered; DELETED is terminal
ALLOWED_TRANSITIONS = {
    ResumeStatus.UPLOADED: {ResumeStatus.TEXT_EXTRACTED},
    ResumeStatus.TEXT_EXTRACTED: {ResumeStatus.STRUCTURED},
    ResumeStatus.STRUCTURED: {ResumeStatus.ANALYZED, ResumeStatus.DELETED},
    ResumeStatus.ANALYZED: {ResumeStatus.ANALYZED, ResumeStatus.DELETED},
    ResumeStatus.DELETED: set(),
}


class RecommendationType(Enum):
    COURSE = "COURSE"
    CERTIFICATION = "CERTIFICATION"
    TRAINING = "TRAINING"
    OPPORTUNITY = "OPPORTUNITY"


class Level(Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class DurationBucket(Enum):
    """Duration categories a user can filter recommendations by"""
    SHORT = "SHORT"      # under 1 month
    MEDIUM = "MEDIUM"    # 1-3 months
    LONG = "LONG"        # over 3 months


WORK_TYPES = ("Full-Time", "Internship", "Part-Time", "Freelance")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly to every owner-scoped call"""
    user_id: str
    username: Optional[str] = None


@dataclass
class StoredResume:
    """A resume profile persisted for one owner"""
    owner_id: str
    filename: str
    json_content: Dict[str, Any]
    content_type: str = "application/octet-stream"
    size: int = 0
    file_data: bytes = b""
    origin: ResumeOrigin = ResumeOrigin.SYSTEM_GENERATED
    status: ResumeStatus = ResumeStatus.STRUCTURED
    score: Optional[int] = None
    resume_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    uploaded_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    def is_owned_by(self, identity: Identity) -> bool:
        return self.owner_id == identity.user_id

    def advance(self, new_status: ResumeStatus):
        """Move to a new lifecycle state, rejecting illegal transitions"""
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Illegal resume transition: {self.status.value} -> {new_status.value}"
            )
        self.status = new_status

    def to_summary(self) -> Dict[str, Any]:
        """Listing view without file bytes or profile body"""
        return {
            'id': self.resume_id,
            'filename': self.filename,
            'contentType': self.content_type,
            'size': self.size,
            'origin': self.origin.value,
            'status': self.status.value,
            'score': self.score,
            'uploadedAt': self.uploaded_at.isoformat(),
        }

    def to_dto(self) -> Dict[str, Any]:
        data = self.to_summary()
        data['jsonContent'] = self.json_content
        return data

    def __repr__(self):
        return f"<StoredResume: {self.resume_id} ({self.filename}) owner={self.owner_id}>"


@dataclass
class PriceRange:
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass
class RecommendationFilters:
    """User constraints forwarded to the model as prompt instructions"""
    types: List[RecommendationType] = field(default_factory=list)
    levels: List[Level] = field(default_factory=list)
    price_range: Optional[PriceRange] = None
    free: bool = False
    durations: List[DurationBucket] = field(default_factory=list)
    providers: List[str] = field(default_factory=list)
    search_query: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Prompt-facing form, camelCase like the rest of the JSON documents"""
        return {
            'types': [t.value for t in self.types],
            'levels': [lvl.value for lvl in self.levels],
            'priceRange': asdict(self.price_range) if self.price_range else None,
            'free': self.free,
            'durations': [d.value for d in self.durations],
            'providers': list(self.providers),
            'searchQuery': self.search_query,
        }
