"""Domain entity for persisted coach chat history."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CoachMessage:
    """One turn of the coach chat for a job."""

    job_id: str
    role: str  # "user" | "assistant"
    content: str
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
