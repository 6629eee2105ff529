"""Domain entity for a job application the user is preparing."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Job:
    """A job the user is applying to — the scope for job-specific coaching."""

    user_id: str
    job_title: str
    company_name: str
    job_description: str | None = None
    status: str = "Draft"
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        job_title: str | None = None,
        company_name: str | None = None,
        job_description: str | None = None,
        status: str | None = None,
    ) -> None:
        """Update job fields and refresh the updated_at timestamp."""
        if job_title is not None:
            self.job_title = job_title
        if company_name is not None:
            self.company_name = company_name
        if job_description is not None:
            self.job_description = job_description
        if status is not None:
            self.status = status
        self.updated_at = datetime.now(timezone.utc)

    @property
    def display_title(self) -> str:
        return f"{self.job_title} at {self.company_name}"
