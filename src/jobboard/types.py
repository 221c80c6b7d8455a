from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, Field

UserRole = Literal["jobseeker", "employer"]
ApplicationStatus = Literal["pending", "shortlisted", "approved", "rejected"]
AttachmentRole = Literal["resume", "other"]

USER_ROLES: tuple[str, ...] = get_args(UserRole)
APPLICATION_STATUSES: tuple[str, ...] = get_args(ApplicationStatus)
EMAILABLE_STATUSES: frozenset[str] = frozenset({"approved", "shortlisted"})

STATUS_LABELS: dict[str, str] = {
    "pending": "Not Yet Reviewed",
    "shortlisted": "Shortlisted",
    "approved": "Approved",
    "rejected": "Rejected",
}


def normalize_role(role: str | None) -> str:
    """Map the historical spellings onto the canonical role names.

    "user" and "jobseeker" both mean a job seeker; anything else is returned
    lower-cased and trimmed so callers can reject it.
    """
    value = (role or "").strip().lower()
    if value in {"user", "jobseeker"}:
        return "jobseeker"
    return value


def is_jobseeker(role: str | None) -> bool:
    return normalize_role(role) == "jobseeker"


def is_employer(role: str | None) -> bool:
    return normalize_role(role) == "employer"


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


class Identity(BaseModel):
    id: int
    role: str
    email: str = ""


class AttachmentUpload(BaseModel):
    name: str | None = None
    data: str | None = None

    @property
    def provided(self) -> bool:
        return bool(self.name) and bool(self.data)


class StoredAttachment(BaseModel):
    name: str | None = None
    path: str | None = None


class ApplicantContact(BaseModel):
    application_id: int
    status: str
    applicant_email: str | None = None
    full_name: str | None = None
    job_title: str = ""
    company: str = ""


class SubmissionRequest(BaseModel):
    full_name: str | None = None
    applicant_email: str | None = None
    qualification_text: str | None = None
    phone: str | None = None
    cover_letter: str | None = None
    resume: AttachmentUpload = Field(default_factory=AttachmentUpload)
    other: AttachmentUpload = Field(default_factory=AttachmentUpload)
