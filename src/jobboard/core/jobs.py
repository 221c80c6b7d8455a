from __future__ import annotations

import logging
from datetime import date
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.core.errors import BadRequestError, ForbiddenError, InternalError, NotFoundError
from jobboard.core.workflow import parse_positive_id
from jobboard.db.repositories import Repository, serialize_job
from jobboard.types import Identity, is_employer

logger = logging.getLogger(__name__)

JOB_TAG_FIELDS = {
    "entryLevel": "entry_level",
    "noDegreeRequired": "no_degree_required",
    "remoteJobs": "remote_job",
    "partTime": "part_time",
    "highPaying": "high_paying",
    "fastHiring": "fast_hiring",
}


class JobService:
    def __init__(self, session: Session):
        self.session = session
        self.repo = Repository(session)

    def list_jobs(self) -> list[dict[str, Any]]:
        try:
            return [serialize_job(job) for job in self.repo.list_jobs()]
        except SQLAlchemyError as exc:
            logger.exception("Listing jobs failed")
            raise InternalError("Failed to fetch jobs") from exc

    def get_job(self, raw_job_id: Any) -> dict[str, Any]:
        job = self.repo.get_job(parse_positive_id(raw_job_id, "job id"))
        if job is None:
            raise NotFoundError("Job not found")
        return serialize_job(job)

    def post_job(self, identity: Identity, payload: dict[str, Any]) -> int:
        if not is_employer(identity.role):
            raise ForbiddenError("Only employers can post jobs")

        title = (payload.get("title") or "").strip()
        company = (payload.get("company") or "").strip()
        location = (payload.get("location") or "").strip()
        description = (payload.get("description") or "").strip()
        if not title or not company or not location or not description:
            raise BadRequestError("title, company, location, and description are required")

        deadline = payload.get("application_deadline")
        if isinstance(deadline, str):
            try:
                deadline = date.fromisoformat(deadline) if deadline.strip() else None
            except ValueError as exc:
                raise BadRequestError("applicationDeadline must be an ISO date") from exc

        tags = payload.get("tags") or {}
        category = (payload.get("category") or "Others").strip() or "Others"

        try:
            job = self.repo.create_job(
                title=title,
                company=company,
                location=location,
                description=description,
                posted_by=identity.id,
                salary=payload.get("salary") or None,
                requirements=payload.get("requirements") or None,
                employment_type=payload.get("employment_type") or None,
                application_deadline=deadline or None,
                contact_email=payload.get("contact_email") or None,
                category=category,
                tags={column: bool(tags.get(key)) for key, column in JOB_TAG_FIELDS.items()},
            )
        except SQLAlchemyError as exc:
            logger.exception("Posting job failed employer_id=%s", identity.id)
            raise InternalError("Failed to post job") from exc

        logger.info("Job %s posted by employer_id=%s", job.id, identity.id)
        return job.id
