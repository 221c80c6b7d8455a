from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.config import Settings, get_settings
from jobboard.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
)
from jobboard.core.notifications import NotificationDispatcher, get_mailer
from jobboard.core.uploads import UploadStore
from jobboard.db.repositories import Repository
from jobboard.types import (
    APPLICATION_STATUSES,
    EMAILABLE_STATUSES,
    ApplicationStatus,
    Identity,
    StoredAttachment,
    SubmissionRequest,
    is_employer,
    is_jobseeker,
)

logger = logging.getLogger(__name__)


def parse_positive_id(raw: Any, label: str) -> int:
    """Accept ints or digit strings greater than zero; anything else is a bad request."""
    if isinstance(raw, bool):
        raise BadRequestError(f"Invalid {label}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        if not text.isdigit():
            raise BadRequestError(f"Invalid {label}")
        value = int(text)
    if value <= 0:
        raise BadRequestError(f"Invalid {label}")
    return value


def _clean(value: str | None) -> str:
    return (value or "").strip()


class ApplicationWorkflow:
    def __init__(
        self,
        session: Session,
        *,
        settings: Settings | None = None,
        dispatcher: NotificationDispatcher | None = None,
        uploads: UploadStore | None = None,
    ):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)
        self.dispatcher = dispatcher or NotificationDispatcher(get_mailer(self.settings))
        self.uploads = uploads or UploadStore(
            self.settings.upload_dir,
            max_bytes=self.settings.max_attachment_bytes,
        )

    def submit_application(self, identity: Identity, raw_job_id: Any, request: SubmissionRequest) -> int:
        if not is_jobseeker(identity.role):
            raise ForbiddenError("Only job seekers can apply to jobs")

        job_id = parse_positive_id(raw_job_id, "job id")

        full_name = _clean(request.full_name)
        applicant_email = _clean(request.applicant_email)
        qualification_text = _clean(request.qualification_text)
        if not full_name or not applicant_email or not qualification_text:
            raise BadRequestError("Name, email, and qualification details are required")

        try:
            if self.repo.get_job(job_id) is None:
                raise NotFoundError("Job not found")
            if self.repo.find_application(user_id=identity.id, job_id=job_id) is not None:
                raise ConflictError("You already applied for this job")
        except SQLAlchemyError as exc:
            logger.exception("Application lookup failed user_id=%s job_id=%s", identity.id, job_id)
            raise InternalError("Failed to apply for job") from exc

        stored: list[StoredAttachment] = []
        try:
            resume = self.uploads.persist(request.resume, user_id=identity.id, job_id=job_id, role="resume")
            stored.append(resume)
            other = self.uploads.persist(request.other, user_id=identity.id, job_id=job_id, role="other")
            stored.append(other)

            application = self.repo.create_application(
                user_id=identity.id,
                job_id=job_id,
                resume_link=resume.path,
                qualification_text=qualification_text,
                document_name=resume.name,
                document_path=resume.path,
                full_name=full_name,
                applicant_email=applicant_email,
                phone=_clean(request.phone) or None,
                cover_letter=_clean(request.cover_letter) or None,
                other_document_name=other.name,
                other_document_path=other.path,
            )
        except BadRequestError:
            self._discard(stored)
            raise
        except IntegrityError as exc:
            self._discard(stored)
            logger.info("Duplicate application rejected by storage user_id=%s job_id=%s", identity.id, job_id)
            raise ConflictError("You already applied for this job") from exc
        except (SQLAlchemyError, OSError) as exc:
            self._discard(stored)
            logger.exception("Application submit failed user_id=%s job_id=%s", identity.id, job_id)
            raise InternalError("Failed to apply for job") from exc

        logger.info("Application %s submitted user_id=%s job_id=%s", application.id, identity.id, job_id)
        return application.id

    def update_status(
        self,
        identity: Identity,
        raw_application_id: Any,
        raw_status: str | None,
    ) -> ApplicationStatus:
        if not is_employer(identity.role):
            raise ForbiddenError("Only employers can update application status")

        application_id = parse_positive_id(raw_application_id, "application id")

        status = _clean(raw_status).lower()
        if status not in APPLICATION_STATUSES:
            raise BadRequestError("Status must be pending, shortlisted, approved, or rejected")

        try:
            contact = self.repo.get_owned_application(application_id=application_id, employer_id=identity.id)
            if contact is None:
                raise NotFoundError("Application not found for this employer")
            self.repo.update_application_status(application_id, status)
        except SQLAlchemyError as exc:
            logger.exception("Status update failed application_id=%s", application_id)
            raise InternalError("Failed to update application status") from exc

        try:
            self.dispatcher.send_status_update(contact, status)
        except Exception as exc:
            logger.warning("Status email warning application_id=%s: %s", application_id, exc)

        return status

    def email_applicant(
        self,
        identity: Identity,
        raw_application_id: Any,
        *,
        subject: str | None,
        message: str | None,
    ) -> None:
        if not is_employer(identity.role):
            raise ForbiddenError("Only employers can send applicant emails")

        application_id = parse_positive_id(raw_application_id, "application id")

        body = _clean(message)
        if not body:
            raise BadRequestError("Email message is required")

        try:
            contact = self.repo.get_owned_application(application_id=application_id, employer_id=identity.id)
        except SQLAlchemyError as exc:
            logger.exception("Applicant lookup failed application_id=%s", application_id)
            raise InternalError("Failed to send email") from exc
        if contact is None:
            raise NotFoundError("Application not found for this employer")

        if contact.status not in EMAILABLE_STATUSES:
            raise BadRequestError("You can email only approved or shortlisted applicants")
        if not self.dispatcher.configured:
            raise ServiceUnavailableError("Email service is not configured. Set SMTP environment variables.")
        if not contact.applicant_email:
            raise BadRequestError("Applicant has no email address on file")

        try:
            self.dispatcher.send_direct_message(contact, subject=_clean(subject), message=body)
        except Exception as exc:
            logger.exception("Direct email failed application_id=%s", application_id)
            raise InternalError("Failed to send email") from exc

    def list_my_applications(self, identity: Identity) -> list[dict[str, Any]]:
        if not is_jobseeker(identity.role):
            return []
        try:
            return self.repo.list_applications_for_user(identity.id)
        except SQLAlchemyError as exc:
            logger.exception("Listing applications failed user_id=%s", identity.id)
            raise InternalError("Failed to fetch your applications") from exc

    def list_applied_job_ids(self, identity: Identity) -> list[int]:
        if not is_jobseeker(identity.role):
            return []
        try:
            return self.repo.list_applied_job_ids(identity.id)
        except SQLAlchemyError as exc:
            logger.exception("Listing applied jobs failed user_id=%s", identity.id)
            raise InternalError("Failed to fetch applications") from exc

    def list_employer_applications(self, identity: Identity) -> list[dict[str, Any]]:
        if not is_employer(identity.role):
            raise ForbiddenError("Only employers can review applications")
        try:
            return self.repo.list_applications_for_employer(identity.id)
        except SQLAlchemyError as exc:
            logger.exception("Listing employer applications failed employer_id=%s", identity.id)
            raise InternalError("Failed to fetch employer applications") from exc

    def _discard(self, stored: list[StoredAttachment]) -> None:
        for item in stored:
            self.uploads.discard(item)
