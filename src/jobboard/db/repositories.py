from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from jobboard.db.models import Application, Job, User
from jobboard.types import ApplicantContact, ApplicationStatus, UserRole


def serialize_job(job: Job) -> dict[str, Any]:
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "salary": job.salary,
        "description": job.description,
        "requirements": job.requirements,
        "employment_type": job.employment_type,
        "application_deadline": job.application_deadline.isoformat() if job.application_deadline else None,
        "posted_by": job.posted_by,
        "contact_email": job.contact_email,
        "category": job.category,
        "entry_level": job.entry_level,
        "no_degree_required": job.no_degree_required,
        "remote_job": job.remote_job,
        "part_time": job.part_time,
        "high_paying": job.high_paying,
        "fast_hiring": job.fast_hiring,
        "created_at": job.created_at.isoformat() if job.created_at else None,
    }


class Repository:
    def __init__(self, session: Session):
        self.session = session

    # users

    def create_user(self, *, name: str, email: str, password_hash: str, role: UserRole) -> User:
        user = User(name=name, email=email, password=password_hash, role=role)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_user(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.session.scalar(select(User).where(User.email == email))

    # jobs

    def create_job(
        self,
        *,
        title: str,
        company: str,
        location: str,
        description: str,
        posted_by: int,
        salary: str | None = None,
        requirements: str | None = None,
        employment_type: str | None = None,
        application_deadline: date | None = None,
        contact_email: str | None = None,
        category: str = "Others",
        tags: dict[str, bool] | None = None,
    ) -> Job:
        job = Job(
            title=title,
            company=company,
            location=location,
            description=description,
            posted_by=posted_by,
            salary=salary,
            requirements=requirements,
            employment_type=employment_type,
            application_deadline=application_deadline,
            contact_email=contact_email,
            category=category,
            **(tags or {}),
        )
        self.session.add(job)
        self.session.commit()
        self.session.refresh(job)
        return job

    def get_job(self, job_id: int) -> Job | None:
        return self.session.get(Job, job_id)

    def list_jobs(self, limit: int | None = None) -> list[Job]:
        statement = select(Job).order_by(Job.id.desc())
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.scalars(statement).all())

    # applications

    def find_application(self, *, user_id: int, job_id: int) -> Application | None:
        statement = (
            select(Application)
            .where(Application.user_id == user_id, Application.job_id == job_id)
            .limit(1)
        )
        return self.session.scalar(statement)

    def create_application(self, **values: Any) -> Application:
        application = Application(status="pending", **values)
        self.session.add(application)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(application)
        return application

    def list_applied_job_ids(self, user_id: int) -> list[int]:
        statement = select(Application.job_id).where(Application.user_id == user_id)
        return list(self.session.scalars(statement).all())

    def list_applications_for_user(self, user_id: int) -> list[dict[str, Any]]:
        statement = (
            select(Application, Job)
            .join(Job, Job.id == Application.job_id)
            .where(Application.user_id == user_id)
            .order_by(Application.id.desc())
        )
        return [
            {
                "application_id": application.id,
                "job_id": application.job_id,
                "status": application.status,
                "created_at": application.created_at.isoformat() if application.created_at else None,
                "job_title": job.title,
                "company": job.company,
                "location": job.location,
                "salary": job.salary,
            }
            for application, job in self.session.execute(statement).all()
        ]

    def list_applications_for_employer(self, employer_id: int) -> list[dict[str, Any]]:
        statement = (
            select(Application, Job)
            .join(Job, Job.id == Application.job_id)
            .where(Job.posted_by == employer_id)
            .order_by(Application.id.desc())
        )
        return [
            {
                "application_id": application.id,
                "job_id": application.job_id,
                "full_name": application.full_name,
                "applicant_email": application.applicant_email,
                "phone": application.phone,
                "cover_letter": application.cover_letter,
                "qualification_text": application.qualification_text,
                "document_name": application.document_name,
                "document_path": application.document_path,
                "other_document_name": application.other_document_name,
                "other_document_path": application.other_document_path,
                "status": application.status,
                "created_at": application.created_at.isoformat() if application.created_at else None,
                "job_title": job.title,
                "company": job.company,
                "posted_by": job.posted_by,
            }
            for application, job in self.session.execute(statement).all()
        ]

    def get_owned_application(self, *, application_id: int, employer_id: int) -> ApplicantContact | None:
        """Return the application only when it belongs to a job the employer posted."""
        statement = (
            select(Application, Job)
            .join(Job, Job.id == Application.job_id)
            .where(Application.id == application_id, Job.posted_by == employer_id)
            .limit(1)
        )
        row = self.session.execute(statement).first()
        if row is None:
            return None
        application, job = row
        return ApplicantContact(
            application_id=application.id,
            status=application.status,
            applicant_email=application.applicant_email,
            full_name=application.full_name,
            job_title=job.title,
            company=job.company,
        )

    def update_application_status(self, application_id: int, status: ApplicationStatus) -> Application:
        application = self.session.get(Application, application_id)
        if not application:
            raise ValueError(f"application {application_id} not found")

        application.status = status
        self.session.commit()
        self.session.refresh(application)
        return application
