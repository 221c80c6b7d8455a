from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.api.deps import get_db, get_identity
from jobboard.api.schemas import (
    ApplicantEmailRequest,
    ApplyRequest,
    ApplyResponse,
    JobCreateRequest,
    JobCreateResponse,
    MessageResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from jobboard.core.jobs import JobService
from jobboard.core.workflow import ApplicationWorkflow
from jobboard.types import Identity

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("")
def list_jobs(db: Session = Depends(get_db)) -> list[dict]:
    return JobService(db).list_jobs()


@router.post("", response_model=JobCreateResponse, status_code=201)
def post_job(
    payload: JobCreateRequest | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> dict:
    job_id = JobService(db).post_job(identity, (payload or JobCreateRequest()).to_payload())
    return {"message": "Job posted successfully", "job_id": job_id}


@router.get("/applied/me")
def list_applied_job_ids(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)) -> dict:
    return {"appliedJobIds": ApplicationWorkflow(db).list_applied_job_ids(identity)}


@router.get("/applications/me")
def list_my_applications(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)) -> dict:
    return {"applications": ApplicationWorkflow(db).list_my_applications(identity)}


@router.get("/employer/applications")
def list_employer_applications(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> dict:
    return {"applications": ApplicationWorkflow(db).list_employer_applications(identity)}


@router.patch("/employer/applications/{application_id}/status", response_model=StatusUpdateResponse)
def update_application_status(
    application_id: str,
    payload: StatusUpdateRequest | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> dict:
    status = ApplicationWorkflow(db).update_status(identity, application_id, payload.status if payload else None)
    return {"message": "Application status updated", "status": status}


@router.post("/employer/applications/{application_id}/email", response_model=MessageResponse)
def email_applicant(
    application_id: str,
    payload: ApplicantEmailRequest | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> dict:
    payload = payload or ApplicantEmailRequest()
    ApplicationWorkflow(db).email_applicant(
        identity,
        application_id,
        subject=payload.subject,
        message=payload.message,
    )
    return {"message": "Email sent successfully"}


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)) -> dict:
    return JobService(db).get_job(job_id)


@router.post("/{job_id}/apply", response_model=ApplyResponse, status_code=201)
def apply_to_job(
    job_id: str,
    payload: ApplyRequest | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> dict:
    submission = (payload or ApplyRequest()).to_submission()
    application_id = ApplicationWorkflow(db).submit_application(identity, job_id, submission)
    return {"message": "Application submitted successfully", "application_id": application_id}
