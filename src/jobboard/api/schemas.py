from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jobboard.types import AttachmentUpload, SubmissionRequest


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserResponse


class JobTags(CamelModel):
    entry_level: bool = Field(default=False, alias="entryLevel")
    no_degree_required: bool = Field(default=False, alias="noDegreeRequired")
    remote_jobs: bool = Field(default=False, alias="remoteJobs")
    part_time: bool = Field(default=False, alias="partTime")
    high_paying: bool = Field(default=False, alias="highPaying")
    fast_hiring: bool = Field(default=False, alias="fastHiring")


class JobCreateRequest(CamelModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    salary: str | None = None
    description: str | None = None
    requirements: str | None = None
    employment_type: str | None = Field(default=None, alias="employmentType")
    application_deadline: str | None = Field(default=None, alias="applicationDeadline")
    contact_email: str | None = Field(default=None, alias="contactEmail")
    category: str | None = None
    tags: JobTags | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(exclude={"tags"})
        payload["tags"] = self.tags.model_dump(by_alias=True) if self.tags else {}
        return payload


class JobCreateResponse(BaseModel):
    message: str
    job_id: int = Field(serialization_alias="jobId")


class ApplyRequest(CamelModel):
    full_name: str | None = Field(default=None, alias="fullName")
    applicant_email: str | None = Field(default=None, alias="applicantEmail")
    phone: str | None = None
    cover_letter: str | None = Field(default=None, alias="coverLetter")
    qualification_text: str | None = Field(default=None, alias="qualificationText")
    resume_document_name: str | None = Field(default=None, alias="resumeDocumentName")
    resume_document_data: str | None = Field(default=None, alias="resumeDocumentData")
    document_name: str | None = Field(default=None, alias="documentName")
    document_data: str | None = Field(default=None, alias="documentData")
    other_document_name: str | None = Field(default=None, alias="otherDocumentName")
    other_document_data: str | None = Field(default=None, alias="otherDocumentData")

    def to_submission(self) -> SubmissionRequest:
        return SubmissionRequest(
            full_name=self.full_name,
            applicant_email=self.applicant_email,
            qualification_text=self.qualification_text,
            phone=self.phone,
            cover_letter=self.cover_letter,
            resume=AttachmentUpload(
                name=self.resume_document_name or self.document_name,
                data=self.resume_document_data or self.document_data,
            ),
            other=AttachmentUpload(name=self.other_document_name, data=self.other_document_data),
        )


class ApplyResponse(BaseModel):
    message: str
    application_id: int = Field(serialization_alias="applicationId")


class StatusUpdateRequest(CamelModel):
    status: str | None = None


class StatusUpdateResponse(BaseModel):
    message: str
    status: str


class ApplicantEmailRequest(CamelModel):
    subject: str | None = None
    message: str | None = None


class MessageResponse(BaseModel):
    message: str
