from __future__ import annotations

import logging
import smtplib
import ssl
import threading
from dataclasses import dataclass
from email.message import EmailMessage

from jobboard.config import Settings, get_settings
from jobboard.types import ApplicantContact, status_label

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MailTransportConfig:
    host: str
    port: int
    user: str
    password: str
    use_ssl: bool
    sender: str
    timeout_sec: int


class Mailer:
    """Thin SMTP client; every send opens and closes its own connection."""

    def __init__(self, config: MailTransportConfig):
        self.config = config

    @property
    def sender(self) -> str:
        return self.config.sender

    def send(self, message: EmailMessage) -> None:
        config = self.config
        context = ssl.create_default_context()
        if config.use_ssl:
            with smtplib.SMTP_SSL(config.host, config.port, timeout=config.timeout_sec, context=context) as smtp:
                smtp.login(config.user, config.password)
                smtp.send_message(message)
            return

        with smtplib.SMTP(config.host, config.port, timeout=config.timeout_sec) as smtp:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()
            smtp.login(config.user, config.password)
            smtp.send_message(message)


_MAILER: Mailer | None = None
_MAILER_LOCK = threading.Lock()


def get_mailer(settings: Settings | None = None) -> Mailer | None:
    """Return the process-wide mailer, or None when SMTP is not configured."""
    global _MAILER
    settings = settings or get_settings()
    if not settings.smtp_configured:
        return None
    if _MAILER is not None:
        return _MAILER

    with _MAILER_LOCK:
        if _MAILER is None:
            _MAILER = Mailer(
                MailTransportConfig(
                    host=settings.smtp_host,
                    port=settings.smtp_port,
                    user=settings.smtp_user,
                    password=settings.smtp_pass,
                    use_ssl=settings.smtp_use_ssl,
                    sender=settings.smtp_sender,
                    timeout_sec=settings.smtp_timeout_sec,
                )
            )
            logger.info("Mail transport initialized host=%s port=%s", settings.smtp_host, settings.smtp_port)
    return _MAILER


def reset_mailer() -> None:
    global _MAILER
    with _MAILER_LOCK:
        _MAILER = None


def status_subject(status: str, job_title: str, company: str) -> str:
    if status == "approved":
        prefix = "Application Approved"
    elif status == "rejected":
        prefix = "Application Update"
    else:
        prefix = "Application Progress Update"
    return f"{prefix}: {job_title} at {company}"


def status_body(status: str, name: str, job_title: str, company: str) -> str:
    if status == "approved":
        return (
            f"Hello {name},\n\n"
            f"Congratulations. Your application for {job_title} at {company} has been approved.\n\n"
            "We will contact you soon with next steps.\n\n"
            f"Regards,\n{company}"
        )
    if status == "rejected":
        return (
            f"Hello {name},\n\n"
            f"Thank you for your interest in {job_title} at {company}. "
            "After careful review, we will not be moving forward at this time.\n\n"
            "We appreciate your effort and encourage you to apply to future opportunities.\n\n"
            f"Regards,\n{company}"
        )
    if status == "shortlisted":
        return (
            f"Hello {name},\n\n"
            f"Good news. Your application for {job_title} at {company} has been shortlisted.\n\n"
            "We will reach out with the next steps.\n\n"
            f"Regards,\n{company}"
        )
    return (
        f"Hello {name},\n\n"
        f"Your application status for {job_title} at {company} is now: {status_label(status)}.\n\n"
        f"Regards,\n{company}"
    )


def direct_body(name: str, message: str, job_title: str, company: str) -> str:
    lines = [
        f"Hello {name},",
        "",
        message or f"You have an update regarding your application for {job_title} at {company}.",
        "",
        "Regards,",
        company,
    ]
    return "\n".join(lines)


def build_message(*, sender: str, recipient: str, subject: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = subject
    message.set_content(body)
    return message


class NotificationDispatcher:
    """Compose and send applicant emails. Unconfigured transport means nothing is sent."""

    def __init__(self, mailer: Mailer | None):
        self.mailer = mailer

    @property
    def configured(self) -> bool:
        return self.mailer is not None

    def send_status_update(self, contact: ApplicantContact, status: str) -> bool:
        if self.mailer is None or not contact.applicant_email:
            return False

        name = contact.full_name or "Applicant"
        message = build_message(
            sender=self.mailer.sender,
            recipient=contact.applicant_email,
            subject=status_subject(status, contact.job_title, contact.company),
            body=status_body(status, name, contact.job_title, contact.company),
        )
        self.mailer.send(message)
        logger.info("Sent %s status email for application_id=%s", status, contact.application_id)
        return True

    def send_direct_message(self, contact: ApplicantContact, *, subject: str, message: str) -> bool:
        if self.mailer is None or not contact.applicant_email:
            return False

        name = contact.full_name or "Applicant"
        subject = subject.strip() or f"Update on your application: {contact.job_title} at {contact.company}"
        email = build_message(
            sender=self.mailer.sender,
            recipient=contact.applicant_email,
            subject=subject,
            body=direct_body(name, message.strip(), contact.job_title, contact.company),
        )
        self.mailer.send(email)
        logger.info("Sent employer message for application_id=%s", contact.application_id)
        return True
