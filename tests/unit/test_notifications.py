from jobboard.config import Settings
from jobboard.core.notifications import (
    NotificationDispatcher,
    get_mailer,
    reset_mailer,
    status_body,
    status_subject,
)
from jobboard.types import ApplicantContact


class RecordingMailer:
    sender = "hr@acme.com"

    def __init__(self) -> None:
        self.sent = []

    def send(self, message) -> None:
        self.sent.append(message)


def _contact(**overrides) -> ApplicantContact:
    values = {
        "application_id": 1,
        "status": "shortlisted",
        "applicant_email": "ann@x.com",
        "full_name": "Ann",
        "job_title": "Backend Engineer",
        "company": "Acme",
    }
    values.update(overrides)
    return ApplicantContact(**values)


def test_subject_prefix_depends_on_status() -> None:
    assert status_subject("approved", "Dev", "Acme") == "Application Approved: Dev at Acme"
    assert status_subject("rejected", "Dev", "Acme") == "Application Update: Dev at Acme"
    assert status_subject("shortlisted", "Dev", "Acme") == "Application Progress Update: Dev at Acme"
    assert status_subject("pending", "Dev", "Acme") == "Application Progress Update: Dev at Acme"


def test_body_templates_per_status() -> None:
    assert "Congratulations" in status_body("approved", "Ann", "Dev", "Acme")
    assert "will not be moving forward" in status_body("rejected", "Ann", "Dev", "Acme")
    assert "has been shortlisted" in status_body("shortlisted", "Ann", "Dev", "Acme")
    assert "is now: Not Yet Reviewed." in status_body("pending", "Ann", "Dev", "Acme")


def test_status_update_not_sent_without_transport() -> None:
    assert NotificationDispatcher(None).send_status_update(_contact(), "approved") is False


def test_status_update_not_sent_without_applicant_email() -> None:
    mailer = RecordingMailer()
    sent = NotificationDispatcher(mailer).send_status_update(_contact(applicant_email=None), "approved")
    assert sent is False
    assert mailer.sent == []


def test_status_update_message_fields() -> None:
    mailer = RecordingMailer()
    sent = NotificationDispatcher(mailer).send_status_update(_contact(full_name=None), "approved")
    assert sent is True
    message = mailer.sent[0]
    assert message["To"] == "ann@x.com"
    assert message["From"] == "hr@acme.com"
    assert message["Subject"] == "Application Approved: Backend Engineer at Acme"
    assert message.get_content().startswith("Hello Applicant,")


def test_direct_message_uses_default_subject() -> None:
    mailer = RecordingMailer()
    NotificationDispatcher(mailer).send_direct_message(_contact(), subject="  ", message="Please call us.")
    message = mailer.sent[0]
    assert message["Subject"] == "Update on your application: Backend Engineer at Acme"
    content = message.get_content()
    assert "Please call us." in content
    assert content.rstrip().endswith("Regards,\nAcme")


def test_get_mailer_requires_full_configuration() -> None:
    reset_mailer()
    assert get_mailer(Settings(smtp_host="smtp.acme.com", smtp_user="", smtp_pass="x")) is None


def test_get_mailer_is_a_singleton() -> None:
    reset_mailer()
    settings = Settings(smtp_host="smtp.acme.com", smtp_port=465, smtp_user="hr@acme.com", smtp_pass="pw")
    try:
        first = get_mailer(settings)
        second = get_mailer(settings)
        assert first is second
        assert first.config.use_ssl is True
        assert first.sender == "hr@acme.com"
    finally:
        reset_mailer()
