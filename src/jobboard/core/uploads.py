from __future__ import annotations

import base64
import binascii
import logging
import re
import secrets
import time
from pathlib import Path, PurePosixPath

from jobboard.core.errors import BadRequestError
from jobboard.types import AttachmentRole, AttachmentUpload, StoredAttachment

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
MAX_SAFE_NAME_LENGTH = 120

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(raw_name: str) -> str:
    """Reduce a client supplied name to a bare file name over `[A-Za-z0-9._-]`."""
    base = PurePosixPath(raw_name.replace("\\", "/")).name
    safe = _UNSAFE_CHARS.sub("_", base)
    if len(safe) > MAX_SAFE_NAME_LENGTH:
        safe = safe[-MAX_SAFE_NAME_LENGTH:]
    return safe or "document"


def decode_payload(raw_data: str) -> bytes:
    # data URLs look like "data:application/pdf;base64,<payload>"
    payload = raw_data.split(",", 1)[1] if "," in raw_data else raw_data
    try:
        return base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise BadRequestError("Attachment data is not valid base64") from exc


class UploadStore:
    def __init__(self, upload_dir: Path, *, max_bytes: int | None = None):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes

    def build_filename(self, *, user_id: int, job_id: int, role: AttachmentRole, safe_name: str) -> str:
        millis = int(time.time() * 1000)
        return f"{millis}_{user_id}_{job_id}_{role}_{secrets.token_hex(4)}_{safe_name}"

    def persist(
        self,
        attachment: AttachmentUpload,
        *,
        user_id: int,
        job_id: int,
        role: AttachmentRole,
    ) -> StoredAttachment:
        if not attachment.provided:
            return StoredAttachment()

        safe_name = sanitize_filename(attachment.name or "")
        content = decode_payload(attachment.data or "")
        if self.max_bytes is not None and len(content) > self.max_bytes:
            raise BadRequestError(f"Attachment {safe_name} exceeds the {self.max_bytes} byte limit")

        file_name = self.build_filename(user_id=user_id, job_id=job_id, role=role, safe_name=safe_name)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.upload_dir / file_name
        out_path.write_bytes(content)
        logger.info("Stored %s attachment %s (%d bytes)", role, file_name, len(content))
        return StoredAttachment(name=safe_name, path=f"{PUBLIC_PREFIX}/{file_name}")

    def discard(self, stored: StoredAttachment) -> None:
        if not stored.path:
            return
        file_name = stored.path.removeprefix(f"{PUBLIC_PREFIX}/")
        try:
            (self.upload_dir / file_name).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove orphaned upload %s: %s", file_name, exc)
