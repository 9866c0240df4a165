"""Attachment storage for medical certificates.

Uploads are staged before the leave request exists, so the workflow only
needs to check that a reference exists and to delete it again when the
request fails or is removed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from werkzeug.utils import secure_filename

from ..common.clock import Clock, SystemClock
from ..core.constants import ALLOWED_ATTACHMENT_MIMETYPES, MAX_ATTACHMENT_BYTES
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AttachmentStore(Protocol):
    def exists(self, ref: str) -> bool:
        raise NotImplementedError

    def delete(self, ref: str) -> bool:
        """Remove the attachment; False when it was already gone."""

        raise NotImplementedError


class LocalAttachmentStore(AttachmentStore):
    def __init__(
        self,
        root: str | Path,
        *,
        clock: Optional[Clock] = None,
        max_bytes: int = MAX_ATTACHMENT_BYTES,
        allowed_mimetypes: tuple[str, ...] = ALLOWED_ATTACHMENT_MIMETYPES,
    ):
        self._root = Path(root)
        self._clock = clock or SystemClock()
        self._max_bytes = int(max_bytes)
        self._allowed_mimetypes = tuple(allowed_mimetypes)

    def stage(self, *, employee_id: int, filename: str, content: bytes, mimetype: str) -> str:
        """Store an uploaded file and return its reference.

        References look like ``{employee_id}_{millis}_{filename}``.
        """
        if mimetype not in self._allowed_mimetypes:
            raise ValidationError("Only PDF files are allowed")
        if len(content) > self._max_bytes:
            raise ValidationError(f"Attachment exceeds {self._max_bytes // (1024 * 1024)} MB")

        safe_name = secure_filename(filename or "") or "attachment.pdf"
        millis = int(self._clock.now().timestamp() * 1000)
        ref = f"{int(employee_id)}_{millis}_{safe_name}"

        self._root.mkdir(parents=True, exist_ok=True)
        self.path_for(ref).write_bytes(content)
        logger.info("Staged attachment %s (%s bytes)", ref, len(content))
        return ref

    def path_for(self, ref: str) -> Path:
        if not ref or secure_filename(ref) != ref:
            raise ValidationError(f"Invalid attachment reference: {ref!r}")
        return self._root / ref

    def exists(self, ref: str) -> bool:
        return self.path_for(ref).is_file()

    def delete(self, ref: str) -> bool:
        path = self.path_for(ref)
        if not path.is_file():
            return False
        path.unlink()
        logger.info("Deleted attachment %s", ref)
        return True
