"""Attachment manager: image binaries on disk, metadata in the record store.

Files live under ``UPLOAD_DIR/<task_id>/<uuid><ext>``.  Disk I/O never runs
while a column lock is held: uploads are written before their metadata
transaction opens, and task-deletion cleanup runs after the task's
transaction has committed.
"""

from __future__ import annotations

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, List, NamedTuple, Optional

from taskboard.config import Settings, settings as default_settings
from taskboard.errors import NotFoundError, StorageError, ValidationError
from taskboard.models import TaskAttachment
from taskboard.store.interfaces import BoardStore

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class AttachmentDownload(NamedTuple):
    path: Path
    content_type: str
    file_name: str


class AttachmentManager:
    def __init__(self, store: BoardStore, settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or default_settings
        self.upload_dir = Path(self.settings.UPLOAD_DIR)

    def _task_dir(self, task_id: int) -> Path:
        return self.upload_dir / str(task_id)

    def _require_task(self, task_id: int) -> None:
        with self.store.snapshot() as tx:
            if tx.get_task(task_id) is None:
                raise NotFoundError(f"Task {task_id} not found")

    def _read_limited(self, stream: BinaryIO) -> bytes:
        limit = self.settings.ATTACHMENT_MAX_BYTES
        chunks = []
        size = 0
        while True:
            chunk = stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                raise ValidationError(f"File exceeds the {limit} byte limit")
            chunks.append(chunk)
        return b"".join(chunks)

    def _validate_type(self, file_name: str, content_type: Optional[str]) -> str:
        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in self.settings.allowed_attachment_types:
            raise ValidationError(f"{file_name}: Only image files (JPEG, PNG, GIF, WebP) are allowed")
        return content_type

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def upload(self, task_id: int, file_name: str, content_type: Optional[str], stream: BinaryIO) -> TaskAttachment:
        """Store an image for *task_id* and record its metadata."""
        file_name = os.path.basename(file_name or "").strip()
        if not file_name:
            raise ValidationError("No file uploaded")
        content_type = self._validate_type(file_name, content_type)
        data = self._read_limited(stream)
        if not data:
            raise ValidationError("File is empty")
        self._require_task(task_id)

        target = self._task_dir(task_id) / f"{uuid.uuid4().hex}{Path(file_name).suffix.lower()}"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.exception("Could not write attachment for task %s", task_id)
            raise StorageError("Could not store the uploaded file") from exc

        try:
            with self.store.transaction() as tx:
                if tx.get_task(task_id) is None:
                    raise NotFoundError(f"Task {task_id} not found")
                attachment = TaskAttachment(
                    task_id=task_id,
                    file_name=file_name,
                    file_path=str(target),
                    content_type=content_type,
                    file_size=len(data),
                )
                tx.add(attachment)
                tx.flush()
        except BaseException:
            target.unlink(missing_ok=True)
            raise

        logger.info("Stored attachment %s (%d bytes) for task %s", attachment.id, len(data), task_id)
        return attachment

    def list_attachments(self, task_id: int) -> List[TaskAttachment]:
        with self.store.snapshot() as tx:
            if tx.get_task(task_id) is None:
                raise NotFoundError(f"Task {task_id} not found")
            return tx.list_attachments(task_id)

    def open_download(self, attachment_id: int) -> AttachmentDownload:
        with self.store.snapshot() as tx:
            attachment = tx.get_attachment(attachment_id)
            if attachment is None:
                raise NotFoundError(f"Attachment {attachment_id} not found")
        path = Path(attachment.file_path)
        if not path.is_file():
            raise NotFoundError(f"Attachment {attachment_id} not found")
        return AttachmentDownload(path=path, content_type=attachment.content_type, file_name=attachment.file_name)

    def delete(self, attachment_id: int) -> None:
        with self.store.transaction() as tx:
            attachment = tx.get_attachment(attachment_id)
            if attachment is None:
                raise NotFoundError(f"Attachment {attachment_id} not found")
            path = Path(attachment.file_path)
            tx.delete(attachment)

        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Could not remove file %s of attachment %s", path, attachment_id)
        logger.info("Deleted attachment %s", attachment_id)

    def on_task_deleted(self, task_id: int) -> None:
        """Remove every stored file of a task that no longer exists."""
        task_dir = self._task_dir(task_id)
        if not task_dir.exists():
            return
        try:
            shutil.rmtree(task_dir)
        except OSError:
            # The task is already gone; leftover files are only disk noise.
            logger.exception("Could not remove attachment files of task %s", task_id)
