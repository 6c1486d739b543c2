"""Schemas for task attachments"""
from datetime import datetime

from taskboard.schemas.base import CamelModel


class AttachmentResponse(CamelModel):
    id: int
    file_name: str
    content_type: str
    file_size: int
    uploaded_at: datetime
