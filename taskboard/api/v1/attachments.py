"""Attachment endpoints"""
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from taskboard.dependencies import get_attachment_manager
from taskboard.schemas import AttachmentResponse
from taskboard.services import AttachmentManager
from taskboard.services.board import serialize_attachment

router = APIRouter()


@router.post("/tasks/{task_id}", response_model=AttachmentResponse, status_code=status.HTTP_201_CREATED)
def upload_attachment(
    task_id: int,
    file: UploadFile = File(...),
    attachments: AttachmentManager = Depends(get_attachment_manager),
):
    """Attach an image (JPEG, PNG, GIF or WebP) to a task."""
    attachment = attachments.upload(task_id, file.filename, file.content_type, file.file)
    return serialize_attachment(attachment)


@router.get("/task/{task_id}", response_model=List[AttachmentResponse])
def list_task_attachments(task_id: int, attachments: AttachmentManager = Depends(get_attachment_manager)):
    return [serialize_attachment(a) for a in attachments.list_attachments(task_id)]


@router.get("/{attachment_id}/download")
def download_attachment(attachment_id: int, attachments: AttachmentManager = Depends(get_attachment_manager)):
    download = attachments.open_download(attachment_id)
    return FileResponse(download.path, media_type=download.content_type, filename=download.file_name)


@router.delete("/{attachment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attachment(attachment_id: int, attachments: AttachmentManager = Depends(get_attachment_manager)):
    attachments.delete(attachment_id)
