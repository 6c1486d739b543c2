import io
from pathlib import Path

import pytest

from taskboard.errors import NotFoundError, ValidationError

from tests.conftest import make_task

PNG = b"\x89PNG\r\n\x1a\n" + b"\x01" * 64


@pytest.fixture
def task(services, columns):
    todo, _, _ = columns
    return make_task(services, todo.id, "illustrated")


def test_upload_stores_file_and_metadata(services, task, test_settings):
    attachment = services.attachments.upload(task.id, "diagram.PNG", "image/png", io.BytesIO(PNG))

    stored = Path(attachment.file_path)
    assert stored.parent == Path(test_settings.UPLOAD_DIR) / str(task.id)
    assert stored.suffix == ".png"
    assert stored.read_bytes() == PNG
    assert attachment.file_name == "diagram.PNG"
    assert attachment.file_size == len(PNG)
    assert [a.id for a in services.attachments.list_attachments(task.id)] == [attachment.id]


def test_upload_strips_client_directories(services, task):
    attachment = services.attachments.upload(task.id, "../../etc/cat.gif", "image/gif", io.BytesIO(b"GIF89a"))

    assert attachment.file_name == "cat.gif"


@pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None, "image/svg+xml"])
def test_upload_rejects_non_images(services, task, content_type, test_settings):
    with pytest.raises(ValidationError):
        services.attachments.upload(task.id, "notes.txt", content_type, io.BytesIO(b"hello"))

    assert not (Path(test_settings.UPLOAD_DIR) / str(task.id)).exists()


def test_upload_rejects_empty_and_oversized(services, task, test_settings):
    test_settings.ATTACHMENT_MAX_BYTES = 16

    with pytest.raises(ValidationError, match="empty"):
        services.attachments.upload(task.id, "a.png", "image/png", io.BytesIO(b""))
    with pytest.raises(ValidationError):
        services.attachments.upload(task.id, "b.png", "image/png", io.BytesIO(b"x" * 17))

    assert services.attachments.list_attachments(task.id) == []


def test_upload_for_unknown_task(services, columns, test_settings):
    with pytest.raises(NotFoundError):
        services.attachments.upload(999, "a.png", "image/png", io.BytesIO(PNG))

    assert not Path(test_settings.UPLOAD_DIR, "999").exists()


def test_download(services, task):
    attachment = services.attachments.upload(task.id, "photo.jpg", "image/jpeg", io.BytesIO(b"\xff\xd8\xff"))

    download = services.attachments.open_download(attachment.id)

    assert download.path.read_bytes() == b"\xff\xd8\xff"
    assert download.content_type == "image/jpeg"
    assert download.file_name == "photo.jpg"


def test_download_missing_file(services, task):
    attachment = services.attachments.upload(task.id, "photo.jpg", "image/jpeg", io.BytesIO(b"\xff\xd8\xff"))
    Path(attachment.file_path).unlink()

    with pytest.raises(NotFoundError):
        services.attachments.open_download(attachment.id)
    with pytest.raises(NotFoundError):
        services.attachments.open_download(999)


def test_delete_attachment(services, task):
    attachment = services.attachments.upload(task.id, "photo.webp", "image/webp", io.BytesIO(b"RIFF"))

    services.attachments.delete(attachment.id)

    assert not Path(attachment.file_path).exists()
    assert services.attachments.list_attachments(task.id) == []
    with pytest.raises(NotFoundError):
        services.attachments.delete(attachment.id)


def test_deleting_task_cascades_to_attachments(services, task, test_settings):
    first = services.attachments.upload(task.id, "1.png", "image/png", io.BytesIO(PNG))
    services.attachments.upload(task.id, "2.png", "image/png", io.BytesIO(PNG))

    services.tasks.delete(task.id)

    assert not (Path(test_settings.UPLOAD_DIR) / str(task.id)).exists()
    with services.store.snapshot() as tx:
        assert tx.get_attachment(first.id) is None
        assert tx.get_all_attachments() == []
