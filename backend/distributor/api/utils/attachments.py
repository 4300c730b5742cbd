"""
Attachment storage on the local filesystem

Files are stored under <UPLOAD_DIR>/<folder>/<uuid hex><original extension>.
The database row keeps the original name; the random stored name avoids
collisions. Writes are not transactional with the database commit.
"""
import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile

from distributor.config import settings

logger = logging.getLogger(__name__)

SALES_ORDER_FOLDER = "sales_orders"
PURCHASE_ORDER_FOLDER = "purchase_orders"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredFile:
    file_name: str
    stored_file_name: str
    content_type: str
    file_size: int


def upload_folder(folder: str) -> Path:
    path = Path(settings.UPLOAD_DIR) / folder
    path.mkdir(parents=True, exist_ok=True)
    return path


def stored_file_path(folder: str, stored_file_name: str) -> Path:
    # Only the final component is used, stored names never contain directories
    return Path(settings.UPLOAD_DIR) / folder / Path(stored_file_name).name


def save_upload(upload: UploadFile, folder: str) -> Optional[StoredFile]:
    """
    Write one uploaded file to disk.

    Returns None (and writes nothing) for nameless or empty parts.
    """
    original_name = Path(upload.filename or "").name
    if not original_name:
        return None

    stored_name = f"{uuid.uuid4().hex}{Path(original_name).suffix}"
    path = upload_folder(folder) / stored_name

    with open(path, "wb") as out:
        shutil.copyfileobj(upload.file, out)

    size = path.stat().st_size
    if size == 0:
        path.unlink()
        return None

    return StoredFile(
        file_name=original_name,
        stored_file_name=stored_name,
        content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
        file_size=size,
    )


def save_uploads(uploads: Optional[Iterable[UploadFile]], folder: str) -> List[StoredFile]:
    stored = []
    for upload in uploads or []:
        saved = save_upload(upload, folder)
        if saved:
            stored.append(saved)
    return stored


def delete_stored_file(folder: str, stored_file_name: Optional[str]) -> bool:
    """
    Best-effort removal of a stored file.

    Missing files are ignored; I/O errors are logged and never raised.
    Returns True when a file was actually removed.
    """
    if not stored_file_name:
        return False

    path = stored_file_path(folder, stored_file_name)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("Error deleting file %s: %s", path, exc)
        return False
    return True


def discard_stored_files(folder: str, stored: Iterable[StoredFile]) -> None:
    """Remove files written for a request whose commit failed"""
    for item in stored:
        delete_stored_file(folder, item.stored_file_name)


def attachment_response(attachment, download_base: str) -> dict:
    """
    Attachment view with its download link.

    Usage:
        attachment_response(att, f"{settings.API_PREFIX}/SalesOrders/attachment")
    """
    return {
        "id": attachment.id,
        "file_name": attachment.file_name,
        "content_type": attachment.content_type,
        "file_size": attachment.file_size,
        "uploaded_date": attachment.uploaded_date,
        "download_url": f"{download_base}/{attachment.id}",
    }
