import logging
import os
import random
import re
import time

from flask import current_app, send_from_directory
from werkzeug.datastructures import FileStorage


logger = logging.getLogger("file_service")

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
    ".dcm": "application/dicom",
    ".dicom": "application/dicom",
}

ONE_YEAR = 31536000

# Radiographs (JPG/PNG), scanned reports (PDF) and DICOM exports
ALLOWED_MIMETYPES = re.compile(r"jpeg|jpg|png|pdf|dcm|dicom")


class UploadError(ValueError):
    """Rejected upload (no files, too many, too large, or unsupported type)."""


def upload_folder() -> str:
    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    return folder


def _file_size(file: FileStorage) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def _validate(file: FileStorage) -> int:
    max_size = current_app.config.get("MAX_FILE_SIZE", 10 * 1024 * 1024)
    ext = os.path.splitext(file.filename or "")[1].lower()
    mimetype = (file.mimetype or "").lower()
    if ext not in MIME_TYPES or not ALLOWED_MIMETYPES.search(mimetype):
        raise UploadError("Unsupported file type. Allowed: JPG, PNG, PDF, DICOM")
    size = _file_size(file)
    if size > max_size:
        raise UploadError(f"{file.filename} exceeds the {max_size // (1024 * 1024)}MB limit")
    return size


def _unique_name(field_name: str, original: str) -> str:
    ext = os.path.splitext(original)[1].lower()
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{suffix}{ext}"


def save_uploads(files: list[FileStorage], field_name: str = "files") -> list[dict]:
    """
    Validate then store every uploaded file under a unique name.
    Nothing is written unless all files pass validation.
    """
    files = [f for f in files if f and f.filename]
    if not files:
        raise UploadError("No files were uploaded")
    max_files = current_app.config.get("MAX_FILES_PER_UPLOAD", 5)
    if len(files) > max_files:
        raise UploadError(f"At most {max_files} files per upload")

    sizes = [_validate(f) for f in files]
    folder = upload_folder()

    stored = []
    for file, size in zip(files, sizes):
        filename = _unique_name(field_name, file.filename)
        file.save(os.path.join(folder, filename))
        stored.append(
            {
                "filename": filename,
                "originalName": file.filename,
                "size": size,
                "mimetype": file.mimetype,
                "url": f"/api/files/{filename}",
            }
        )
    logger.info(f"[save_uploads] Stored {len(stored)} files: {[s['filename'] for s in stored]}")
    return stored


def send_stored_file(filename: str):
    """Stream a stored upload; raises NotFound for unknown or unsafe names."""
    ext = os.path.splitext(filename)[1].lower()
    response = send_from_directory(
        upload_folder(),
        filename,
        mimetype=MIME_TYPES.get(ext, "application/octet-stream"),
        max_age=ONE_YEAR,
    )
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response
