import logging
import os
import re
import shutil
import time

from fastapi import UploadFile
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
ALLOWED_IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)


class InvalidAvatarError(ValueError):
    pass


def is_allowed_image(filename: str | None) -> bool:
    return bool(filename) and ALLOWED_IMAGE_PATTERN.search(filename) is not None


def build_stored_filename(filename: str) -> str:
    millis = int(time.time() * 1000)
    return f"{millis}-{secure_filename(filename)}"


def save_avatar(upload: UploadFile, upload_dir: str) -> str:
    """Store an uploaded avatar and return its public path."""
    if not is_allowed_image(upload.filename):
        raise InvalidAvatarError("Only image files are allowed!")

    os.makedirs(upload_dir, exist_ok=True)
    stored_name = build_stored_filename(upload.filename)
    destination = os.path.join(upload_dir, stored_name)
    with open(destination, "wb") as buffer:
        shutil.copyfileobj(upload.file, buffer)

    logger.info("Stored avatar %s", stored_name)
    return f"{UPLOADS_URL_PREFIX}/{stored_name}"


def remove_avatar(avatar_path: str, upload_dir: str) -> None:
    stored_name = avatar_path.rsplit("/", 1)[-1]
    try:
        os.remove(os.path.join(upload_dir, stored_name))
    except FileNotFoundError:
        logger.warning("Avatar %s already removed", stored_name)
