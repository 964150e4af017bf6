"""
utils/uploads.py
----------------
Profile pictures are stored on Cloudinary. Files are checked locally
(extension and size) before upload; a stored file can be destroyed again
when the request that uploaded it fails later on.
"""

import os

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app

from utils.logger import get_logger
from utils.messages import (
    MESSAGE_FILE_REQUIRED,
    MESSAGE_FILE_TYPE_NOT_ALLOWED,
    MESSAGE_FILE_TOO_LARGE,
    MESSAGE_UPLOAD_FAILED,
)
from utils.responses import ApiError, STATUS_CODE_BAD_REQUEST

logger = get_logger(__name__)

ALLOWED_FORMATS = ("jpg", "jpeg", "png", "svg", "webp", "avif")


def configure_cloudinary(app):
    cloudinary.config(
        cloud_name=app.config.get("CLOUDINARY_CLOUD_NAME"),
        api_key=app.config.get("CLOUDINARY_KEY"),
        api_secret=app.config.get("CLOUDINARY_SECRET"),
        secure=True,
    )


def _file_size(file_storage):
    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_image(file_storage, max_bytes):
    if file_storage is None or not file_storage.filename:
        raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_FILE_REQUIRED)

    extension = file_storage.filename.rsplit(".", 1)[-1].lower() if "." in file_storage.filename else ""
    if extension not in ALLOWED_FORMATS:
        raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_FILE_TYPE_NOT_ALLOWED)

    if _file_size(file_storage) > max_bytes:
        raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_FILE_TOO_LARGE)


def upload_image(file_storage):
    """Validate and upload; returns {"url", "filename"} where filename is the public id."""
    validate_image(file_storage, current_app.config["UPLOAD_MAX_BYTES"])
    try:
        result = cloudinary.uploader.upload(
            file_storage.stream,
            folder=current_app.config.get("CLOUDINARY_FOLDER"),
            allowed_formats=list(ALLOWED_FORMATS),
            resource_type="image",
        )
    except CloudinaryError as e:
        logger.error("Cloudinary upload failed for %s: %s", file_storage.filename, e)
        raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_UPLOAD_FAILED)

    logger.info("Uploaded %s as %s", file_storage.filename, result.get("public_id"))
    return {"url": result["secure_url"], "filename": result["public_id"]}


def destroy_image(filename):
    if not filename:
        return
    try:
        cloudinary.uploader.destroy(filename)
    except CloudinaryError as e:
        logger.error("Couldn't remove %s from Cloudinary: %s", filename, e)
