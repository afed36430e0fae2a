"""Static file extension to MIME type table used for attachments."""

from __future__ import annotations

from typing import Dict

DEFAULT_MIME_TYPE = "multipart/*"

MIME_TYPES: Dict[str, str] = {
    # Documents
    "pdf": "application/pdf",
    "ai": "application/postscript",
    "eps": "application/postscript",
    "ps": "application/postscript",
    "rtf": "text/rtf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "dot": "application/msword",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "odt": "application/vnd.oasis.opendocument.text",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
    "odp": "application/vnd.oasis.opendocument.presentation",
    # Text
    "txt": "text/plain",
    "text": "text/plain",
    "log": "text/plain",
    "csv": "text/csv",
    "htm": "text/html",
    "html": "text/html",
    "shtml": "text/html",
    "css": "text/css",
    "xml": "text/xml",
    "xsl": "text/xml",
    "ics": "text/calendar",
    "vcf": "text/x-vcard",
    "eml": "message/rfc822",
    "json": "application/json",
    "js": "application/javascript",
    # Images
    "bmp": "image/bmp",
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "jpe": "image/jpeg",
    "png": "image/png",
    "svg": "image/svg+xml",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "ico": "image/x-icon",
    "webp": "image/webp",
    # Audio / video
    "mid": "audio/midi",
    "midi": "audio/midi",
    "mp2": "audio/mpeg",
    "mp3": "audio/mpeg",
    "wav": "audio/x-wav",
    "aif": "audio/x-aiff",
    "aiff": "audio/x-aiff",
    "ogg": "audio/ogg",
    "mpeg": "video/mpeg",
    "mpg": "video/mpeg",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "qt": "video/quicktime",
    "avi": "video/x-msvideo",
    "movie": "video/x-sgi-movie",
    # Archives and binaries
    "zip": "application/zip",
    "gz": "application/x-gzip",
    "tgz": "application/x-tar",
    "tar": "application/x-tar",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "bin": "application/octet-stream",
    "exe": "application/octet-stream",
    "dll": "application/octet-stream",
    "class": "application/octet-stream",
    "swf": "application/x-shockwave-flash",
}


def mime_type_for(extension: str) -> str:
    """Return the MIME type for ``extension`` (with or without a leading dot)."""
    return MIME_TYPES.get(extension.lstrip(".").lower(), DEFAULT_MIME_TYPE)


__all__ = ["MIME_TYPES", "DEFAULT_MIME_TYPE", "mime_type_for"]
