import base64
import binascii
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional
from urllib.parse import quote, unquote

from ..settings import settings

logger = logging.getLogger("recipebook.storage")

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB

# Extension -> content types accepted for it
ALLOWED_TYPES = {
    ".jpg": {"image/jpeg"},
    ".jpeg": {"image/jpeg"},
    ".png": {"image/png"},
    ".gif": {"image/gif"},
    ".webp": {"image/webp"},
}
ALLOWED_EXTENSIONS = tuple(ALLOWED_TYPES)

MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(;[\w=-]+)*;base64,", re.IGNORECASE)
INVALID_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


@dataclass
class ImageUpload:
    """An image as received from a client, before it is stored."""
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename or "").suffix.lower()

    @classmethod
    def from_stream(cls, filename: Optional[str], content_type: Optional[str], stream: BinaryIO) -> "ImageUpload":
        """Read at most one byte past MAX_FILE_SIZE, enough for ``validate`` to reject the file."""
        return cls(filename=filename, content_type=content_type, data=stream.read(MAX_FILE_SIZE + 1))


def sanitize_file_name(name: str) -> str:
    cleaned = INVALID_NAME_CHARS.sub("", name)[:50]
    cleaned = cleaned.replace(" ", "-")
    cleaned = re.sub(r"-{2,}", "-", cleaned).strip("-")
    return cleaned or "image"


class LocalImageStore:
    """Recipe images on local disk, served as static files.

    Files live in ``<root>/images/recipes`` and are addressed by
    ``<url_prefix>/<percent-encoded file name>``.
    """

    def __init__(self, root: Path | str | None = None, url_prefix: str | None = None):
        self.url_prefix = "/" + (url_prefix or settings.image_url_prefix).strip("/")
        static_root = Path(root or settings.static_root)
        self.directory = static_root.joinpath(*self.url_prefix.strip("/").split("/"))
        self.directory.mkdir(parents=True, exist_ok=True)

    def validate(self, upload: Optional[ImageUpload]) -> bool:
        if upload is None or upload.size == 0:
            return False
        if upload.size > MAX_FILE_SIZE:
            return False
        allowed_types = ALLOWED_TYPES.get(upload.extension)
        if not allowed_types:
            return False
        if (upload.content_type or "").lower() not in allowed_types:
            return False
        return True

    def upload(self, upload: Optional[ImageUpload], recipe_id: Optional[int] = None) -> Optional[str]:
        """Store a valid image and return its public URL, or None."""
        if not self.validate(upload):
            logger.warning(f"Invalid image file attempted to upload: {upload.filename if upload else None}")
            return None

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        unique_id = uuid.uuid4().hex[:8]
        if recipe_id is not None:
            stem = f"recipe-{recipe_id}"
        else:
            stem = sanitize_file_name(PurePosixPath(upload.filename or "").stem)
        file_name = f"{stem}-{timestamp}-{unique_id}{upload.extension}"
        file_path = self.directory / file_name

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(upload.data)
        except OSError as e:
            logger.error(f"Error uploading image {upload.filename}: {e}")
            return None

        logger.info(f"Saved {upload.size} bytes to {file_path}")
        return f"{self.url_prefix}/{quote(file_name)}"

    def upload_base64(
        self,
        payload: str,
        file_name: Optional[str] = None,
        recipe_id: Optional[int] = None,
    ) -> Optional[str]:
        """Decode a base64 (or data URL) image and store it like ``upload``."""
        mime_type = None
        match = DATA_URL_PATTERN.match(payload.strip())
        encoded = payload.strip()
        if match:
            mime_type = (match.group("mime") or "").lower() or None
            encoded = encoded[match.end():]

        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Invalid base64 image payload: {e}")
            return None

        if len(data) > MAX_FILE_SIZE:
            logger.warning(f"Base64 image too large: {len(data)} bytes")
            return None

        if mime_type and mime_type not in MIME_EXTENSIONS:
            logger.warning(f"Unsupported image type in data URL: {mime_type}")
            return None

        extension = MIME_EXTENSIONS.get(mime_type or "")
        if extension is None and file_name:
            hinted = PurePosixPath(file_name).suffix.lower()
            if hinted in ALLOWED_TYPES:
                extension = hinted
        extension = extension or ".jpg"

        stem = PurePosixPath(file_name).stem if file_name else "image"
        content_type = next(iter(ALLOWED_TYPES[extension]))
        return self.upload(
            ImageUpload(filename=f"{stem}{extension}", content_type=content_type, data=data),
            recipe_id=recipe_id,
        )

    def is_managed_url(self, url: Optional[str]) -> bool:
        return bool(url) and url.startswith(self.url_prefix + "/")

    def path_for_url(self, url: str) -> Optional[Path]:
        """Map a public URL back to a file inside the managed directory."""
        if not self.is_managed_url(url):
            return None
        name = unquote(url[len(self.url_prefix) + 1:])
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        return self.directory / name

    def delete(self, url: Optional[str]) -> bool:
        """Delete the file behind ``url``. Returns True only if a file was removed."""
        if not url or not url.strip():
            return False

        file_path = self.path_for_url(url.strip())
        if file_path is None:
            logger.warning(f"Invalid delete url: {url}")
            return False

        try:
            if file_path.is_file():
                file_path.unlink()
                logger.info(f"Deleted file {file_path}")
                return True
        except OSError as e:
            logger.error(f"Failed to delete {file_path}: {e}")
            return False

        logger.warning(f"Image not found for deletion: {file_path}")
        return False


_store: Optional[LocalImageStore] = None


def get_image_store() -> LocalImageStore:
    global _store
    if _store is None:
        _store = LocalImageStore()
    return _store
