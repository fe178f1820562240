import logging
import uuid
from pathlib import Path
from typing import Protocol

from eventboard.core.config import IMAGE_DIR, get_storage_root

logger = logging.getLogger(__name__)


class FileStore(Protocol):
    def store(self, data: bytes, suggested_ext: str) -> str:
        """Persist ``data`` and return its relative path."""
        ...

    def remove(self, path: str) -> bool:
        """Delete the file at ``path``; return True if it existed."""
        ...


def generate_filename(suggested_ext: str) -> str:
    """Unique file name keeping the upload's extension, e.g. ``img_<hex>.png``."""
    ext = suggested_ext.lstrip(".")
    name = f"img_{uuid.uuid4().hex}"
    return f"{name}.{ext}" if ext else name


class LocalFileStore:
    """Images stored on disk under ``<root>/event-image``."""

    def __init__(self, root: str | Path, image_dir: str = IMAGE_DIR):
        self.root = Path(root).resolve()
        self.image_dir = image_dir

    @property
    def directory(self) -> Path:
        return self.root / self.image_dir

    def resolve(self, path: str) -> Path | None:
        """Absolute location of a stored relative path, None if it escapes the root."""
        target = (self.root / path).resolve()
        if target != self.root and self.root not in target.parents:
            return None
        return target

    def exists(self, path: str) -> bool:
        target = self.resolve(path)
        return target is not None and target.is_file()

    def store(self, data: bytes, suggested_ext: str) -> str:
        self.directory.mkdir(parents=True, exist_ok=True)
        filename = generate_filename(suggested_ext)
        (self.directory / filename).write_bytes(data)
        return f"{self.image_dir}/{filename}"

    def remove(self, path: str) -> bool:
        target = self.resolve(path)
        if target is None:
            logger.warning("Refusing to remove %s outside of %s", path, self.root)
            return False
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        return True


def get_file_store() -> FileStore:
    return LocalFileStore(get_storage_root())
