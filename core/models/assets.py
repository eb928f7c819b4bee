"""Generated asset registry.

Tracks every downloadable artifact produced during a session. Completed
generation tasks append; explicit user deletion removes by filename. Nothing
else mutates an entry, so concurrent appends from interleaved tasks are safe
on a single event loop.
"""

import base64
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class AssetKind(str, Enum):
    """Types of generated assets."""
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


MIME_EXTENSIONS = {
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "audio/wav": "wav",
    "audio/mpeg": "mp3",
}


def make_filename(prefix: str, extension: str) -> str:
    """Build a collision-resistant filename like ``image-3f2a9c01b7d4.jpeg``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}.{extension.lstrip('.')}"


def extension_for(mime_type: str, default: str = "bin") -> str:
    return MIME_EXTENSIONS.get(mime_type.lower(), default)


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass
class GeneratedAsset:
    """A materialized artifact: a url + filename pair, plus bytes when local."""
    url: str
    filename: str
    kind: AssetKind
    mime_type: str = "application/octet-stream"
    prompt: str = ""
    data: Optional[bytes] = None
    duration: Optional[float] = None  # seconds, for audio and video
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_local(self) -> bool:
        return self.data is not None

    def save(self, output_dir: Path) -> Optional[Path]:
        """Write bytes to ``output_dir/filename``; remote-only assets are skipped."""
        if self.data is None:
            return None
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.filename
        path.write_bytes(self.data)
        return path


class AssetRegistry:
    """Append-only list of generated assets with delete-by-filename"""

    def __init__(self):
        self._assets: List[GeneratedAsset] = []

    def add(self, asset: GeneratedAsset) -> GeneratedAsset:
        self._assets.append(asset)
        logger.debug("Registered %s asset %s", asset.kind.value, asset.filename)
        return asset

    def remove(self, filename: str) -> bool:
        """Remove the first asset with ``filename``.

        Returns False (and does nothing) when no such asset exists, so
        repeated deletion is a no-op.
        """
        for index, asset in enumerate(self._assets):
            if asset.filename == filename:
                del self._assets[index]
                logger.debug("Removed asset %s", filename)
                return True
        return False

    def find(self, filename: str) -> Optional[GeneratedAsset]:
        for asset in self._assets:
            if asset.filename == filename:
                return asset
        return None

    def list(self, kind: Optional[AssetKind] = None) -> List[GeneratedAsset]:
        if kind is None:
            return list(self._assets)
        return [a for a in self._assets if a.kind == kind]

    def save_all(self, output_dir: Path) -> List[Path]:
        """Write every local asset into ``output_dir``."""
        paths = []
        for asset in self._assets:
            path = asset.save(output_dir)
            if path:
                paths.append(path)
        return paths

    def clear(self):
        self._assets.clear()

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[GeneratedAsset]:
        return iter(list(self._assets))

    def __contains__(self, filename: str) -> bool:
        return self.find(filename) is not None
