"""
Asset Store - Save uploads, resolve asset URLs and manage rendered files
"""

import random
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional
from urllib.parse import quote, unquote, urlparse
from loguru import logger
from PIL import Image

from config import settings
from utils.exceptions import AssetNotFoundError, UploadRejectedError

CHUNK_SIZE = 1024 * 1024


@dataclass
class StoredAsset:
    """Uploaded asset as returned to the client"""
    id: str
    name: str
    src: str
    type: str
    size: int
    path: str

    def to_dict(self) -> Dict:
        return asdict(self)


class AssetStore:
    """
    Keeps uploads in workspace/uploads and renders in workspace/exports
    """

    def __init__(self, upload_dir: Path = None, export_dir: Path = None):
        """
        Initialize Asset Store

        Args:
            upload_dir: Upload directory (default: workspace/uploads)
            export_dir: Export directory (default: workspace/exports)
        """
        self.upload_dir = upload_dir or settings.UPLOADS_DIR
        self.export_dir = export_dir or settings.EXPORTS_DIR
        self.max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"AssetStore initialized: uploads={self.upload_dir}, exports={self.export_dir}")

    def _unique_name(self, original: str) -> str:
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}-{Path(original).name}"

    def _directory(self, kind: str) -> Path:
        return self.export_dir if kind == "exports" else self.upload_dir

    def save_upload(self, filename: str, content_type: Optional[str], fileobj: BinaryIO) -> StoredAsset:
        """
        Store one uploaded image

        Args:
            filename: Original filename
            content_type: MIME type sent by the client
            fileobj: File-like object with the upload content

        Returns:
            StoredAsset
        """
        if not content_type or not content_type.startswith("image/"):
            raise UploadRejectedError("Only image files are allowed")

        stored_name = self._unique_name(filename or "upload")
        output_path = self.upload_dir / stored_name

        size = 0
        with output_path.open("wb") as buffer:
            while True:
                chunk = fileobj.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_size:
                    break
                buffer.write(chunk)

        if size > self.max_size:
            output_path.unlink()
            raise UploadRejectedError(f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB.")

        logger.info(f"Uploaded {filename} as {stored_name} ({size} bytes)")

        return StoredAsset(
            id=f"{int(time.time() * 1000)}-{random.randint(0, 10**6)}",
            name=filename,
            src=f"/uploads/{quote(stored_name)}",
            type=content_type,
            size=size,
            path=str(output_path),
        )

    def resolve(self, url_or_name: str, kind: str = "uploads") -> Path:
        """
        Map an asset URL or filename to a file in the workspace

        Accepts absolute URLs, '/uploads/x.png', 'uploads/x.png' or 'x.png'.
        Only the final path component is used.

        Args:
            url_or_name: URL, path or filename
            kind: 'uploads' or 'exports'

        Returns:
            Existing file path
        """
        if not url_or_name:
            raise AssetNotFoundError("", "No asset path provided")

        path = url_or_name
        if path.startswith("http://") or path.startswith("https://"):
            path = urlparse(path).path

        name = Path(unquote(path)).name
        file_path = self._directory(kind) / name

        if not name or not file_path.is_file():
            raise AssetNotFoundError(name or url_or_name)

        return file_path

    def delete(self, filename: str) -> None:
        """
        Delete an uploaded asset

        Args:
            filename: Stored filename, already URL-decoded
        """
        file_path = self.upload_dir / Path(filename).name

        if not file_path.is_file():
            raise AssetNotFoundError(filename)

        file_path.unlink()
        logger.info(f"🗑️ Deleted asset {file_path.name}")

    def discard(self, assets: List[StoredAsset]) -> None:
        """
        Remove files written earlier in a request that failed

        Args:
            assets: Assets saved by save_upload
        """
        for asset in assets:
            Path(asset.path).unlink(missing_ok=True)

        if assets:
            logger.info(f"Discarded {len(assets)} uploads from failed request")

    def save_render(self, image: Image.Image, prefix: str = "rendered") -> str:
        """
        Save a rendered creative as PNG in the export directory

        Args:
            image: Rendered image
            prefix: Filename prefix ('rendered' or 'fixed')

        Returns:
            Stored filename
        """
        filename = f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 10**6)}.png"
        image.save(self.export_dir / filename, format="PNG")

        logger.info(f"Saved {filename}")

        return filename
