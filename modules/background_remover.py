"""
Background Remover - remove.bg integration with a local PNG fallback
"""

import random
import time
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote
import httpx
from loguru import logger
from PIL import Image

from config import settings
from utils.exceptions import BackgroundRemovalError


class BackgroundRemover:
    """
    Removes image backgrounds through remove.bg when an API key is configured

    Without a key, or when the API call fails, the image is re-encoded as PNG
    so the client still gets a usable file.
    """

    def __init__(self, api_key: Optional[str] = None, output_dir: Path = None):
        """
        Initialize Background Remover

        Args:
            api_key: remove.bg API key (default: settings.REMOVE_BG_API_KEY)
            output_dir: Where processed images go (default: workspace/uploads)
        """
        self.api_key = api_key if api_key is not None else settings.REMOVE_BG_API_KEY
        self.output_dir = output_dir or settings.UPLOADS_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)

        mode = "remove.bg API" if self.api_key else "local fallback only"
        logger.info(f"BackgroundRemover initialized ({mode})")

    async def _call_api(self, image_path: Path) -> bytes:
        """
        Send the image to remove.bg

        Args:
            image_path: Source image

        Returns:
            PNG bytes with transparent background
        """
        try:
            async with httpx.AsyncClient(timeout=settings.REMOVE_BG_TIMEOUT) as client:
                response = await client.post(
                    settings.REMOVE_BG_URL,
                    content=image_path.read_bytes(),
                    headers={
                        "X-Api-Key": self.api_key,
                        "Content-Type": "application/octet-stream",
                    },
                    params={"size": "auto"},
                )
                response.raise_for_status()
                return response.content

        except httpx.TimeoutException:
            raise BackgroundRemovalError("remove.bg request timed out")
        except httpx.HTTPError as e:
            raise BackgroundRemovalError(f"remove.bg request failed: {e}")

    def _reencode(self, image_path: Path, output_path: Path) -> None:
        with Image.open(image_path) as img:
            img.save(output_path, format="PNG")

    async def remove(self, image_path: Path) -> Dict:
        """
        Remove the background of an uploaded image

        Args:
            image_path: Uploaded image

        Returns:
            Dict with image_url, processed_url, method and an optional note
        """
        output_path = self.output_dir / f"removed-bg-{int(time.time() * 1000)}-{random.randint(0, 10**6)}.png"

        result = {
            "success": True,
            "image_url": f"/uploads/{quote(image_path.name)}",
            "processed_url": f"/uploads/{output_path.name}",
        }

        if self.api_key:
            try:
                output_path.write_bytes(await self._call_api(image_path))
                logger.info(f"✅ Background removed via remove.bg: {output_path.name}")
                result["method"] = "remove.bg API"
                return result
            except BackgroundRemovalError as e:
                logger.warning(f"remove.bg failed, falling back to local re-encode: {e}")

        self._reencode(image_path, output_path)
        logger.info(f"Background removal simulated for {image_path.name}")

        result["method"] = "simulated"
        result["note"] = (
            "API failed, using simulation" if self.api_key
            else "Set REMOVE_BG_API_KEY in .env for real background removal"
        )
        return result
