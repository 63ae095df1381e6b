"""Product images stored as files under the data directory."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.repository.image_store import ImageStore


class LocalImageStore(ImageStore):

    def __init__(self, media_dir: Path, url_prefix: str) -> None:
        self._media_dir = media_dir
        self._url_prefix = url_prefix

    def owns(self, image_url: str) -> bool:
        return image_url.startswith(self._url_prefix)

    def delete(self, image_url: str) -> None:
        name = image_url[len(self._url_prefix):]
        path = (self._media_dir / name).resolve()
        if self._media_dir.resolve() not in path.parents:
            raise OSError(f"Refusing to delete outside media dir: {image_url}")
        path.unlink()
