"""
Client for the remote asset store that holds uploaded photos.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import requests

from .config import get_settings
from .logging_config import photo_logger


@dataclass
class DeletionResult:
    ok: bool
    error: Optional[str] = None


class PhotoStore(ABC):
    """Deletes assets by public id. Subclasses talk to a concrete store."""

    @abstractmethod
    def delete_photo(self, public_id: str) -> DeletionResult:
        ...


class LocalPhotoStore(PhotoStore):
    """Used when no remote store is configured; photos exist only as rows."""

    def delete_photo(self, public_id: str) -> DeletionResult:
        photo_logger.debug("No remote photo store configured, skipping delete", public_id=public_id)
        return DeletionResult(ok=True)


class HttpPhotoStore(PhotoStore):
    """Asset service exposing ``DELETE {base_url}/{public_id}``."""

    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def delete_photo(self, public_id: str) -> DeletionResult:
        try:
            response = requests.delete(
                f"{self.base_url}/{public_id}",
                headers=self._get_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError:
            error = f"Cannot connect to photo store at {self.base_url}"
            photo_logger.warning(error, public_id=public_id)
            return DeletionResult(ok=False, error=error)
        except requests.exceptions.RequestException as e:
            error = f"Photo delete failed: {e}"
            photo_logger.warning(error, public_id=public_id)
            return DeletionResult(ok=False, error=error)

        # 404 means the asset is already gone
        if response.status_code in (200, 202, 204, 404):
            photo_logger.info("Deleted photo from remote store", public_id=public_id)
            return DeletionResult(ok=True)

        error = f"Photo store error {response.status_code}: {response.text[:200]}"
        photo_logger.warning(error, public_id=public_id)
        return DeletionResult(ok=False, error=error)


def get_photo_store() -> PhotoStore:
    """Dependency returning the configured photo store."""
    settings = get_settings()
    if settings.photo_store_url:
        return HttpPhotoStore(
            settings.photo_store_url,
            api_key=settings.photo_store_api_key,
            timeout=settings.photo_store_timeout,
        )
    return LocalPhotoStore()
