"""Supabase Storage object-store adapter.

Talks to the Supabase Storage REST API with the service-role key:

    POST   {url}/storage/v1/object/{bucket}/{name}     upload (no upsert)
    DELETE {url}/storage/v1/object/{bucket}            {"prefixes": [name]}
    public {url}/storage/v1/object/public/{bucket}/{name}

Objects in a public bucket are addressable by their public URL; the object
name is always the final path segment of that URL.
"""

from __future__ import annotations

from urllib.parse import quote, unquote, urlparse

import httpx
import structlog

from src.interfaces.object_store import IObjectStore
from src.utils.errors import StorageError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 60.0


class SupabaseStorageProvider(IObjectStore):
    """Public-bucket object storage on Supabase."""

    def __init__(
        self,
        supabase_url: str,
        service_role_key: str,
        bucket: str = "audiobooks",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = supabase_url.rstrip("/")
        self._key = service_role_key
        self._bucket = bucket
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(_DEFAULT_TIMEOUT)
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._key}",
            "apikey": self._key,
        }

    def public_url(self, name: str) -> str:
        return (
            f"{self._base_url}/storage/v1/object/public/"
            f"{self._bucket}/{quote(name)}"
        )

    async def put(self, name: str, data: bytes, content_type: str) -> str:
        try:
            response = await self._client.post(
                f"{self._base_url}/storage/v1/object/{self._bucket}/{quote(name)}",
                content=data,
                headers={
                    **self._headers(),
                    "content-type": content_type,
                    "x-upsert": "false",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StorageError(
                message=f"HTTP {exc.response.status_code} uploading {name}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise StorageError(
                message=f"Upload of {name} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        url = self.public_url(name)
        logger.info("object_stored", bucket=self._bucket, name=name, bytes=len(data))
        return url

    async def delete(self, name: str) -> None:
        try:
            response = await self._client.request(
                "DELETE",
                f"{self._base_url}/storage/v1/object/{self._bucket}",
                json={"prefixes": [name]},
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StorageError(
                message=f"HTTP {exc.response.status_code} deleting {name}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise StorageError(
                message=f"Delete of {name} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("object_deleted", bucket=self._bucket, name=name)

    def name_from_url(self, url: str) -> str:
        path = urlparse(url).path
        return unquote(path.rstrip("/").rsplit("/", 1)[-1])

    def get_provider_name(self) -> str:
        return "supabase-storage"
