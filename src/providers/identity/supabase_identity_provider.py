"""Supabase Auth identity provider.

Resolves a bearer access token to a user by calling
``GET {url}/auth/v1/user``.  Any non-2xx answer, transport error or
malformed body is reported as :class:`UnauthorizedError`; the API layer
never tells the caller which of these it was.
"""

from __future__ import annotations

import httpx
import structlog

from src.interfaces.identity_provider import IIdentityProvider
from src.models.user import AuthenticatedUser
from src.utils.errors import UnauthorizedError

logger = structlog.get_logger(logger_name=__name__)


class SupabaseIdentityProvider(IIdentityProvider):
    """Verifies access tokens against the Supabase Auth REST API."""

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = supabase_url.rstrip("/")
        self._anon_key = anon_key
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(10.0))

    async def verify_token(self, token: str) -> AuthenticatedUser:
        if not token:
            raise UnauthorizedError(
                message="No token provided",
                provider_name=self.get_provider_name(),
            )
        try:
            response = await self._client.get(
                f"{self._base_url}/auth/v1/user",
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {token}",
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.info("token_rejected", status=exc.response.status_code)
            raise UnauthorizedError(
                message="Invalid token",
                provider_name=self.get_provider_name(),
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("token_verification_failed", error=str(exc))
            raise UnauthorizedError(
                message="Token verification failed",
                provider_name=self.get_provider_name(),
            ) from exc

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            raise UnauthorizedError(
                message="Token did not resolve to a user",
                provider_name=self.get_provider_name(),
            )
        return AuthenticatedUser(id=user_id, email=payload.get("email") or "")

    def get_provider_name(self) -> str:
        return "supabase-auth"
