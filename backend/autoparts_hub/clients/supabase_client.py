"""
Supabase client — connection to the project holding coefficients and saved orders.

The SDK client is created on first use and kept by the wrapper. The DI
container caches one wrapper per process, so stores share a connection
without any class-level state; a second wrapper (e.g. with other
credentials) gets its own SDK client.
Version: 1.0.0
"""
import logging

from supabase import create_client, Client

from autoparts_hub.core.config import Settings

logger = logging.getLogger("supabase_client")


class SupabaseClient:
    """Lazily-created supabase-py client for one set of credentials."""

    def __init__(self, settings: Settings) -> None:
        self._url = settings.supabase_url
        self._key = settings.supabase_service_role_key
        self._client: Client | None = None

        if not self._url or not self._key:
            raise RuntimeError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set for Supabase access"
            )

    def get_client(self) -> Client:
        if self._client is None:
            self._client = create_client(self._url, self._key)
            logger.info("supabase client initialized url=%s", self._url)
        return self._client

    @property
    def client(self) -> Client:
        return self.get_client()
