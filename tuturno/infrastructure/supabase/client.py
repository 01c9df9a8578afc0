from __future__ import annotations

import logging

from supabase import Client, create_client
from supabase.client import ClientOptions


logger = logging.getLogger(__name__)


def create_supabase_client(url: str | None, service_role_key: str | None, timeout: float = 10.0) -> Client:
    """Service-role client. Bypasses row level security, so it must stay server side."""
    if not url:
        raise ValueError("SUPABASE_URL is required for the Supabase backend")
    if not service_role_key:
        raise ValueError("SUPABASE_SERVICE_ROLE_KEY is required for the Supabase backend")

    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout,
        function_client_timeout=int(timeout),
    )
    return create_client(url, service_role_key, options=options)


def close_supabase_client(client: Client) -> None:
    client.postgrest.session.close()
    logger.info("Supabase client closed")
