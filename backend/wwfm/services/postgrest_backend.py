"""
PostgREST search backend.

Calls the search functions exposed by Supabase as RPC endpoints:
    POST {supabase_url}/rest/v1/rpc/<function>  {"<arg>": "<term>"}
"""
import logging
from typing import Optional

import httpx

from wwfm.services.search_backend import RpcSearchBackend, CollaboratorUnavailable, RPC_FUNCTIONS

logger = logging.getLogger(__name__)


class PostgrestSearchBackend(RpcSearchBackend):
    """Async HTTP client for the Supabase RPC search functions."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            timeout=timeout,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def _call(self, operation: str, term: str) -> list[dict]:
        function, argument = RPC_FUNCTIONS[operation]
        logger.debug(f"RPC {function}({argument}={term!r})")
        try:
            response = await self.client.post(f"/rpc/{function}", json={argument: term})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise CollaboratorUnavailable(operation, str(e)) from e
        except ValueError as e:
            # Body was not JSON
            raise CollaboratorUnavailable(operation, f"invalid JSON: {e}") from e

    async def close(self):
        if self._owns_client:
            await self.client.aclose()
