"""Supabase anonymous authentication client."""

from dataclasses import dataclass

import httpx
from supabase import AsyncClient
from supabase_auth.errors import AuthError

from fit_tracker.domain.errors import NetworkUnavailableError, UnauthorizedError
from fit_tracker.services.identity import AnonymousAuthClient


@dataclass
class SupabaseAnonymousAuthClient(AnonymousAuthClient):
    """Issue opaque user ids through Supabase anonymous sign-in."""

    client: AsyncClient

    async def session_user_id(self) -> str | None:
        """Return the user id of the current auth session, if any."""
        try:
            session = await self.client.auth.get_session()
        except httpx.TransportError as exc:
            raise NetworkUnavailableError("Auth service unreachable") from exc
        except AuthError:
            return None
        if session is None or session.user is None:
            return None
        return session.user.id

    async def sign_in_anonymously(self) -> str:
        """Create an anonymous user and return its id."""
        try:
            response = await self.client.auth.sign_in_anonymously()
        except httpx.TransportError as exc:
            raise NetworkUnavailableError("Auth service unreachable") from exc
        except AuthError as exc:
            raise UnauthorizedError(f"Anonymous sign-in failed: {exc}") from exc
        if response.user is None:
            raise UnauthorizedError("Anonymous sign-in returned no user")
        return response.user.id
