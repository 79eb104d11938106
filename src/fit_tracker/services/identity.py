"""User identity resolution for the app and widget processes."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from fit_tracker.domain.errors import NotFoundError
from fit_tracker.services.shared_state import USER_ID_KEY, SharedStore

_logger = logging.getLogger(__name__)


class AnonymousAuthClient(Protocol):
    """Interface for the anonymous identity issuer."""

    async def session_user_id(self) -> str | None:
        """Return the user id of an existing auth session."""

    async def sign_in_anonymously(self) -> str:
        """Create a new anonymous identity and return its user id."""


class IdentityProvider(Protocol):
    """Narrow read interface over the current user id."""

    def current_user_id(self) -> str | None:
        """Return the known user id without side effects."""

    async def ensure_identity(self) -> str:
        """Return the user id, resolving it if the provider is allowed to."""


@dataclass
class IdentityService(IdentityProvider):
    """Main-process identity: lazily created, then cached for the process.

    ``ensure_identity`` creates at most one anonymous identity per process.
    Concurrent callers wait on the same lock and observe the cached id.
    """

    auth_client: AnonymousAuthClient
    shared_store: SharedStore
    _user_id: str | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    def current_user_id(self) -> str | None:
        """Return the cached user id, if resolved."""
        return self._user_id

    async def ensure_identity(self) -> str:
        """Return the user id, creating an anonymous identity if needed."""
        if self._user_id is not None:
            return self._user_id
        async with self._lock:
            if self._user_id is not None:
                return self._user_id
            user_id = await self.auth_client.session_user_id()
            if user_id is None:
                user_id = await asyncio.to_thread(_stored_user_id, self.shared_store)
            if user_id is None:
                user_id = await self.auth_client.sign_in_anonymously()
                _logger.info("Created anonymous identity %s", user_id)
            self._user_id = user_id
            await asyncio.to_thread(self.shared_store.set, USER_ID_KEY, user_id)
            return user_id


@dataclass
class SharedIdentityProvider(IdentityProvider):
    """Widget-process identity read from the shared store; never creates one."""

    shared_store: SharedStore

    def current_user_id(self) -> str | None:
        """Return the user id handed off by the main app."""
        return _stored_user_id(self.shared_store)

    async def ensure_identity(self) -> str:
        """Return the shared user id or fail with NotFoundError."""
        try:
            user_id = await asyncio.to_thread(self.current_user_id)
        except OSError as exc:
            raise NotFoundError("Shared user id is not readable") from exc
        if user_id is None:
            raise NotFoundError("No shared user id found")
        return user_id


def _stored_user_id(shared_store: SharedStore) -> str | None:
    value = shared_store.get(USER_ID_KEY)
    if isinstance(value, str) and value:
        return value
    return None
