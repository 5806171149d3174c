"""
    Storage contracts consumed by the grant types. The authorization server
    never implements them, it only holds one collaborator per role in a
    :class:`StorageRegistry`.
"""
from dataclasses import dataclass, fields
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from .errors import ServerError
from .mixins import (
    AccessTokenMixin,
    AuthorizationCodeMixin,
    ClientMixin,
    RefreshTokenMixin,
    ScopeMixin,
    SessionMixin,
)


@runtime_checkable
class ClientStorage(Protocol):
    async def get_client(
        self,
        client_id: str,
        client_secret: str = None,
        redirect_uri: str = None,
        grant_type: str = None,
    ) -> Optional[ClientMixin]:
        """Validate a client. ``client_secret`` and ``redirect_uri`` are
        checked when given, ``grant_type`` is the grant used by the request.
        Return ``None`` when the validation fails.
        """
        ...


@runtime_checkable
class SessionStorage(Protocol):
    async def create_session(
        self,
        client_id: str,
        owner_type: str,
        owner_id: str,
        scopes: List[ScopeMixin],
    ) -> SessionMixin:
        ...

    async def get_session(self, session_id) -> Optional[SessionMixin]:
        ...

    async def delete_session(self, session_id) -> None:
        ...


@runtime_checkable
class AccessTokenStorage(Protocol):
    async def create_access_token(
        self,
        session: SessionMixin,
        access_token: str,
        expires_at: int,
    ) -> AccessTokenMixin:
        ...

    async def get_access_token(self, access_token: str) -> Optional[AccessTokenMixin]:
        ...

    async def revoke_access_token(self, access_token: str) -> None:
        ...


@runtime_checkable
class RefreshTokenStorage(Protocol):
    async def create_refresh_token(
        self,
        access_token: AccessTokenMixin,
        refresh_token: str,
        expires_at: int,
        client_id: str,
    ) -> RefreshTokenMixin:
        ...

    async def get_refresh_token(self, refresh_token: str, client_id: str) -> Optional[RefreshTokenMixin]:
        ...

    async def consume_refresh_token(self, refresh_token: str, client_id: str) -> Optional[RefreshTokenMixin]:
        """Invalidate the refresh token and return it, in one atomic step.
        Return ``None`` when it was unknown or already consumed, so that only
        one of several concurrent redemptions succeeds.
        """
        ...


@runtime_checkable
class AuthCodeStorage(Protocol):
    async def create_auth_code(
        self,
        session: SessionMixin,
        code: str,
        redirect_uri: str,
        expires_at: int,
    ) -> AuthorizationCodeMixin:
        ...

    async def get_auth_code(self, code: str) -> Optional[AuthorizationCodeMixin]:
        ...

    async def consume_auth_code(
        self,
        code: str,
        client_id: str,
        redirect_uri: str,
    ) -> Optional[AuthorizationCodeMixin]:
        """Invalidate the authorization code issued to ``client_id`` for
        ``redirect_uri`` and return it, in one atomic step.
        """
        ...


@runtime_checkable
class ScopeStorage(Protocol):
    async def get_scope(self, scope: str, client_id: str = None, grant_type: str = None) -> Optional[ScopeMixin]:
        ...


STORAGE_CONTRACTS = {
    'client': ClientStorage,
    'session': SessionStorage,
    'access_token': AccessTokenStorage,
    'refresh_token': RefreshTokenStorage,
    'auth_code': AuthCodeStorage,
    'scope': ScopeStorage,
}


@dataclass
class StorageRegistry:
    """One storage collaborator per role. Filled during assembly, read-only
    while serving requests.
    """
    client: Optional[ClientStorage] = None
    session: Optional[SessionStorage] = None
    access_token: Optional[AccessTokenStorage] = None
    refresh_token: Optional[RefreshTokenStorage] = None
    auth_code: Optional[AuthCodeStorage] = None
    scope: Optional[ScopeStorage] = None

    def __post_init__(self):
        for role in self.roles():
            storage = getattr(self, role)
            if storage is not None:
                self.register(role, storage)

    @classmethod
    def roles(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def register(self, role: str, storage) -> None:
        contract = STORAGE_CONTRACTS.get(role)
        if contract is None:
            raise ServerError('Unknown storage role `{}`'.format(role))
        if not isinstance(storage, contract):
            raise TypeError('{!r} does not implement {}'.format(storage, contract.__name__))
        setattr(self, role, storage)

    def get(self, role: str):
        storage = getattr(self, role, None) if role in STORAGE_CONTRACTS else None
        if storage is None:
            raise ServerError('The `{}` storage interface has not been registered with the authorization server'.format(role))
        return storage

    def missing(self, roles: Iterable[str]) -> List[str]:
        return [role for role in roles if getattr(self, role, None) is None]
