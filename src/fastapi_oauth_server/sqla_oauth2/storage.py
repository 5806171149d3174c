"""
    Storages backed by SQLAlchemy async sessions. Each storage opens a
    session from ``session_factory`` per call and commits its own writes.

    The models are the application's mapped classes built on the bases of
    :mod:`fastapi_oauth_server.sqla_oauth2.models`, with an integer ``id``
    primary key for sessions.
"""
import logging
import time
from typing import List, Optional, Type

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..rfc6749.mixins import ScopeMixin
from .models import (
    OAuth2AccessTokenBase,
    OAuth2AuthorizationCodeBase,
    OAuth2ClientBase,
    OAuth2RefreshTokenBase,
    OAuth2ScopeBase,
    OAuth2SessionBase,
)

log = logging.getLogger(__name__)


class SQLAStorage(object):
    def __init__(self, session_factory: async_sessionmaker, model: Type):
        self.session_factory = session_factory
        self.model = model

    async def _add(self, db: AsyncSession, item):
        db.add(item)
        await db.commit()
        await db.refresh(item)
        return item


class SQLAClientStorage(SQLAStorage):
    """Client storage validating the secret, the redirect URI and the grant
    type against the stored client.
    """
    model: Type[OAuth2ClientBase]

    async def get_client(
        self,
        client_id: str,
        client_secret: str = None,
        redirect_uri: str = None,
        grant_type: str = None,
    ) -> Optional[OAuth2ClientBase]:
        async with self.session_factory() as db:
            q = select(self.model).filter_by(client_id=client_id)
            client = (await db.scalars(q)).first()

        if client is None:
            return None
        if client_secret is not None and not client.check_client_secret(client_secret):
            return None
        if redirect_uri is not None and not client.check_redirect_uri(redirect_uri):
            return None
        if grant_type is not None and not client.check_grant_type(grant_type):
            return None
        return client


class SQLASessionStorage(SQLAStorage):
    model: Type[OAuth2SessionBase]

    async def create_session(
        self,
        client_id: str,
        owner_type: str,
        owner_id: str,
        scopes: List[ScopeMixin],
    ) -> OAuth2SessionBase:
        item = self.model(
            client_id=client_id,
            owner_type=owner_type,
            owner_id=str(owner_id),
            scope=' '.join(scope.get_scope() for scope in scopes),
        )
        async with self.session_factory() as db:
            return await self._add(db, item)

    async def get_session(self, session_id) -> Optional[OAuth2SessionBase]:
        async with self.session_factory() as db:
            return await db.get(self.model, session_id)

    async def delete_session(self, session_id) -> None:
        async with self.session_factory() as db:
            await db.execute(delete(self.model).where(self.model.id == session_id))
            await db.commit()


class SQLAAccessTokenStorage(SQLAStorage):
    model: Type[OAuth2AccessTokenBase]

    async def create_access_token(self, session, access_token: str, expires_at: int) -> OAuth2AccessTokenBase:
        item = self.model(
            access_token=access_token,
            session_id=session.get_session_id(),
            expires_at=expires_at,
        )
        async with self.session_factory() as db:
            return await self._add(db, item)

    async def get_access_token(self, access_token: str) -> Optional[OAuth2AccessTokenBase]:
        async with self.session_factory() as db:
            q = select(self.model).filter_by(access_token=access_token)
            return (await db.scalars(q)).first()

    async def revoke_access_token(self, access_token: str) -> None:
        async with self.session_factory() as db:
            q = (
                update(self.model)
                .where(self.model.access_token == access_token, self.model.revoked_at == 0)
                .values(revoked_at=int(time.time()))
                .execution_options(synchronize_session=False)
            )
            await db.execute(q)
            await db.commit()


class SQLARefreshTokenStorage(SQLAStorage):
    """Refresh token storage. Redemption marks the token revoked with a
    conditional ``UPDATE``, so concurrent redemptions of one token cannot
    both succeed.
    """
    model: Type[OAuth2RefreshTokenBase]

    async def create_refresh_token(
        self,
        access_token,
        refresh_token: str,
        expires_at: int,
        client_id: str,
    ) -> OAuth2RefreshTokenBase:
        item = self.model(
            refresh_token=refresh_token,
            access_token=access_token.get_access_token(),
            client_id=client_id,
            expires_at=expires_at,
        )
        async with self.session_factory() as db:
            return await self._add(db, item)

    async def get_refresh_token(self, refresh_token: str, client_id: str) -> Optional[OAuth2RefreshTokenBase]:
        async with self.session_factory() as db:
            q = select(self.model).filter_by(refresh_token=refresh_token, client_id=client_id, revoked_at=0)
            return (await db.scalars(q)).first()

    async def consume_refresh_token(self, refresh_token: str, client_id: str) -> Optional[OAuth2RefreshTokenBase]:
        async with self.session_factory() as db:
            q = (
                update(self.model)
                .where(
                    self.model.refresh_token == refresh_token,
                    self.model.client_id == client_id,
                    self.model.revoked_at == 0,
                )
                .values(revoked_at=int(time.time()))
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(q)
            if result.rowcount != 1:
                await db.rollback()
                log.debug('Refresh token of %r is unknown or already consumed', client_id)
                return None
            await db.commit()

            q = select(self.model).filter_by(refresh_token=refresh_token)
            return (await db.scalars(q)).first()


class SQLAAuthCodeStorage(SQLAStorage):
    model: Type[OAuth2AuthorizationCodeBase]

    async def create_auth_code(self, session, code: str, redirect_uri: str, expires_at: int) -> OAuth2AuthorizationCodeBase:
        item = self.model(
            code=code,
            client_id=session.get_client_id(),
            session_id=session.get_session_id(),
            redirect_uri=redirect_uri,
            expires_at=expires_at,
        )
        async with self.session_factory() as db:
            return await self._add(db, item)

    async def get_auth_code(self, code: str) -> Optional[OAuth2AuthorizationCodeBase]:
        async with self.session_factory() as db:
            q = select(self.model).filter_by(code=code, revoked_at=0)
            return (await db.scalars(q)).first()

    async def consume_auth_code(self, code: str, client_id: str, redirect_uri: str) -> Optional[OAuth2AuthorizationCodeBase]:
        async with self.session_factory() as db:
            q = (
                update(self.model)
                .where(
                    self.model.code == code,
                    self.model.client_id == client_id,
                    self.model.redirect_uri == redirect_uri,
                    self.model.revoked_at == 0,
                )
                .values(revoked_at=int(time.time()))
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(q)
            if result.rowcount != 1:
                await db.rollback()
                return None
            await db.commit()

            q = select(self.model).filter_by(code=code)
            return (await db.scalars(q)).first()


class SQLAScopeStorage(SQLAStorage):
    model: Type[OAuth2ScopeBase]

    async def get_scope(self, scope: str, client_id: str = None, grant_type: str = None) -> Optional[OAuth2ScopeBase]:
        async with self.session_factory() as db:
            q = select(self.model).filter_by(scope=scope)
            return (await db.scalars(q)).first()


__all__ = [
    'SQLAClientStorage',
    'SQLASessionStorage',
    'SQLAAccessTokenStorage',
    'SQLARefreshTokenStorage',
    'SQLAAuthCodeStorage',
    'SQLAScopeStorage',
]
