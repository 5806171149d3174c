import asyncio
import itertools
import time

import pytest

from fastapi_oauth_server.common.setting import OAuthSetting
from fastapi_oauth_server.rfc6749 import (
    AccessTokenMixin,
    AuthorizationCodeMixin,
    AuthorizationServer,
    ClientMixin,
    OAuth2Request,
    RefreshTokenMixin,
    ScopeMixin,
    SessionMixin,
    StorageRegistry,
)

REDIRECT_URI = 'https://client.example.com/cb'


class Client(ClientMixin):
    def __init__(self, client_id, client_secret, redirect_uris=None, grant_types=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uris = redirect_uris or []
        self.grant_types = grant_types or []

    def get_client_id(self):
        return self.client_id

    def get_redirect_uris(self):
        return self.redirect_uris


class Session(SessionMixin):
    def __init__(self, id, client_id, owner_type, owner_id, scope):
        self.id = id
        self.client_id = client_id
        self.owner_type = owner_type
        self.owner_id = owner_id
        self.scope = scope

    def get_session_id(self):
        return self.id

    def get_client_id(self):
        return self.client_id

    def get_owner_type(self):
        return self.owner_type

    def get_owner_id(self):
        return self.owner_id

    def get_scope(self):
        return self.scope


class AccessToken(AccessTokenMixin):
    def __init__(self, access_token, session_id, expires_at):
        self.access_token = access_token
        self.session_id = session_id
        self.expires_at = expires_at
        self.revoked = False

    def get_access_token(self):
        return self.access_token

    def get_session_id(self):
        return self.session_id

    def get_expires_at(self):
        return self.expires_at

    def is_revoked(self):
        return self.revoked


class RefreshToken(RefreshTokenMixin):
    def __init__(self, refresh_token, access_token, client_id, expires_at):
        self.refresh_token = refresh_token
        self.access_token = access_token
        self.client_id = client_id
        self.expires_at = expires_at

    def get_refresh_token(self):
        return self.refresh_token

    def get_access_token(self):
        return self.access_token

    def get_client_id(self):
        return self.client_id

    def get_expires_at(self):
        return self.expires_at


class AuthCode(AuthorizationCodeMixin):
    def __init__(self, code, client_id, session_id, redirect_uri, expires_at):
        self.code = code
        self.client_id = client_id
        self.session_id = session_id
        self.redirect_uri = redirect_uri
        self.expires_at = expires_at

    def get_code(self):
        return self.code

    def get_session_id(self):
        return self.session_id

    def get_redirect_uri(self):
        return self.redirect_uri

    def get_expires_at(self):
        return self.expires_at


class Scope(ScopeMixin):
    def __init__(self, name, description=None):
        self.name = name
        self.description = description

    def get_scope(self):
        return self.name

    def get_description(self):
        return self.description


class MemoryClientStorage(object):
    def __init__(self, *clients):
        self.clients = {client.client_id: client for client in clients}

    async def get_client(self, client_id, client_secret=None, redirect_uri=None, grant_type=None):
        client = self.clients.get(client_id)
        if client is None:
            return None
        if client_secret is not None and client.client_secret != client_secret:
            return None
        if redirect_uri is not None and not client.check_redirect_uri(redirect_uri):
            return None
        if grant_type is not None and client.grant_types and grant_type not in client.grant_types:
            return None
        return client


class MemorySessionStorage(object):
    def __init__(self):
        self.sessions = {}
        self._ids = itertools.count(1)

    async def create_session(self, client_id, owner_type, owner_id, scopes):
        session = Session(
            next(self._ids),
            client_id,
            owner_type,
            owner_id,
            ' '.join(scope.get_scope() for scope in scopes),
        )
        self.sessions[session.id] = session
        return session

    async def get_session(self, session_id):
        return self.sessions.get(session_id)

    async def delete_session(self, session_id):
        self.sessions.pop(session_id, None)


class MemoryAccessTokenStorage(object):
    def __init__(self):
        self.tokens = {}

    async def create_access_token(self, session, access_token, expires_at):
        token = AccessToken(access_token, session.get_session_id(), expires_at)
        self.tokens[access_token] = token
        return token

    async def get_access_token(self, access_token):
        # let concurrent requests interleave
        await asyncio.sleep(0)
        return self.tokens.get(access_token)

    async def revoke_access_token(self, access_token):
        token = self.tokens.get(access_token)
        if token is not None:
            token.revoked = True


class MemoryRefreshTokenStorage(object):
    def __init__(self):
        self.tokens = {}

    async def create_refresh_token(self, access_token, refresh_token, expires_at, client_id):
        token = RefreshToken(refresh_token, access_token.get_access_token(), client_id, expires_at)
        self.tokens[refresh_token] = token
        return token

    async def get_refresh_token(self, refresh_token, client_id):
        await asyncio.sleep(0)
        token = self.tokens.get(refresh_token)
        if token is None or token.client_id != client_id:
            return None
        return token

    async def consume_refresh_token(self, refresh_token, client_id):
        # no await between the check and the removal
        token = self.tokens.get(refresh_token)
        if token is None or token.client_id != client_id:
            return None
        return self.tokens.pop(refresh_token)


class MemoryAuthCodeStorage(object):
    def __init__(self):
        self.codes = {}

    async def create_auth_code(self, session, code, redirect_uri, expires_at):
        auth_code = AuthCode(code, session.get_client_id(), session.get_session_id(), redirect_uri, expires_at)
        self.codes[code] = auth_code
        return auth_code

    async def get_auth_code(self, code):
        return self.codes.get(code)

    async def consume_auth_code(self, code, client_id, redirect_uri):
        auth_code = self.codes.get(code)
        if auth_code is None or auth_code.client_id != client_id or auth_code.redirect_uri != redirect_uri:
            return None
        return self.codes.pop(code)


class MemoryScopeStorage(object):
    def __init__(self, *names):
        self.scopes = {name: Scope(name) for name in names}

    async def get_scope(self, scope, client_id=None, grant_type=None):
        return self.scopes.get(scope)


@pytest.fixture
def client():
    return Client('client-1', 'secret-1', redirect_uris=[REDIRECT_URI])


@pytest.fixture
def storages(client):
    return StorageRegistry(
        client=MemoryClientStorage(client),
        session=MemorySessionStorage(),
        access_token=MemoryAccessTokenStorage(),
        refresh_token=MemoryRefreshTokenStorage(),
        auth_code=MemoryAuthCodeStorage(),
        scope=MemoryScopeStorage('basic', 'email', 'profile'),
    )


@pytest.fixture
def config():
    return OAuthSetting(OAUTH2_DEFAULT_SCOPE='basic')


@pytest.fixture
def server(config, storages):
    return AuthorizationServer(config=config, storages=storages)


@pytest.fixture
def token_request():
    def create_request(headers=None, **form):
        return OAuth2Request(
            method='POST',
            uri='https://server.example.com/token',
            form=form,
            headers=headers,
        )

    return create_request


@pytest.fixture
def now():
    return int(time.time())
