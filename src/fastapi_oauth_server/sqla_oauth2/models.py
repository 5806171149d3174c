"""
    This module defines how to construct Client, Session, AccessToken,
    RefreshToken, AuthorizationCode and Scope tables.
"""
import secrets
import time
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, Integer, String, Text

from ..common.encoding import json_dumps, json_loads
from ..rfc6749.mixins import (
    AccessTokenMixin,
    AuthorizationCodeMixin,
    ClientMixin,
    RefreshTokenMixin,
    ScopeMixin,
    SessionMixin,
)


class OAuth2ClientBase(ClientMixin):
    client_id = Column(String(48), index=True, unique=True, nullable=False)
    client_secret = Column(String(120))
    client_id_issued_at = Column(Integer, nullable=False, default=lambda: int(time.time()))
    _client_metadata = Column('client_metadata', Text)

    @property
    def client_metadata(self) -> Dict[str, Any]:
        if 'client_metadata' in self.__dict__:
            return self.__dict__['client_metadata']
        data = json_loads(self._client_metadata, default={})
        self.__dict__['client_metadata'] = data
        return data

    def set_client_metadata(self, value: Dict[str, Any]):
        self.__dict__.pop('client_metadata', None)
        self._client_metadata = json_dumps(value)

    @property
    def redirect_uris(self) -> List[str]:
        return self.client_metadata.get('redirect_uris', [])

    @property
    def grant_types(self) -> List[str]:
        return self.client_metadata.get('grant_types', [])

    @property
    def client_name(self) -> Optional[str]:
        return self.client_metadata.get('client_name', None)

    def get_client_id(self) -> str:
        return self.client_id

    def get_redirect_uris(self) -> List[str]:
        return self.redirect_uris

    def has_client_secret(self) -> bool:
        return bool(self.client_secret)

    def check_client_secret(self, client_secret: str) -> bool:
        if not self.client_secret or client_secret is None:
            return False
        return secrets.compare_digest(self.client_secret, client_secret)

    def check_grant_type(self, grant_type: str) -> bool:
        # clients without a restriction may use every grant type
        if not self.grant_types:
            return True
        return grant_type in self.grant_types


class OAuth2SessionBase(SessionMixin):
    client_id = Column(String(48), index=True, nullable=False)
    owner_type = Column(String(40), nullable=False)
    owner_id = Column(String(255), nullable=False)
    scope = Column(Text, default='')

    def get_session_id(self):
        return self.id

    def get_client_id(self) -> str:
        return self.client_id

    def get_owner_type(self) -> str:
        return self.owner_type

    def get_owner_id(self) -> str:
        return self.owner_id

    def get_scope(self) -> str:
        return self.scope or ''


class OAuth2AccessTokenBase(AccessTokenMixin):
    access_token = Column(String(255), unique=True, nullable=False)
    session_id = Column(Integer, index=True, nullable=False)
    expires_at = Column(Integer, nullable=False, default=0)
    revoked_at = Column(Integer, nullable=False, default=0)

    def get_access_token(self) -> str:
        return self.access_token

    def get_session_id(self):
        return self.session_id

    def get_expires_at(self) -> int:
        return self.expires_at

    def is_revoked(self) -> bool:
        return bool(self.revoked_at)


class OAuth2RefreshTokenBase(RefreshTokenMixin):
    refresh_token = Column(String(255), unique=True, nullable=False)
    access_token = Column(String(255), index=True, nullable=False)
    client_id = Column(String(48), nullable=False)
    expires_at = Column(Integer, nullable=False, default=0)
    revoked_at = Column(Integer, nullable=False, default=0)

    def get_refresh_token(self) -> str:
        return self.refresh_token

    def get_access_token(self) -> str:
        return self.access_token

    def get_client_id(self) -> str:
        return self.client_id

    def get_expires_at(self) -> int:
        return self.expires_at


class OAuth2AuthorizationCodeBase(AuthorizationCodeMixin):
    code = Column(String(120), unique=True, nullable=False)
    client_id = Column(String(48), nullable=False)
    session_id = Column(Integer, index=True, nullable=False)
    redirect_uri = Column(Text, default='')
    expires_at = Column(Integer, nullable=False, default=0)
    revoked_at = Column(Integer, nullable=False, default=0)

    def get_code(self) -> str:
        return self.code

    def get_session_id(self):
        return self.session_id

    def get_redirect_uri(self) -> str:
        return self.redirect_uri

    def get_expires_at(self) -> int:
        return self.expires_at


class OAuth2ScopeBase(ScopeMixin):
    scope = Column(String(80), unique=True, nullable=False)
    description = Column(Text)

    def get_scope(self) -> str:
        return self.scope

    def get_description(self) -> Optional[str]:
        return self.description


__all__ = [
    'OAuth2ClientBase',
    'OAuth2SessionBase',
    'OAuth2AccessTokenBase',
    'OAuth2RefreshTokenBase',
    'OAuth2AuthorizationCodeBase',
    'OAuth2ScopeBase',
]
