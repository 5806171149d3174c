"""
    Read interfaces of the records handed out by the storages. Storage
    implementations return objects implementing these mixins.
"""
import time
from typing import List, Optional


class ClientMixin(object):
    """Implementation of OAuth 2 Client described in `Section 2`_ with
    some methods to help validation. A client has at least these information:

    * client_id: A string represents client identifier.
    * client_secret: A string represents client password.
    * redirect_uris: A list of registered redirect uris.
    * grant_types: A list of grant types the client is allowed to use.

    .. _`Section 2`: https://tools.ietf.org/html/rfc6749#section-2
    """

    def get_client_id(self) -> str:
        raise NotImplementedError()

    def get_redirect_uris(self) -> List[str]:
        raise NotImplementedError()

    def get_default_redirect_uri(self) -> Optional[str]:
        redirect_uris = self.get_redirect_uris()
        if redirect_uris:
            return redirect_uris[0]
        return None

    def check_redirect_uri(self, redirect_uri: str) -> bool:
        return redirect_uri in self.get_redirect_uris()


class SessionMixin(object):
    """Binding between a resource owner (or the client itself) and a client,
    carrying the granted scopes.
    """

    def get_session_id(self):
        raise NotImplementedError()

    def get_client_id(self) -> str:
        raise NotImplementedError()

    def get_owner_type(self) -> str:
        raise NotImplementedError()

    def get_owner_id(self) -> str:
        raise NotImplementedError()

    def get_scope(self) -> str:
        """Granted scope names, joined by a single space."""
        raise NotImplementedError()


class ExpiringMixin(object):
    def get_expires_at(self) -> int:
        raise NotImplementedError()

    def is_expired(self) -> bool:
        return self.get_expires_at() < time.time()


class AccessTokenMixin(ExpiringMixin):
    def get_access_token(self) -> str:
        raise NotImplementedError()

    def get_session_id(self):
        raise NotImplementedError()

    def is_revoked(self) -> bool:
        raise NotImplementedError()


class RefreshTokenMixin(ExpiringMixin):
    def get_refresh_token(self) -> str:
        raise NotImplementedError()

    def get_access_token(self) -> str:
        """The access token this refresh token was issued with."""
        raise NotImplementedError()

    def get_client_id(self) -> str:
        raise NotImplementedError()


class AuthorizationCodeMixin(ExpiringMixin):
    def get_code(self) -> str:
        raise NotImplementedError()

    def get_session_id(self):
        raise NotImplementedError()

    def get_redirect_uri(self) -> str:
        """A method to get authorization code's ``redirect_uri``.
        For instance, the database table for authorization code has a
        column called ``redirect_uri``::

            def get_redirect_uri(self):
                return self.redirect_uri

        :return: A URL string
        """
        raise NotImplementedError()


class ScopeMixin(object):
    def get_scope(self) -> str:
        """The scope name, e.g. ``basic``."""
        raise NotImplementedError()

    def get_description(self) -> Optional[str]:
        return None
