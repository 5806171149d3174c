"""
    Registry of client credential extraction methods, with 2 built-in methods:

    1. client_secret_post
    2. client_secret_basic

    Methods are tried in registration order, the first one finding both a
    ``client_id`` and a secret wins. Otherwise the first one finding only a
    ``client_id`` is used. The credentials are then validated by the client
    storage.
"""

import logging
from typing import Callable, Dict, Mapping, Optional, Tuple

from .errors import InvalidClientError, InvalidRequestError
from .mixins import ClientMixin
from .storage import ClientStorage
from .wrappers import OAuth2Request

log = logging.getLogger(__name__)

ClientCredentials = Tuple[Optional[str], Optional[str]]
ExtractCredentialsFn = Callable[[OAuth2Request, Mapping], ClientCredentials]


def extract_client_secret_post(request: OAuth2Request, extra_input: Mapping) -> ClientCredentials:
    """The client sends its credentials as POST parameters, which can be
    overridden by the caller through ``extra_input``.
    """
    client_id = extra_input.get('client_id') or request.form.get('client_id')
    client_secret = extra_input.get('client_secret') or request.form.get('client_secret')
    return client_id, client_secret


def extract_client_secret_basic(request: OAuth2Request, extra_input: Mapping) -> ClientCredentials:
    """The client uses HTTP Basic for authentication."""
    return request.auth_user, request.auth_password


class ClientAuthentication(object):
    def __init__(self):
        self._methods: Dict[str, ExtractCredentialsFn] = {
            'client_secret_post': extract_client_secret_post,
            'client_secret_basic': extract_client_secret_basic,
        }

    def register(self, method: str, func: ExtractCredentialsFn):
        self._methods[method] = func

    def extract(self, request: OAuth2Request, extra_input: Mapping) -> Tuple[Optional[str], ClientCredentials]:
        partial = None, (None, None)
        for method, func in self._methods.items():
            client_id, client_secret = func(request, extra_input)
            if client_id and client_secret:
                return method, (client_id, client_secret)
            if client_id and partial[0] is None:
                partial = method, (client_id, client_secret)
        return partial

    async def authenticate(
        self,
        client_storage: ClientStorage,
        request: OAuth2Request,
        extra_input: Mapping,
        grant_type: str,
        redirect_uri: str = None,
    ) -> ClientMixin:
        method, (client_id, client_secret) = self.extract(request, extra_input)
        if not client_id:
            raise InvalidRequestError('client_id')
        if not client_secret:
            raise InvalidRequestError('client_secret')

        client = await client_storage.get_client(
            client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            grant_type=grant_type,
        )
        if not client:
            log.debug(f'Authenticate {client_id} via "{method}" failed')
            raise InvalidClientError(client_id)

        log.debug(f'Authenticate {client_id} via "{method}" success')
        request.client = client
        return client


__all__ = [
    'ClientAuthentication',
    'extract_client_secret_post',
    'extract_client_secret_basic',
]
