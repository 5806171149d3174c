import json
import logging
from typing import Any, Dict, Mapping, Union

from fastapi import APIRouter, FastAPI, Request, Response

from ..common.deps import OAuthDependency
from ..common.setting import OAuthSetting
from ..rfc6749 import AuthorizationServer as _AuthorizationServer
from ..rfc6749 import OAuth2Error, OAuth2Request, ServerError, StorageRegistry
from ..utils.consts import DEFAULT_JSON_HEADERS
from ..utils.functions import create_oauth_request

log = logging.getLogger(__name__)


class AuthorizationServer(_AuthorizationServer, OAuthDependency):
    """FastAPI implementation of :class:`fastapi_oauth_server.rfc6749.AuthorizationServer`.
    Initialize it with the storages and the FastAPI app instance::

        server = AuthorizationServer(
            app,
            config=OAuthSetting(),
            storages=StorageRegistry(
                client=SQLAClientStorage(session_factory, Client),
                session=SQLASessionStorage(session_factory, Session),
                access_token=SQLAAccessTokenStorage(session_factory, AccessToken),
                scope=SQLAScopeStorage(session_factory, Scope),
            ),
        )
        server.add_grant_type(ClientCredentialsGrant())
        app.include_router(server.create_token_router())

        # or initialize lazily, once every grant type is registered
        server = AuthorizationServer(config=OAuthSetting(), storages=storages)
        server.add_grant_type(ClientCredentialsGrant())
        server.init_app(app)
    """

    def __init__(self, app: FastAPI = None, config: OAuthSetting = None, storages: StorageRegistry = None):
        super(AuthorizationServer, self).__init__(config=config, storages=storages)
        if app is not None:
            self.init_app(app)

    def init_app(self, app: FastAPI, config: OAuthSetting = None):
        """Initialize later with FastAPI app instance. The storages needed by
        the registered grant types are checked here.
        """
        if config is not None:
            self.configure(config)
        self.validate()
        app.add_exception_handler(OAuth2Error, self.handle_error)

    async def create_token_response(
        self,
        request: Union[Request, OAuth2Request],
        extra_input: Mapping[str, Any] = None,
    ) -> Response:
        """Validate token request and create token response.

        :param request: HTTP request instance
        :param extra_input: parameters taking precedence over the request's
        """
        oauth_request = await create_oauth_request(request)
        token = await self.issue_access_token(oauth_request, extra_input)
        return self._handle_response(200, dict(token), dict(DEFAULT_JSON_HEADERS))

    async def handle_error(self, request: Request, error: OAuth2Error) -> Response:
        """Render ``error`` as an OAuth 2 error response. The request body is
        not parsed again, the headers are enough to find the auth scheme.
        """
        oauth_request = OAuth2Request(
            method=request.method,
            uri=str(request.url),
            headers=dict(request.headers),
        )
        if isinstance(error, ServerError):
            log.error('OAuth 2 server error (sub code %s): %s', error.sub_code, error.detail)
        else:
            log.info('OAuth 2 request failed with %s (sub code %s)', error.error, error.sub_code)

        status_code, body, headers = error(oauth_request)
        return self._handle_response(status_code, body, headers)

    def create_token_router(self, path: str = '/oauth/token') -> APIRouter:
        """Create a router serving the token endpoint at ``path``."""
        router = APIRouter()

        @router.post(path)
        async def issue_token(request: Request) -> Response:
            return await self.create_token_response(request)

        return router

    @staticmethod
    def _handle_response(status_code: int, payload: Union[Dict, str], headers: Dict[str, str]) -> Response:
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        return Response(
            payload,
            status_code=status_code,
            headers=headers,
        )
