import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Set, Tuple

from ..errors import (
    InvalidClientError,
    InvalidRequestError,
    InvalidScopeError,
    ServerError,
    UnsupportedResponseTypeError,
)
from ..mixins import ClientMixin, ScopeMixin, SessionMixin
from ..util import list_to_scope, scope_to_list
from ..wrappers import OAuth2Token

if TYPE_CHECKING:
    from ...common.context import OAuthContext
    from ...common.types import GrantHook
    from ..authorization_server import AuthorizationServer

log = logging.getLogger(__name__)


class BaseGrant(object):
    #: Designed for which "grant_type"
    GRANT_TYPE: str

    #: "response_type" served at the authorization endpoint, if any
    RESPONSE_TYPE: Optional[str] = None

    #: storage roles read or written by this grant
    REQUIRED_STORAGES: Tuple[str, ...] = ('client', 'session', 'access_token', 'scope')

    def __init__(self):
        self._server: Optional['AuthorizationServer'] = None
        self._hooks: Dict[str, Set['GrantHook']] = {
            'after_validate_token_request': set(),
            'process_token': set(),
        }

    @property
    def identifier(self) -> str:
        return self.GRANT_TYPE

    @property
    def response_type(self) -> Optional[str]:
        return self.RESPONSE_TYPE

    def set_authorization_server(self, server: 'AuthorizationServer'):
        self._server = server

    @property
    def server(self) -> 'AuthorizationServer':
        if self._server is None:
            raise ServerError('Grant type "{}" is not registered with an authorization server'.format(self.identifier))
        return self._server

    def register_hook(self, hook_type: str, hook: 'GrantHook'):
        if hook_type not in self._hooks:
            raise ValueError(
                'Hook type {} is not in {}.'.format(hook_type, list(self._hooks)),
            )
        self._hooks[hook_type].add(hook)

    def execute_hook(self, hook_type: str, *args, **kwargs):
        for hook in self._hooks[hook_type]:
            hook(self, *args, **kwargs)

    @staticmethod
    def get_param(params: Mapping[str, Any], name: str, extra_input: Mapping[str, Any] = None) -> Optional[str]:
        """Read ``name`` from ``extra_input`` first, then from ``params``."""
        if extra_input and extra_input.get(name) is not None:
            return extra_input[name]
        return params.get(name)

    def require_param(self, params: Mapping[str, Any], name: str, extra_input: Mapping[str, Any] = None) -> str:
        value = self.get_param(params, name, extra_input)
        if not value:
            raise InvalidRequestError(name)
        return value

    async def authenticate_token_endpoint_client(
        self,
        context: 'OAuthContext',
        extra_input: Mapping[str, Any],
        redirect_uri: str = None,
    ) -> ClientMixin:
        """Authenticate client with the given methods for token endpoint.

        For example, the client makes the following HTTP request using TLS:

        .. code-block:: http

            POST /token HTTP/1.1
            Host: server.example.com
            Content-Type: application/x-www-form-urlencoded

            grant_type=client_credentials&client_id=s6BhdRkqt3
            &client_secret=7Fjfp0ZBr1KtDRbnfVdmIw

        :return: client
        """
        return await self.server.authenticate_client(
            request=context.request,
            extra_input=extra_input,
            grant_type=self.identifier,
            redirect_uri=redirect_uri,
        )

    async def validate_requested_scope(
        self,
        context: 'OAuthContext',
        scope: Optional[str],
        client_id: str,
    ) -> List[ScopeMixin]:
        """Resolve the requested scope string into scopes. When ``scope`` is
        empty, either fail (scope parameter required) or fall back to the
        default scope.
        """
        config = context.config
        names = scope_to_list(scope, config.OAUTH2_SCOPE_DELIMITER) if scope else []

        if not names:
            if config.OAUTH2_REQUIRE_SCOPE_PARAM:
                raise InvalidRequestError('scope')
            if config.OAUTH2_DEFAULT_SCOPE:
                names = scope_to_list(config.OAUTH2_DEFAULT_SCOPE, config.OAUTH2_SCOPE_DELIMITER)

        return await self.resolve_scopes(names, client_id)

    async def resolve_scopes(self, names: List[str], client_id: str) -> List[ScopeMixin]:
        scope_storage = self.server.get_storage('scope')
        scopes = []
        for name in names:
            scope = await scope_storage.get_scope(name, client_id=client_id, grant_type=self.identifier)
            if scope is None:
                raise InvalidScopeError(name)
            scopes.append(scope)
        return scopes

    @staticmethod
    def get_session_scopes(session: SessionMixin) -> List[str]:
        # sessions store granted scopes joined by a single space
        return (session.get_scope() or '').split()

    async def create_session(
        self,
        context: 'OAuthContext',
        client: ClientMixin,
        owner_type: str,
        owner_id: str,
        scopes: List[ScopeMixin],
    ) -> SessionMixin:
        session = await self.server.get_storage('session').create_session(
            client.get_client_id(),
            owner_type,
            owner_id,
            scopes,
        )
        context.request.session = session
        return session

    async def issue_token(
        self,
        context: 'OAuthContext',
        client: ClientMixin,
        session: SessionMixin,
        scopes: List[str],
        include_refresh_token: bool = False,
    ) -> OAuth2Token:
        """Create and persist the access token (and refresh token, when
        requested and supported) of ``session``, then build the token
        payload. The lifetime is the one configured when the request was
        dispatched.
        """
        config = context.config
        issued_at = int(time.time())
        expires_in = config.OAUTH2_ACCESS_TOKEN_TTL
        scope = list_to_scope(scopes, config.OAUTH2_SCOPE_DELIMITER)

        access_token = self.server.generate_access_token(self.identifier, client, scope, expires_in)
        access_token_record = await self.server.get_storage('access_token').create_access_token(
            session,
            access_token,
            issued_at + expires_in,
        )

        payload = {
            'access_token': access_token,
            'token_type': self.server.token_type,
            'expires_in': expires_in,
            'scope': scope,
        }

        if include_refresh_token and self.server.can_issue_refresh_token():
            refresh_expires_in = config.OAUTH2_REFRESH_TOKEN_TTL
            refresh_token = self.server.generate_refresh_token(self.identifier, client, scope, refresh_expires_in)
            await self.server.get_storage('refresh_token').create_refresh_token(
                access_token_record,
                refresh_token,
                issued_at + refresh_expires_in,
                client.get_client_id(),
            )
            payload['refresh_token'] = refresh_token

        token = OAuth2Token(payload, issued_at=issued_at)
        log.debug('Issue token of grant "%s" to %s', self.identifier, client.get_client_id())
        self.execute_hook('process_token', token=token)
        return token

    async def complete_flow(self, context: 'OAuthContext', extra_input: Mapping[str, Any]) -> OAuth2Token:
        """Validate the token request and issue the token. Every grant type
        MUST implement this method.

        :param context: request and configuration of the current request
        :param extra_input: parameters supplementing the request
        :return: token payload
        """
        raise NotImplementedError()

    def __repr__(self):
        return '<{} "{}">'.format(self.__class__.__name__, self.identifier)


@dataclass
class AuthorizeRequest:
    """Validated parameters of an authorization endpoint request."""
    client: ClientMixin
    redirect_uri: str
    response_type: str
    scopes: List[ScopeMixin] = field(default_factory=list)
    state: Optional[str] = None

    @property
    def client_id(self) -> str:
        return self.client.get_client_id()


class AuthorizationEndpointMixin(BaseGrant):
    async def check_authorize_params(
        self,
        context: 'OAuthContext',
        extra_input: Mapping[str, Any] = None,
    ) -> AuthorizeRequest:
        """Validate the parameters of an authorization request, which are
        read from the query string or the body:

        response_type
            REQUIRED. One of the response types advertised by the server.

        client_id
            REQUIRED.  The client identifier.

        redirect_uri
            REQUIRED.  Must be registered for the client.

        scope
            OPTIONAL, unless the server requires it.

        state
            RECOMMENDED, unless the server requires it.
        """
        params = context.request.data
        config = context.config

        client_id = self.require_param(params, 'client_id', extra_input)
        redirect_uri = self.require_param(params, 'redirect_uri', extra_input)

        state = self.get_param(params, 'state', extra_input)
        if config.OAUTH2_REQUIRE_STATE_PARAM and not state:
            raise InvalidRequestError('state')

        response_type = self.require_param(params, 'response_type', extra_input)
        if response_type not in self.server.response_types:
            raise UnsupportedResponseTypeError(response_type)

        client = await self.server.get_storage('client').get_client(
            client_id,
            redirect_uri=redirect_uri,
            grant_type=self.identifier,
        )
        if not client:
            raise InvalidClientError(client_id)
        context.request.client = client

        scopes = await self.validate_requested_scope(
            context,
            self.get_param(params, 'scope', extra_input),
            client_id,
        )
        return AuthorizeRequest(
            client=client,
            redirect_uri=redirect_uri,
            response_type=response_type,
            scopes=scopes,
            state=state,
        )
