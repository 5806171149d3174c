import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..common.context import OAuthContext
from ..common.security import generate_token
from ..common.setting import OAuthSetting
from ..rfc6750.token import BearerTokenGenerator
from ..utils.consts import ACCESS_TOKEN_LENGTH, AUTH_CODE_LENGTH, REFRESH_TOKEN_LENGTH
from ..utils.functions import create_token_generator
from .authenticate_client import ClientAuthentication, ExtractCredentialsFn
from .errors import ClientError, ErrorKind, InvalidRequestError, ServerError, UnsupportedGrantTypeError
from .grants.base import BaseGrant
from .mixins import ClientMixin
from .storage import StorageRegistry
from .wrappers import OAuth2Request, OAuth2Token

log = logging.getLogger(__name__)


class AuthorizationServer(object):
    """Authorization server that dispatches token requests to the registered
    grant types.

    The server is assembled once, before serving requests::

        server = AuthorizationServer(OAuthSetting(OAUTH2_DEFAULT_SCOPE='basic'))
        server.register_storage('client', client_storage)
        server.register_storage('session', session_storage)
        server.register_storage('access_token', access_token_storage)
        server.register_storage('scope', scope_storage)
        server.add_grant_type(ClientCredentialsGrant())
        server.validate()

    and then only read while serving::

        token = await server.issue_access_token(request)
    """

    def __init__(self, config: OAuthSetting = None, storages: StorageRegistry = None):
        self._config: OAuthSetting = config if config is not None else OAuthSetting()
        self._storages: StorageRegistry = storages if storages is not None else StorageRegistry()
        self._grant_types: Dict[str, BaseGrant] = {}
        self._response_types: List[str] = []
        self._client_auth = ClientAuthentication()
        self._token_generator = self._create_bearer_token_generator(self._config)

    def configure(self, config: OAuthSetting):
        """Replace the whole configuration. Requests already dispatched keep
        the configuration they started with.
        """
        self._config = config
        self._token_generator = self._create_bearer_token_generator(config)

    @property
    def config(self) -> OAuthSetting:
        return self._config

    def _update_config(self, **changes):
        self._config = self._config.replace(**changes)

    @property
    def scope_delimiter(self) -> str:
        return self._config.OAUTH2_SCOPE_DELIMITER

    @scope_delimiter.setter
    def scope_delimiter(self, value: str):
        self._update_config(OAUTH2_SCOPE_DELIMITER=value)

    @property
    def access_token_ttl(self) -> int:
        return self._config.OAUTH2_ACCESS_TOKEN_TTL

    @access_token_ttl.setter
    def access_token_ttl(self, value: int):
        self._update_config(OAUTH2_ACCESS_TOKEN_TTL=value)

    @property
    def refresh_token_ttl(self) -> int:
        return self._config.OAUTH2_REFRESH_TOKEN_TTL

    @refresh_token_ttl.setter
    def refresh_token_ttl(self, value: int):
        self._update_config(OAUTH2_REFRESH_TOKEN_TTL=value)

    @property
    def auth_code_ttl(self) -> int:
        return self._config.OAUTH2_AUTH_CODE_TTL

    @auth_code_ttl.setter
    def auth_code_ttl(self, value: int):
        self._update_config(OAUTH2_AUTH_CODE_TTL=value)

    @property
    def require_scope_param(self) -> bool:
        """Whether the ``scope`` parameter is mandatory."""
        return self._config.OAUTH2_REQUIRE_SCOPE_PARAM

    @require_scope_param.setter
    def require_scope_param(self, value: bool):
        self._update_config(OAUTH2_REQUIRE_SCOPE_PARAM=value)

    @property
    def require_state_param(self) -> bool:
        """Whether the ``state`` parameter is mandatory in authorization
        requests.
        """
        return self._config.OAUTH2_REQUIRE_STATE_PARAM

    @require_state_param.setter
    def require_state_param(self, value: bool):
        self._update_config(OAUTH2_REQUIRE_STATE_PARAM=value)

    @property
    def default_scope(self) -> Optional[str]:
        """Scope used when ``scope`` is absent and not required."""
        return self._config.OAUTH2_DEFAULT_SCOPE

    @default_scope.setter
    def default_scope(self, value: Optional[str]):
        self._update_config(OAUTH2_DEFAULT_SCOPE=value)

    @property
    def storages(self) -> StorageRegistry:
        return self._storages

    def register_storage(self, role: str, storage) -> 'AuthorizationServer':
        """Bind a storage to one of the roles ``client``, ``session``,
        ``access_token``, ``refresh_token``, ``auth_code`` and ``scope``.
        A later call for the same role replaces the previous storage.
        """
        self._storages.register(role, storage)
        return self

    def get_storage(self, role: str):
        """Return the storage of ``role``. A missing storage is a deployment
        defect and raises :class:`ServerError`.
        """
        return self._storages.get(role)

    def add_grant_type(self, grant: BaseGrant, identifier: str = None) -> 'AuthorizationServer':
        """Enable a grant type. The grant is bound to this server and
        registered under ``identifier`` (its own identifier by default),
        replacing any grant registered under the same identifier::

            server.add_grant_type(AuthorizationCodeGrant())
            server.add_grant_type(RefreshTokenGrant())

        :param grant: a grant instance
        :param identifier: the ``grant_type`` value served by the grant
        """
        if identifier is None:
            identifier = grant.identifier

        grant.set_authorization_server(self)
        self._grant_types[identifier] = grant

        if grant.response_type is not None:
            self._response_types.append(grant.response_type)

        log.debug('Register grant type %s as %r', identifier, grant)
        return self

    def has_grant_type(self, identifier: str) -> bool:
        return identifier in self._grant_types

    def get_grant_type(self, identifier: str) -> BaseGrant:
        grant = self._grant_types.get(identifier)
        if grant is None:
            raise UnsupportedGrantTypeError(identifier)
        return grant

    @property
    def response_types(self) -> Tuple[str, ...]:
        """Response types of the registered grants, in registration order."""
        return tuple(self._response_types)

    def validate(self):
        """Check that every storage needed by the registered grants is
        bound. Call it once the server is assembled.
        """
        for identifier, grant in self._grant_types.items():
            missing = self._storages.missing(grant.REQUIRED_STORAGES)
            if missing:
                raise ServerError(
                    'Grant type "{}" requires the storage interface(s): {}'.format(identifier, ', '.join(missing)),
                )

    def register_client_auth_method(self, method: str, func: ExtractCredentialsFn):
        """Add more client credential extraction methods. The default methods
        are:

        * client_secret_post: The client uses the HTTP POST parameters
        * client_secret_basic: The client uses HTTP Basic

        An example of a custom method::

            def extract_custom(request, extra_input):
                return request.headers.get('X-Client-Id'), request.headers.get('X-Client-Secret')

            server.register_client_auth_method('custom', extract_custom)
        """
        self._client_auth.register(method, func)

    async def authenticate_client(
        self,
        request: OAuth2Request,
        extra_input: Mapping[str, Any],
        grant_type: str,
        redirect_uri: str = None,
    ) -> ClientMixin:
        return await self._client_auth.authenticate(
            client_storage=self.get_storage('client'),
            request=request,
            extra_input=extra_input,
            grant_type=grant_type,
            redirect_uri=redirect_uri,
        )

    @property
    def token_type(self) -> str:
        return self._token_generator.TOKEN_TYPE

    def can_issue_refresh_token(self) -> bool:
        return self.has_grant_type('refresh_token') and self._token_generator.can_refresh

    def generate_access_token(self, grant_type: str, client: ClientMixin, scope: str = None, expires_in: int = None) -> str:
        return self._token_generator.generate_access_token(grant_type, client, scope, expires_in)

    def generate_refresh_token(self, grant_type: str, client: ClientMixin, scope: str = None, expires_in: int = None) -> Optional[str]:
        return self._token_generator.generate_refresh_token(grant_type, client, scope, expires_in)

    @staticmethod
    def generate_auth_code() -> str:
        return generate_token(AUTH_CODE_LENGTH)

    def create_context(self, request: OAuth2Request) -> OAuthContext:
        """Bind ``request`` to the configuration in force right now."""
        return OAuthContext(request=request, config=self._config)

    async def issue_access_token(self, request: OAuth2Request, extra_input: Mapping[str, Any] = None) -> OAuth2Token:
        """Issue an access token for the token request ``request``.

        ``grant_type`` is read from the form encoded body of the request,
        ``extra_input`` supplements the other parameters. The result of the
        grant type is returned unmodified and its errors are not caught.

        :param request: OAuth2Request instance
        :param extra_input: parameters taking precedence over the request's
        :return: token payload
        """
        grant_type = request.grant_type
        if grant_type is None:
            raise InvalidRequestError('grant_type')

        # Ensure grant type is one that is recognised and is enabled
        if grant_type not in self._grant_types:
            raise ClientError(grant_type, kind=ErrorKind.UNSUPPORTED_GRANT_TYPE)

        grant = self.get_grant_type(grant_type)
        context = self.create_context(request)
        log.debug('Dispatching grant_type %s request to %r.', grant_type, grant)
        return await grant.complete_flow(context, extra_input or {})

    @classmethod
    def _create_bearer_token_generator(cls, config: OAuthSetting) -> BearerTokenGenerator:
        """Create a generator for the ``access_token`` and ``refresh_token``
        values, configured by:

        1. OAUTH2_ACCESS_TOKEN_GENERATOR: Boolean, import string or callable, default is True.
        2. OAUTH2_REFRESH_TOKEN_GENERATOR: Boolean, import string or callable, default is True.
        """
        access_token_generator = create_token_generator(config.OAUTH2_ACCESS_TOKEN_GENERATOR, ACCESS_TOKEN_LENGTH)
        refresh_token_generator = create_token_generator(
            config.OAUTH2_REFRESH_TOKEN_GENERATOR,
            REFRESH_TOKEN_LENGTH,
            allow_none=True,
        )
        return BearerTokenGenerator(
            access_token_generator=access_token_generator,
            refresh_token_generator=refresh_token_generator,
        )
