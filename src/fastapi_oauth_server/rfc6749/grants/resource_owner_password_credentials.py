"""
    fastapi_oauth_server.rfc6749.grants.resource_owner_password_credentials
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Resource Owner Password Credentials Grant per `Section 4.3`_.

    .. _`Section 4.3`: https://tools.ietf.org/html/rfc6749#section-4.3
"""
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from ...common.context import OAuthContext
from ..errors import InvalidCredentialsError, ServerError
from ..wrappers import OAuth2Token
from .base import BaseGrant

log = logging.getLogger(__name__)

VerifyCredentialsFn = Callable[[str, str], Awaitable[Optional[str]]]


class ResourceOwnerPasswordCredentialsGrant(BaseGrant):
    """The resource owner password credentials grant type is suitable in
    cases where the resource owner has a trust relationship with the
    client. Resource owners are verified by ``verify_credentials`` or by
    overriding :meth:`authenticate_user`::

        async def verify_credentials(username, password):
            user = await find_user(username)
            if user and user.check_password(password):
                return user.id

        server.add_grant_type(ResourceOwnerPasswordCredentialsGrant(verify_credentials))
    """
    GRANT_TYPE = 'password'

    def __init__(self, verify_credentials: VerifyCredentialsFn = None):
        super().__init__()
        self._verify_credentials = verify_credentials

    async def authenticate_user(self, username: str, password: str) -> Optional[str]:
        """Return the id of the resource owner identified by ``username`` and
        ``password``, or ``None`` when the credentials are incorrect.
        """
        if self._verify_credentials is None:
            raise ServerError('No credentials verifier is set for grant type "{}"'.format(self.identifier))
        return await self._verify_credentials(username, password)

    async def complete_flow(self, context: OAuthContext, extra_input: Mapping[str, Any]) -> OAuth2Token:
        """The client makes a request to the token endpoint by adding the
        following parameters using the "application/x-www-form-urlencoded"
        format:

        grant_type
             REQUIRED.  Value MUST be set to "password".

        username
             REQUIRED.  The resource owner username.

        password
             REQUIRED.  The resource owner password.

        scope
             OPTIONAL.  The scope of the access request.
        """
        client = await self.authenticate_token_endpoint_client(context, extra_input)
        client_id = client.get_client_id()
        log.debug('Validate token request of %r', client_id)

        form = context.request.form
        username = self.require_param(form, 'username', extra_input)
        password = self.require_param(form, 'password', extra_input)

        user_id = await self.authenticate_user(username, password)
        if not user_id:
            raise InvalidCredentialsError()

        scopes = await self.validate_requested_scope(
            context,
            self.get_param(form, 'scope', extra_input),
            client_id,
        )
        self.execute_hook('after_validate_token_request')

        session = await self.create_session(context, client, 'user', user_id, scopes)
        return await self.issue_token(
            context,
            client,
            session,
            [scope.get_scope() for scope in scopes],
            include_refresh_token=True,
        )
