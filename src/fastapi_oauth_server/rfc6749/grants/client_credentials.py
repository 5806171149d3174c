"""
    fastapi_oauth_server.rfc6749.grants.client_credentials
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Client Credentials Grant per `Section 4.4`_.

    .. _`Section 4.4`: https://tools.ietf.org/html/rfc6749#section-4.4
"""
import logging
from typing import Any, Mapping

from ...common.context import OAuthContext
from ..wrappers import OAuth2Token
from .base import BaseGrant

log = logging.getLogger(__name__)


class ClientCredentialsGrant(BaseGrant):
    """The client can request an access token using only its client
    credentials when the client is requesting access to the protected
    resources under its control. The session is owned by the client itself
    and no refresh token is issued.
    """
    GRANT_TYPE = 'client_credentials'

    async def complete_flow(self, context: OAuthContext, extra_input: Mapping[str, Any]) -> OAuth2Token:
        """The client makes a request to the token endpoint by adding the
        following parameters using the "application/x-www-form-urlencoded"
        format:

        grant_type
             REQUIRED.  Value MUST be set to "client_credentials".

        scope
             OPTIONAL.  The scope of the access request.

        .. code-block:: http

            POST /token HTTP/1.1
            Host: server.example.com
            Content-Type: application/x-www-form-urlencoded

            grant_type=client_credentials&client_id=s6BhdRkqt3
            &client_secret=7Fjfp0ZBr1KtDRbnfVdmIw
        """
        client = await self.authenticate_token_endpoint_client(context, extra_input)
        client_id = client.get_client_id()
        log.debug('Validate token request of %r', client_id)

        scopes = await self.validate_requested_scope(
            context,
            self.get_param(context.request.form, 'scope', extra_input),
            client_id,
        )
        self.execute_hook('after_validate_token_request')

        session = await self.create_session(context, client, 'client', client_id, scopes)
        return await self.issue_token(
            context,
            client,
            session,
            [scope.get_scope() for scope in scopes],
            include_refresh_token=False,
        )
