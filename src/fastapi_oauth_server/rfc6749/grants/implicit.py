"""
    fastapi_oauth_server.rfc6749.grants.implicit
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Implicit Grant per `Section 4.2`_.

    .. _`Section 4.2`: https://tools.ietf.org/html/rfc6749#section-4.2
"""
import logging
from typing import Any, Mapping

from ...common.context import OAuthContext
from ..errors import AccessDeniedError
from ..wrappers import OAuth2Token
from .base import AuthorizationEndpointMixin

log = logging.getLogger(__name__)


class ImplicitGrant(AuthorizationEndpointMixin):
    """The implicit grant type is used to obtain access tokens directly
    from the authorization endpoint, once the resource owner approved the
    request. No refresh token is issued.

    ``extra_input`` carries the approving resource owner as ``user_id``
    and, optionally, the already validated ``authorize_request``.
    """
    GRANT_TYPE = 'implicit'
    RESPONSE_TYPE = 'token'

    async def complete_flow(self, context: OAuthContext, extra_input: Mapping[str, Any]) -> OAuth2Token:
        params = extra_input.get('authorize_request')
        if params is None:
            params = await self.check_authorize_params(context, extra_input)

        owner_id = extra_input.get('user_id')
        if not owner_id:
            log.debug('No resource owner approved the request of %r', params.client_id)
            raise AccessDeniedError()

        context.request.client = params.client
        session = await self.create_session(
            context,
            params.client,
            extra_input.get('owner_type', 'user'),
            owner_id,
            params.scopes,
        )
        return await self.issue_token(
            context,
            params.client,
            session,
            [scope.get_scope() for scope in params.scopes],
            include_refresh_token=False,
        )
