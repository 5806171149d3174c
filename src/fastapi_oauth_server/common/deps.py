from typing import Any, Callable, Coroutine

from starlette.requests import Request

from ..rfc6749.wrappers import OAuth2Request
from ..utils.functions import create_oauth_request


class OAuthDependency(object):
    """
    OAuth Dependency for FastAPI
    """

    @property
    def get_oauth_request(self) -> Callable[..., Coroutine[Any, Any, OAuth2Request]]:
        """
        Get OAuth Request Dependency for FastAPI
        :return:
        """

        async def build_oauth_request(request: Request) -> OAuth2Request:
            return await create_oauth_request(request)

        return build_oauth_request
