"""
    The OAuth 2.0 Authorization Framework: Bearer Token Usage.

    https://tools.ietf.org/html/rfc6750
"""
from .token import BearerTokenGenerator

__all__ = ['BearerTokenGenerator']
