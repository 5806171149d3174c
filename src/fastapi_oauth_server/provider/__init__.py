from .authorization_server import AuthorizationServer

__all__ = ['AuthorizationServer']
