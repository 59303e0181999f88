# proxy package
from .server import create_app, ProxySettings, ProxyRequest, parse_proxy_request

__all__ = [
    'create_app',
    'ProxySettings',
    'ProxyRequest',
    'parse_proxy_request'
]
