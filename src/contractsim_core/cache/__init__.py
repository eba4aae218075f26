"""
Exposes the public interface of the cache package.
"""
from .service import ProxyCache, PROXY_KINDS

__all__ = [
    "ProxyCache",
    "PROXY_KINDS",
]
