"""
service_tokens – encrypted claims tokens for service-to-service authentication.

Import path convention::

    from service_tokens.security.jwe import TokenService
    from service_tokens.config.settings import TokenSettings
    from service_tokens.kernel.errors import TokenExpiredError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
