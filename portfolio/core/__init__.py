# Core package initialization
# Configuration, security and cross-cutting helpers

from . import auth_decorators, exceptions, security

__all__ = [
    "auth_decorators",
    "exceptions",
    "security",
]
