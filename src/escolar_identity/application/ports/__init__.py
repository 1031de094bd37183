"""Application layer ports (aka interfaces)."""

from escolar_identity.application.ports.auth_provider import AuthProvider, AuthSession

__all__ = ["AuthProvider", "AuthSession"]
