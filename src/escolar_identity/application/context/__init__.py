from escolar_identity.application.context.identity_context import IdentityContext

__all__ = ["IdentityContext"]
