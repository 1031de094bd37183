"""AuthProvider adapters."""

from escolar_identity.infrastructure.auth.local_auth_provider import LocalAuthProvider
from escolar_identity.infrastructure.auth.supabase_auth_provider import (
    SupabaseAuthProvider,
)

__all__ = ["LocalAuthProvider", "SupabaseAuthProvider"]
