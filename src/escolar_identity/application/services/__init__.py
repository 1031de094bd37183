"""Application services for identity provisioning and sign-in."""

from escolar_identity.application.services.account_provisioner import (
    AccountProvisioner,
)
from escolar_identity.application.services.authentication_service import (
    AuthenticationService,
)
from escolar_identity.application.services.login_resolver import LoginResolver
from escolar_identity.application.services.session_policy import SessionPolicy

__all__ = [
    "AccountProvisioner",
    "AuthenticationService",
    "LoginResolver",
    "SessionPolicy",
]
