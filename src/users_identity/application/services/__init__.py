"""Application services of the identity core."""

from users_identity.application.services.access_control_service import (
    AccessControlService,
)
from users_identity.application.services.activation_service import ActivationService
from users_identity.application.services.error_boundary import internal_errors
from users_identity.application.services.session_service import SessionService

__all__ = [
    "AccessControlService",
    "ActivationService",
    "SessionService",
    "internal_errors",
]
