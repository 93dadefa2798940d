"""Ports the identity core consumes."""

from users_identity.application.ports.notifier import Notifier

__all__ = ["Notifier"]
