"""Notifier - what the identity core needs from outbound email.

The actual implementation is provided by an adapter in the
infrastructure layer (SMTP).
"""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Outbound notification capability.

    Implementations raise on delivery failure; callers decide whether a
    failure is fatal.
    """

    @abstractmethod
    def send_activation_email(self, to_email: str, activation_link: str) -> None:
        """Send the link that confirms ownership of ``to_email``."""

    @abstractmethod
    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        """Send a single-use password reset link."""
