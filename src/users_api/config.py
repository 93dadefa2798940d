"""API configuration adapter.

Bridges the centralized users_config settings with the API layer.
"""

from users_config.settings import Settings, get_settings


def get_api_settings() -> Settings:
    """Get settings from centralized configuration.

    Kept as its own dependency so tests can override it per app.
    """
    return get_settings()
