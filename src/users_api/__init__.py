"""Users API - HTTP boundary and operator CLI for the identity core.

Architecture:
    users_api/
    ├── app.py                  # FastAPI application factory
    ├── dependencies.py         # Engine, sessions and service wiring
    ├── exception_handlers.py   # ErrorKind -> HTTP status mapping
    ├── routers/                # /auth and /users endpoints
    ├── schemas/                # Request/response models
    └── cli/                    # Typer commands

Run with:
    users-api serve
"""
