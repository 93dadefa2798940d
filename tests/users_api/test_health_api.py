"""API tests for the health endpoint and error envelope."""

from fastapi import APIRouter

from users_api.app import API_VERSION


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": API_VERSION}


async def test_unexpected_error_is_opaque(app, client):
    router = APIRouter()

    @router.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    app.include_router(router)

    response = await client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "detail": "An internal error occurred",
        "code": "INTERNAL_ERROR",
    }
