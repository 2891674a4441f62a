import httpx
import pytest

from mealmate.infra.api_client import (
    ApiClient,
    ApiError,
    AuthExpiredError,
    NetworkError,
    RequestTimeoutError,
)
from mealmate.infra.Plan_Repository import PlanRepository
from mealmate.tests.fake_backend import ADMIN_TOKEN


@pytest.mark.asyncio
async def test_bearer_token_is_attached(backend, storage, api):
    storage.set_token(ADMIN_TOKEN)
    data = await api.get("/api/auth/me")
    assert data["user"]["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_401_clears_session_and_fires_callback(backend, storage):
    expired = []
    storage.set_token("stale-token")
    async with backend.client(storage, on_auth_expired=lambda: expired.append(True)) as api:
        with pytest.raises(AuthExpiredError) as info:
            await api.get("/api/auth/me")
    assert info.value.status_code == 401
    assert info.value.message == "Invalid or expired token"
    assert expired == [True]
    assert storage.get_token() is None


@pytest.mark.asyncio
async def test_401_without_auth_is_a_plain_error(backend, storage, api):
    storage.set_token(ADMIN_TOKEN)
    with pytest.raises(ApiError) as info:
        await api.post("/api/auth/login", json={"email": "ada@example.com", "password": "wrong"}, auth=False)
    assert not isinstance(info.value, AuthExpiredError)
    assert info.value.message == "Invalid email or password"
    assert storage.get_token() == ADMIN_TOKEN


@pytest.mark.asyncio
async def test_error_message_from_body_or_status(backend, api):
    with pytest.raises(ApiError) as info:
        await PlanRepository(api).get_by_date("2024-06-10")
    assert info.value.status_code == 404
    assert info.value.message == "Plan not found"

    async def handler(request):
        return httpx.Response(502, text="bad gateway")

    async with ApiClient("http://test", transport=httpx.MockTransport(handler)) as bare:
        with pytest.raises(ApiError) as info:
            await bare.get("/anything")
    assert info.value.message == "Request failed with status code 502"


@pytest.mark.asyncio
async def test_empty_body_is_none():
    async def handler(request):
        return httpx.Response(204)

    async with ApiClient("http://test/", transport=httpx.MockTransport(handler)) as api:
        assert api.base_url == "http://test"
        assert await api.delete("/api/plans/2024-06-10") is None


@pytest.mark.asyncio
async def test_transport_failures_become_network_errors():
    async def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with ApiClient("http://test", transport=httpx.MockTransport(unreachable)) as api:
        with pytest.raises(NetworkError) as info:
            await api.get("/health")
    assert info.value.message == "Network error - cannot reach server at http://test"

    async with ApiClient("http://test", transport=httpx.MockTransport(slow)) as api:
        with pytest.raises(RequestTimeoutError) as info:
            await api.get("/health")
    assert "timeout" in info.value.message.lower()
