"""Tests for the public IP probe"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from core.providers.ip_probe import DETECTION_FAILED, UNDETECTED, get_public_ip


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


def _patched_client(responses):
    client = MagicMock()
    client.get = AsyncMock(side_effect=responses)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return patch("core.providers.ip_probe.httpx.AsyncClient", return_value=client), client


@pytest.mark.asyncio
async def test_first_ok_service_wins():
    patcher, client = _patched_client([_response(payload={"ip": "203.0.113.7"})])
    with patcher:
        assert await get_public_ip() == "203.0.113.7"
    assert client.get.await_count == 1


@pytest.mark.asyncio
async def test_falls_through_errors_and_reads_query_field():
    patcher, client = _patched_client([
        httpx.ConnectError("refused"),
        _response(status_code=429),
        _response(payload={"query": "198.51.100.4"}),
    ])
    with patcher:
        assert await get_public_ip(services=("a", "b", "c")) == "198.51.100.4"


@pytest.mark.asyncio
async def test_ok_without_address():
    patcher, _ = _patched_client([_response(payload={"country": "ID"})])
    with patcher:
        assert await get_public_ip(services=("a",)) == UNDETECTED


@pytest.mark.asyncio
async def test_everything_failing():
    patcher, _ = _patched_client([_response(status_code=500), httpx.ReadTimeout("slow")])
    with patcher:
        assert await get_public_ip(services=("a", "b")) == DETECTION_FAILED
