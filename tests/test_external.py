# tests/test_external.py

import asyncio
import time

import pytest

from errors import ExternalServiceError, ExternalServiceTimeout
from external import call_external


def test_returns_value():
    assert asyncio.run(call_external("svc", lambda a, b: a + b, 2, 3)) == 5


def test_timeout_maps_to_external_error():
    with pytest.raises(ExternalServiceTimeout) as exc:
        asyncio.run(call_external("ticket_service", time.sleep, 0.3, timeout=0.05))
    assert exc.value.service == "ticket_service"
    assert isinstance(exc.value, ExternalServiceError)


def test_client_exception_is_wrapped():
    def boom():
        raise ValueError("bad payload")

    with pytest.raises(ExternalServiceError) as exc:
        asyncio.run(call_external("ai_service", boom))
    assert isinstance(exc.value.__cause__, ValueError)
    assert "bad payload" in str(exc.value)


def test_external_error_passes_through():
    original = ExternalServiceError("ticket_service", "refused")

    def raise_it():
        raise original

    with pytest.raises(ExternalServiceError) as exc:
        asyncio.run(call_external("ticket_service", raise_it))
    assert exc.value is original
