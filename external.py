# external.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from errors import ExternalServiceError, ExternalServiceTimeout

logger = logging.getLogger(__name__)


async def call_external(service: str, fn: Callable[..., Any], *args: Any, timeout: float = 10.0) -> Any:
    """
    Executa uma chamada bloqueante (Ticket/AI Service) numa thread, limitada por timeout.
    Timeout e qualquer exceção do cliente viram ExternalServiceError.
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.error("⏱️ %s timed out after %.1fs (%s)", service, timeout, getattr(fn, "__name__", fn))
        raise ExternalServiceTimeout(service, f"timeout after {timeout}s") from exc
    except ExternalServiceError:
        raise
    except Exception as exc:
        logger.exception("%s call failed (%s)", service, getattr(fn, "__name__", fn))
        raise ExternalServiceError(service, str(exc)) from exc
