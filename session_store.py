# session_store.py
from __future__ import annotations

import asyncio
import logging
import threading
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Tuple

from pydantic import ValidationError

from errors import SessionCorruptedError
from models import SessionState

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 1800


def _decode(sid: str, raw: str) -> SessionState:
    try:
        return SessionState.model_validate_json(raw)
    except ValidationError as exc:
        raise SessionCorruptedError(f"invalid session payload for {sid}") from exc


class BaseStore:
    """get(sid) -> SessionState | None, set(sid, state). O estado é guardado serializado."""

    def get(self, sid: str) -> Optional[SessionState]:
        raise NotImplementedError

    def set(self, sid: str, st: SessionState) -> None:
        raise NotImplementedError

    def delete(self, sid: str) -> None:
        raise NotImplementedError


class MemoryStore(BaseStore):
    """
    Store em memória do processo. Sessões expiradas somem na leitura e numa
    varredura feita durante `set`, no máximo a cada ttl/10 segundos.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.ttl_seconds = ttl_seconds
        self.sweep_interval = max(ttl_seconds / 10, 1)
        self._mem: Dict[str, str] = {}
        self._exp: Dict[str, float] = {}
        self._lock = threading.RLock()
        self._last_sweep = time.time()

    def get(self, sid: str) -> Optional[SessionState]:
        with self._lock:
            exp = self._exp.get(sid)
            if exp and time.time() > exp:
                self._mem.pop(sid, None)
                self._exp.pop(sid, None)
                logger.info("⌛ session %s expired", sid)
                return None
            raw = self._mem.get(sid)
        return _decode(sid, raw) if raw is not None else None

    def set(self, sid: str, st: SessionState) -> None:
        self._write(sid, st.model_dump_json())

    def _write(self, sid: str, raw: str) -> None:
        now = time.time()
        with self._lock:
            self._mem[sid] = raw
            self._exp[sid] = now + self.ttl_seconds
            if now - self._last_sweep >= self.sweep_interval:
                self._last_sweep = now
                removed = self.purge_expired()
                if removed:
                    logger.info("🧹 purged %d expired sessions", removed)

    def delete(self, sid: str) -> None:
        with self._lock:
            self._mem.pop(sid, None)
            self._exp.pop(sid, None)

    def purge_expired(self) -> int:
        now = time.time()
        with self._lock:
            expired = [sid for sid, exp in self._exp.items() if now > exp]
            for sid in expired:
                self._mem.pop(sid, None)
                self._exp.pop(sid, None)
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._mem)


class RedisStore(BaseStore):
    def __init__(self, url: str, ttl_seconds: int = DEFAULT_TTL_SECONDS, prefix: str = "flightbot:session:"):
        import redis

        self.r = redis.Redis.from_url(url, decode_responses=True)
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def _key(self, sid: str) -> str:
        return f"{self.prefix}{sid}"

    def get(self, sid: str) -> Optional[SessionState]:
        raw = self.r.get(self._key(sid))
        if not raw:
            return None
        return _decode(sid, raw)

    def set(self, sid: str, st: SessionState) -> None:
        self.r.set(self._key(sid), st.model_dump_json(), ex=self.ttl_seconds)

    def delete(self, sid: str) -> None:
        self.r.delete(self._key(sid))


def make_store(settings) -> BaseStore:
    ttl = getattr(settings, "SESSION_TTL_SECONDS", DEFAULT_TTL_SECONDS)
    backend = (getattr(settings, "PERSIST_BACKEND", "memory") or "memory").lower()
    if backend == "redis":
        url = getattr(settings, "REDIS_URL", None)
        if not url:
            logger.warning("PERSIST_BACKEND=redis mas REDIS_URL não definido – usando MemoryStore")
            return MemoryStore(ttl_seconds=ttl)
        return RedisStore(url, ttl_seconds=ttl)
    return MemoryStore(ttl_seconds=ttl)


# ──────────────────────────────────────────────────────────────────────────────
# Exclusão mútua por sessão: no máximo um turno em andamento por session id

class SessionLocks:
    def __init__(self) -> None:
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, sid: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(sid, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[sid] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[sid]
            if users <= 1:
                del self._locks[sid]
            else:
                self._locks[sid] = (lock, users - 1)

    def active(self) -> int:
        return len(self._locks)
