"""Per-email failed-login counter with a time-boxed lockout."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Protocol

from ems.core.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginAttempt:
    count: int = 0
    last_failed_at: float | None = None
    locked_until: float | None = None


AttemptUpdate = Callable[[LoginAttempt | None], LoginAttempt | None]


class LoginAttemptStore(Protocol):
    """Keyed attempt storage. ``update`` must apply ``fn`` atomically per key;
    returning ``None`` from ``fn`` deletes the record."""

    def get(self, key: str) -> LoginAttempt | None:
        ...

    def update(self, key: str, fn: AttemptUpdate) -> LoginAttempt | None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryLoginAttemptStore:
    def __init__(self) -> None:
        self._records: dict[str, LoginAttempt] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> LoginAttempt | None:
        with self._lock:
            return self._records.get(key)

    def update(self, key: str, fn: AttemptUpdate) -> LoginAttempt | None:
        with self._lock:
            result = fn(self._records.get(key))
            if result is None:
                self._records.pop(key, None)
            else:
                self._records[key] = result
            return result

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def _normalize(email: str) -> str:
    return email.strip().lower()


class LoginThrottle:
    def __init__(
        self,
        store: LoginAttemptStore | None = None,
        *,
        max_attempts: int = 5,
        lock_seconds: float = 15 * 60,
        exempt_emails: Iterable[str] = (),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store if store is not None else InMemoryLoginAttemptStore()
        self.max_attempts = max_attempts
        self.lock_seconds = lock_seconds
        self.exempt_emails = frozenset(_normalize(e) for e in exempt_emails)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, store: LoginAttemptStore | None = None) -> LoginThrottle:
        return cls(
            store,
            max_attempts=settings.LOGIN_MAX_ATTEMPTS,
            lock_seconds=settings.LOGIN_LOCK_MINUTES * 60,
            exempt_emails=settings.LOGIN_THROTTLE_EXEMPT_EMAILS,
        )

    def is_exempt(self, email: str) -> bool:
        return _normalize(email) in self.exempt_emails

    def login_succeeded(self, email: str) -> None:
        self._store.delete(_normalize(email))

    def login_failed(self, email: str) -> None:
        if self.is_exempt(email):
            return

        now = self._clock()

        def _fail(attempt: LoginAttempt | None) -> LoginAttempt:
            attempt = attempt or LoginAttempt()
            count = attempt.count + 1
            locked_until = attempt.locked_until
            if count >= self.max_attempts:
                locked_until = now + self.lock_seconds
            return replace(attempt, count=count, last_failed_at=now, locked_until=locked_until)

        key = _normalize(email)
        attempt = self._store.update(key, _fail)
        if attempt and attempt.count == self.max_attempts:
            logger.info("Login locked for %s after %d failed attempts", key, attempt.count)

    def is_blocked(self, email: str) -> bool:
        if self.is_exempt(email):
            return False

        now = self._clock()
        blocked = False

        def _check(attempt: LoginAttempt | None) -> LoginAttempt | None:
            nonlocal blocked
            if attempt is None or attempt.locked_until is None:
                return attempt
            if attempt.locked_until > now:
                blocked = True
                return attempt
            # Lock window elapsed
            return None

        self._store.update(_normalize(email), _check)
        return blocked

    def failure_count(self, email: str) -> int:
        attempt = self._store.get(_normalize(email))
        return attempt.count if attempt else 0


login_throttle = LoginThrottle.from_settings(settings)
