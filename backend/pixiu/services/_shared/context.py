"""Request-scoped context handed to every service call."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, tracing, deadline).

    The dispatch layer builds one per request and passes it through
    untouched; only services decide whether to act on it.

    :param request_id: Correlation id for logging/tracing.
    :param actor_id: Identity of the authenticated caller, when known.
    :param deadline: ``time.monotonic()`` value after which work should stop.
    """

    request_id: str | None = None
    actor_id: str | None = None
    deadline: float | None = None

    @classmethod
    def with_timeout(
        cls,
        seconds: float | None,
        *,
        request_id: str | None = None,
        actor_id: str | None = None,
    ) -> "ServiceContext":
        """Build a context whose deadline lies ``seconds`` from now."""

        deadline = time.monotonic() + seconds if seconds else None
        return cls(request_id=request_id, actor_id=actor_id, deadline=deadline)

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline
