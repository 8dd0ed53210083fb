"""
In-memory sliding window rate limiting.

Provides:
- RateLimiter: per-identifier sliding window
- RateLimitMiddleware: site-wide per-IP limit
- contact_rate_limit: stricter per-IP limit for form submissions

State is per process and lost on restart.
"""
import logging
import threading
import time
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding window limiter keyed by client identifier.

    Each allowed request stores its timestamp; a request is allowed while fewer
    than ``limit`` timestamps fall inside the last ``window_seconds``.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self.buckets: Dict[str, List[float]] = defaultdict(list)
        self.last_cleanup = clock()
        self._lock = threading.Lock()

    def _cleanup_if_needed(self, now: float):
        """Drop idle identifiers every few minutes."""
        if now - self.last_cleanup < 300:
            return
        cutoff = now - self.window_seconds
        for key in list(self.buckets.keys()):
            self.buckets[key] = [t for t in self.buckets[key] if t > cutoff]
            if not self.buckets[key]:
                del self.buckets[key]
        self.last_cleanup = now

    def hit(self, identifier: str) -> Tuple[bool, int, int]:
        """
        Record a request and check it against the limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        with self._lock:
            now = self.clock()
            self._cleanup_if_needed(now)

            cutoff = now - self.window_seconds
            recent = [t for t in self.buckets[identifier] if t > cutoff]

            if len(recent) >= self.limit:
                self.buckets[identifier] = recent
                retry_after = int(recent[0] + self.window_seconds - now) + 1
                return False, 0, retry_after

            recent.append(now)
            self.buckets[identifier] = recent
            return True, self.limit - len(recent), 0

    def reset(self, identifier: Optional[str] = None):
        with self._lock:
            if identifier is None:
                self.buckets.clear()
            else:
                self.buckets.pop(identifier, None)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Site-wide per-IP limit (100 requests per 15 minutes by default)."""

    def __init__(
        self,
        app,
        limiter: RateLimiter,
        exempt_paths: Iterable[str] = ("/health",),
        message: str = "Too many requests from this IP, please try again later.",
    ):
        super().__init__(app)
        self.limiter = limiter
        self.exempt_paths = set(exempt_paths)
        self.message = message

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        ip = client_ip(request)
        allowed, remaining, retry_after = self.limiter.hit(ip)
        if not allowed:
            logger.warning(f"Rate limit exceeded: {ip} {request.url.path}")
            return PlainTextResponse(
                self.message,
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response


def get_contact_limiter(request: Request) -> RateLimiter:
    """Limiter shared by the contact and assessment endpoints (set up in create_app)."""
    return request.app.state.contact_limiter


async def contact_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_contact_limiter),
) -> None:
    """Dependency: at most 5 form submissions per IP per hour by default."""
    ip = client_ip(request)
    allowed, _, retry_after = limiter.hit(ip)
    if not allowed:
        logger.warning(f"Contact form rate limit exceeded: {ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many contact form submissions, please try again later.",
            headers={"Retry-After": str(retry_after)},
        )
