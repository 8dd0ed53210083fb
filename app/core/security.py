"""
Security headers and no-cache static file serving.
"""
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
    "script-src 'self' 'unsafe-inline' https://twemoji.maxcdn.com https://cdn.jsdelivr.net "
    "https://unpkg.com https://cdnjs.cloudflare.com; "
    "font-src 'self' https://fonts.gstatic.com https://github.com; "
    "img-src 'self' data: https:; "
    "connect-src 'self'"
)

# Swagger UI pulls its assets from a CDN
CSP_EXEMPT_PATHS = {"/api/swagger", "/api/redoc", "/openapi.json"}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds CSP and the usual hardening headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if "X-Content-Type-Options" not in response.headers:
            response.headers["X-Content-Type-Options"] = "nosniff"

        if "X-Frame-Options" not in response.headers:
            response.headers["X-Frame-Options"] = "SAMEORIGIN"

        if "Referrer-Policy" not in response.headers:
            response.headers["Referrer-Policy"] = "no-referrer"

        if request.url.path in CSP_EXEMPT_PATHS:
            return response

        if "Content-Security-Policy" not in response.headers:
            response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY

        return response


class NoCacheStaticFiles(StaticFiles):
    """StaticFiles that tells browsers and CDNs never to cache."""

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        response.headers["Surrogate-Control"] = "no-store"
        return response
