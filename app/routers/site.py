"""
Site Router - single page, legacy redirects, SEO files, analytics and
integration webhooks.
"""
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import (
    FileResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)
from pydantic import ValidationError

from app.core.config import Settings, get_settings
from app.models.inquiry import AnalyticsEvent
from app.services.analytics_service import record_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["site"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "Surrogate-Control": "no-store",
}

# Old multi-page routes now live as sections of the single page
LEGACY_REDIRECTS = {
    "/workflows": "/#products",
    "/products": "/#products",
    "/services": "/#services",
    "/case-studies": "/#case-studies",
    "/about": "/#about",
    "/contact": "/#contact",
    "/workflows/material-management": "/#products",
}

PRODUCT_PAGES = ("focusflow", "supplychain", "pulsekpi", "autocaption", "copyforge")

SITEMAP_SECTIONS = [
    ("/", "weekly", "1.0"),
    ("/#services", "monthly", "0.8"),
    ("/#products", "weekly", "0.9"),
    ("/#case-studies", "monthly", "0.7"),
    ("/#about", "monthly", "0.6"),
    ("/#contact", "monthly", "0.7"),
]


def index_response(settings: Settings, status_code: int = 200) -> FileResponse:
    """Serve the single page with caching disabled."""
    return FileResponse(
        Path(settings.static_dir) / "index.html",
        status_code=status_code,
        headers=NO_CACHE_HEADERS,
        media_type="text/html",
    )


def _base_url(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


@router.get("/", include_in_schema=False)
async def home(settings: Settings = Depends(get_settings)):
    """Serve the main page (merged site)."""
    logger.info("Serving main page (merged site)")
    return index_response(settings)


def _make_redirect(source: str, target: str):
    async def redirect():
        logger.info(f"Redirecting {source} to {target}")
        return RedirectResponse(target, status_code=status.HTTP_302_FOUND)
    return redirect


for _source, _target in LEGACY_REDIRECTS.items():
    for _path in (_source, f"{_source}/"):
        router.add_api_route(
            _path, _make_redirect(_path, _target), methods=["GET"], include_in_schema=False
        )

for _product in PRODUCT_PAGES:
    _path = f"/products/{_product}"
    router.add_api_route(
        _path, _make_redirect(_path, "/#products"), methods=["GET"], include_in_schema=False
    )


@router.get("/workflows/material-management/demo")
async def material_management_demo(settings: Settings = Depends(get_settings)):
    logger.info("Material management demo requested")
    return {
        "message": "Material Management Demo coming soon",
        "contact": settings.contact_email,
        "status": "development",
        "redirect_to": "/#products",
    }


@router.post("/api/analytics")
async def track_analytics(request: Request, settings: Settings = Depends(get_settings)):
    """Log an analytics event sent by the page."""
    try:
        event = AnalyticsEvent.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.error(f"Analytics error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False},
        )

    record_event(event, settings.site_type)
    return {"success": True}


@router.post("/api/webhook/material-order")
async def material_order_webhook(request: Request):
    """
    Receive a material order from a client system.

    No downstream integration yet; orders are logged for processing.
    """
    body = await request.body()
    try:
        order = json.loads(body)
        if not isinstance(order, dict):
            raise ValueError("order must be a JSON object")
    except ValueError as e:
        logger.error(f"Webhook error: {e}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid webhook data"},
        )

    logger.info(f"Material order received: {order}")
    return {
        "success": True,
        "orderId": order.get("orderId") or int(time.time() * 1000),
        "status": "received",
        "note": "Order logged for processing",
    }


@router.get("/api/docs")
async def api_directory(settings: Settings = Depends(get_settings)):
    """Describe the public API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "port": settings.port,
        "site_type": settings.site_type,
        "endpoints": {
            "POST /api/contact": "Submit contact form (proxied to n8n)",
            "POST /api/assessment": "Submit ROI assessment (scored, proxied to n8n)",
            "POST /api/assessment/preview": "Instant ROI assessment preview",
            "POST /api/analytics": "Track analytics events",
            "POST /api/webhook/material-order": "Material order webhook",
            "GET /health": "Health check",
            "GET /": "Main homepage (merged site)",
            "GET /products": "Redirect to /#products",
            "GET /services": "Redirect to /#services",
            "GET /about": "Redirect to /#about",
            "GET /contact": "Redirect to /#contact",
        },
        "redirects": {
            source: target
            for source, target in LEGACY_REDIRECTS.items()
            if source != "/workflows/material-management"
        },
        "integrations": {
            "n8n_webhook": bool(settings.n8n_webhook_url),
            "n8n_analytics": False,
            "n8n_material": False,
        },
        "documentation": f"Contact {settings.contact_email} for API access",
    }


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(request: Request):
    base_url = _base_url(request)
    lastmod = datetime.now(timezone.utc).date().isoformat()
    urls = "".join(
        f"""
    <url>
        <loc>{base_url}{path}</loc>
        <lastmod>{lastmod}</lastmod>
        <changefreq>{changefreq}</changefreq>
        <priority>{priority}</priority>
    </url>"""
        for path, changefreq, priority in SITEMAP_SECTIONS
    )
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{urls}\n</urlset>"
    )
    return Response(content=xml, media_type="text/xml")


@router.get("/robots.txt", include_in_schema=False)
async def robots(request: Request):
    robots_txt = (
        "User-agent: *\n"
        "Allow: /\n"
        "Disallow: /api/\n"
        "Disallow: /health\n"
        "\n"
        f"Sitemap: {_base_url(request)}/sitemap.xml"
    )
    return PlainTextResponse(robots_txt)
