from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool
from pydantic import ValidationError

from hikeclub.api.router import PROXY_PATH
from hikeclub.core.config import Settings, logger
from hikeclub.core.templates import render_fragment, templates
from hikeclub.finder.client import ProxyClient
from hikeclub.finder.controller import SubmissionController
from hikeclub.finder.state import IDLE_LABEL, LOADING_LABEL
from hikeclub.schemas.hike import ContactMessage
from hikeclub.site.calculator import INVALID_DISTANCE_MESSAGE, estimate_hike, parse_number
from hikeclub.site.contact import send_contact_message
from hikeclub.site.hikes import UPCOMING_HIKES, reveal_delay_class

router = APIRouter()

CONTACT_SUCCESS_MESSAGE = "Thanks for your message! We'll get back to you soon."
CONTACT_FAILURE_MESSAGE = "Oops! Something went wrong. We couldn't send your message."

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

@asynccontextmanager
async def open_proxy_client(request: Request, settings: Settings) -> AsyncIterator[ProxyClient]:
    """
    Opens an HTTP client for the trail finder proxy: the configured PROXY_URL,
    or this same application through an in-process ASGI transport.
    """
    if settings.PROXY_URL:
        async with httpx.AsyncClient(timeout=settings.PROXY_TIMEOUT_SECONDS) as http_client:
            yield ProxyClient(http_client, settings.PROXY_URL)
        return

    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://hikeclub.internal",
        timeout=settings.PROXY_TIMEOUT_SECONDS,
    ) as http_client:
        yield ProxyClient(http_client, f"{settings.API_V1_STR}{PROXY_PATH}")

TRAIL_FINDER_REGION = "trail-finder-result"
CALCULATOR_REGION = "calculator-result"
CONTACT_REGION = "contact-result"

def render_index(request: Request, settings: Settings, results: Optional[Dict[str, str]] = None):
    hikes = [(hike, reveal_delay_class(i)) for i, hike in enumerate(UPCOMING_HIKES)]
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "project_name": settings.PROJECT_NAME,
            "hikes": hikes,
            "trail_finder_label": IDLE_LABEL,
            "trail_finder_loading_label": LOADING_LABEL,
            "results": results or {},
        },
    )

def respond_with_fragment(request: Request, settings: Settings, region: str, fragment: str):
    """
    htmx requests get the bare fragment, swapped into `region` by the page.
    A plain form post gets the whole page back with the fragment already in place.
    """
    if request.headers.get("HX-Request") == "true":
        return HTMLResponse(fragment)
    return render_index(request, settings, {region: fragment})

@router.get("/", response_class=HTMLResponse, tags=["Site"])
async def index_page(request: Request, settings: Settings = Depends(get_app_settings)):
    """The club landing page with the hikes grid and the three forms."""
    return render_index(request, settings)

@router.get("/health", tags=["Site"])
def health_check(settings: Settings = Depends(get_app_settings)):
    """A simple health check endpoint to confirm the API is running."""
    return {"status": "ok", "message": f"Welcome to the {settings.PROJECT_NAME} API!"}

@router.post("/trail-finder", response_class=HTMLResponse, tags=["Site"])
async def trail_finder_submit(request: Request, settings: Settings = Depends(get_app_settings)):
    """Runs one trail finder submission and returns the result fragment."""
    form = await request.form()
    async with open_proxy_client(request, settings) as proxy_client:
        controller = SubmissionController(proxy_client)
        await controller.submit_form(form)
    return respond_with_fragment(request, settings, TRAIL_FINDER_REGION, controller.fragment)

@router.post("/calculator", response_class=HTMLResponse, tags=["Site"])
async def calculator_submit(request: Request, settings: Settings = Depends(get_app_settings)):
    form = await request.form()
    distance = parse_number(form.get("distance"))
    elevation = parse_number(form.get("elevation")) or 0
    pace = form.get("pace") or "normal"

    if distance is None:
        fragment = render_fragment("fragments/calculator_error.html", message=INVALID_DISTANCE_MESSAGE)
    else:
        try:
            estimate = estimate_hike(distance, elevation, pace)
        except ValueError as e:
            fragment = render_fragment("fragments/calculator_error.html", message=str(e))
        else:
            fragment = render_fragment("fragments/calculator_result.html", estimate=estimate)
    return respond_with_fragment(request, settings, CALCULATOR_REGION, fragment)

@router.post("/contact", response_class=HTMLResponse, tags=["Site"])
async def contact_submit(request: Request, settings: Settings = Depends(get_app_settings)):
    form = await request.form()
    try:
        contact = ContactMessage(
            name=form.get("name") or "",
            email=form.get("email") or "",
            message=form.get("message") or "",
        )
    except ValidationError as e:
        logger.warning(f"Rejected contact form submission: {e.error_count()} invalid field(s).")
        sent = False
    else:
        # SMTP login and send block, so they run in the threadpool.
        sent = await run_in_threadpool(send_contact_message, contact, settings)

    if sent:
        fragment = render_fragment("fragments/contact_message.html", status="success", message=CONTACT_SUCCESS_MESSAGE)
    else:
        fragment = render_fragment("fragments/contact_message.html", status="error", message=CONTACT_FAILURE_MESSAGE)
    return respond_with_fragment(request, settings, CONTACT_REGION, fragment)
