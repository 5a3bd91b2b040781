from fastapi import APIRouter, Depends, Request

from hikeclub.core.config import logger
from hikeclub.core.errors import ErrorKind, TrailFinderError
from hikeclub.schemas.proxy import ProxyResponse
from hikeclub.services.gemini_proxy import GeminiProxyService

router = APIRouter()

PROXY_PATH = "/gemini-proxy"

def get_proxy_service(request: Request) -> GeminiProxyService:
    """The proxy service is built once at startup and stored on the application state."""
    return request.app.state.proxy_service

# Every method is routed here so that non-POST requests get the proxy's own
# JSON error body instead of the framework default.
@router.api_route(
    PROXY_PATH,
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=ProxyResponse,
    tags=["Trail Finder"],
)
async def gemini_proxy_endpoint(
    request: Request,
    proxy: GeminiProxyService = Depends(get_proxy_service),
):
    """
    Forwards a `{prompt, schema}` request to the Gemini model and returns the
    model's structured output as `{text}`.
    """
    proxy.ensure_configured()

    if request.method != "POST":
        raise TrailFinderError(ErrorKind.METHOD_NOT_ALLOWED, "Method Not Allowed")

    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Gemini proxy received a body that is not valid JSON.")
        payload = None

    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    schema = payload.get("schema") if isinstance(payload, dict) else None
    if not isinstance(prompt, str) or not prompt or not isinstance(schema, dict) or not schema:
        raise TrailFinderError(
            ErrorKind.BAD_REQUEST,
            "Bad Request: 'prompt' and 'schema' are required in the request body.",
        )

    text = await proxy.handle(prompt, schema)
    return ProxyResponse(text=text)
