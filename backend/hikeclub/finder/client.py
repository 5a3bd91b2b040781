import httpx

from hikeclub.core.config import logger
from hikeclub.core.errors import ErrorKind, TrailFinderError
from hikeclub.schemas.proxy import TrailSuggestionRequest

class ProxyClient:
    """
    Calls the Gemini proxy over HTTP, the way the browser widget does.
    Makes exactly one POST per call and never retries.
    """

    def __init__(self, http_client: httpx.AsyncClient, url: str):
        self._http = http_client
        self.url = url

    async def request_suggestion(self, request: TrailSuggestionRequest) -> str:
        """Returns the proxy's `text`, or raises a TrailFinderError naming what went wrong."""
        try:
            response = await self._http.post(
                self.url,
                json=request.to_payload(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Could not reach the trail finder proxy at {self.url}: {e}")
            raise TrailFinderError(
                ErrorKind.UPSTREAM_FAILURE, "The trail finder proxy could not be reached.", details=type(e).__name__
            ) from e

        if response.status_code != 200:
            raise TrailFinderError(
                _kind_for_status(response.status_code),
                f"Trail finder proxy answered {response.status_code}.",
                details=_error_message(response),
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TrailFinderError(
                ErrorKind.MALFORMED_RESPONSE, "Trail finder proxy answered with a body that is not JSON."
            ) from e

        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise TrailFinderError(ErrorKind.MALFORMED_RESPONSE, "Trail finder proxy answer has no 'text'.")
        return text

def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code == 400:
        return ErrorKind.BAD_REQUEST
    if status_code == 405:
        return ErrorKind.METHOD_NOT_ALLOWED
    return ErrorKind.UPSTREAM_FAILURE

def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return str(body)[:200]
