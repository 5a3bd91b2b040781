import json
import logging

import httpx
import pytest

from fakes import FakeGeminiModel, SAMPLE_TRAIL, make_settings
from hikeclub.core.errors import ErrorKind
from hikeclub.finder.client import ProxyClient
from hikeclub.finder.controller import SubmissionController
from hikeclub.finder.state import IDLE_LABEL, LOADING_LABEL, SubmissionPhase
from hikeclub.schemas.trail import PreferenceSet
from hikeclub.services.gemini_proxy import GeminiProxyService

PROXY_URL = "http://proxy.test/api/v1/gemini-proxy"
EASY = PreferenceSet(difficulties=("Easy",))


class RecordingProxy:
    """MockTransport handler that counts proxy calls and replies with a fixed response."""

    def __init__(self, status_code: int = 200, body=None, error: Exception = None):
        self.status_code = status_code
        self.body = {"text": json.dumps(SAMPLE_TRAIL)} if body is None else body
        self.error = error
        self.requests: list[httpx.Request] = []
        self.on_request = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            await self.on_request(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)


def _controller(http_client: httpx.AsyncClient) -> tuple[SubmissionController, list]:
    controller = SubmissionController(ProxyClient(http_client, PROXY_URL))
    transitions: list = []
    controller.subscribe(lambda state, control: transitions.append((state.phase, control)))
    return controller, transitions


@pytest.mark.asyncio
async def test_empty_selection_fails_without_network_call() -> None:
    proxy = RecordingProxy()
    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, transitions = _controller(http_client)
        state = await controller.submit(PreferenceSet())

    assert state.phase == SubmissionPhase.FAILED
    assert state.error == ErrorKind.EMPTY_SELECTION
    assert proxy.requests == []
    assert [phase for phase, _ in transitions] == [SubmissionPhase.VALIDATING, SubmissionPhase.FAILED]
    assert not any(control.disabled for _, control in transitions)
    assert "Please select some options!" in controller.fragment


@pytest.mark.asyncio
async def test_round_trip_through_the_real_proxy_renders_every_field() -> None:
    from main import create_app

    model = FakeGeminiModel()
    app = create_app(
        settings=make_settings(),
        proxy_service=GeminiProxyService(llm=model, model_name="gemini-2.5-flash"),
    )
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://hikeclub.test") as http_client:
        controller = SubmissionController(ProxyClient(http_client, "/api/v1/gemini-proxy"))
        state = await controller.submit(EASY)

    assert state.phase == SubmissionPhase.SUCCESS
    assert len(model.calls) == 1
    assert "vibes of any" in model.calls[0]["prompt"]
    for value in SAMPLE_TRAIL.values():
        assert value in controller.fragment


@pytest.mark.asyncio
async def test_control_is_disabled_for_the_whole_request() -> None:
    proxy = RecordingProxy()
    seen_during_request = []

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, transitions = _controller(http_client)

        async def check_control(request: httpx.Request) -> None:
            seen_during_request.append((controller.state.phase, controller.control))

        proxy.on_request = check_control
        state = await controller.submit_form({"difficulty": "Easy", "vibe": ["Forest"]})

    assert state.phase == SubmissionPhase.SUCCESS
    assert len(proxy.requests) == 1
    assert seen_during_request[0][0] == SubmissionPhase.LOADING
    assert seen_during_request[0][1].disabled
    assert seen_during_request[0][1].label == LOADING_LABEL

    phases = [phase for phase, _ in transitions]
    assert phases == [SubmissionPhase.VALIDATING, SubmissionPhase.LOADING, SubmissionPhase.SUCCESS]
    assert [control.disabled for _, control in transitions] == [False, True, False]
    assert controller.control.label == IDLE_LABEL


@pytest.mark.asyncio
async def test_loading_clears_the_previous_result() -> None:
    proxy = RecordingProxy()
    fragments_while_loading = []

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, _ = _controller(http_client)
        await controller.submit(EASY)
        assert SAMPLE_TRAIL["trailName"] in controller.fragment

        async def capture_fragment(request: httpx.Request) -> None:
            fragments_while_loading.append(controller.fragment)

        proxy.on_request = capture_fragment
        await controller.submit(EASY)

    assert fragments_while_loading == [""]


@pytest.mark.asyncio
async def test_partial_suggestion_is_malformed_response(caplog) -> None:
    partial = {k: v for k, v in SAMPLE_TRAIL.items() if k != "whyItMatches"}
    proxy = RecordingProxy(body={"text": json.dumps(partial)})

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, _ = _controller(http_client)
        with caplog.at_level(logging.ERROR, logger="hikeclub"):
            state = await controller.submit(EASY)

    assert state.phase == SubmissionPhase.FAILED
    assert state.error == ErrorKind.MALFORMED_RESPONSE
    assert state.suggestion is None
    assert "MalformedResponse" in caplog.text
    assert "try again in a few moments" in controller.fragment
    assert SAMPLE_TRAIL["trailName"] not in controller.fragment


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "proxy, expected",
    [
        (RecordingProxy(status_code=500, body={"message": "Failed to generate content from the AI service."}), ErrorKind.UPSTREAM_FAILURE),
        (RecordingProxy(status_code=400, body={"message": "Bad Request"}), ErrorKind.BAD_REQUEST),
        (RecordingProxy(status_code=405, body={"message": "Method Not Allowed"}), ErrorKind.METHOD_NOT_ALLOWED),
        (RecordingProxy(body={"answer": "no text key"}), ErrorKind.MALFORMED_RESPONSE),
        (RecordingProxy(error=httpx.ConnectError("connection refused")), ErrorKind.UPSTREAM_FAILURE),
    ],
    ids=["server-error", "bad-request", "method-not-allowed", "no-text", "unreachable"],
)
async def test_proxy_failures_end_in_failed_state(proxy: RecordingProxy, expected: ErrorKind) -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, _ = _controller(http_client)
        state = await controller.submit(EASY)

    assert state.phase == SubmissionPhase.FAILED
    assert state.error == expected
    assert len(proxy.requests) == 1
    assert not controller.control.disabled
    assert "Oops! Something went wrong." in controller.fragment


@pytest.mark.asyncio
async def test_overlapping_submit_is_refused() -> None:
    proxy = RecordingProxy()
    nested_states = []

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, _ = _controller(http_client)

        async def submit_again(request: httpx.Request) -> None:
            nested_states.append(await controller.submit(EASY))

        proxy.on_request = submit_again
        state = await controller.submit(EASY)

    assert len(proxy.requests) == 1
    assert nested_states[0].phase == SubmissionPhase.LOADING
    assert state.phase == SubmissionPhase.SUCCESS


@pytest.mark.asyncio
async def test_failed_controller_accepts_a_new_submission() -> None:
    proxy = RecordingProxy(status_code=500, body={"message": "boom"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(proxy)) as http_client:
        controller, transitions = _controller(http_client)
        first = await controller.submit(EASY)

        proxy.status_code = 200
        proxy.body = {"text": json.dumps(SAMPLE_TRAIL)}
        second = await controller.submit(EASY)

    assert first.phase == SubmissionPhase.FAILED
    assert second.phase == SubmissionPhase.SUCCESS
    assert second.error is None
    assert len(proxy.requests) == 2
    assert transitions[-3][0] == SubmissionPhase.VALIDATING
