from typing import Any, Callable, List

from langgraph.graph import StateGraph, END

from hikeclub.core.config import logger
from hikeclub.core.errors import ErrorKind, TrailFinderError
from hikeclub.finder.client import ProxyClient
from hikeclub.finder.collector import collect
from hikeclub.finder.prompt import build_trail_request
from hikeclub.finder.renderer import render_state
from hikeclub.finder.state import (
    SubmissionGraphState, SubmissionPhase, SubmissionState, SubmitControl, control_for,
)
from hikeclub.schemas.trail import PreferenceSet, parse_trail_suggestion

TransitionListener = Callable[[SubmissionState, SubmitControl], None]

def should_continue(state: SubmissionGraphState) -> str:
    """Routes a run to `finish` as soon as any node has recorded an error."""
    if state.get("error"):
        return "end_with_error"
    return "continue_to_next_step"

class SubmissionController:
    """
    Drives one trail finder form through Validating, Loading and a terminal
    Success or Failed state.

    The controller is the only writer of its SubmissionState. The submit
    control and the result fragment are derived from that state, so they can
    never disagree with it. A submission that arrives while another is still
    validating or loading is refused: the disabled control is the only guard,
    there is no queue.
    """

    def __init__(self, proxy_client: ProxyClient):
        self._proxy_client = proxy_client
        self._state = SubmissionState()
        self._listeners: List[TransitionListener] = []
        self._graph = self._build_graph()

    # --- Public surface ---

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def control(self) -> SubmitControl:
        return control_for(self._state)

    @property
    def fragment(self) -> str:
        return render_state(self._state)

    @property
    def in_flight(self) -> bool:
        return self._state.phase in (SubmissionPhase.VALIDATING, SubmissionPhase.LOADING)

    def subscribe(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    async def submit_form(self, form: Any) -> SubmissionState:
        return await self.submit(collect(form))

    async def submit(self, preferences: PreferenceSet) -> SubmissionState:
        if self.in_flight:
            logger.warning("Trail finder submission ignored: a request is already in flight.")
            return self._state

        self._transition(SubmissionState(phase=SubmissionPhase.VALIDATING))
        try:
            await self._graph.ainvoke({"preferences": preferences})
        except Exception as e:
            logger.error(f"Unhandled error in trail finder submission: {e}", exc_info=True)
            self._transition(SubmissionState.failed(ErrorKind.UPSTREAM_FAILURE))
        return self._state

    # --- Graph nodes ---

    async def _validate_node(self, state: SubmissionGraphState) -> dict:
        preferences = state["preferences"]
        if preferences.is_empty:
            return {"error": ErrorKind.EMPTY_SELECTION, "error_detail": "No difficulty or vibe selected."}
        return {"request": build_trail_request(preferences)}

    async def _call_proxy_node(self, state: SubmissionGraphState) -> dict:
        self._transition(SubmissionState(phase=SubmissionPhase.LOADING))
        try:
            text = await self._proxy_client.request_suggestion(state["request"])
        except TrailFinderError as e:
            return {"error": e.kind, "error_detail": e.details or e.message}
        return {"response_text": text}

    async def _parse_response_node(self, state: SubmissionGraphState) -> dict:
        try:
            suggestion = parse_trail_suggestion(state["response_text"])
        except TrailFinderError as e:
            return {"error": e.kind, "error_detail": e.details or e.message}
        return {"suggestion": suggestion}

    async def _finish_node(self, state: SubmissionGraphState) -> dict:
        error = state.get("error")
        if error:
            logger.error(f"AI Trail Finder Error: {error.value} ({state.get('error_detail')})")
            self._transition(SubmissionState.failed(error))
        else:
            suggestion = state["suggestion"]
            logger.info(f"Trail suggestion ready: '{suggestion.trail_name}'.")
            self._transition(SubmissionState.succeeded(suggestion))
        return {}

    # --- Internals ---

    def _build_graph(self):
        workflow = StateGraph(SubmissionGraphState)

        workflow.add_node("validate", self._validate_node)
        workflow.add_node("call_proxy", self._call_proxy_node)
        workflow.add_node("parse_response", self._parse_response_node)
        workflow.add_node("finish", self._finish_node)

        workflow.set_entry_point("validate")
        workflow.add_conditional_edges(
            "validate",
            should_continue,
            {"continue_to_next_step": "call_proxy", "end_with_error": "finish"}
        )
        workflow.add_conditional_edges(
            "call_proxy",
            should_continue,
            {"continue_to_next_step": "parse_response", "end_with_error": "finish"}
        )
        workflow.add_edge("parse_response", "finish")
        workflow.add_edge("finish", END)

        return workflow.compile()

    def _transition(self, new_state: SubmissionState) -> None:
        logger.debug(f"Trail finder: {self._state.phase.value} -> {new_state.phase.value}")
        self._state = new_state
        control = control_for(new_state)
        for listener in self._listeners:
            listener(new_state, control)
