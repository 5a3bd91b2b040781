from hikeclub.core.errors import ErrorKind
from hikeclub.core.templates import render_fragment
from hikeclub.finder.state import SubmissionPhase, SubmissionState
from hikeclub.schemas.trail import TrailSuggestion

def render_suggestion(suggestion: TrailSuggestion) -> str:
    return render_fragment("fragments/trail_result.html", trail=suggestion)

def render_error(kind: ErrorKind) -> str:
    # Only an empty selection is explained; every other failure looks the same.
    if kind == ErrorKind.EMPTY_SELECTION:
        return render_fragment("fragments/trail_empty_selection.html")
    return render_fragment("fragments/trail_error.html")

def render_state(state: SubmissionState) -> str:
    """The result region as a function of the submission state; empty while idle or in flight."""
    if state.phase == SubmissionPhase.SUCCESS and state.suggestion is not None:
        return render_suggestion(state.suggestion)
    if state.phase == SubmissionPhase.FAILED and state.error is not None:
        return render_error(state.error)
    return ""
