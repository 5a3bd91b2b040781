from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TypedDict

from hikeclub.core.errors import ErrorKind
from hikeclub.schemas.proxy import TrailSuggestionRequest
from hikeclub.schemas.trail import PreferenceSet, TrailSuggestion

IDLE_LABEL = "Generate My AI Trail"
LOADING_LABEL = "Generating..."

class SubmissionPhase(str, Enum):
    IDLE = "Idle"
    VALIDATING = "Validating"
    LOADING = "Loading"
    SUCCESS = "Success"
    FAILED = "Failed"

@dataclass(frozen=True)
class SubmissionState:
    """
    Where a trail finder submission stands.
    `suggestion` is only set in Success, `error` only in Failed.
    """
    phase: SubmissionPhase = SubmissionPhase.IDLE
    suggestion: Optional[TrailSuggestion] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def succeeded(cls, suggestion: TrailSuggestion) -> "SubmissionState":
        return cls(phase=SubmissionPhase.SUCCESS, suggestion=suggestion)

    @classmethod
    def failed(cls, error: ErrorKind) -> "SubmissionState":
        return cls(phase=SubmissionPhase.FAILED, error=error)

@dataclass(frozen=True)
class SubmitControl:
    disabled: bool
    label: str

def control_for(state: SubmissionState) -> SubmitControl:
    """The submit button is disabled, with the in-progress label, exactly while Loading."""
    if state.phase == SubmissionPhase.LOADING:
        return SubmitControl(disabled=True, label=LOADING_LABEL)
    return SubmitControl(disabled=False, label=IDLE_LABEL)

class SubmissionGraphState(TypedDict, total=False):
    """
    Data passed between the nodes of one submission's graph run.
    A node that fails sets `error`, which routes the run straight to `finish`.
    """
    preferences: PreferenceSet
    request: Optional[TrailSuggestionRequest]
    response_text: Optional[str]
    suggestion: Optional[TrailSuggestion]
    error: Optional[ErrorKind]
    error_detail: Optional[Any]
