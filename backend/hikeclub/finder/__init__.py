# This file collects the trail finder pieces the site and tests use.
from .collector import collect
from .prompt import build_trail_request
from .client import ProxyClient
from .controller import SubmissionController
from .renderer import render_error, render_state, render_suggestion
from .state import SubmissionPhase, SubmissionState, SubmitControl
