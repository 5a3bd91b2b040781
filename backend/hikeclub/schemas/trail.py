from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Any, Dict, Tuple

from hikeclub.core.errors import ErrorKind, TrailFinderError

class PreferenceSet(BaseModel):
    """
    The trail preferences picked in the finder form.
    Values are de-duplicated and kept in selection order so the prompt built
    from them is always the same for the same form.
    """
    model_config = ConfigDict(frozen=True)

    difficulties: Tuple[str, ...] = ()
    vibes: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.difficulties and not self.vibes

class TrailSuggestion(BaseModel):
    """
    A validated AI trail suggestion.
    This model is the single source of the response schema: the descriptor sent
    to the model and the validator applied to its reply are both derived from it.
    """
    model_config = ConfigDict(strict=True)

    trail_name: str = Field(
        alias="trailName", min_length=1,
        description="A creative and plausible name for the trail.",
    )
    difficulty: str = Field(
        min_length=1,
        description="The difficulty level (e.g., Easy, Moderate, Challenging).",
    )
    distance: str = Field(
        min_length=1,
        description="The estimated length of the trail (e.g., '5 km loop').",
    )
    description: str = Field(
        min_length=1,
        description="A one-paragraph, engaging description of the trail experience.",
    )
    why_it_matches: str = Field(
        alias="whyItMatches", min_length=1,
        description="A short sentence explaining why this trail is a good match for the user's preferences.",
    )

def build_schema_descriptor(model: type[BaseModel]) -> Dict[str, Any]:
    """
    Expresses a model of required string fields as a JSON Schema object,
    the dialect Gemini's `response_json_schema` accepts. Property keys are
    the wire names (aliases), so replies are only valid under those names.
    """
    properties: Dict[str, Any] = {}
    required = []
    for name, field in model.model_fields.items():
        if field.annotation is not str:
            raise TypeError(f"Only string fields can be described, got {name}: {field.annotation}")
        wire_name = field.alias or name
        properties[wire_name] = {"type": "string", "description": field.description or ""}
        required.append(wire_name)
    return {"type": "object", "properties": properties, "required": required}

TRAIL_SUGGESTION_SCHEMA: Dict[str, Any] = build_schema_descriptor(TrailSuggestion)
REQUIRED_FIELDS: Tuple[str, ...] = tuple(TRAIL_SUGGESTION_SCHEMA["required"])

def parse_trail_suggestion(text: str) -> TrailSuggestion:
    """
    Decodes the proxy's text into a TrailSuggestion.
    Raises a MalformedResponse error rather than returning partial data.
    """
    try:
        return TrailSuggestion.model_validate_json(text)
    except ValidationError as e:
        raise TrailFinderError(
            ErrorKind.MALFORMED_RESPONSE,
            "The AI response did not match the trail suggestion schema.",
            details=f"{e.error_count()} validation error(s)",
        ) from e
