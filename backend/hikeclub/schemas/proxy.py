from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

class TrailSuggestionRequest(BaseModel):
    """
    The body sent to the Gemini proxy: the natural-language prompt plus the
    response schema the model's output must follow.
    Immutable once built; serialized with the wire name `schema`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt: str
    response_schema: Dict[str, Any] = Field(alias="schema")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class ProxyResponse(BaseModel):
    """Successful proxy reply: the model's structured output, verbatim."""
    text: str

class ErrorMessage(BaseModel):
    message: str
    details: Optional[str] = None
