from hikeclub.schemas.proxy import TrailSuggestionRequest
from hikeclub.schemas.trail import PreferenceSet, TRAIL_SUGGESTION_SCHEMA

TRAIL_PROMPT_TEMPLATE = (
    "You are a creative trail guide for the Minto, Ontario area in Canada. "
    "A hiker is looking for a trail with the following characteristics: "
    "difficulty of {difficulties}, and vibes of {vibes}. "
    "Generate a single, plausible-sounding but fictional trail suggestion. "
    "The trail should feel like it belongs in the Minto/Wellington County region. "
    "Be creative and encouraging in your description. "
    "Provide your response in JSON format according to the provided schema."
)

def build_trail_request(preferences: PreferenceSet) -> TrailSuggestionRequest:
    """An empty group is described to the model as 'any'."""
    prompt = TRAIL_PROMPT_TEMPLATE.format(
        difficulties=", ".join(preferences.difficulties) or "any",
        vibes=", ".join(preferences.vibes) or "any",
    )
    return TrailSuggestionRequest(prompt=prompt, schema=TRAIL_SUGGESTION_SCHEMA)
