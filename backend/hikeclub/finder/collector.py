from typing import Any, Iterable, List

from hikeclub.schemas.trail import PreferenceSet

DIFFICULTY_FIELD = "difficulty"
VIBE_FIELD = "vibe"

def _checked_values(form: Any, field: str) -> List[str]:
    if hasattr(form, "getlist"):
        raw: Iterable[Any] = form.getlist(field)
    else:
        value = form.get(field) if form else None
        if value is None:
            raw = []
        elif isinstance(value, str):
            raw = [value]
        else:
            raw = value

    values: List[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        item = item.strip()
        if item and item not in values:
            values.append(item)
    return values

def collect(form: Any) -> PreferenceSet:
    """
    Reads the checked `difficulty` and `vibe` boxes from a submitted form.
    Accepts a multi-valued form (anything with `getlist`) or a plain mapping.
    Never raises: a form with nothing checked gives an empty PreferenceSet.
    """
    return PreferenceSet(
        difficulties=tuple(_checked_values(form, DIFFICULTY_FIELD)),
        vibes=tuple(_checked_values(form, VIBE_FIELD)),
    )
