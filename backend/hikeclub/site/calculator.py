import math
from typing import Optional

from hikeclub.schemas.hike import HikeEstimate

# km/h
PACE_SPEEDS = {"slow": 3, "normal": 4, "fast": 5}
DEFAULT_PACE_SPEED = 4

# Minutes added per 100 m of ascent
MINUTES_PER_100M_ASCENT = 10

INVALID_DISTANCE_MESSAGE = "Please enter a valid positive number for distance."

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def rate_difficulty(score: float) -> tuple[str, str]:
    """Returns (difficulty, icon) for a score of distance/4 + elevation/300."""
    if score < 5:
        return "Easy", "directions_walk"
    if score <= 10:
        return "Moderate", "hiking"
    return "Challenging", "filter_hdr"

def estimate_hike(distance_km: float, elevation_m: float = 0, pace: str = "normal") -> HikeEstimate:
    """
    Estimates hiking time and difficulty from distance, total ascent and pace.
    Raises ValueError when the distance is not a positive number.
    """
    if not math.isfinite(distance_km) or distance_km <= 0:
        raise ValueError(INVALID_DISTANCE_MESSAGE)
    if not math.isfinite(elevation_m):
        elevation_m = 0

    pace_speed = PACE_SPEEDS.get(pace, DEFAULT_PACE_SPEED)
    time_for_distance = distance_km / pace_speed * 60
    time_for_elevation = elevation_m / 100 * MINUTES_PER_100M_ASCENT
    total_minutes = _round_half_up(time_for_distance + time_for_elevation)

    hours, minutes = divmod(total_minutes, 60)
    score = distance_km / 4 + elevation_m / 300
    difficulty, icon = rate_difficulty(score)

    return HikeEstimate(
        pace_speed=pace_speed,
        time_for_distance=time_for_distance,
        time_for_elevation=time_for_elevation,
        total_minutes=total_minutes,
        formatted_time=f"{hours}h {minutes}m",
        score=score,
        difficulty=difficulty,
        difficulty_icon=icon,
    )

def parse_number(raw: Optional[str]) -> Optional[float]:
    """Form values that are blank or not numbers come back as None."""
    if raw is None:
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None
