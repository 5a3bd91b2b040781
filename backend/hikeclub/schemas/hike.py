from pydantic import BaseModel, EmailStr, Field
from typing import Literal

class Hike(BaseModel):
    """A scheduled club hike shown in the upcoming hikes grid."""
    title: str
    date: str
    distance: str
    difficulty: Literal["Easy", "Moderate", "Challenging"]
    description: str

class HikeEstimate(BaseModel):
    """
    Result of the hike calculator.
    Times are in minutes; `score` drives the difficulty rating.
    """
    pace_speed: float
    time_for_distance: float
    time_for_elevation: float
    total_minutes: int
    formatted_time: str
    score: float
    difficulty: Literal["Easy", "Moderate", "Challenging"]
    difficulty_icon: str

class ContactMessage(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)
