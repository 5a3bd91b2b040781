from typing import List

from hikeclub.schemas.hike import Hike

UPCOMING_HIKES: List[Hike] = [
    Hike(
        title="White's Junction Trail Loop",
        date="Saturday, July 20, 2024",
        distance="5 km",
        difficulty="Easy",
        description="A gentle loop perfect for families and beginners. Enjoy well-maintained paths through a mix of forest and open fields.",
    ),
    Hike(
        title="Clifford Rotary Park Trail",
        date="Sunday, July 28, 2024",
        distance="3.5 km",
        difficulty="Easy",
        description="A beautiful, accessible walk along the river. Great for a quick morning hike and bird watching.",
    ),
    Hike(
        title="Harriston Greenway Full Circuit",
        date="Saturday, August 10, 2024",
        distance="8 km",
        difficulty="Moderate",
        description="Explore the full length of the Harriston Greenway. This trail offers varied scenery and a slightly longer distance for a good workout.",
    ),
    Hike(
        title="Minto-Saugeen Exploration",
        date="Saturday, August 24, 2024",
        distance="12 km",
        difficulty="Challenging",
        description="A more demanding hike for experienced members, connecting local trails for a longer, more rugged adventure.",
    ),
    Hike(
        title="Fall Colours at White's Junction",
        date="Saturday, October 5, 2024",
        distance="5 km",
        difficulty="Easy",
        description="Revisit this popular trail to experience the spectacular autumn colours. A perfect photo opportunity!",
    ),
    Hike(
        title="Historic Palmerston Railway Hike",
        date="Sunday, October 20, 2024",
        distance="7 km",
        difficulty="Moderate",
        description="Walk along the old railway lines near Palmerston, discovering local history and enjoying the crisp autumn air.",
    ),
]

def reveal_delay_class(index: int) -> str:
    """Cards fade in with a staggered delay that cycles delay-1, delay-2, delay-3."""
    return f"delay-{(index % 3) + 1}"
