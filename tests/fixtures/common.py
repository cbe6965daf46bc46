"""
Common/Shared Fixtures

Base factories used across test layers.
"""
from typing import Any, Dict, Optional


def make_project_create_request(
    title: str = "Community Garden",
    goal_amount: int = 100,
    duration: int = 1,
    duration_unit: Optional[str] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Build a project creation payload"""
    payload: Dict[str, Any] = {
        "title": title,
        "description": overrides.pop("description", "Raised beds for the neighbourhood"),
        "goal_amount": goal_amount,
        "duration": duration,
    }
    if duration_unit:
        payload["duration_unit"] = duration_unit
    payload.update(overrides)
    return payload
