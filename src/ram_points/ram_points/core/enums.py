from __future__ import annotations

from enum import Enum


class Term(str, Enum):
    """Term bucket an event's points are routed into."""

    SPRING_2025 = "spring2025"
    FALL_2025 = "fall2025"
    OTHER = "other"
