"""Router modules for the StudyAtlas API."""

from . import (
    courses,
    diary,
    lab_reviews,
    labs,
    ping,
    programs,
    reviews,
    saved,
    statistics,
    teachers,
    topics,
    universities,
    users,
    workbench,
)

__all__ = [
    "courses",
    "diary",
    "lab_reviews",
    "labs",
    "ping",
    "programs",
    "reviews",
    "saved",
    "statistics",
    "teachers",
    "topics",
    "universities",
    "users",
    "workbench",
]
