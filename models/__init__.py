from models.inquiry import (
    DEFAULT_URGENCY,
    INITIAL_STATUS,
    SORT_ACCESSORS,
    STATUSES,
    URGENCIES,
    Inquiry,
)

__all__ = [
    "Inquiry",
    "STATUSES",
    "URGENCIES",
    "DEFAULT_URGENCY",
    "INITIAL_STATUS",
    "SORT_ACCESSORS",
]
