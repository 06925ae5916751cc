"""Type definitions for dispatched commands."""
from __future__ import annotations

from typing import Optional, TypedDict


class CommandPayload(TypedDict, total=False):
    """
    TypedDict for command payloads sent to apply_command().

    Fields vary by command type.
    """
    # Common
    type: str

    # ADDTEAM / SUBMIT / QUERY_RANKING / QUERY_SUBMISSION
    team: Optional[str]

    # START
    duration: Optional[int]
    problemCount: Optional[int]

    # SUBMIT
    problem: Optional[str]
    status: Optional[str]
    time: Optional[int]

    # QUERY_SUBMISSION
    problemFilter: Optional[str]
    statusFilter: Optional[str]
