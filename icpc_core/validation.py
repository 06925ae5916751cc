"""
Input validation schemas using Pydantic v2
Validates all command types before they reach the scoreboard
"""

import logging
import re
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {
    "ADDTEAM",
    "START",
    "SUBMIT",
    "FLUSH",
    "FREEZE",
    "SCROLL",
    "QUERY_RANKING",
    "QUERY_SUBMISSION",
    "END",
}

_TEAM_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
_PROBLEM_RE = re.compile(r"^[A-Z]$")


class ValidatedCmd(BaseModel):
    """Command model with per-type required fields"""

    type: str = Field(..., min_length=1, max_length=50, description="Command type")

    team: Optional[str] = Field(None, min_length=1, max_length=255, description="Team name")

    # START
    duration: Optional[int] = Field(None, ge=0, description="Contest duration (advisory)")
    problemCount: Optional[int] = Field(None, ge=1, le=26, description="Problem count (1-26)")

    # SUBMIT
    problem: Optional[str] = Field(None, description="Problem letter")
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    time: Optional[int] = Field(None, ge=0, description="Submission time")

    # QUERY_SUBMISSION
    problemFilter: Optional[str] = Field(None, min_length=1, max_length=10)
    statusFilter: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        v = v.strip().upper()
        if v not in ALLOWED_TYPES:
            raise ValueError(f"type must be one of {sorted(ALLOWED_TYPES)}, got {v}")
        return v

    @field_validator("team")
    @classmethod
    def validate_team_name(cls, v: Optional[str]) -> Optional[str]:
        """Team names are single tokens of letters, digits and underscores"""
        if v is None:
            return v
        v = v.strip()
        if not _TEAM_NAME_RE.match(v):
            raise ValueError(f"team name must match {_TEAM_NAME_RE.pattern}, got {v!r}")
        return v

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not _PROBLEM_RE.match(v):
            raise ValueError(f"problem must be a single letter A-Z, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        cmd_type = self.type

        if cmd_type in {"ADDTEAM", "QUERY_RANKING", "QUERY_SUBMISSION"}:
            if self.team is None:
                raise ValueError(f"{cmd_type} requires team")

        elif cmd_type == "START":
            if self.duration is None:
                raise ValueError("START requires duration")
            if self.problemCount is None:
                raise ValueError("START requires problemCount")

        elif cmd_type == "SUBMIT":
            for name in ("team", "problem", "status", "time"):
                if getattr(self, name) is None:
                    raise ValueError(f"SUBMIT requires {name}")

        return self

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        value = value.strip()
        value = value[:max_length]
        # Remove null bytes
        value = value.replace("\0", "")
        return value

    @staticmethod
    def validate_and_sanitize_cmd(cmd_dict: dict) -> ValidatedCmd:
        """
        Validate and sanitize command dictionary

        Returns:
            ValidatedCmd: Validated command object

        Raises:
            ValueError: If validation fails
        """
        cleaned = {
            key: InputSanitizer.sanitize_string(value) if isinstance(value, str) else value
            for key, value in cmd_dict.items()
        }
        try:
            return ValidatedCmd(**cleaned)
        except Exception as e:
            logger.warning(f"Command validation failed: {e}")
            raise ValueError(f"Invalid command: {str(e)}")


__all__ = [
    "ALLOWED_TYPES",
    "ValidatedCmd",
    "InputSanitizer",
]
