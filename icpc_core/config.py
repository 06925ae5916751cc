"""Scoring rules shared by the ledger, the standing calculator and validation."""

from typing import Self, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ScoringRules(BaseModel):
    """ICPC scoring constants.

    Instances are immutable; build a new one to change a rule.
    """

    penalty_minutes: int = Field(
        20, ge=0, description="Penalty per wrong attempt before the first acceptance"
    )
    accepted_status: str = Field("Accepted", min_length=1)
    status_labels: Tuple[str, ...] = (
        "Accepted",
        "Wrong_Answer",
        "Runtime_Error",
        "Time_Limit_Exceed",
    )
    wildcard: str = Field("ALL", min_length=1, description="Query filter matching anything")
    max_problems: int = Field(26, ge=1, le=26, description="Problems are lettered A..Z")

    model_config = ConfigDict(frozen=True)

    @field_validator("status_labels")
    @classmethod
    def validate_status_labels(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v:
            raise ValueError("status_labels cannot be empty")
        if len(set(v)) != len(v):
            raise ValueError("status_labels must be unique")
        return v

    @model_validator(mode="after")
    def validate_accepted_label(self) -> Self:
        if self.accepted_status not in self.status_labels:
            raise ValueError(
                f"accepted_status {self.accepted_status!r} must be one of {self.status_labels}"
            )
        if self.wildcard in self.status_labels:
            raise ValueError("wildcard cannot collide with a status label")
        return self

    def is_accepted(self, status: str) -> bool:
        return status == self.accepted_status

    def problem_ids(self, count: int) -> Tuple[str, ...]:
        """First ``count`` letters of the alphabet, in order."""
        if count < 0 or count > self.max_problems:
            raise ValueError(f"problem count must be 0-{self.max_problems}, got {count}")
        return tuple(chr(ord("A") + i) for i in range(count))


DEFAULT_RULES = ScoringRules()
