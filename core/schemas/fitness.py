"""PFT and CFT input records."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

MIN_AGE = 17


class FitnessInputBase(BaseModel):
    """Fields shared by PFT and CFT records."""

    gender: Literal["male", "female"]
    age: int = Field(ge=MIN_AGE, description="Age in years on the test date")
    is_altitude: bool = Field(default=False, description="Tested at high altitude")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class PFTInput(FitnessInputBase):
    """Physical Fitness Test raw scores."""

    pull_ups: int | None = Field(default=None, ge=0)
    push_ups: int | None = Field(default=None, ge=0)
    plank_seconds: float = Field(ge=0)
    cardio_event: Literal["run", "row"] = "run"
    run_seconds: float | None = Field(default=None, ge=0)
    row_seconds: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_event_selection(self) -> "PFTInput":
        if (self.pull_ups is None) == (self.push_ups is None):
            raise ValueError("Exactly one of pull_ups or push_ups must be provided")

        selected, other = (
            (self.run_seconds, self.row_seconds)
            if self.cardio_event == "run"
            else (self.row_seconds, self.run_seconds)
        )
        if selected is None:
            raise ValueError(f"{self.cardio_event}_seconds is required for cardio_event")
        if other is not None:
            raise ValueError("Only the selected cardio event may have a time")
        return self

    @property
    def upper_body_selection(self) -> tuple[str, int]:
        """(event, reps) for the chosen upper body event."""
        if self.pull_ups is not None:
            return "pullups", self.pull_ups
        return "pushups", self.push_ups or 0

    @property
    def cardio_selection(self) -> tuple[str, float]:
        """(event, seconds) for the chosen cardio event."""
        if self.cardio_event == "row":
            return "row", self.row_seconds or 0
        return "run", self.run_seconds or 0


class CFTInput(FitnessInputBase):
    """Combat Fitness Test raw scores."""

    mtc_seconds: float = Field(ge=0, description="Movement to Contact time")
    ammo_lift_reps: int = Field(ge=0, description="Ammunition Lift reps")
    maneuver_seconds: float = Field(ge=0, description="Maneuver Under Fire time")
