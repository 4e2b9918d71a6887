"""Body composition input record."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BodyCompositionInput(BaseModel):
    """Height/weight screen and tape measurements."""

    gender: Literal["male", "female"]
    age: int = Field(ge=17)
    height_inches: float = Field(gt=0)
    weight_lbs: float = Field(gt=0)
    neck_inches: float | None = Field(default=None, gt=0)
    abdomen_inches: float | None = Field(default=None, gt=0)
    hips_inches: float | None = Field(default=None, gt=0, description="Required for females")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value
