"""
Pydantic Validated Models
=========================
Pydantic validation layer for configuration objects.

Usage:
    from dutyplan.models.validated import ValidatedGeneratorConfig

    config = ValidatedGeneratorConfig(no_duty_score=500.0, spacing_tolerance=0.2)
    generator_config = config.to_dataclass()

Note: The dataclass GeneratorConfig stays the type the engine consumes.
"""
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import GeneratorConfig, default_shift_weekdays
from .shift import ShiftType, Weekday


def _default_weekday_lists() -> Dict[ShiftType, List[Weekday]]:
    return {
        st: sorted(days, key=lambda d: d.day_number)
        for st, days in default_shift_weekdays().items()
    }


class ValidatedGeneratorConfig(BaseModel):
    """
    Pydantic-validated generator configuration.

    Use this for strict validation at API boundaries.
    Can be converted to/from the dataclass GeneratorConfig.
    """
    model_config = ConfigDict(validate_assignment=True)

    shift_weekdays: Dict[ShiftType, List[Weekday]] = Field(
        default_factory=_default_weekday_lists,
        description="Weekdays on which each shift type is staffed",
    )

    # Must exceed any real distance inside one month
    no_duty_score: float = Field(default=1000.0, gt=31, description="Spacing score without duties")
    spacing_tolerance: float = Field(default=0.1, ge=0, lt=1)

    rest_after_duty: bool = Field(default=True)
    rest_after_absence: bool = Field(default=True)
    respect_duty_limits: bool = Field(default=True)

    @field_validator("shift_weekdays")
    @classmethod
    def validate_shift_weekdays(cls, v: Dict[ShiftType, List[Weekday]]) -> Dict[ShiftType, List[Weekday]]:
        """Ensure at least one shift type with at least one weekday."""
        if not v:
            raise ValueError("shift_weekdays must name at least one shift type")
        for shift_type, days in v.items():
            if not days:
                raise ValueError(f"shift type {shift_type.value} has no weekdays")
        return v

    def to_dataclass(self) -> GeneratorConfig:
        """Convert to dataclass GeneratorConfig for the generator."""
        return GeneratorConfig(
            shift_weekdays={st: frozenset(days) for st, days in self.shift_weekdays.items()},
            no_duty_score=self.no_duty_score,
            spacing_tolerance=self.spacing_tolerance,
            rest_after_duty=self.rest_after_duty,
            rest_after_absence=self.rest_after_absence,
            respect_duty_limits=self.respect_duty_limits,
        )

    @classmethod
    def from_dataclass(cls, config: GeneratorConfig) -> "ValidatedGeneratorConfig":
        """Create from dataclass GeneratorConfig."""
        return cls(
            shift_weekdays={
                st: sorted(days, key=lambda d: d.day_number)
                for st, days in config.shift_weekdays.items()
            },
            no_duty_score=config.no_duty_score,
            spacing_tolerance=config.spacing_tolerance,
            rest_after_duty=config.rest_after_duty,
            rest_after_absence=config.rest_after_absence,
            respect_duty_limits=config.respect_duty_limits,
        )
