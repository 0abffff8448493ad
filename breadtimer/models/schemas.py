"""
Pydantic data models for the Bread Timer scheduling engine.
"""
import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class StepType(str, Enum):
    """Kind of work a step demands from the baker."""
    ACTIVE = "active"
    WAITING = "waiting"
    PREPARATION = "preparation"


def total_duration(steps: List["Step"]) -> float:
    """Sum step durations in hours, rounded to tame float noise (0.33 + 0.66 ...)."""
    return round(math.fsum(step.duration for step in steps), 6)


class Step(BaseModel):
    """A single process step of a recipe template."""
    name: str = Field(..., description="Step name, e.g. 'Bulk Fermentation'")
    duration: float = Field(..., ge=0, allow_inf_nan=False, description="Duration in hours")
    type: StepType = Field(default=StepType.ACTIVE, description="active, waiting or preparation")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"name": "Bulk Fermentation", "duration": 4, "type": "waiting"}
            ]
        }
    }

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Step name cannot be empty')
        return v.strip()


class Recipe(BaseModel):
    """Recipe with an ordered list of steps, first to last."""
    id: str = Field(..., description="Unique recipe key (slug)")
    name: str = Field(..., description="Recipe name")
    steps: List[Step] = Field(default_factory=list, description="Ordered process steps")
    total_time: float = Field(default=0.0, description="Sum of step durations in hours")
    builtin: bool = Field(default=False, description="True for recipes shipped with the app")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "baguette",
                    "name": "Baguette",
                    "steps": [
                        {"name": "Mixing", "duration": 0.5, "type": "active"},
                        {"name": "First Rise", "duration": 2, "type": "waiting"},
                        {"name": "Baking", "duration": 0.5, "type": "active"}
                    ],
                    "total_time": 3.0,
                    "builtin": True
                }
            ]
        }
    }

    @model_validator(mode="after")
    def recompute_total_time(self) -> "Recipe":
        """Keep total_time equal to the sum of step durations."""
        self.total_time = total_duration(self.steps)
        return self


class ScheduledStep(Step):
    """A step pinned to absolute start and end timestamps."""
    start_time: datetime
    end_time: datetime


class Schedule(BaseModel):
    """A computed schedule, forward ordered, ending at target_time."""
    recipe_id: Optional[str] = None
    recipe_name: str
    target_time: datetime
    steps: List[ScheduledStep] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "recipe_id": "baguette",
                    "recipe_name": "Baguette",
                    "target_time": "2024-01-01T08:00:00",
                    "steps": [
                        {
                            "name": "Mixing",
                            "duration": 0.5,
                            "type": "active",
                            "start_time": "2024-01-01T07:30:00",
                            "end_time": "2024-01-01T08:00:00"
                        }
                    ]
                }
            ]
        }
    }

    @property
    def start_time(self) -> Optional[datetime]:
        """When the first step has to begin, or None for an empty schedule."""
        return self.steps[0].start_time if self.steps else None

    @property
    def total_time(self) -> float:
        return total_duration(self.steps)


class StepDefinition(BaseModel):
    """Step as typed by a recipe author; the name may still be blank."""
    name: str = ""
    duration: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Duration in hours")
    type: StepType = StepType.ACTIVE


class RecipeDefinition(BaseModel):
    """Recipe as typed by a recipe author, validated by the recipe service."""
    name: str = ""
    steps: List[StepDefinition] = Field(default_factory=lambda: [StepDefinition()])
