"""Trace, step and regression models.

Python attributes are snake_case; the persisted JSON uses camelCase names
(``stepName``, ``hasRegression``, ...). Always dump with ``by_alias=True`` so
documents stay readable by the dashboard and by older tooling.

Traces and steps keep fields they do not declare, so rewriting the document
never drops data written by other tools.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "RegressionChange",
    "RegressionResult",
    "Step",
    "StepData",
    "StepStatus",
    "Trace",
    "TracesData",
]

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class StepStatus(StrEnum):
    """Outcome of a step, and of a trace as a whole."""

    SUCCESS = "success"
    FAILURE = "failure"


class StepData(BaseModel, Generic[InputT, OutputT]):
    """What a caller hands to ``TraceRecorder.add_step``.

    Parametrize to have pydantic check the payloads, e.g.
    ``StepData[SearchInput, SearchOutput](...)`` with TypedDict types.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    step_name: str
    input: InputT
    output: OutputT
    reasoning: str = ""
    status: StepStatus = StepStatus.SUCCESS


class Step(BaseModel):
    """One recorded pipeline stage. Immutable once appended to a trace."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra="allow")

    step_name: str
    input: dict[str, Any]
    output: dict[str, Any]
    reasoning: str
    status: StepStatus
    timestamp: datetime


class Trace(BaseModel):
    """One pipeline run: metadata plus its steps in recording order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    timestamp: datetime
    status: StepStatus = StepStatus.SUCCESS
    steps: list[Step] = Field(default_factory=list)


class TracesData(BaseModel):
    """The whole persisted document, oldest trace first."""

    traces: list[Trace] = Field(default_factory=list)


class RegressionChange(BaseModel):
    """Structural difference for one field of one step."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    step_name: str
    field: Literal["input", "output"]
    previous_structure: list[str]
    current_structure: list[str]
    added_keys: list[str]
    removed_keys: list[str]


class RegressionResult(BaseModel):
    """Outcome of comparing a trace against an earlier one."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    has_regression: bool = False
    changes: list[RegressionChange] = Field(default_factory=list)
