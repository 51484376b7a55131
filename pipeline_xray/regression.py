"""Structural regression detection between two traces."""

from typing import Literal

from pipeline_xray.models import RegressionChange, RegressionResult, Step, Trace
from pipeline_xray.structure import diff_structures, structure_of

__all__ = ["compare_steps", "compare_traces"]

_FIELDS: tuple[Literal["input", "output"], ...] = ("input", "output")


def compare_steps(previous: Step, current: Step) -> list[RegressionChange]:
    """Return one change per field (input, then output) whose structure differs."""
    changes: list[RegressionChange] = []
    for field in _FIELDS:
        previous_structure = structure_of(getattr(previous, field))
        current_structure = structure_of(getattr(current, field))
        diff = diff_structures(previous_structure, current_structure)
        if not diff.changed:
            continue
        changes.append(
            RegressionChange(
                step_name=current.step_name,
                field=field,
                previous_structure=previous_structure,
                current_structure=current_structure,
                added_keys=diff.added,
                removed_keys=diff.removed,
            )
        )
    return changes


def compare_traces(previous: Trace, current: Trace) -> RegressionResult:
    """Compare every step of ``current`` with the same-named step of ``previous``.

    Steps are paired by name, using the first step of ``previous`` carrying that
    name. Steps without a counterpart are skipped. Changes follow the order of
    ``current``'s steps.
    """
    previous_by_name: dict[str, Step] = {}
    for step in previous.steps:
        previous_by_name.setdefault(step.step_name, step)

    changes: list[RegressionChange] = []
    for step in current.steps:
        counterpart = previous_by_name.get(step.step_name)
        if counterpart is None:
            continue
        changes.extend(compare_steps(counterpart, step))

    return RegressionResult(has_regression=bool(changes), changes=changes)
