"""Client-side progress state machine for the three processing steps.

Progress is driven only by the lifecycle of the single summarize call. The
endpoint performs scraping, summarizing and translating inside one request,
so the later steps are advanced together once the response arrives.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from client.models import ProcessingStep, StepStatus

_ALLOWED = {
    StepStatus.PENDING: {StepStatus.PENDING, StepStatus.PROCESSING},
    StepStatus.PROCESSING: {StepStatus.PROCESSING, StepStatus.COMPLETED, StepStatus.ERROR},
    StepStatus.COMPLETED: {StepStatus.COMPLETED},
    StepStatus.ERROR: {StepStatus.ERROR},
}


class CallEvent(str, Enum):
    """Lifecycle events of the summarize call."""
    CALL_STARTED = "call_started"
    CALL_SUCCEEDED = "call_succeeded"
    PAYLOAD_ACCEPTED = "payload_accepted"
    CALL_FAILED = "call_failed"


@dataclass(frozen=True)
class StepChange:
    index: int
    status: StepStatus
    detail: Optional[str]


def _changes_for(steps: List[ProcessingStep], event: CallEvent, message: Optional[str]) -> List[StepChange]:
    if event == CallEvent.CALL_STARTED:
        return [StepChange(0, StepStatus.PROCESSING, "Extracting content from blog...")]

    if event == CallEvent.CALL_SUCCEEDED:
        return [
            StepChange(0, StepStatus.COMPLETED, "Content extracted successfully"),
            StepChange(1, StepStatus.PROCESSING, "Generating summary..."),
            StepChange(2, StepStatus.PROCESSING, "Translating to Urdu..."),
        ]

    if event == CallEvent.PAYLOAD_ACCEPTED:
        return [
            StepChange(1, StepStatus.COMPLETED, "Summary generated"),
            StepChange(2, StepStatus.COMPLETED, "Translation completed"),
        ]

    # Only the first in-flight step is blamed; later steps keep their status.
    for index, step in enumerate(steps):
        if step.status == StepStatus.PROCESSING:
            return [StepChange(index, StepStatus.ERROR, message)]
    return []


def transition(
    steps: List[ProcessingStep],
    event: CallEvent,
    message: Optional[str] = None
) -> List[ProcessingStep]:
    """
    Apply a call lifecycle event and return the new list of steps.

    The input list is not modified. Raises ValueError if the event would move
    a step backwards.
    """
    updated = [step.model_copy() for step in steps]

    for change in _changes_for(steps, event, message):
        current = updated[change.index]
        if change.status not in _ALLOWED[current.status]:
            raise ValueError(
                f"Step {change.index} cannot move from {current.status.value} to {change.status.value}"
            )
        updated[change.index] = current.model_copy(
            update={"status": change.status, "detail": change.detail}
        )

    return updated
