"""
Execution Result Data Models.

Represents outcomes of workflow steps, tolerated deletes, resource group
cleanup, and the whole run. No business logic - pure data structures.

Exports:
    StepOutcome: Result of one workflow step
    DeleteOutcome: Result of a delete whose failure is tolerated
    CleanupOutcome: Result of releasing the resource group
    WorkflowResult: Everything a run did, in order
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field

from .enums import WorkflowStep, StepStatus, DeleteStatus, CleanupStatus


def _utc_now() -> datetime:
    """Helper function to get current UTC time."""
    return datetime.now(timezone.utc)


class StepOutcome(BaseModel):
    """Result of a single workflow step."""

    step: WorkflowStep = Field(..., description="Which step ran")
    status: StepStatus = Field(..., description="Completed or failed")
    detail: Optional[str] = Field(default=None, description="Resource name/id or error message")
    timestamp: datetime = Field(default_factory=_utc_now)

    @property
    def success(self) -> bool:
        return self.status == StepStatus.COMPLETED


class DeleteOutcome(BaseModel):
    """
    Result of a delete the workflow does not fail on.

    Returned instead of raising so the caller decides, visibly, that
    a failure here is acceptable.
    """

    target: str = Field(..., description="Name or id of the resource being deleted")
    status: DeleteStatus = Field(...)
    error_type: Optional[str] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

    @property
    def deleted(self) -> bool:
        return self.status == DeleteStatus.DELETED


class CleanupOutcome(BaseModel):
    """Result of releasing the provisioned resource group."""

    status: CleanupStatus = Field(...)
    resource_group_id: Optional[str] = Field(default=None)
    resource_group_name: Optional[str] = Field(default=None)
    error_type: Optional[str] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

    @property
    def attempted(self) -> bool:
        """True when a delete call was actually issued."""
        return self.status != CleanupStatus.NOT_CREATED


class WorkflowResult(BaseModel):
    """
    Record of a workflow run.

    Populated as the run progresses, so it is meaningful even when the
    run raised part-way through.
    """

    run_id: str = Field(...)
    subscription_id: Optional[str] = Field(default=None)
    resource_group_name: str = Field(...)
    namespace_name: str = Field(...)
    first_queue_name: str = Field(...)
    second_queue_name: str = Field(...)
    steps: List[StepOutcome] = Field(default_factory=list)
    namespace_delete: Optional[DeleteOutcome] = Field(default=None)
    cleanup: Optional[CleanupOutcome] = Field(default=None)
    started_at: datetime = Field(default_factory=_utc_now)
    finished_at: Optional[datetime] = Field(default=None)

    @property
    def completed_steps(self) -> List[WorkflowStep]:
        return [outcome.step for outcome in self.steps if outcome.success]

    @property
    def failed_step(self) -> Optional[WorkflowStep]:
        for outcome in self.steps:
            if not outcome.success:
                return outcome.step
        return None

    @property
    def succeeded(self) -> bool:
        """Every step completed. Cleanup status does not affect this."""
        return self.completed_steps == list(WorkflowStep)
