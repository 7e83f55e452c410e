"""
Lifecycle cascades: cross-entity cleanup when a parent entity changes.

CONSISTENCY MODEL
=================

The store has no multi-document transactions, so a cascade is an ordered
list of independent writes:

  Resource delete:
    1. clear the resource's future bookings        (best effort)
    2. resolve the resource's open error reports    (best effort)
    3. delete the resource                          (result returned)

  Institution update:
    1. clear the institution's future bookings     (best effort)
    2. replace the institution record               (result returned)

Best-effort steps never gate the final step: a step that changes nothing or
raises is logged and counted, and the workflow moves on. Nothing is
compensated. If the final step fails or finds no record, bookings that were
cleared stay cleared and reports that were resolved stay resolved.

Cascades are not serialized against other requests. A booking created for a
resource while that resource is being deleted can survive the cascade.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from app.core.logging import get_logger
from app.core.metrics import record_cascade_step
from app.repositories.base import WriteOutcome
from app.repositories.entity_repositories import InstitutionRepository, ResourceRepository
from app.services.booking_service import BookingService
from app.services.error_report_service import ErrorReportService

logger = get_logger(__name__)


@dataclass(frozen=True)
class CascadeStep:
    name: str
    run: Callable[[], Awaitable[Any]]


class CascadeWorkflow:
    """Runs best-effort side effects in order, then the final mutation."""

    def __init__(self, name: str, subject_id: str):
        self.name = name
        self.log = logger.bind(workflow=name, subject_id=subject_id)

    async def run(self, side_effects: Sequence[CascadeStep], final: CascadeStep) -> Any:
        for step in side_effects:
            try:
                changed = await step.run()
            except Exception:
                record_cascade_step(self.name, step.name, ok=False)
                self.log.warning("cascade_step_failed", step=step.name, exc_info=True)
                continue
            record_cascade_step(self.name, step.name, ok=True)
            self.log.info("cascade_step_completed", step=step.name, changed=changed)

        try:
            result = await final.run()
        except Exception:
            record_cascade_step(self.name, final.name, ok=False)
            self.log.error("cascade_final_step_failed", step=final.name, exc_info=True)
            raise

        record_cascade_step(self.name, final.name, ok=True)
        self.log.info("cascade_completed", step=final.name, result=str(result))
        return result


class LifecycleCascade:
    def __init__(
        self,
        bookings: BookingService,
        error_reports: ErrorReportService,
        resources: ResourceRepository,
        institutions: InstitutionRepository,
    ):
        self.bookings = bookings
        self.error_reports = error_reports
        self.resources = resources
        self.institutions = institutions

    async def delete_resource(self, resource_id: str) -> bool:
        workflow = CascadeWorkflow("resource_delete", resource_id)
        return await workflow.run(
            side_effects=[
                CascadeStep(
                    "clear_future_bookings",
                    lambda: self.bookings.clear_future_bookings_for_resource(resource_id),
                ),
                CascadeStep(
                    "resolve_error_reports",
                    lambda: self.error_reports.resolve_all_on_resource(resource_id),
                ),
            ],
            final=CascadeStep("delete_resource", lambda: self.resources.delete(resource_id)),
        )

    async def update_institution(self, institution_id: str, data: dict[str, Any]) -> WriteOutcome:
        # Opening hours may have changed, so existing future bookings are dropped
        # before the new record is written, whatever the update contains.
        workflow = CascadeWorkflow("institution_update", institution_id)
        return await workflow.run(
            side_effects=[
                CascadeStep(
                    "clear_future_bookings",
                    lambda: self.bookings.clear_future_bookings_for_institution(institution_id),
                ),
            ],
            final=CascadeStep(
                "replace_institution",
                lambda: self.institutions.replace(institution_id, data),
            ),
        )
