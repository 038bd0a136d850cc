"""Result models for batch upload/delete."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from gdstorage.errors import GDStorageError


StepStatus = Literal["success", "failed", "skipped"]
BatchStatus = Literal["success", "failed"]


@dataclass(slots=True)
class StepResult:
    """Outcome of one item of a batch, in input order."""

    index: int
    target: str
    status: StepStatus

    file_id: Optional[str] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class BatchResult:
    """
    Aggregate result of store_files/delete_files.

    Remote side effects of successful steps are never rolled back, so a failed
    batch may still carry successful steps.
    """

    status: BatchStatus
    stopped_index: Optional[int]
    results: list[StepResult]

    summary: dict[str, int] = field(default_factory=dict)
    error: Optional[GDStorageError] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def file_ids(self) -> list[str]:
        """Ids of successful steps, in input order."""
        return [r.file_id for r in self.results if r.status == "success" and r.file_id]

    def raise_for_status(self) -> None:
        """Re-raise the error that stopped the batch, if any."""
        if self.error is not None:
            raise self.error


def success_step(index: int, target: str, file_id: Optional[str] = None) -> StepResult:
    return StepResult(index=index, target=target, status="success", file_id=file_id)


def failed_step(index: int, target: str, exc: GDStorageError) -> StepResult:
    return StepResult(
        index=index,
        target=target,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=getattr(exc, "details", None),
    )


def skipped_step(index: int, target: str) -> StepResult:
    return StepResult(index=index, target=target, status="skipped")


def build_batch_result(
    results: list[StepResult],
    *,
    error: Optional[GDStorageError] = None,
) -> BatchResult:
    stopped_index = next((r.index for r in results if r.status == "failed"), None)
    status = "failed" if stopped_index is not None else "success"
    return BatchResult(
        status=status,  # type: ignore[arg-type]
        stopped_index=stopped_index,
        results=results,
        summary=_summarize_results(results),
        error=error,
    )


def _summarize_results(results: list[StepResult]) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
    for r in results:
        summary[r.status] = summary.get(r.status, 0) + 1
    return summary
