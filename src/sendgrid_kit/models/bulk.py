"""Models for bulk email validation jobs."""

import threading
from pathlib import PurePath
from typing import Annotated, List, Optional, Tuple

from pydantic import BeforeValidator, Field, PrivateAttr, field_validator

from ..exceptions import DecodeError, UploadSlotConsumedError
from .common import EpochDatetime, WireEnum, WireModel

# Number of addresses SendGrid processes as one segment.
SEGMENT_SIZE = 1500


class FileType(WireEnum):
    """Format of an uploaded address list."""

    CSV = "csv"
    ZIP = "zip"

    @classmethod
    def from_filename(cls, filename: str) -> "FileType":
        suffix = PurePath(filename).suffix.lstrip(".")
        try:
            return cls.parse(suffix)
        except ValueError:
            raise ValueError(
                f"Cannot infer file type from {filename!r}; expected a .csv or .zip file"
            ) from None


class JobStatus(WireEnum):
    """Lifecycle of a bulk validation job as reported by SendGrid.

    initiated -> queued -> ready -> processing -> done, with error reachable
    from any non-terminal state.
    """

    INITIATED = "initiated"
    QUEUED = "queued"
    READY = "ready"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.DONE, JobStatus.ERROR)


JobStatusField = Annotated[JobStatus, BeforeValidator(JobStatus.parse)]


class BulkValidationUploadRequest(WireModel):
    file_type: FileType


class UploadHeader(WireModel):
    header: Optional[str] = None
    value: Optional[str] = None


class UploadSlot(WireModel):
    """A pre-signed, single-use upload destination for one job.

    Every field is optional as decoded; ``upload_uri`` and the header set are
    only required when the slot is used.
    """

    job_id: Optional[str] = None
    upload_uri: Optional[str] = None
    upload_headers: Optional[List[UploadHeader]] = None

    _consumed: bool = PrivateAttr(default=False)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def required_headers(self) -> List[Tuple[str, str]]:
        """Return the header pairs that must accompany the upload verbatim.

        Raises:
            DecodeError: If the header set is missing or has an incomplete entry
        """
        if self.upload_headers is None:
            raise DecodeError("Upload slot response did not include upload_headers")

        headers = []
        for position, entry in enumerate(self.upload_headers):
            if not entry.header or entry.value is None:
                raise DecodeError(
                    f"Upload header #{position} is incomplete",
                    context={"job_id": self.job_id},
                )
            headers.append((entry.header, entry.value))
        return headers

    def consume(self) -> None:
        """Mark the slot as used.

        Raises:
            UploadSlotConsumedError: If the slot was already used
        """
        with self._lock:
            if self._consumed:
                raise UploadSlotConsumedError(
                    "Upload slot has already been used; request a new one",
                    context={"job_id": self.job_id},
                )
            self._consumed = True


class JobError(WireModel):
    """An error reported for a failed job."""

    message: Optional[str] = None


class JobSummary(WireModel):
    """A job as listed by the jobs collection endpoint."""

    id: Optional[str] = None
    status: Optional[JobStatusField] = None
    started_at: Optional[EpochDatetime] = None
    finished_at: Optional[EpochDatetime] = None

    @field_validator("started_at", "finished_at", mode="before")
    @classmethod
    def _zero_is_unset(cls, value):
        # SendGrid reports 0 for timestamps that have not happened yet.
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return None
        return value

    @property
    def is_terminal(self) -> bool:
        return self.status is not None and self.status.is_terminal


class BulkValidationJob(JobSummary):
    """Detailed state of one job."""

    segments: Optional[int] = None
    segments_processed: Optional[int] = None
    is_download_available: Optional[bool] = None
    errors: List[JobError] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value):
        return [] if value is None else value

    @property
    def progress(self) -> Optional[float]:
        """Fraction of segments processed, once processing has started."""
        if not self.segments or self.segments_processed is None:
            return None
        return self.segments_processed / self.segments


class NestedJobValue(WireModel):
    result: Optional[BulkValidationJob] = None


class NestedJobResponse(WireModel):
    value: Optional[NestedJobValue] = None


class NestedJobEnvelope(WireModel):
    """``{"response": {"value": {"result": {...}}}}``"""

    response: Optional[NestedJobResponse] = None

    def job(self) -> Optional[BulkValidationJob]:
        if self.response and self.response.value:
            return self.response.value.result
        return None


class FlatJobEnvelope(WireModel):
    """``{"result": {...}}``"""

    result: Optional[BulkValidationJob] = None


class JobListResponse(WireModel):
    result: List[JobSummary] = Field(default_factory=list)

    @field_validator("result", mode="before")
    @classmethod
    def _null_result(cls, value):
        return [] if value is None else value
