"""Bulk email validation job manager.

A bulk validation runs as three independent HTTP round-trips:

1. ``request_upload_slot`` asks SendGrid for a job id and a pre-signed,
   single-use upload destination.
2. ``upload_file`` PUTs the address list to that destination. Processing
   starts once the upload lands.
3. ``get_job`` fetches the job's status once. Callers decide the polling cadence and
   stop once ``job.is_terminal``.

The manager holds no job state between calls; the job id is the only thing a
caller needs to keep to resume after a restart.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Type, Union
from urllib.parse import quote

from .base import BaseOperation, Scope
from .codec import decode, encode
from .exceptions import DecodeError
from .models.bulk import (
    BulkValidationJob,
    BulkValidationUploadRequest,
    FileType,
    FlatJobEnvelope,
    JobListResponse,
    JobSummary,
    NestedJobEnvelope,
    UploadSlot,
)
from .models.common import WireModel
from .transport import HTTPRequest, RequestProfile, redact_url

logger = logging.getLogger(__name__)

JOBS_PATH = "/validations/email/jobs"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of uploading an address list to an upload slot."""

    succeeded: bool
    job_id: Optional[str]
    status_code: Optional[int] = None


def decode_job(body: bytes) -> BulkValidationJob:
    """Decode a job poll response into a single job view.

    SendGrid nests the job under ``response.value.result`` in one variant of
    the endpoint and returns it under ``result`` or as top-level fields in
    others. The deepest shape is tried first.

    Raises:
        DecodeError: If no shape yields a job
    """
    shapes: List[Type[WireModel]] = [NestedJobEnvelope, FlatJobEnvelope, BulkValidationJob]
    last_error: Optional[DecodeError] = None

    for shape in shapes:
        try:
            payload = decode(body, shape)
        except DecodeError as e:
            last_error = e
            continue

        if isinstance(payload, NestedJobEnvelope):
            job = payload.job()
        elif isinstance(payload, FlatJobEnvelope):
            job = payload.result
        else:
            job = payload if (payload.id or payload.status) else None

        if job is not None:
            return job

    if last_error is not None:
        raise last_error
    raise DecodeError("Response body does not contain a bulk validation job")


class BulkValidationJobManager(BaseOperation):
    """Drives bulk email validation jobs."""

    scope = Scope.EMAIL_VALIDATION

    @property
    def json_profile(self) -> RequestProfile:
        return RequestProfile(timeout=self.timeouts.metadata)

    @property
    def poll_profile(self) -> RequestProfile:
        return RequestProfile(timeout=self.timeouts.metadata, content_type=None)

    @property
    def listing_profile(self) -> RequestProfile:
        return RequestProfile(timeout=self.timeouts.listing, content_type=None)

    def request_upload_slot(self, file_type: Union[FileType, str]) -> UploadSlot:
        """Request a pre-signed destination for an address list.

        This alone does not start processing.

        Args:
            file_type: Format of the file that will be uploaded (csv or zip)

        Returns:
            UploadSlot with the job id, upload URI and required headers

        Raises:
            ValueError: If ``file_type`` is not csv or zip, before any request
            ConfigurationError: If no email validation API key is configured
            TransportError: If the request could not be completed
            ProviderError: If SendGrid rejected the request
            DecodeError: If the response could not be decoded
        """
        self._require_api_key()
        payload = BulkValidationUploadRequest(file_type=FileType.parse(file_type))

        response = self._execute("POST", JOBS_PATH, self.json_profile, body=encode(payload))
        self._raise_for_error(response)

        slot = decode(response.body, UploadSlot)
        logger.info(
            f"Upload slot issued for bulk validation job {slot.job_id}",
            extra={"operation": "request_upload_slot", "job_id": slot.job_id},
        )
        return slot

    def upload_file(self, file_data: bytes, slot: UploadSlot) -> UploadResult:
        """Upload an address list to a slot from ``request_upload_slot``.

        The PUT carries exactly the headers SendGrid issued with the slot and
        no API credential. The slot is consumed even if the upload fails.

        Args:
            file_data: Raw CSV or ZIP bytes
            slot: Upload slot to consume

        Returns:
            UploadResult; ``succeeded`` reflects the status of the PUT and
            ``job_id`` is the slot's job id

        Raises:
            ConfigurationError: If no email validation API key is configured
            UploadSlotConsumedError: If the slot was already used
            DecodeError: If the slot lacks an upload URI or complete headers
            TransportError: If the upload could not be completed
        """
        self._require_api_key()
        if not slot.upload_uri:
            raise DecodeError(
                "Upload slot response did not include upload_uri",
                context={"job_id": slot.job_id},
            )
        headers = slot.required_headers()
        slot.consume()

        request = HTTPRequest(
            method="PUT",
            url=slot.upload_uri,
            headers=headers,
            body=file_data,
            timeout=self.timeouts.upload,
        )
        response = self.transport.execute(request)

        if response.is_success:
            logger.info(
                f"Uploaded {len(file_data)} bytes for bulk validation job {slot.job_id}",
                extra={"operation": "upload_file", "job_id": slot.job_id, "status_code": response.status_code},
            )
        else:
            logger.warning(
                f"Upload to {redact_url(slot.upload_uri)} for job {slot.job_id} "
                f"failed with status {response.status_code}",
                extra={"operation": "upload_file", "job_id": slot.job_id, "status_code": response.status_code},
            )

        return UploadResult(
            succeeded=response.is_success,
            job_id=slot.job_id,
            status_code=response.status_code,
        )

    def upload_bulk_validation_file(
        self, file_data: bytes, file_type: Union[FileType, str]
    ) -> UploadResult:
        """Request an upload slot and upload an address list to it.

        Args:
            file_data: Raw CSV or ZIP bytes
            file_type: Format of ``file_data``

        Returns:
            UploadResult for the new job
        """
        slot = self.request_upload_slot(file_type)
        return self.upload_file(file_data, slot)

    def get_job(self, job_id: str) -> BulkValidationJob:
        """Fetch the current state of a job. One request, no waiting.

        Args:
            job_id: Id returned with the upload slot

        Returns:
            BulkValidationJob as currently reported by SendGrid

        Raises:
            ValueError: If ``job_id`` is empty, before any request
            ConfigurationError: If no email validation API key is configured
            TransportError: If the request could not be completed
            ProviderError: If SendGrid rejected the request
            DecodeError: If the response holds no job
        """
        self._require_api_key()
        if not job_id:
            raise ValueError("job_id must not be empty")

        response = self._execute(
            "GET", f"{JOBS_PATH}/{quote(job_id, safe='')}", self.poll_profile
        )
        self._raise_for_error(response)

        job = decode_job(response.body)
        if job.id is None:
            job = job.model_copy(update={"id": job_id})

        status = job.status.value if job.status else "unknown"
        logger.debug(
            f"Bulk validation job {job.id} is {status} "
            f"({job.segments_processed}/{job.segments} segments)",
            extra={"operation": "get_job", "job_id": job.id, "job_status": status},
        )
        return job

    def list_jobs(self) -> List[JobSummary]:
        """List every bulk validation job visible to the account.

        Summaries carry only id, status and timestamps; use ``get_job`` for
        segment counts and errors.

        Raises:
            ConfigurationError: If no email validation API key is configured
            TransportError: If the request could not be completed
            ProviderError: If SendGrid rejected the request
            DecodeError: If the response could not be decoded
        """
        self._require_api_key()
        response = self._execute("GET", JOBS_PATH, self.listing_profile)
        self._raise_for_error(response)

        jobs = decode(response.body, JobListResponse).result
        logger.debug(
            f"Listed {len(jobs)} bulk validation job(s)",
            extra={"operation": "list_jobs", "job_count": len(jobs)},
        )
        return jobs
