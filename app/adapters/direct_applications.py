"""Source for applications submitted directly against job/internship postings."""

from typing import Any, Dict, List, Optional

from app.domain.models import SourceKind
from app.domain.status import round_trips, to_backend
from app.logging import get_logger

from .base import BaseSource, RawRecord
from .exceptions import AdapterResponseError

logger = get_logger(__name__, component="adapter")


class DirectApplicationSource(BaseSource):
    """Source for the applications API.

    The backend stores a narrower status vocabulary than the display one;
    statuses are translated with ``to_backend`` before being written.

    API Details:
        List:       GET   /api/applications?applicant_email=&recruiter_email=
        Recruiter:  GET   /api/applications/recruiter/applications?status=&application_type=
        Check:      GET   /api/applications/check?job_id=&internship_id=
        Status:     PATCH /api/applications/{id}/status  {"status": ...}
    """

    SOURCE_NAME = "applications"
    API_PATH = "/api/applications"

    source_kind = SourceKind.DIRECT_APPLICATION

    def fetch_records(
        self,
        applicant_email: Optional[str] = None,
        recruiter_email: Optional[str] = None,
        **filters: Any,
    ) -> List[RawRecord]:
        """Fetch application records.

        Args:
            applicant_email: Only applications submitted by this address
            recruiter_email: Only applications to postings owned by this address
            **filters: Extra query parameters passed through

        Returns:
            List of raw application records

        Raises:
            AdapterError: On any failure
        """
        params = {"applicant_email": applicant_email, "recruiter_email": recruiter_email, **filters}
        logger.info(
            "Fetching applications",
            extra={"event": "adapter.fetch.started", "source": self.SOURCE_NAME},
        )

        records = self._extract_records(
            self._make_request(self.API_PATH, params=params), "applications"
        )

        logger.info(
            "Fetched applications",
            extra={"event": "adapter.fetch.completed", "source": self.SOURCE_NAME, "count": len(records)},
        )
        return records

    def fetch_recruiter_records(
        self,
        status: Optional[str] = None,
        application_type: Optional[str] = None,
    ) -> List[RawRecord]:
        """Fetch applications to the calling recruiter's postings.

        The backend scopes results by the bearer token and pre-joins posting
        fields (title, location, salary/stipend, duration) onto each record.

        Args:
            status: Optional display status filter (translated to the backend vocabulary)
            application_type: Optional "job" or "internship" filter

        Returns:
            List of raw recruiter-scoped application records

        Raises:
            AdapterError: On any failure
        """
        params = {
            "status": to_backend(status) if status else None,
            "application_type": application_type,
        }
        logger.info(
            "Fetching recruiter applications",
            extra={"event": "adapter.fetch.started", "source": f"{self.SOURCE_NAME}.recruiter"},
        )

        records = self._extract_records(
            self._make_request(f"{self.API_PATH}/recruiter/applications", params=params),
            "applications",
        )

        logger.info(
            "Fetched recruiter applications",
            extra={
                "event": "adapter.fetch.completed",
                "source": f"{self.SOURCE_NAME}.recruiter",
                "count": len(records),
            },
        )
        return records

    def has_applied(self, job_id: Optional[str] = None, internship_id: Optional[str] = None) -> bool:
        """Ask the backend whether the token's user already applied to a posting.

        Raises:
            ValueError: If neither job_id nor internship_id is given
            AdapterError: On any failure
        """
        if not job_id and not internship_id:
            raise ValueError("has_applied needs job_id or internship_id")

        payload = self._make_request(
            f"{self.API_PATH}/check",
            params={"job_id": job_id, "internship_id": internship_id},
        )
        if not isinstance(payload, dict) or "hasApplied" not in payload:
            raise AdapterResponseError("Expected an object with 'hasApplied' from the check endpoint")
        return bool(payload["hasApplied"])

    def set_status(self, record_id: str, status: str) -> Dict[str, Any]:
        """Write a display status, translated to the backend vocabulary."""
        wire_status = to_backend(status)

        if not round_trips(status):
            logger.warning(
                f"Status '{status}' is stored as '{wire_status}' and will read back differently",
                extra={
                    "event": "adapter.status.lossy",
                    "record_id": record_id,
                    "status": status,
                    "wire_status": wire_status,
                },
            )

        ack = self._make_request(
            f"{self.API_PATH}/{record_id}/status",
            method="PATCH",
            json_data={"status": wire_status},
        )

        logger.info(
            "Application status updated",
            extra={
                "event": "adapter.status.updated",
                "source": self.SOURCE_NAME,
                "record_id": record_id,
                "wire_status": wire_status,
            },
        )
        return ack if isinstance(ack, dict) else {"result": ack}
