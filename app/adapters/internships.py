"""Source for internship postings, read as applications by some consumers."""

from typing import Any, Dict, List, Optional

from app.domain.models import SourceKind
from app.logging import get_logger

from .base import BaseSource, RawRecord

logger = get_logger(__name__, component="adapter")


class InternshipSource(BaseSource):
    """Source for the internships API.

    The same record serves as a posting and, for this package, as an
    application. Statuses are written verbatim; this backend has no
    narrower vocabulary.

    API Details:
        List:    GET /api/jobs/internships?posted_by=...
        Status:  PUT /api/jobs/internships/{id}  {"status": ...}
    """

    SOURCE_NAME = "internships"
    API_PATH = "/api/jobs/internships"

    source_kind = SourceKind.INTERNSHIP_ENTITY

    def fetch_records(self, posted_by: Optional[str] = None, **filters: Any) -> List[RawRecord]:
        """Fetch internship records.

        Args:
            posted_by: Only internships posted by this user
            **filters: Extra query parameters passed through

        Returns:
            List of raw internship records

        Raises:
            AdapterError: On any failure
        """
        logger.info(
            "Fetching internships",
            extra={"event": "adapter.fetch.started", "source": self.SOURCE_NAME},
        )

        records = self._extract_records(
            self._make_request(self.API_PATH, params={"posted_by": posted_by, **filters}),
            "internships",
        )

        logger.info(
            "Fetched internships",
            extra={"event": "adapter.fetch.completed", "source": self.SOURCE_NAME, "count": len(records)},
        )
        return records

    def set_status(self, record_id: str, status: str) -> Dict[str, Any]:
        """Write a status onto the internship entity."""
        ack = self._make_request(
            f"{self.API_PATH}/{record_id}",
            method="PUT",
            json_data={"status": status},
        )

        logger.info(
            "Internship status updated",
            extra={
                "event": "adapter.status.updated",
                "source": self.SOURCE_NAME,
                "record_id": record_id,
                "wire_status": status,
            },
        )
        return ack if isinstance(ack, dict) else {"result": ack}
