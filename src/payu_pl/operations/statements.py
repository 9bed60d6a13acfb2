"""Statement (report) download."""

from __future__ import annotations

import re
from typing import Any

from payu_pl import endpoints
from payu_pl.operations.base import Operation

FILENAME_RE = re.compile(r'filename="?(?P<filename>[^";]+)"?', re.IGNORECASE)


def filename_from_disposition(content_disposition: str | None) -> str | None:
    """Extract the file name from a ``Content-Disposition`` header."""
    match = FILENAME_RE.search(content_disposition or "")
    return match.group("filename") if match else None


class RetrieveStatement(Operation):
    """Download a statement file.

    Returns a dict with ``data`` (raw bytes), ``filename``, ``content_type``
    and ``http_status``.
    """

    def __call__(self, report_id: str) -> dict[str, Any]:
        self.validate_ids(report_id=report_id)

        response = self.transport.request(
            "get",
            endpoints.report(report_id),
            headers={"Accept": "application/octet-stream"},
            return_headers=True,
        )
        headers = response["headers"]
        return {
            "data": response["body"],
            "filename": filename_from_disposition(headers.get("content-disposition")),
            "content_type": headers.get("content-type"),
            "http_status": response["http_status"],
        }
