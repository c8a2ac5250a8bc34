"""Evidence attachment storage backed by ImageKit."""

import logging
import time

import httpx

from grievance_api.config.settings import EvidenceSettings
from grievance_api.config.settings import get_evidence_settings
from grievance_api.database.models.evidence import EvidenceUpload

logger = logging.getLogger(__name__)


class EvidenceUploadError(Exception):
    """Raised when the evidence store rejects or fails an upload."""


class EvidenceStore:
    """Uploads grievance attachments and returns their public URL."""

    def __init__(self, settings: EvidenceSettings | None = None):
        self.settings = settings or get_evidence_settings()

    @property
    def is_configured(self) -> bool:
        return self.settings.enabled

    async def upload(self, complaint_id: int, upload: EvidenceUpload) -> str:
        """Store an attachment for a complaint and return its URL."""
        file_name = f"evidence_{complaint_id}_{int(time.time() * 1000)}"

        try:
            async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                response = await client.post(
                    self.settings.upload_url,
                    auth=(self.settings.private_key, ""),
                    data={"fileName": file_name, "folder": self.settings.folder},
                    files={
                        "file": (upload.file_name, upload.content, upload.content_type)
                    },
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            raise EvidenceUploadError(
                f"Evidence upload for complaint {complaint_id} failed"
            ) from e
        except ValueError as e:
            raise EvidenceUploadError(
                f"Evidence store returned a non-JSON response for complaint {complaint_id}"
            ) from e

        url = payload.get("url") if isinstance(payload, dict) else None
        if not url:
            raise EvidenceUploadError("Evidence store response did not include a URL")

        logger.info(f"Uploaded evidence for complaint {complaint_id}")
        return url
