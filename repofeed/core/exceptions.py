"""Ingestion error taxonomy.

Each error carries the HTTP status the webhook endpoint answers with.
Unsupported and duplicate deliveries are outcomes, not errors.
"""

from typing import Optional


class IngestionError(Exception):
    """Base class for errors that reject a webhook delivery."""

    status_code = 500
    message = "Failed to process webhook"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.message
        super().__init__(self.detail)


class AuthenticationFailure(IngestionError):
    """Missing or mismatched webhook signature."""

    status_code = 401
    message = "Invalid signature"


class MalformedPayload(IngestionError):
    """Body is not parseable or lacks a required block."""

    status_code = 400
    message = "Malformed webhook payload"


class StorageFailure(IngestionError):
    """Persistence error other than an anticipated uniqueness violation."""

    status_code = 500
    message = "Failed to store event"
