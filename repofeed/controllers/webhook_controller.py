from typing import Optional

from repofeed.controllers.base_controller import BaseController
from repofeed.core.exceptions import IngestionError
from repofeed.utils.ingestion_service import IngestionService, IngestStatus
from repofeed.utils.logger import logger

STATUS_CODES = {
    IngestStatus.CREATED: 201,
    IngestStatus.DUPLICATE: 200,
    IngestStatus.UNSUPPORTED: 200,
    IngestStatus.PING: 200,
}


class WebhookController(BaseController):
    def __init__(self, service: IngestionService):
        self.service = service

    def receive(
        self,
        event_family: Optional[str],
        raw_body: bytes,
        signature: Optional[str] = None,
        delivery_id: Optional[str] = None,
    ):
        try:
            outcome = self.service.ingest(
                event_family, raw_body, signature=signature, delivery_id=delivery_id
            )
        except IngestionError as e:
            if e.status_code >= 500:
                logger.error(f"Webhook delivery {delivery_id} failed: {e.detail}")
            else:
                logger.warning(f"Webhook delivery {delivery_id} rejected: {e.detail}")
            return self.failure(
                error=e.detail, message=e.message, status_code=e.status_code
            )

        return self.success(
            {
                "outcome": outcome.status.value,
                "event": outcome.event.dict() if outcome.event else None,
            },
            message=outcome.message,
            status_code=STATUS_CODES[outcome.status],
        )
