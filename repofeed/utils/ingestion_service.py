"""
Webhook ingestion.

Verifies, parses, normalizes and stores one GitHub webhook delivery.
Retries of an occurrence are collapsed onto one Event row in two steps: a
lookup by (repo, dedup key, type) before inserting, and the storage unique
constraint on the same triple for deliveries racing past that lookup.
"""

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from repofeed.config.db import is_unique_violation
from repofeed.core.exceptions import (
    AuthenticationFailure,
    MalformedPayload,
    StorageFailure,
)
from repofeed.integrations.github.normalizer import normalize
from repofeed.integrations.github.signature import verify_signature
from repofeed.integrations.github.webhook_payloads import parse_webhook_payload
from repofeed.models.event import Event
from repofeed.utils.dedup import derive_dedup_key
from repofeed.utils.logger import logger
from repofeed.utils.repo_resolver import resolve_repo


class IngestStatus(enum.Enum):
    CREATED = "created"
    DUPLICATE = "duplicate"
    UNSUPPORTED = "unsupported"
    PING = "ping"


@dataclass
class IngestOutcome:
    status: IngestStatus
    message: str
    event: Optional[Event] = None


class IngestionService:
    def __init__(
        self,
        session: Session,
        webhook_secret: Optional[str] = None,
        include_closed_prs: bool = False,
    ):
        self.session = session
        self.webhook_secret = webhook_secret
        self.include_closed_prs = include_closed_prs

    def ingest(
        self,
        event_family: Optional[str],
        raw_body: bytes,
        signature: Optional[str] = None,
        delivery_id: Optional[str] = None,
    ) -> IngestOutcome:
        """
        Process one delivery end to end.

        Raises:
            AuthenticationFailure: The signature does not match the body.
            MalformedPayload: The body or event header cannot be understood.
            StorageFailure: Persisting the repo or event failed.
        """
        if not verify_signature(raw_body, signature, self.webhook_secret):
            logger.warning(
                f"Rejected delivery {delivery_id}: signature does not match."
            )
            raise AuthenticationFailure()

        if not event_family:
            raise MalformedPayload("X-GitHub-Event header is required")

        data = self._decode(raw_body)

        if event_family == "ping":
            logger.info(f"Received ping delivery {delivery_id}.")
            return IngestOutcome(IngestStatus.PING, "Webhook configured successfully")

        payload = parse_webhook_payload(event_family, data)
        if payload is None:
            return self._unsupported(event_family, None, delivery_id)

        # Derived from the typed payload before normalizing: the identity
        # fields (release id, PR id, push head) are not part of the event.
        dedup_key = derive_dedup_key(event_family, payload)

        normalized = normalize(
            event_family,
            payload.action,
            payload,
            include_closed_prs=self.include_closed_prs,
        )
        if normalized is None:
            return self._unsupported(event_family, payload.action, delivery_id)

        repository = payload.repository
        repo_id = resolve_repo(
            self.session, repository.full_name, repository.html_url, repository.icon_url
        )

        if dedup_key:
            existing = self._find_existing(repo_id, dedup_key, normalized.type.value)
            if existing:
                return self._duplicate(existing, delivery_id)

        event = Event(
            **normalized.to_row(),
            repo_id=repo_id,
            github_delivery_id=delivery_id,
            github_event_id=dedup_key,
        )

        try:
            event.save(self.session)
        except IntegrityError as e:
            self.session.rollback()
            if dedup_key and is_unique_violation(e):
                existing = self._find_existing(
                    repo_id, dedup_key, normalized.type.value
                )
                if existing:
                    logger.info(
                        f"Concurrent delivery stored {dedup_key} first for {repository.full_name}."
                    )
                    return self._duplicate(existing, delivery_id)
            logger.error(
                f"Failed to store event for {repository.full_name} (dedup key: {dedup_key}): {e}"
            )
            raise StorageFailure() from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(
                f"Failed to store event for {repository.full_name} (dedup key: {dedup_key}): {e}"
            )
            raise StorageFailure() from e

        logger.info(f"Event created from delivery {delivery_id}: {event}")
        return IngestOutcome(IngestStatus.CREATED, "Event created", event)

    def _decode(self, raw_body: bytes) -> Dict[str, Any]:
        try:
            data = json.loads(raw_body)
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning(f"Rejected webhook body that is not valid JSON: {e}")
            raise MalformedPayload("Body is not valid JSON") from e

        if not isinstance(data, dict):
            raise MalformedPayload("Body must be a JSON object")
        return data

    def _find_existing(
        self, repo_id: int, dedup_key: str, event_type: str
    ) -> Optional[Event]:
        try:
            return Event.first_by(
                self.session,
                repo_id=repo_id,
                github_event_id=dedup_key,
                type=event_type,
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(
                f"Failed to look up event (repo: {repo_id}, dedup key: {dedup_key}): {e}"
            )
            raise StorageFailure() from e

    def _unsupported(
        self, event_family: str, action: Optional[str], delivery_id: Optional[str]
    ) -> IngestOutcome:
        logger.info(
            f"Ignoring delivery {delivery_id}: {event_family} (action: {action}) is not tracked."
        )
        return IngestOutcome(IngestStatus.UNSUPPORTED, "Event type not supported")

    def _duplicate(self, existing: Event, delivery_id: Optional[str]) -> IngestOutcome:
        logger.info(
            f"Delivery {delivery_id} duplicates event {existing.id} ({existing.github_event_id})."
        )
        return IngestOutcome(IngestStatus.DUPLICATE, "Event already recorded", existing)
