from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from repofeed.controllers.base_controller import BaseController
from repofeed.integrations.github.detail_enricher import DetailEnricher
from repofeed.models.event import Event
from repofeed.models.repo import Repo
from repofeed.utils.logger import logger


class EventController(BaseController):
    def __init__(self, session: Session, enricher: DetailEnricher):
        self.session = session
        self.enricher = enricher

    def show_details(self, event_id: int):
        try:
            event = Event.get(self.session, event_id)
            repo = Repo.get(self.session, event.repo_id) if event else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load event {event_id}: {e}")
            return self.failure(
                error=str(e),
                message="An error occurred while retrieving the event",
                status_code=500,
            )

        if not event:
            return self.failure("Event not found", status_code=404)

        event_data = event.dict()
        event_data["repo"] = repo.dict() if repo else None

        detail = self.enricher.enrich(event)
        return self.success(
            {
                "event": event_data,
                "details": detail.model_dump() if detail else None,
            }
        )
