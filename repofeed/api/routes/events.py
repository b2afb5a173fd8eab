from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from repofeed.config.db import get_session
from repofeed.controllers.event_controller import EventController
from repofeed.integrations.github.detail_enricher import DetailEnricher

router = APIRouter()


def get_detail_enricher(request: Request) -> DetailEnricher:
    return DetailEnricher(request.app.state.github_client)


@router.get("/{event_id}/details")
def get_event_details(
    event_id: int,
    session: Session = Depends(get_session),
    enricher: DetailEnricher = Depends(get_detail_enricher),
):
    return EventController(session, enricher).show_details(event_id)
