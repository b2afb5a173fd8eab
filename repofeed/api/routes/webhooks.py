from fastapi import APIRouter, Depends, Header, Request
from sqlmodel import Session

from repofeed.config.db import get_session
from repofeed.config.settings import GITHUB_WEBHOOK_SECRET, TRACK_CLOSED_PRS
from repofeed.controllers.webhook_controller import WebhookController
from repofeed.utils.ingestion_service import IngestionService

router = APIRouter()


@router.post("/github")
async def github_webhook(
    request: Request,
    event: str = Header(None, alias="X-GitHub-Event"),
    signature: str = Header(None, alias="X-Hub-Signature-256"),
    delivery_id: str = Header(None, alias="X-GitHub-Delivery"),
    session: Session = Depends(get_session),
):
    # The signature covers the exact bytes sent, so read them before any parsing.
    raw_body = await request.body()

    service = IngestionService(
        session,
        webhook_secret=GITHUB_WEBHOOK_SECRET,
        include_closed_prs=TRACK_CLOSED_PRS,
    )
    return WebhookController(service).receive(
        event, raw_body, signature=signature, delivery_id=delivery_id
    )
