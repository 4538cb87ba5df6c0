from typing import Annotated

from fastapi import APIRouter, Header, Request
from fastapi.responses import PlainTextResponse

from threads.web.deps import AppDep
from threads.web.openapi import ErrorResponse

router = APIRouter(tags=["telegram"])


@router.post(
    "/telegram",
    summary="Telegram bot webhook",
    description="Receives bot updates. Requests must carry the webhook secret registered with setWebhook.",
    operation_id="telegramWebhook",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Update processed or ignored"},
        403: {"model": ErrorResponse, "description": "Missing or wrong webhook secret"},
    },
)
async def telegram_webhook(
    request: Request,
    app: AppDep,
    secret: Annotated[str | None, Header(alias="X-Telegram-Bot-Api-Secret-Token")] = None,
) -> PlainTextResponse:
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    # Non-actionable updates are still acknowledged with 200
    handled = await app.handle_telegram_webhook(secret, payload)
    return PlainTextResponse("OK" if handled else "Ignored")
