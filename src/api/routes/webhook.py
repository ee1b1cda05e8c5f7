"""
Webhook API Routes

Receives signed identity-provider deliveries, one route per application.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.webhooks import ProcessWebhookCommand, ProcessWebhookUseCase, WebhookAck
from src.depends import get_unit_of_work

router = APIRouter(prefix="/webhook", tags=["Webhook"])

CLIENT_ERROR_CODES = (
    "MISCONFIGURED_APPLICATION",
    "MISSING_SIGNATURE_HEADERS",
    "INVALID_SIGNATURE",
    "INVALID_PAYLOAD",
)


@router.post("/{app_name}", status_code=status.HTTP_200_OK, response_model=WebhookAck)
async def receive_webhook(
    app_name: str,
    request: Request,
    svix_id: Optional[str] = Header(None),
    svix_timestamp: Optional[str] = Header(None),
    svix_signature: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Receive Webhook

    The path segment names the application; its signing secret is read from
    WEBHOOK_SECRET_<APP_NAME>.

    Raises:
        - 400 Bad Request: secret not configured, svix headers missing,
          signature invalid or payload malformed
        - 500 Internal Server Error: DATABASE_ERROR (provider will redeliver)
    """
    command = ProcessWebhookCommand(
        app_name=app_name,
        body=await request.body(),
        svix_id=svix_id,
        svix_timestamp=svix_timestamp,
        svix_signature=svix_signature,
        secret=ApplicationConfig.get_webhook_secret(app_name),
    )

    use_case = ProcessWebhookUseCase(
        uow,
        tolerance_seconds=ApplicationConfig.WEBHOOK_TOLERANCE_SECONDS,
        max_wait_ms=ApplicationConfig.TRANSACTION_MAX_WAIT_MS,
        timeout_ms=ApplicationConfig.TRANSACTION_TIMEOUT_MS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in CLIENT_ERROR_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error, message="Database error")

    return result.value
