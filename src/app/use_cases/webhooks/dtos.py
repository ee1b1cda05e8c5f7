"""
Webhook Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


class ProcessWebhookCommand(BaseModel):
    """
    One inbound delivery, exactly as received.

    secret is resolved by the API layer from configuration; None means the
    application has no secret configured.
    """

    app_name: str
    body: bytes
    svix_id: Optional[str] = None
    svix_timestamp: Optional[str] = None
    svix_signature: Optional[str] = None
    secret: Optional[str] = None


class WebhookAck(BaseModel):
    success: bool = True
    message: str = "Webhook received"
