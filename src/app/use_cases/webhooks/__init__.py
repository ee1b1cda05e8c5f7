"""
Webhook Use Cases

Ingestion of identity-provider deliveries.
"""

from .dtos import ProcessWebhookCommand, WebhookAck
from .process_webhook_use_case import ProcessWebhookUseCase

__all__ = [
    "ProcessWebhookUseCase",
    "ProcessWebhookCommand",
    "WebhookAck",
]
