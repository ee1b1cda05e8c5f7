"""
Webhook signature verification

The identity provider signs each delivery the Svix way:

    signed content = "{msg_id}.{timestamp}.{raw body}"
    signature      = base64(HMAC-SHA256(base64decode(secret), signed content))

and sends it as ``v1,<signature>`` (several space separated entries during
secret rotation). The secret is configured as ``whsec_<base64>``.
"""

import base64
import binascii
import hashlib
import hmac
import time
from typing import Optional

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"
DEFAULT_TOLERANCE_SECONDS = 300  # 5 minutes


class WebhookVerificationError(Exception):
    pass


class WebhookVerifier:
    def __init__(self, secret: str, tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS):
        if secret.startswith(SECRET_PREFIX):
            secret = secret[len(SECRET_PREFIX):]
        try:
            self._key = base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise WebhookVerificationError("Webhook secret is not valid base64") from exc
        if not self._key:
            raise WebhookVerificationError("Webhook secret is empty")
        self.tolerance_seconds = tolerance_seconds

    def sign(self, msg_id: str, timestamp: int, body: bytes) -> str:
        signed_content = f"{msg_id}.{timestamp}.".encode() + body
        digest = hmac.new(self._key, signed_content, hashlib.sha256).digest()
        return f"{SIGNATURE_VERSION},{base64.b64encode(digest).decode()}"

    def verify(
        self,
        body: bytes,
        msg_id: str,
        timestamp: str,
        signature_header: str,
        now: Optional[int] = None,
    ) -> None:
        """
        Raise WebhookVerificationError unless one of the signatures matches.

        The timestamp must lie within tolerance_seconds of now in either
        direction.
        """
        try:
            sent_at = int(timestamp)
        except (TypeError, ValueError) as exc:
            raise WebhookVerificationError("Invalid signature timestamp") from exc

        now = int(time.time()) if now is None else now
        if sent_at < now - self.tolerance_seconds:
            raise WebhookVerificationError("Message timestamp too old")
        if sent_at > now + self.tolerance_seconds:
            raise WebhookVerificationError("Message timestamp too new")

        expected = self.sign(msg_id, sent_at, body).split(",", 1)[1]

        for versioned in signature_header.split(" "):
            version, _, signature = versioned.partition(",")
            if version != SIGNATURE_VERSION:
                continue
            if hmac.compare_digest(expected, signature):
                return

        raise WebhookVerificationError("No matching signature found")
