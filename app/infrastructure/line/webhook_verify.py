from __future__ import annotations

import base64
import hashlib
import hmac
import logging


logger = logging.getLogger(__name__)


def sign_body(body: bytes, channel_secret: str) -> str:
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_post_signature(body: bytes, signature_header: str | None, channel_secret: str | None) -> bool:
    """
    Check X-Line-Signature against the raw request body.
    The body must be the exact bytes received, never re-serialized JSON.
    """
    if not signature_header:
        return False

    if not channel_secret:
        logger.error("Missing channel secret for signature verification")
        return False

    expected = sign_body(body, channel_secret)
    return hmac.compare_digest(expected.encode("ascii"), signature_header.strip().encode("utf-8"))
