import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Webhook-Signature"


def sign_payload(payload: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def verify_signature(payload: bytes, signature_header: str, secret: str) -> bool:
    """
    Verify a change webhook signature.

    The header carries ``sha256=<hex>`` where hex is HMAC-SHA256(body, secret).
    """
    if not signature_header or not secret:
        return False

    algo, _, provided = signature_header.partition("=")
    if algo != "sha256" or not provided:
        logger.warning(f"Unsupported webhook signature format: {algo}")
        return False

    expected = sign_payload(payload, secret).partition("=")[2]
    return hmac.compare_digest(expected, provided)
