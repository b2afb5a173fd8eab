import hashlib
import hmac
from typing import Optional


def compute_signature(payload: bytes, secret: str) -> str:
    hash_payload = hmac.new(secret.encode(), payload, hashlib.sha256)
    return f"sha256={hash_payload.hexdigest()}"


def verify_signature(payload: bytes, signature: Optional[str], secret: Optional[str]) -> bool:
    """
    Check an X-Hub-Signature-256 header against the raw request body.

    The digest is computed over the bytes exactly as received. Without a
    configured secret every request passes.
    """
    if not secret:
        return True
    if not signature:
        return False
    # Header values arrive latin-1 decoded and may hold non-ASCII characters.
    return hmac.compare_digest(
        compute_signature(payload, secret).encode(),
        signature.encode("latin-1", "replace"),
    )
