import hashlib
import hmac
from typing import Optional

# GitHub sends the SHA-256 variant in this header as "sha256=<hexdigest>".
# The legacy SHA-1 "X-Hub-Signature" header is not read.
SIGNATURE_HEADER = "X-Hub-Signature-256"

def parse_signature_header(value: Optional[str]) -> Optional[str]:
    """Return the hexdigest half of an 'algorithm=hexdigest' header value."""
    if not value:
        return None
    algorithm, separator, digest = value.partition("=")
    if not separator or not algorithm or not digest:
        return None
    return digest

def verify_signature(candidate_hex: str, body: bytes, secret: str) -> bool:
    """Check a hex encoded HMAC-SHA256 tag against the raw request body.

    Malformed hex never raises, it simply fails verification.
    """
    try:
        candidate = bytes.fromhex(candidate_hex)
    except ValueError:
        return False
    expected = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return hmac.compare_digest(expected, candidate)

def sign(body: bytes, secret: str) -> str:
    """Build the header value a sender would attach to body."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"
