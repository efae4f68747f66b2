import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token part of an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None

def verify_bearer_token(authorization: Optional[str], expected: str) -> bool:
    """Static token gate; not a capability model."""
    token = bearer_token(authorization)
    if token is None:
        return False
    if not hmac.compare_digest(token.encode('utf-8'), expected.encode('utf-8')):
        logger.info("Rejected request with an invalid bearer token")
        return False
    return True
