"""
API key authentication
"""
from fastapi import HTTPException, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from config.settings import settings
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

security = HTTPBearer()


def verify_api_key(credentials: HTTPAuthorizationCredentials = Security(security)) -> str:
    """
    Check the bearer token against the configured API key

    Raises:
        HTTPException: 401 when the key does not match
    """
    token = credentials.credentials

    if token != settings.api_secret_key:
        logger.warning(f"Rejected API key: {token[:4]}...")
        raise HTTPException(status_code=401, detail="Invalid API key")

    return token
