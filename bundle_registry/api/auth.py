import logging

from fastapi import Depends, Header

from bundle_registry.core.config import Settings, get_settings
from bundle_registry.core.error_codes import ErrorCode
from bundle_registry.core.errors import ApiError
from bundle_registry.core.security import api_key_matches, extract_api_token

logger = logging.getLogger(__name__)


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.api_key:
        return
    token = extract_api_token(x_api_key, authorization)
    if not token:
        raise ApiError(status_code=401, code=ErrorCode.MISSING_API_KEY, message="Missing API key")
    if not api_key_matches(token, settings.api_key):
        logger.warning("Rejected request with an invalid API key")
        raise ApiError(status_code=403, code=ErrorCode.INVALID_API_KEY, message="Invalid API key")
