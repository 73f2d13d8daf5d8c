# Chatter Doc Auth
# Resolves the caller of a dashboard-facing function

import logging

from .database import get_user_from_token
from .errors import Unauthorized
from .helpers import extract_bearer_token

logger = logging.getLogger(__name__)


def authenticate(authorization):
    """Return the user behind an Authorization header or raise Unauthorized"""
    token = extract_bearer_token(authorization)
    if not token:
        logger.warning("Missing authorization header")
        raise Unauthorized('Missing authorization header')

    user = get_user_from_token(token)
    if not user:
        logger.warning("Invalid or expired access token")
        raise Unauthorized('Invalid or expired access token')

    logger.info(f"User authenticated successfully: {user['id']}")
    return user
