# Chatter Doc Shared Helpers
# Utility functions used across all Chatter Doc functions

import logging
import sys

from flask import jsonify, request

from .config import LOG_FORMAT, LOG_LEVEL


def setup_logging(log_level=LOG_LEVEL):
    """Configure logging once for the running function."""
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def extract_bearer_token(authorization):
    """Pull the token out of an Authorization header value.

    Accepts both 'Bearer xxx' and a bare 'xxx'. Returns None when empty.
    """
    if not authorization:
        return None
    token = authorization.strip()
    scheme, _, value = token.partition(' ')
    if scheme == 'Bearer':
        token = value.strip()
    return token or None


def mask_secret(secret, visible=5):
    """Mask a key for logs (e.g., 'sk_ab...')"""
    if not secret:
        return ''
    return f'{secret[:visible]}...'


def parse_json_body():
    """Return the request JSON object or None if it isn't a JSON object"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def error_response(error):
    """Build the JSON response for a ChatterDocError"""
    return jsonify(error.to_dict()), error.status
