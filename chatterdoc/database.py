# Chatter Doc Shared Database Functions
# All Supabase read/write operations (PostgREST tables, RPC and auth)

import logging
import uuid
from datetime import datetime, timezone

import httpx

from . import config
from .config import (
    API_KEY_PREFIX,
    API_KEYS_TABLE,
    FEEDBACK_TABLE,
    USER_CREDITS_TABLE,
    WIDGET_SETTINGS_TABLE
)
from .errors import ConfigurationError, UpstreamUnavailable

logger = logging.getLogger(__name__)


def _require_config():
    """Fail fast when the Supabase credentials are missing"""
    if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
        logger.error("Missing Supabase environment variables")
        raise ConfigurationError('Server configuration error: Missing Supabase credentials')


def _get_headers(extra=None):
    """Get standard Supabase service-role headers"""
    headers = {
        'apikey': config.SUPABASE_SERVICE_ROLE_KEY,
        'Authorization': f'Bearer {config.SUPABASE_SERVICE_ROLE_KEY}',
        'Content-Type': 'application/json'
    }
    if extra:
        headers.update(extra)
    return headers


def _request(method, path, headers=None, **kwargs):
    """Send one request to Supabase.

    Transport failures and 5xx answers raise UpstreamUnavailable.
    Other responses are returned as-is for the caller to interpret.
    """
    _require_config()
    url = f"{config.SUPABASE_URL}{path}"

    try:
        response = httpx.request(
            method,
            url,
            headers=headers or _get_headers(),
            timeout=config.SUPABASE_TIMEOUT,
            **kwargs
        )
    except httpx.HTTPError as e:
        logger.error(f"Supabase {method} {path} failed: {e}")
        raise UpstreamUnavailable() from e

    if response.status_code >= 500:
        logger.error(f"Supabase {method} {path} returned {response.status_code}: {response.text}")
        raise UpstreamUnavailable()

    return response


def _rest(method, table, **kwargs):
    response = _request(method, f"/rest/v1/{table}", **kwargs)
    response.raise_for_status()
    return response


# ===================
# AUTH
# ===================

def get_user_from_token(access_token):
    """Resolve an access token to its user.

    Returns {'id', 'email'} or None if the token is invalid or expired.
    """
    if not access_token:
        return None

    headers = {
        'apikey': config.SUPABASE_SERVICE_ROLE_KEY,
        'Authorization': f'Bearer {access_token}'
    }
    response = _request('GET', '/auth/v1/user', headers=headers)

    if response.status_code in (400, 401, 403, 404):
        logger.info("Token validation failed")
        return None
    response.raise_for_status()

    user = response.json()
    if not user or not user.get('id'):
        return None

    return {
        'id': user['id'],
        'email': user.get('email')
    }


# ===================
# READ OPERATIONS
# ===================

def get_feedback_by_id(feedback_id):
    """Look up one feedback item.

    Returns the raw row dict or None if not found.
    Used by analyze-sentiment before the credit gate runs.
    """
    params = {'id': f'eq.{feedback_id}', 'select': '*'}
    response = _request('GET', f"/rest/v1/{FEEDBACK_TABLE}", params=params)

    # PostgREST answers 400 for ids that aren't valid UUIDs
    if response.status_code == 400:
        logger.info(f"Feedback lookup rejected for id {feedback_id}: {response.text}")
        return None
    response.raise_for_status()

    records = response.json()
    if not records:
        logger.info(f"Feedback '{feedback_id}' not found")
        return None

    return records[0]


def get_feedback_for_user(user_id, api_key_id=None):
    """Get all feedback owned by a user, newest first.

    Optionally restricted to one API key. Each row carries the
    linked key's name and value under 'api_keys'.
    """
    params = {
        'user_id': f'eq.{user_id}',
        'select': '*,api_keys(name,api_key)',
        'order': 'created_at.desc'
    }
    if api_key_id:
        params['api_key_id'] = f'eq.{api_key_id}'

    return _rest('GET', FEEDBACK_TABLE, params=params).json()


def get_api_key_record(api_key):
    """Look up an API key.

    Returns {'id', 'user_id'} or None when the key is unknown.
    Used by submit-feedback to attribute widget submissions.
    """
    params = {'api_key': f'eq.{api_key}', 'select': 'id,user_id'}
    records = _rest('GET', API_KEYS_TABLE, params=params).json()

    if not records:
        return None

    return {
        'id': records[0]['id'],
        'user_id': records[0]['user_id']
    }


def get_credit_balance(user_id):
    """Read a user's credit balance, or None if they have no credits row"""
    params = {'user_id': f'eq.{user_id}', 'select': 'credits'}
    records = _rest('GET', USER_CREDITS_TABLE, params=params).json()

    if not records:
        return None

    return records[0].get('credits') or 0


def list_api_keys(user_id):
    """Get a user's API keys, newest first"""
    params = {
        'user_id': f'eq.{user_id}',
        'select': 'id,name,api_key,created_at',
        'order': 'created_at.desc'
    }
    return _rest('GET', API_KEYS_TABLE, params=params).json()


def get_widget_settings_row(user_id, api_key_id=None):
    """Get the widget settings row for a user and optional API key, or None"""
    params = {'user_id': f'eq.{user_id}', 'select': '*'}
    if api_key_id:
        params['api_key_id'] = f'eq.{api_key_id}'
    else:
        params['api_key_id'] = 'is.null'

    records = _rest('GET', WIDGET_SETTINGS_TABLE, params=params).json()
    return records[0] if records else None


# ===================
# WRITE OPERATIONS
# ===================

def create_feedback(user_id, api_key_id, text, rating, source):
    """Insert a new feedback item and return its id"""
    payload = {
        'user_id': user_id,
        'api_key_id': api_key_id,
        'text': text,
        'rating': rating,
        'source': source
    }
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('POST', FEEDBACK_TABLE, headers=headers, json=payload).json()

    new_id = records[0]['id'] if records else None
    logger.info(f"Created feedback {new_id} for user {user_id}")
    return new_id


def update_feedback_sentiment(feedback_id, sentiment):
    """Store a sentiment label and mark the item analyzed"""
    params = {'id': f'eq.{feedback_id}'}
    payload = {'sentiment': sentiment, 'analyzed': True}
    _rest('PATCH', FEEDBACK_TABLE, params=params, json=payload)
    logger.info(f"Updated feedback {feedback_id} with sentiment {sentiment}")


def insert_credit_balance(user_id, credits):
    """Create the credits row for a user"""
    payload = {'user_id': user_id, 'credits': credits}
    _rest('POST', USER_CREDITS_TABLE, json=payload)
    logger.info(f"Initialized credits for user {user_id}: {credits}")


def generate_api_key():
    """Make a new widget API key: 'sk_' followed by 32 hex characters"""
    return f'{API_KEY_PREFIX}{uuid.uuid4().hex}'


def create_api_key(user_id, name):
    """Insert a new API key for a user and return the stored row"""
    payload = {
        'user_id': user_id,
        'name': name,
        'api_key': generate_api_key()
    }
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('POST', API_KEYS_TABLE, headers=headers, json=payload).json()

    record = records[0] if records else None
    logger.info(f"Created API key '{name}' for user {user_id}")
    return record


def rename_api_key(user_id, key_id, name):
    """Rename one of a user's API keys.

    Returns the updated row or None if the user has no such key.
    """
    params = {'id': f'eq.{key_id}', 'user_id': f'eq.{user_id}'}
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('PATCH', API_KEYS_TABLE, params=params, headers=headers,
                    json={'name': name}).json()

    if not records:
        return None

    logger.info(f"Renamed API key {key_id} for user {user_id}")
    return records[0]


def delete_api_key(user_id, key_id):
    """Delete one of a user's API keys. Returns False if nothing was deleted."""
    params = {'id': f'eq.{key_id}', 'user_id': f'eq.{user_id}'}
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('DELETE', API_KEYS_TABLE, params=params, headers=headers).json()

    if not records:
        return False

    logger.info(f"Deleted API key {key_id} for user {user_id}")
    return True


def create_widget_settings(fields):
    """Insert a widget settings row and return it"""
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('POST', WIDGET_SETTINGS_TABLE, headers=headers, json=fields).json()
    return records[0] if records else fields


def update_widget_settings(row_id, fields):
    """Update an existing widget settings row and return it"""
    params = {'id': f'eq.{row_id}'}
    payload = dict(fields, updated_at=datetime.now(timezone.utc).isoformat())
    headers = _get_headers({'Prefer': 'return=representation'})
    records = _rest('PATCH', WIDGET_SETTINGS_TABLE, params=params, headers=headers,
                    json=payload).json()
    return records[0] if records else payload


def call_rpc(function_name, params):
    """Call a Postgres function exposed through PostgREST and return its result"""
    response = _request('POST', f"/rest/v1/rpc/{function_name}", json=params)
    response.raise_for_status()
    return response.json()
