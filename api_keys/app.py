# Chatter Doc API Keys
# Lets dashboard users create, list, rename and delete their widget API keys

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    DEFAULT_API_KEY_NAME,
    ChatterDocError,
    InvalidInput,
    NotFound,
    setup_logging,
    parse_json_body,
    error_response,
    authenticate,
    list_api_keys,
    create_api_key,
    rename_api_key,
    delete_api_key
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)


def format_api_key(record):
    """Convert an api_keys row into the dashboard's camelCase shape"""
    return {
        'id': record.get('id'),
        'name': record.get('name'),
        'key': record.get('api_key'),
        'createdAt': record.get('created_at')
    }


def parse_key_name(data):
    """Validate the 'name' field of a create or rename request"""
    if data is None:
        raise InvalidInput('Invalid request body')

    name = data.get('name')
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput('name is required')

    return name.strip()


@app.route('/api-keys', methods=['GET'])
def get_api_keys():
    """List the caller's API keys, newest first.

    A user with no keys gets a default key created on first read,
    so the widget always has something to embed.
    """
    try:
        user = authenticate(request.headers.get('Authorization'))

        records = list_api_keys(user['id'])
        if not records:
            logger.info(f"No API keys for user {user['id']}, creating default key")
            records = [create_api_key(user['id'], DEFAULT_API_KEY_NAME)]

        return jsonify({'apiKeys': [format_api_key(r) for r in records]})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in api-keys list")
        return jsonify({
            'error': 'Failed to load API keys',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/api-keys', methods=['POST'])
def new_api_key():
    """Create an API key.

    Accepts:
        - name: Display name for the key
    """
    try:
        user = authenticate(request.headers.get('Authorization'))
        name = parse_key_name(parse_json_body())

        record = create_api_key(user['id'], name)
        return jsonify({'apiKey': format_api_key(record)}), 201

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in api-keys create")
        return jsonify({
            'error': 'Failed to create API key',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/api-keys/<key_id>', methods=['PATCH'])
def update_api_key(key_id):
    """Rename one of the caller's API keys"""
    try:
        user = authenticate(request.headers.get('Authorization'))
        name = parse_key_name(parse_json_body())

        record = rename_api_key(user['id'], key_id, name)
        if not record:
            raise NotFound('API key not found')

        return jsonify({'apiKey': format_api_key(record)})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in api-keys rename")
        return jsonify({
            'error': 'Failed to update API key',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/api-keys/<key_id>', methods=['DELETE'])
def remove_api_key(key_id):
    """Delete one of the caller's API keys"""
    try:
        user = authenticate(request.headers.get('Authorization'))

        if not delete_api_key(user['id'], key_id):
            raise NotFound('API key not found')

        return jsonify({'success': True})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in api-keys delete")
        return jsonify({
            'error': 'Failed to delete API key',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc API Keys',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
