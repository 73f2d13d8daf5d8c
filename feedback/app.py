# Chatter Doc Feedback
# Lists a dashboard user's feedback with a sentiment breakdown

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    ChatterDocError,
    SentimentLabel,
    setup_logging,
    error_response,
    authenticate,
    get_feedback_for_user
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)

LABELS = frozenset(label.value for label in SentimentLabel)


def format_feedback(item):
    """Convert a feedback row into the dashboard's camelCase shape"""
    api_key = item.get('api_keys') or {}
    return {
        'id': item.get('id'),
        'userId': item.get('user_id'),
        'apiKey': api_key.get('api_key', ''),
        'apiKeyName': api_key.get('name') or 'Unknown',
        'apiKeyId': item.get('api_key_id'),
        'text': item.get('text'),
        'rating': item.get('rating'),
        'sentiment': item.get('sentiment'),
        'createdAt': item.get('created_at'),
        'analyzed': bool(item.get('analyzed')),
        'source': item.get('source')
    }


def summarize_feedback(items):
    """Count feedback per sentiment label.

    Items without a label count as unanalyzed.
    """
    summary = {label: 0 for label in LABELS}
    summary['total'] = len(items)
    summary['unanalyzed'] = 0

    for item in items:
        sentiment = item.get('sentiment')
        if sentiment in LABELS:
            summary[sentiment] += 1
        else:
            summary['unanalyzed'] += 1

    summary['analyzed'] = summary['total'] - summary['unanalyzed']
    return summary


@app.route('/feedback', methods=['GET'])
def feedback():
    """List the caller's feedback, newest first.

    Accepts:
        - apiKeyId: Optional query parameter to filter by API key

    Returns:
        - feedback: List of feedback items
        - summary: Counts per sentiment label
    """
    try:
        user = authenticate(request.headers.get('Authorization'))
        api_key_id = request.args.get('apiKeyId')

        rows = get_feedback_for_user(user['id'], api_key_id=api_key_id)
        items = [format_feedback(row) for row in rows]

        logger.info(f"Returning {len(items)} feedback items for user {user['id']}")

        return jsonify({
            'feedback': items,
            'summary': summarize_feedback(items)
        })

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in feedback function")
        return jsonify({
            'error': 'Failed to load feedback',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc Feedback',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
