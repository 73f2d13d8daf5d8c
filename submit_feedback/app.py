# Chatter Doc Submit Feedback
# Receives feedback from embedded widgets, authenticated by API key

import sys
import os

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    MAX_RATING,
    ChatterDocError,
    InvalidInput,
    Unauthorized,
    setup_logging,
    extract_bearer_token,
    mask_secret,
    parse_json_body,
    error_response,
    get_api_key_record,
    create_feedback
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)


def parse_rating(value):
    """Validate an optional star rating. Returns 0 for no rating."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidInput('Rating must be a whole number')
    try:
        rating = int(value)
    except ValueError:
        raise InvalidInput('Rating must be a whole number')
    if rating < 0:
        raise InvalidInput('Rating cannot be negative')
    if rating > MAX_RATING:
        raise InvalidInput(f'Rating cannot be above {MAX_RATING}')
    return rating


@app.route('/submit-feedback', methods=['POST'])
def submit_feedback():
    """Store feedback sent by a widget.

    Accepts:
        - Authorization: 'Bearer <api key>' or the bare API key
        - text: Feedback text (optional if rating given)
        - rating: Star rating (optional if text given)

    Returns:
        - success: True
        - message: Confirmation message
        - id: The new feedback item's id
    """
    try:
        api_key = extract_bearer_token(request.headers.get('Authorization'))
        if not api_key:
            raise Unauthorized('Missing API key')

        logger.info(f"Feedback submitted with API key {mask_secret(api_key)}")

        data = parse_json_body()
        if data is None:
            raise InvalidInput('Invalid request body')

        text = data.get('text')
        rating = data.get('rating')

        if not text and rating is None:
            raise InvalidInput('Text or rating is required')

        if text is not None and not isinstance(text, str):
            raise InvalidInput('Text must be a string')

        rating = parse_rating(rating)

        key_record = get_api_key_record(api_key)
        if not key_record:
            logger.warning(f"API key not found: {mask_secret(api_key)}")
            raise Unauthorized('Invalid API key')

        feedback_id = create_feedback(
            user_id=key_record['user_id'],
            api_key_id=key_record['id'],
            text=text or '',
            rating=rating,
            source=request.headers.get('Origin') or 'Unknown'
        )

        return jsonify({
            'success': True,
            'message': 'Feedback submitted successfully',
            'id': feedback_id
        })

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in submit-feedback function")
        return jsonify({
            'error': 'Failed to submit feedback',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc Submit Feedback',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
