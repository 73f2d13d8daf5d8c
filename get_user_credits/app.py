# Chatter Doc Get User Credits
# Returns the caller's analysis credit balance

import sys
import os

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    ChatterDocError,
    setup_logging,
    error_response,
    authenticate,
    get_user_credits
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)


@app.route('/get-user-credits', methods=['GET', 'POST'])
def user_credits():
    """Get the caller's credit balance.

    New accounts are given the default balance on first read.

    Returns:
        - credits: Remaining analysis credits
    """
    try:
        user = authenticate(request.headers.get('Authorization'))

        logger.info(f"Getting credits for user: {user['id']}")
        credits = get_user_credits(user['id'])
        logger.info(f"Retrieved credits for user {user['id']}: {credits}")

        return jsonify({'credits': credits})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in get-user-credits function")
        return jsonify({
            'error': 'Failed to get user credits',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc Get User Credits',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
