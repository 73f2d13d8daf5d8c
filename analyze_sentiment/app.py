# Chatter Doc Analyze Sentiment
# Classifies a stored feedback item, charging one analysis credit

import sys
import os

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
import httpx

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    REANALYZE_POLICY,
    ChatterDocError,
    InvalidInput,
    Forbidden,
    NotFound,
    AlreadyAnalyzed,
    UpstreamUnavailable,
    setup_logging,
    parse_json_body,
    error_response,
    authenticate,
    analyze_text_sentiment,
    get_feedback_by_id,
    update_feedback_sentiment,
    require_analysis_credit,
    get_remaining_credits
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)


@app.route('/analyze-sentiment', methods=['POST'])
def analyze_sentiment():
    """Run sentiment analysis on one feedback item.

    Accepts:
        - feedbackId: The stored feedback item to classify

    Returns:
        - success: True
        - sentiment: positive, negative or neutral
        - credits: The caller's remaining credit balance
    """
    try:
        data = parse_json_body()
        if data is None:
            raise InvalidInput('Invalid request body')

        feedback_id = data.get('feedbackId')
        if not feedback_id:
            raise InvalidInput('feedbackId is required')

        user = authenticate(request.headers.get('Authorization'))
        user_id = user['id']

        logger.info(f"Fetching feedback with ID: {feedback_id}")
        feedback = get_feedback_by_id(feedback_id)

        if not feedback:
            raise NotFound('Feedback not found')

        if feedback.get('user_id') != user_id:
            logger.warning(f"User {user_id} does not own feedback {feedback_id}")
            raise Forbidden('You do not have permission to analyze this feedback')

        if feedback.get('sentiment') and REANALYZE_POLICY == 'reject':
            raise AlreadyAnalyzed('Feedback has already been analyzed')

        text = feedback.get('text') or ''
        if not text.strip():
            logger.warning(f"Feedback {feedback_id} has empty text, cannot analyze sentiment")
            raise InvalidInput('Feedback text is empty')

        # Charge before classifying; a failed write below does not refund
        require_analysis_credit(user_id)

        sentiment = analyze_text_sentiment(text, feedback.get('rating'))

        try:
            update_feedback_sentiment(feedback_id, sentiment.value)
        except httpx.HTTPStatusError as e:
            logger.error(f"Error updating feedback {feedback_id}: {e}")
            raise UpstreamUnavailable('Failed to save sentiment analysis, please try again') from e

        logger.info(f"Successfully analyzed feedback {feedback_id}: {sentiment.value}")

        # Label is saved; report 0 credits if the balance read fails
        try:
            credits = get_remaining_credits(user_id)
        except ChatterDocError as e:
            logger.warning(f"Could not read remaining credits for user {user_id}: {e.message}")
            credits = 0

        return jsonify({
            'success': True,
            'sentiment': sentiment.value,
            'credits': credits
        })

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in analyze-sentiment function")
        return jsonify({
            'error': 'Failed to analyze sentiment',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc Analyze Sentiment',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
