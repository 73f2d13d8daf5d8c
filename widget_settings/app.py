# Chatter Doc Widget Settings
# Reads and saves the look and behaviour of a user's feedback widget

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from chatterdoc import (
    CORS_ALLOW_HEADERS,
    ChatterDocError,
    InvalidInput,
    setup_logging,
    parse_json_body,
    error_response,
    authenticate,
    get_widget_settings_row,
    create_widget_settings,
    update_widget_settings
)

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, allow_headers=CORS_ALLOW_HEADERS)

DEFAULT_SETTINGS = {
    'title': 'We value your feedback!',
    'backgroundColor': '#ffffff',
    'textColor': '#333333',
    'primaryColor': '#3b82f6',
    'showLogo': True,
    'logoUrl': '',
    'feedbackType': 'text',
    'buttonStyle': 'rectangle',
    'ratingScale': 5,
    'showPrompt': True,
    'customPrompt': 'How was your experience with our product?',
    'position': 'bottom-right',
    'showRating': False,
    'ratingType': 'stars',
    'buttonText': 'Feedback'
}

# camelCase request field -> widget_settings column
COLUMNS = {
    'title': 'title',
    'backgroundColor': 'background_color',
    'textColor': 'text_color',
    'primaryColor': 'primary_color',
    'showLogo': 'show_logo',
    'logoUrl': 'logo_url',
    'feedbackType': 'feedback_type',
    'buttonStyle': 'button_style',
    'ratingScale': 'rating_scale',
    'showPrompt': 'show_prompt',
    'customPrompt': 'custom_prompt',
    'position': 'position',
    'showRating': 'show_rating',
    'ratingType': 'rating_type',
    'buttonText': 'button_text'
}

CHOICES = {
    'position': ('bottom-right', 'bottom-left', 'top-right', 'top-left'),
    'buttonStyle': ('rectangle', 'circle', 'chat'),
    'feedbackType': ('text', 'rating', 'both'),
    'ratingType': ('stars', 'emoji'),
    'ratingScale': (5, 10)
}

FLAGS = ('showLogo', 'showPrompt', 'showRating')


def validate_settings(data):
    """Check a settings payload and merge it over the defaults.

    Unknown fields are ignored. Raises InvalidInput for bad values.
    """
    settings = dict(DEFAULT_SETTINGS)

    for field in COLUMNS:
        if field not in data:
            continue
        value = data[field]

        if field in CHOICES:
            if isinstance(value, bool) or value not in CHOICES[field]:
                allowed = ', '.join(str(c) for c in CHOICES[field])
                raise InvalidInput(f'{field} must be one of {allowed}')
        elif field in FLAGS:
            if not isinstance(value, bool):
                raise InvalidInput(f'{field} must be true or false')
        elif not isinstance(value, str):
            raise InvalidInput(f'{field} must be a string')

        settings[field] = value

    return settings


def to_row(settings):
    return {COLUMNS[field]: value for field, value in settings.items()}


def from_row(row):
    """Read a widget_settings row back into camelCase, filling gaps with defaults"""
    settings = dict(DEFAULT_SETTINGS)
    for field, column in COLUMNS.items():
        if row.get(column) is not None:
            settings[field] = row[column]
    return settings


def save_settings(user_id, api_key_id, settings):
    """Update the user's settings row for this key, or insert one"""
    existing = get_widget_settings_row(user_id, api_key_id)
    fields = to_row(settings)

    if existing:
        logger.info(f"Updating widget settings {existing['id']} for user {user_id}")
        row = update_widget_settings(existing['id'], fields)
    else:
        logger.info(f"Creating widget settings for user {user_id}")
        row = create_widget_settings(dict(fields, user_id=user_id, api_key_id=api_key_id))

    return from_row(row)


@app.route('/widget-settings', methods=['GET'])
def get_settings():
    """Get the caller's widget settings.

    Accepts:
        - apiKeyId: Optional query parameter, settings are stored per key

    Users without saved settings get the defaults, which are saved first.
    """
    try:
        user = authenticate(request.headers.get('Authorization'))
        api_key_id = request.args.get('apiKeyId')

        row = get_widget_settings_row(user['id'], api_key_id)
        if row:
            settings = from_row(row)
        else:
            settings = save_settings(user['id'], api_key_id, dict(DEFAULT_SETTINGS))

        return jsonify({'settings': settings})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in widget-settings get")
        return jsonify({
            'error': 'Failed to load widget settings',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/widget-settings', methods=['PUT', 'POST'])
def put_settings():
    """Save the caller's widget settings.

    Accepts the camelCase settings object plus an optional apiKeyId.
    Fields left out fall back to the defaults.
    """
    try:
        user = authenticate(request.headers.get('Authorization'))

        data = parse_json_body()
        if data is None:
            raise InvalidInput('Invalid request body')

        settings = validate_settings(data)
        saved = save_settings(user['id'], data.get('apiKeyId'), settings)

        return jsonify({'success': True, 'settings': saved})

    except ChatterDocError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error in widget-settings save")
        return jsonify({
            'error': 'Failed to save widget settings',
            'code': 'INTERNAL_ERROR'
        }), 500


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'Chatter Doc Widget Settings',
        'version': '1.0'
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port)
