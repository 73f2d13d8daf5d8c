# Chatter Doc Shared Config
# Central configuration for all Chatter Doc functions

import os

# Supabase
SUPABASE_URL = os.environ.get('SUPABASE_URL', '').rstrip('/')
SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')
SUPABASE_TIMEOUT = float(os.environ.get('SUPABASE_TIMEOUT', '10.0'))

# Table names
FEEDBACK_TABLE = 'feedback'
USER_CREDITS_TABLE = 'user_credits'
API_KEYS_TABLE = 'api_keys'

# RPC functions
USE_CREDIT_RPC = 'use_analysis_credit'

# Credits
DEFAULT_CREDITS = 25

# What to do when an already analyzed item is analyzed again
REANALYZE_POLICIES = ('allow', 'reject')


def parse_reanalyze_policy(value):
    """Normalize REANALYZE_POLICY, raising ValueError for unknown values"""
    policy = (value or 'allow').strip().lower()
    if policy not in REANALYZE_POLICIES:
        raise ValueError(
            f"REANALYZE_POLICY must be one of {', '.join(REANALYZE_POLICIES)}, got '{value}'"
        )
    return policy


REANALYZE_POLICY = parse_reanalyze_policy(os.environ.get('REANALYZE_POLICY'))

# Feedback ratings (widgets offer 1-5 or 1-10 scales, 0 means no rating)
MAX_RATING = 10

# API keys
DEFAULT_API_KEY_NAME = 'Default API Key'
API_KEY_PREFIX = 'sk_'

# Widget settings
WIDGET_SETTINGS_TABLE = 'widget_settings'

# CORS
CORS_ALLOW_HEADERS = ['authorization', 'x-client-info', 'apikey', 'content-type']

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
