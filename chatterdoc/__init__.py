# Chatter Doc Shared Module
# Common functions used across all Chatter Doc functions

from .config import (
    DEFAULT_CREDITS,
    REANALYZE_POLICY,
    MAX_RATING,
    DEFAULT_API_KEY_NAME,
    CORS_ALLOW_HEADERS
)

from .errors import (
    ChatterDocError,
    InvalidInput,
    Unauthorized,
    InsufficientCredits,
    Forbidden,
    NotFound,
    AlreadyAnalyzed,
    ConfigurationError,
    UpstreamUnavailable
)

from .helpers import (
    setup_logging,
    extract_bearer_token,
    mask_secret,
    parse_json_body,
    error_response
)

from .sentiment import (
    SentimentLabel,
    SentimentScore,
    analyze_text_sentiment,
    score_text_sentiment
)

from .database import (
    get_user_from_token,
    get_feedback_by_id,
    get_feedback_for_user,
    get_api_key_record,
    list_api_keys,
    get_widget_settings_row,
    create_feedback,
    update_feedback_sentiment,
    create_api_key,
    rename_api_key,
    delete_api_key,
    create_widget_settings,
    update_widget_settings
)

from .auth import authenticate

from .credits import (
    use_analysis_credit,
    require_analysis_credit,
    get_user_credits,
    get_remaining_credits
)
