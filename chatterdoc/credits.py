# Chatter Doc Credits
# Analysis credit balance and the one-credit-per-analysis gate

import logging

from .config import DEFAULT_CREDITS, USE_CREDIT_RPC
from .database import call_rpc, get_credit_balance, insert_credit_balance
from .errors import InsufficientCredits

logger = logging.getLogger(__name__)


def use_analysis_credit(user_id):
    """Consume one credit if the balance is above zero.

    The check and the decrement happen in a single conditional UPDATE
    inside the database, so concurrent requests cannot both spend the
    last credit. Returns True when a credit was consumed.
    """
    result = call_rpc(USE_CREDIT_RPC, {'user_id_param': user_id})

    # Scalar functions come back bare, but tolerate a one-row list
    if isinstance(result, list):
        result = result[0] if result else False

    consumed = bool(result)
    logger.info(f"Credit check for user {user_id}: {consumed}")
    return consumed


def require_analysis_credit(user_id):
    """Consume one credit or raise InsufficientCredits"""
    if not use_analysis_credit(user_id):
        raise InsufficientCredits()


def get_user_credits(user_id):
    """Return the user's balance, creating a default balance on first read"""
    credits = get_credit_balance(user_id)

    if credits is None:
        logger.info(f"No credits found for user {user_id}, initializing with default {DEFAULT_CREDITS}")
        insert_credit_balance(user_id, DEFAULT_CREDITS)
        return DEFAULT_CREDITS

    return credits


def get_remaining_credits(user_id):
    """Return the user's balance without creating one (0 when missing)"""
    credits = get_credit_balance(user_id)
    return credits or 0
