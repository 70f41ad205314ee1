"""
Template filters for money and timestamp display.
"""
import logging
from datetime import datetime, timezone

import pytz
from flask import current_app

from ..utils.money import format_money

logger = logging.getLogger(__name__)


def money_filter(amount):
    """Format an amount with the configured currency symbol, e.g. $1,234.50."""
    symbol = current_app.config.get('CURRENCY_SYMBOL', '$')
    return format_money(amount, symbol)


def localtime_filter(value, fmt='%Y-%m-%d %H:%M'):
    """
    Convert a UTC datetime to the configured TIMEZONE and format it.

    Naive datetimes are treated as UTC. Unknown timezone names fall back to UTC.
    """
    if not isinstance(value, datetime):
        return ''
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    tz_name = current_app.config.get('TIMEZONE') or 'UTC'
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown TIMEZONE '{tz_name}', using UTC")
        tz = pytz.utc
    return value.astimezone(tz).strftime(fmt)
