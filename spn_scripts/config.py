"""
Configuration loading for the service principal scripts
"""

import os
from datetime import datetime, timezone

import yaml
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from spn_scripts.errors import ConfigError
from spn_scripts.models import PasswordWindow

DEFAULT_CONFIG_FILE = "az_spn_config.yaml"

DEFAULTS = {
    "SECRET_NAME": "spn-secret",
    "DEFAULT_ROLE": "Contributor",
    "EXPIRY_YEARS": 1,
    "EXPIRY_MONTHS": 0,
    "EXPIRY_DAYS": 0,
    "SHOW_SECRETS": False,
    "LOG_LEVEL": "INFO",
}


def load_config(config_file_path: str) -> dict:
    """Load configuration from a YAML file, filling in defaults"""

    if not os.path.exists(config_file_path):
        raise ConfigError(f"Configuration file not found: {config_file_path}")

    with open(config_file_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {config_file_path}")

    return {**DEFAULTS, **config}


def require(config: dict, key: str):
    """Return a mandatory configuration value"""
    value = config.get(key)
    if value in (None, ""):
        raise ConfigError(f"Missing required configuration value: {key}")
    return value


def role_scope(config: dict) -> str:
    """Scope for the default role assignment, subscription-wide unless configured"""
    scope = config.get("ROLE_SCOPE")
    if scope:
        return scope
    return f"/subscriptions/{require(config, 'SUBSCRIPTION')}"


def expiry_date(config: dict, now: datetime) -> datetime:
    """
    End of the password validity window.
    SECRET_END_DATE pins a fixed date; otherwise EXPIRY_YEARS/MONTHS/DAYS count forward from now.
    """
    fixed = config.get("SECRET_END_DATE")
    if fixed:
        if isinstance(fixed, datetime):
            end = fixed
        else:
            # yaml hands back a date object for unquoted ISO dates
            try:
                end = date_parser.isoparse(str(fixed))
            except ValueError as e:
                raise ConfigError(f"Invalid SECRET_END_DATE '{fixed}': {e}") from e
        if end.tzinfo is None:
            end = end.replace(tzinfo=timezone.utc)
    else:
        end = now + relativedelta(
            years=config.get("EXPIRY_YEARS", 1),
            months=config.get("EXPIRY_MONTHS", 0),
            days=config.get("EXPIRY_DAYS", 0),
        )

    if end <= now:
        raise ConfigError(f"Secret expiry {end.isoformat()} is not in the future")
    return end


def password_window_factory(config: dict):
    """
    Returns a callable producing a fresh PasswordWindow (start = now) on every call.
    The expiry settings are checked here so a bad value fails before any Azure call.
    """
    expiry_date(config, datetime.now(timezone.utc))

    def make_window() -> PasswordWindow:
        now = datetime.now(timezone.utc)
        return PasswordWindow(start=now, end=expiry_date(config, now))

    return make_window
