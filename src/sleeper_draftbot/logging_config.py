"""Process-wide logging setup."""

import logging

from sleeper_draftbot.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # boto and the Slack SDK are noisy at DEBUG
    for name in ("botocore", "boto3", "urllib3", "slack_sdk", "slack_bolt"):
        logging.getLogger(name).setLevel(max(logging.getLogger().level, logging.INFO))
