"""Miscellaneous helpers shared across driver-images."""

from __future__ import annotations

import logging

NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def suppress_noisy_loggers(level: int = logging.WARNING) -> None:
    """Raise the log level of chatty third-party loggers.

    botocore logs every request and credential lookup at DEBUG, which
    drowns out our own output when running with ``--verbose``.
    """
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)
