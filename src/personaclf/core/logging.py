"""Sanitizing log filter that redacts self-reported answers before they reach handlers.

Questionnaire scores are personal data.  Any ``feature_id=value`` or
``feature_id: value`` pair for a known feature is rewritten so raw
answers never appear in log output.
"""

from __future__ import annotations

import logging
import re
from typing import Final, Iterable

from personaclf.core.schema import FeatureSchemaV1

_REDACTED: Final[str] = "[REDACTED]"


def _build_pattern(keys: Iterable[str]) -> re.Pattern[str]:
    alternatives = sorted((re.escape(k) for k in keys), key=len, reverse=True)
    return re.compile(
        r"(?P<quote>['\"]?)(?P<key>\b(?:" + "|".join(alternatives) + r"))(?P=quote)"
        r"\s*[=:]\s*(?P<value>\"[^\"]*\"|'[^']*'|[^\s,}\]]+)",
    )


_SENSITIVE_PATTERN: Final[re.Pattern[str]] = _build_pattern(FeatureSchemaV1.FEATURE_IDS)


def redact_message(message: str) -> str:
    """Replace answer values in ``key=value`` / ``key: value`` pairs with redaction markers.

    Args:
        message: Raw log message string.

    Returns:
        Message with every feature value replaced by ``[REDACTED]``.
    """
    return _SENSITIVE_PATTERN.sub(
        lambda m: f"{m.group('key')}={_REDACTED}", message,
    )


class SanitizingFilter(logging.Filter):
    """A :class:`logging.Filter` that rewrites log records to strip answer values.

    Attach to any logger or handler via :func:`install_sanitizing_filter`.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = redact_message(record.getMessage())
            record.args = None
        else:
            record.msg = redact_message(str(record.msg))
        return True


def install_sanitizing_filter(
    logger: logging.Logger | None = None,
    *,
    handler_level: bool = False,
) -> SanitizingFilter:
    """Attach a :class:`SanitizingFilter` to *logger* (or the root logger).

    Args:
        logger: Target logger.  Defaults to the root logger if ``None``.
        handler_level: If ``True``, install on each handler of *logger*
            instead of the logger itself.

    Returns:
        The filter instance that was installed (useful for later removal).
    """
    filt = SanitizingFilter()
    target = logger or logging.getLogger()

    if handler_level:
        for handler in target.handlers:
            handler.addFilter(filt)
    else:
        target.addFilter(filt)

    return filt


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging for the CLI with answer redaction on every handler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    install_sanitizing_filter(handler_level=True)
