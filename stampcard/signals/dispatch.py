"""Post-commit dispatch of domain events."""

import logging

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)


def send_isolated(signal: Signal, sender, **kwargs) -> list:
    """
    Send to every receiver, logging (never raising) receiver failures.

    Returns the (receiver, response) pairs from send_robust.
    """
    responses = signal.send_robust(sender=sender, **kwargs)
    for receiver, response in responses:
        if isinstance(response, Exception):
            logger.warning(
                "Receiver %s failed: %s",
                getattr(receiver, "__qualname__", receiver),
                response,
                exc_info=(type(response), response, response.__traceback__),
            )
    return responses


def emit_on_commit(signal: Signal, sender, **kwargs) -> None:
    """Send the signal once the current transaction commits (immediately in autocommit)."""
    transaction.on_commit(lambda: send_isolated(signal, sender, **kwargs))
