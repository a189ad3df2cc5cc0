"""
Response classification.

Maps the outcome of one dispatch (an HTTP status code or a transport error)
to the single action the loop must take. The mapping is closed: every
possible outcome lands on exactly one action.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from idhunt.errors import TransportError

STATUS_FOUND = 200
# The target redirects to its login page once the session has expired.
STATUS_SESSION_EXPIRED = 302
STATUS_NOT_FOUND = 404

Outcome = Union[int, TransportError]


class Action(str, Enum):
    REPORT_HIT = "report_hit"
    NEEDS_CREDENTIAL = "needs_credential"
    IGNORE = "ignore"
    WARN_UNEXPECTED = "warn_unexpected"
    LOG_TRANSPORT_ERROR = "log_transport_error"


def classify(outcome: Outcome) -> Action:
    if isinstance(outcome, TransportError):
        return Action.LOG_TRANSPORT_ERROR
    if outcome == STATUS_FOUND:
        return Action.REPORT_HIT
    if outcome == STATUS_SESSION_EXPIRED:
        return Action.NEEDS_CREDENTIAL
    if outcome == STATUS_NOT_FOUND:
        return Action.IGNORE
    return Action.WARN_UNEXPECTED
