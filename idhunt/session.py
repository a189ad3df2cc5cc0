"""Module session: the single live session credential for a hunt."""
#
# PURPOSE:
# The target authenticates every request with a PHP session cookie. The
# operator supplies the first value at startup; when the target signals
# expiry the loop asks for a replacement and swaps it in here.
#
# KEY CONCEPTS:
# - Exactly one credential is live at a time; replacement discards the old one
# - ACTIVE while requests use it, AWAITING_INPUT only during a reprompt
# - Reads and replacement take the same lock, so a dispatcher running on
#   another thread always sees one consistent value
#

from __future__ import annotations

import logging
import sys
from enum import Enum
from threading import RLock
from typing import Callable, Optional, TextIO

from idhunt.errors import ErrorCode, SessionInputError

logger = logging.getLogger(__name__)

COOKIE_NAME = "PHPSESSID"

CredentialPrompt = Callable[[], str]


class CredentialState(str, Enum):
    ACTIVE = "active"
    AWAITING_INPUT = "awaiting_input"


def make_session_cookie(session_id: str) -> str:
    """Render the Cookie header value for a session id."""
    return f"{COOKIE_NAME}={session_id}"


class SessionStore:
    """
    Mutable cell holding the current session credential.

    Owned by the request loop and passed explicitly to whoever needs it.
    """

    def __init__(self, session_id: str):
        self._lock = RLock()
        self._session_id = session_id
        self._state = CredentialState.ACTIVE

    @property
    def session_id(self) -> str:
        with self._lock:
            return self._session_id

    @property
    def state(self) -> CredentialState:
        with self._lock:
            return self._state

    def cookie(self) -> str:
        with self._lock:
            return make_session_cookie(self._session_id)

    def refresh(self, prompt: CredentialPrompt) -> str:
        """
        Block on ``prompt`` for a replacement credential and install it.

        The lock is held for the whole exchange so no request can observe the
        expired value once a refresh has started. If the prompt fails the
        store goes back to ACTIVE with the old value and the error propagates.
        """
        with self._lock:
            self._state = CredentialState.AWAITING_INPUT
            try:
                new_id = prompt()
            finally:
                self._state = CredentialState.ACTIVE
            self._session_id = new_id
        logger.debug("Session credential replaced")
        return new_id


def prompt_session_id(stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> str:
    """Ask the operator for a new session id on the diagnostic stream."""
    stdin = stdin or sys.stdin
    stderr = stderr or sys.stderr

    logger.error("your session ID has expired")
    stderr.write("Please input a new session ID (value only): ")
    stderr.flush()

    line = stdin.readline()
    if not line:
        raise SessionInputError(
            ErrorCode.SESSION_INPUT_CLOSED,
            "Input closed while waiting for a new session ID",
        )
    return line.strip()
