"""Module loop: the request loop that drives a hunt."""
#
# PURPOSE:
# Generate an identifier, dispatch it with the current credential, classify
# the outcome, act on it, repeat. Everything runs on one thread with one
# request in flight; a credential reprompt blocks all traffic until the
# operator answers.
#
# INTEGRATION:
# - Used by: idhunt.cli
# - Depends on: identifiers, session, net.dispatcher, classifier, stats
#

from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, TextIO

from idhunt.classifier import Action, Outcome, classify
from idhunt.errors import TransportError
from idhunt.identifiers import IdentifierGenerator
from idhunt.net.dispatcher import HttpDispatcher, build_url
from idhunt.session import CredentialPrompt, SessionStore, prompt_session_id
from idhunt.stats import RunStats

logger = logging.getLogger(__name__)


class RequestLoop:
    """
    Runs until stopped, until ``max_requests`` is reached, or forever.

    ``stop()`` may be called from another thread or a signal handler; the
    loop notices at the top of its next iteration.
    """

    def __init__(
        self,
        url_path: str,
        session: SessionStore,
        dispatcher: HttpDispatcher,
        generator: Optional[IdentifierGenerator] = None,
        prompt: Optional[CredentialPrompt] = None,
        stats: Optional[RunStats] = None,
        output: Optional[TextIO] = None,
        max_requests: Optional[int] = None,
    ):
        self.url_path = url_path
        self.session = session
        self.dispatcher = dispatcher
        self.generator = generator or IdentifierGenerator()
        self.prompt = prompt or prompt_session_id
        self.stats = stats or RunStats()
        self.output = output
        self.max_requests = max_requests
        self._stop = threading.Event()

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def _budget_spent(self) -> bool:
        return self.max_requests is not None and self.stats.requests >= self.max_requests

    def run(self) -> RunStats:
        logger.debug("Starting hunt against %s", self.url_path)
        while not self._stop.is_set() and not self._budget_spent():
            self.step()
        return self.stats

    def step(self) -> Action:
        """Perform one full iteration and return the action taken."""
        self.stats.record_request()
        if self.stats.should_report():
            self.stats.report()

        file_id = self.generator.generate()
        url = build_url(self.url_path, file_id)

        outcome: Outcome
        try:
            outcome = self.dispatcher.send(url, self.session.cookie())
        except TransportError as exc:
            outcome = exc

        action = classify(outcome)
        self.handle(action, file_id, outcome)
        return action

    def handle(self, action: Action, file_id: str, outcome: Outcome) -> None:
        if action is Action.REPORT_HIT:
            self.stats.hits += 1
            print(file_id, file=self.output or sys.stdout, flush=True)
        elif action is Action.NEEDS_CREDENTIAL:
            # The identifier in flight is not retried.
            self.session.refresh(self.prompt)
            self.stats.credential_refreshes += 1
        elif action is Action.IGNORE:
            self.stats.not_found += 1
        elif action is Action.WARN_UNEXPECTED:
            self.stats.unexpected += 1
            logger.warning("unexpected code %s for file ID %s", outcome, file_id)
        elif action is Action.LOG_TRANSPORT_ERROR:
            self.stats.transport_errors += 1
            logger.error("%s [%s]", outcome.message, outcome.code.value)  # type: ignore[union-attr]
            logger.debug("%s", outcome.to_dict())  # type: ignore[union-attr]
