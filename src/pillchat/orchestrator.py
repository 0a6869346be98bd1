"""Owns the conversation ledger and the single in-flight request.

Only one request may be pending at a time. A submission or follow-up that
arrives while one is pending is ignored, not queued. Every outcome of a request
that was sent, success or failure, ends up in the ledger as an assistant turn.
"""

import threading
from typing import Callable, List, Optional

from loguru import logger

from . import api, prompts
from .ledger import InMemory, Ledger
from .models import (
    ASSISTANT_ROLE,
    IDLE,
    PENDING,
    USER_ROLE,
    Prescription,
    RequestState,
    Turn,
)
from .parser import parse
from .transport import Transport, TransportError

Subscriber = Callable[["Orchestrator"], None]


class Orchestrator:
    """Turns user intents into ledger mutations.

    Parameters
    ----------
    transport : Transport
        Where requests are sent.
    ledger : Ledger, optional
        Conversation storage. Defaults to an empty ``ledger.InMemory()``.
    """

    def __init__(self, transport: Transport, ledger: Optional[Ledger] = None):
        self.transport = transport
        self.ledger = ledger if ledger is not None else InMemory()
        self._in_flight = threading.Lock()
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> RequestState:
        return PENDING if self._in_flight.locked() else IDLE

    @property
    def is_pending(self) -> bool:
        return self.state == PENDING

    def turns(self) -> List[Turn]:
        return self.ledger.all()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback`` after every ledger or state change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def submit_prompt(self, image: Optional[str], text: Optional[str]) -> bool:
        """Append the user's message, then ask the backend about it.

        Returns False, changing nothing, when a request is already pending or
        when there is neither text nor an image.
        """
        text = text or ""
        image = image or None
        if not text.strip() and not image:
            logger.debug("Ignoring empty submission")
            return False
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Ignoring submission while a request is pending")
            return False

        try:
            self.ledger.append(Turn(role=USER_ROLE, text=text, image=image))
            self._notify()
            self._settle(api.ANALYZE_IMAGE, {"imageData": image, "prompt": text})
        finally:
            self._in_flight.release()
        self._notify()
        return True

    def request_follow_up(self, drug_name: Optional[str], dosage: Optional[str]) -> bool:
        """Ask for the full summary of one prescribed drug.

        No user turn is added; the reply (or the error) is appended as a single
        assistant turn.
        """
        drug_name = (drug_name or "").strip()
        if not drug_name:
            logger.debug("Ignoring follow-up without a drug name")
            return False
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Ignoring follow-up while a request is pending")
            return False

        try:
            self._notify()
            self._settle(api.DRUG_DETAILS, {"drugName": drug_name, "dosage": dosage})
        finally:
            self._in_flight.release()
        self._notify()
        return True

    def request_item_details(self, turn_id: int, item_index: int) -> bool:
        """Follow up on item ``item_index`` of the prescription in turn ``turn_id``."""
        turn = self.ledger.get(turn_id)
        if turn is None or turn.role != ASSISTANT_ROLE:
            return False

        reply = parse(turn.text)
        if not isinstance(reply, Prescription) or not 0 <= item_index < len(reply.items):
            return False

        item = reply.items[item_index]
        return self.request_follow_up(item.drug_name, item.dosage)

    def clear(self) -> None:
        """Empty the conversation. Only ever called on an explicit user reset."""
        self.ledger.clear()
        self._notify()

    def _settle(self, route: str, payload: dict) -> None:
        logger.info("Sending {} request", route)
        try:
            text = self.transport.send(route, payload)
        except TransportError as e:
            logger.warning("{} request failed: {}", route, e.detail)
            text = prompts.error_message(e.detail)
        except Exception as e:
            logger.exception("Unexpected error during {} request", route)
            text = prompts.error_message(str(e))
        self.ledger.append(Turn(role=ASSISTANT_ROLE, text=text))

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("Subscriber {!r} failed", callback)
