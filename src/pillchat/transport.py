"""Concrete implementations for the transport to the backend."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from . import api
from .service import Pharmacist


class TransportError(Exception):
    """A request did not produce a description. ``detail`` is user-presentable."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail


class Transport(ABC):
    """Interface for sending one request to the backend and awaiting its reply."""

    @abstractmethod
    def send(self, route: str, payload: Dict[str, Any]) -> str:
        """Sends ``payload`` to ``route`` and returns the reply's description.

        Raises
        ------
        TransportError
            On a non-2xx status, a transport fault or a body without a
            ``description`` string.
        """
        pass

    @staticmethod
    def interpret(route: str, status: int, body: Any) -> str:
        """Map an HTTP-style status and JSON body to a description or a failure."""
        if not 200 <= status < 300:
            error = body.get("error") if isinstance(body, dict) else None
            raise TransportError(error or api.FAILURE_DETAILS.get(route))

        description = body.get("description") if isinstance(body, dict) else None
        if not isinstance(description, str):
            raise TransportError("Malformed response: missing 'description'")
        return description


class HTTP(Transport):
    """Posts JSON to a running pillchat API."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, route: str, payload: Dict[str, Any]) -> str:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self.session.post(
                f"{self.base_url}/{route}",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = None
        return self.interpret(route, response.status_code, body)


class Local(Transport):
    """Calls the API handler in-process, with the same status/body contract."""

    def __init__(self, pharmacist: Pharmacist):
        self.pharmacist = pharmacist

    def send(self, route: str, payload: Dict[str, Any]) -> str:
        body, status = api.dispatch(self.pharmacist, route, payload)
        return self.interpret(route, status, body)
