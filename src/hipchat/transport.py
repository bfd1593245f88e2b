"""
HTTP Transport

Performs the actual HTTP calls for the client. Given a method, a URL and
form parameters it returns the status code and the response body; it does
not interpret either. Connectivity failures are raised as TransportFailure.

The requests session is created through an injectable factory so tests can
replace the network layer.
"""

import logging
from typing import Callable, Mapping, Optional, Tuple

import requests

from .errors import TransportFailure

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Sends form-encoded requests with a shared requests session.

    Attributes:
        timeout: Seconds to wait for the service before failing
    """

    def __init__(
        self,
        timeout: Optional[float] = 10.0,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds, None to wait forever
            session_factory: Optional factory for creating the session
                             (for dependency injection/testing)
        """
        self.timeout = timeout
        self._session_factory = session_factory or requests.Session
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    def send(
        self, method: str, url: str, params: Mapping[str, str]
    ) -> Tuple[int, str]:
        """
        Send a request.

        GET parameters go in the query string, anything else is sent as a
        form body.

        Returns:
            Tuple of (status_code, body_text)

        Raises:
            TransportFailure: If the request could not be completed
        """
        method = method.upper()
        if method == "GET":
            kwargs = {"params": dict(params)}
        else:
            kwargs = {"data": dict(params)}

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportFailure(e) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response.status_code, response.text

    def close(self) -> None:
        """Close the underlying session."""
        if self._session is not None:
            self._session.close()
            self._session = None
