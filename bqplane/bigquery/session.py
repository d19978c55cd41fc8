"""
Lazily created, cached BigQuery client sessions.
"""

import logging
import threading
from dataclasses import dataclass

from google.cloud import bigquery

from ..params import RequestParams
from .credentials import CredentialResolver


@dataclass(frozen=True)
class ClientSession:
    """A BigQuery client together with the table it targets."""

    client: bigquery.Client
    table_id: str


class LazySession:
    """
    Creates a ClientSession on first use and caches it.

    Concurrent first callers collapse to a single client creation; every
    caller observes the same session.
    """

    def __init__(
        self,
        params: RequestParams,
        resolver: CredentialResolver | None = None,
        lock: "threading.Lock | None" = None,
    ) -> None:
        self.params = params
        self.resolver = resolver or CredentialResolver()
        self._lock = lock or threading.Lock()
        self._session: ClientSession | None = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def initialized(self) -> bool:
        return self._session is not None

    def get(self) -> ClientSession:
        """
        Return the session, creating it if needed.

        Raises:
            AuthenticationFailure: If the client cannot be created
        """
        session = self._session
        if session is not None:
            return session

        with self._lock:
            if self._session is None:
                client = self.resolver.create_client(self.params)
                self._session = ClientSession(client=client, table_id=self.params.table_path)
                self.logger.info(f"BigQuery session initialized for {self.params.table_path}")
            return self._session

    def close(self) -> None:
        """Close the underlying client, if one was created."""
        with self._lock:
            if self._session is not None:
                self._session.client.close()
                self._session = None
