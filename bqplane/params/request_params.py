"""
Resolved configuration for one transfer direction.
"""

from dataclasses import dataclass

from ..spi.address import DataFlowRequest


@dataclass(frozen=True)
class RequestParams:
    """Parameters for one BigQuery endpoint, built once per transfer request."""

    project: str
    dataset: str
    table: str
    request: DataFlowRequest | None = None
    query: str | None = None  # Source only

    # Auth selectors: impersonation target or key file, both unset means default credentials
    service_account_file: str | None = None
    service_account_name: str | None = None

    @property
    def table_path(self) -> str:
        """Fully qualified `project.dataset.table` path."""
        return f"{self.project}.{self.dataset}.{self.table}"
