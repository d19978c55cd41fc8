"""
Data addresses and flow requests exchanged with the transfer pipeline.
"""

from dataclasses import dataclass, field
from typing import Any

# Namespace prefix the pipeline may put in front of address property keys
EDC_NAMESPACE = "https://w3id.org/edc/v0.0.1/ns/"

BIGQUERY_DATA = "BigQuery"

# Address property keys
PROJECT = "project"
DATASET = "dataset"
TABLE = "table"
QUERY = "query"
SERVICE_ACCOUNT_FILE = "serviceAccountFile"
SERVICE_ACCOUNT_NAME = "serviceAccountName"


@dataclass(frozen=True)
class DataAddress:
    """Typed bag of string properties describing where data lives."""

    type: str
    properties: dict[str, Any] = field(default_factory=dict)

    def get_string_property(self, key: str) -> str | None:
        """
        Look up a property, accepting both the plain and the namespaced key.

        Args:
            key: Property name (e.g., 'project')

        Returns:
            The property value as a string, or None if absent
        """
        value = self.properties.get(key)
        if value is None:
            value = self.properties.get(EDC_NAMESPACE + key)
        if value is None:
            return None
        return str(value)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataAddress":
        """Build an address from its JSON/YAML representation."""
        address_type = data.get("type")
        if not address_type:
            raise ValueError("Data address requires a 'type'")
        return cls(type=address_type, properties=dict(data.get("properties") or {}))


@dataclass(frozen=True)
class DataFlowRequest:
    """A single transfer request: where to read from and where to write to."""

    id: str
    source_data_address: DataAddress
    destination_data_address: DataAddress
    process_id: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DataFlowRequest":
        """Build a request from its JSON/YAML representation."""
        for key in ("id", "sourceDataAddress", "destinationDataAddress"):
            if key not in data:
                raise ValueError(f"Transfer request is missing '{key}'")

        return cls(
            id=str(data["id"]),
            process_id=data.get("processId"),
            source_data_address=DataAddress.from_dict(data["sourceDataAddress"]),
            destination_data_address=DataAddress.from_dict(data["destinationDataAddress"]),
            properties=dict(data.get("properties") or {}),
        )
