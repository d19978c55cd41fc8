"""
Builds RequestParams from the addresses of a DataFlowRequest.
"""

import logging

from ..exceptions import ValidationError
from ..spi.address import (
    DATASET,
    PROJECT,
    QUERY,
    SERVICE_ACCOUNT_FILE,
    SERVICE_ACCOUNT_NAME,
    TABLE,
    DataAddress,
    DataFlowRequest,
)
from .request_params import RequestParams


class RequestParamsProvider:
    """Extracts source and sink parameters from a transfer request."""

    REQUIRED_PROPERTIES = [PROJECT, DATASET, TABLE]

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    def provide_source_params(self, request: DataFlowRequest) -> RequestParams:
        """
        Build parameters for reading from the source address.

        Args:
            request: Transfer request

        Returns:
            RequestParams including the source query

        Raises:
            ValidationError: If project, dataset or table is missing
        """
        address = request.source_data_address
        return self._build(request, address, query=address.get_string_property(QUERY))

    def provide_sink_params(self, request: DataFlowRequest) -> RequestParams:
        """
        Build parameters for writing to the destination address.

        Raises:
            ValidationError: If project, dataset or table is missing
        """
        return self._build(request, request.destination_data_address, query=None)

    def _build(
        self, request: DataFlowRequest, address: DataAddress, query: str | None
    ) -> RequestParams:
        missing = [key for key in self.REQUIRED_PROPERTIES if not address.get_string_property(key)]
        if missing:
            raise ValidationError(
                f"BigQuery address for request {request.id} is missing required properties: {missing}"
            )

        service_account_file = address.get_string_property(SERVICE_ACCOUNT_FILE) or None
        service_account_name = address.get_string_property(SERVICE_ACCOUNT_NAME) or None
        if service_account_file and service_account_name:
            self.logger.warning(
                f"Both {SERVICE_ACCOUNT_NAME} and {SERVICE_ACCOUNT_FILE} are set for request "
                f"{request.id}; impersonation takes precedence"
            )

        return RequestParams(
            project=address.get_string_property(PROJECT),
            dataset=address.get_string_property(DATASET),
            table=address.get_string_property(TABLE),
            request=request,
            query=query,
            service_account_file=service_account_file,
            service_account_name=service_account_name,
        )
