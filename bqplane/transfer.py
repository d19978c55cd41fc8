"""
Transfer driver.

Connects the source and sink selected for a request and moves every part
from one to the other.
"""

import logging

from .config import TransferSettings, load_settings
from .registry import FactoryRegistry, build_registry
from .spi.address import DataFlowRequest
from .spi.part import StreamResult

logger = logging.getLogger(__name__)


def run_transfer(
    request: DataFlowRequest,
    settings: TransferSettings | None = None,
    registry: FactoryRegistry | None = None,
) -> StreamResult:
    """
    Run a transfer end to end.

    Args:
        request: Transfer request naming the source and destination addresses
        settings: Transfer settings (loaded from the current directory when omitted)
        registry: Factory registry (BigQuery factories when omitted)

    Returns:
        StreamResult of the sink
    """
    settings = settings or load_settings()
    registry = registry or build_registry(settings)

    try:
        source = registry.create_source(request)
        sink = registry.create_sink(request)
    except ValueError as e:
        logger.error(f"Cannot set up transfer {request.id}: {e}")
        return StreamResult.error(str(e))

    logger.info(f"Starting transfer {request.id} with {settings.write_strategy} writes")
    result = sink.transfer(source)
    if result.succeeded:
        logger.info(f"Transfer {request.id} succeeded")
    else:
        logger.error(f"Transfer {request.id} failed: {result.failure_detail}")
    return result
