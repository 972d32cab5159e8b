"""Build the transport selected by configuration."""

from __future__ import annotations

from typing import Optional, Union

from loguru import logger

from ..config.settings import TRANSPORT_DIRECT, AnalyticsConfig
from ..queuer import BatchConfig
from .batching import BatchingTransport
from .direct import DirectTransport, Sink


def create_transport(
    config: Optional[AnalyticsConfig] = None,
    sink: Optional[Sink] = None,
) -> Union[BatchingTransport, DirectTransport]:
    """Create the transport described by ``config``.

    Args:
        config: Analytics configuration, loaded from the environment if omitted
        sink: Sink for the direct transport

    Returns:
        A batching or direct transport

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or AnalyticsConfig()

    is_valid, errors = config.validate()
    if not is_valid:
        raise ValueError(f"Invalid analytics configuration: {'; '.join(errors)}")

    if config.transport == TRANSPORT_DIRECT:
        logger.info("Using direct analytics transport")
        return DirectTransport(sink)

    return BatchingTransport(BatchConfig(**config.get_batch_config()))
