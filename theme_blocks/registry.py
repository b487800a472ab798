"""Hand finished descriptors to the host block-type registry."""

from __future__ import annotations

import logging
import typing as typ

if typ.TYPE_CHECKING:
    from .descriptor import BlockDescriptor
    from .host import BlockTypeRegistry

logger = logging.getLogger(__name__)


class RegistryClient:
    """The only point of contact with the host block-type registry."""

    def __init__(self, host: BlockTypeRegistry) -> None:
        self.host = host

    def register(self, descriptor: BlockDescriptor) -> None:
        """Register ``descriptor``; the host's return value is not inspected."""
        logger.debug("registering block %s", descriptor.name)
        self.host.register_block_type(descriptor.to_registration())


__all__ = ["RegistryClient"]
