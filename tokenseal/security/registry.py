"""Immutable mapping from algorithm identifier to signing capability."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from ..constants import MAC_ALGORITHMS, SIGNATURE_ALGORITHMS
from ..exceptions import AlgorithmNotSupported, KeyUnavailable
from .capabilities import Capability, MacCapability, SignatureCapability
from .keys import KeyProvider

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Capabilities available for a given set of key material.

    The registry asks ``provider`` for a primitive for every supported
    algorithm once, at construction.  Algorithms the provider cannot serve
    are left out and the reason is kept in :attr:`unavailable`; requesting
    one later raises :class:`~tokenseal.exceptions.AlgorithmNotSupported`.
    Nothing is mutated after ``__init__`` returns, so lookups need no lock.
    """

    def __init__(self, provider: KeyProvider) -> None:
        capabilities: Dict[str, Capability] = {}
        unavailable: Dict[str, str] = {}

        for name in MAC_ALGORITHMS:
            try:
                capabilities[name] = MacCapability(name, provider.get_mac_primitive(name))
            except KeyUnavailable as exc:
                unavailable[name] = str(exc)
                logger.debug("Skipping %s: %s", name, exc)

        for name in SIGNATURE_ALGORITHMS:
            try:
                capabilities[name] = SignatureCapability(
                    name, provider.get_signature_primitive(name)
                )
            except KeyUnavailable as exc:
                unavailable[name] = str(exc)
                logger.debug("Skipping %s: %s", name, exc)

        self._capabilities: Mapping[str, Capability] = MappingProxyType(capabilities)
        self._unavailable: Mapping[str, str] = MappingProxyType(unavailable)
        logger.info(
            "Algorithm registry ready: %s",
            ", ".join(self._capabilities) or "no algorithms available",
        )

    @property
    def algorithms(self) -> List[str]:
        return sorted(self._capabilities)

    @property
    def capabilities(self) -> Mapping[str, Capability]:
        return self._capabilities

    @property
    def unavailable(self) -> Mapping[str, str]:
        """Algorithm identifier -> reason it could not be registered."""
        return self._unavailable

    def __contains__(self, name: object) -> bool:
        return self.lookup(name) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._capabilities)

    def lookup(self, name: Optional[str]) -> Optional[Capability]:
        """Return the capability for ``name`` or ``None``."""
        if not isinstance(name, str):
            return None
        return self._capabilities.get(name)

    def require(self, name: Optional[str]) -> Capability:
        """Return the capability for ``name`` or raise ``AlgorithmNotSupported``."""
        capability = self.lookup(name)
        if capability is None:
            reason = self._unavailable.get(name) if isinstance(name, str) else None
            raise AlgorithmNotSupported(name, reason)
        return capability


__all__ = ["AlgorithmRegistry"]
