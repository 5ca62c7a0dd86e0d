"""Registry of the dependency probes known to the service."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple

from vitals.domain.entities.errors import DuplicateNameError, ProbeConfigurationError
from vitals.domain.entities.health import ProbeDescriptor


class ProbeRegistry:
    """Ordered, name-unique collection of probe descriptors.

    Probes are registered once while the service boots; afterwards the
    registry is only read, so it carries no locking.
    """

    def __init__(self, descriptors: Optional[Iterable[ProbeDescriptor]] = None) -> None:
        self._probes: Dict[str, ProbeDescriptor] = {}
        for descriptor in descriptors or ():
            self.register(descriptor)

    def register(self, descriptor: ProbeDescriptor) -> None:
        """Add a probe to the registry.

        Raises:
            DuplicateNameError: If a probe with the same name exists.
            ProbeConfigurationError: If the name is empty or the timeout
                is not positive.
        """
        if not descriptor.name:
            raise ProbeConfigurationError("Probe name must not be empty")
        if descriptor.timeout <= 0:
            raise ProbeConfigurationError(
                f"Probe '{descriptor.name}' timeout must be greater than 0",
                details={"timeout": descriptor.timeout},
            )
        if descriptor.name in self._probes:
            raise DuplicateNameError(descriptor.name)
        self._probes[descriptor.name] = descriptor

    def all(self) -> Tuple[ProbeDescriptor, ...]:
        return tuple(self._probes.values())

    def select(self, tags: Optional[Iterable[str]] = None) -> Tuple[ProbeDescriptor, ...]:
        """Return the probes carrying at least one of ``tags``, in order.

        An empty or missing selector returns every probe.
        """
        wanted = frozenset(tags or ())
        if not wanted:
            return self.all()
        return tuple(d for d in self._probes.values() if d.tags & wanted)

    def names(self) -> Tuple[str, ...]:
        return tuple(self._probes)

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: object) -> bool:
        return name in self._probes

    def __iter__(self) -> Iterator[ProbeDescriptor]:
        return iter(self.all())
