from __future__ import annotations

import threading
from collections.abc import Iterator

from beanwire.descriptors import ComponentDescriptor, name_key
from beanwire.exceptions import BeanWireDuplicateRegistrationError


class DescriptorStore:
    """Hold every registered descriptor under its case-insensitive name.

    Iteration follows registration order. Writes are serialized; readers get
    snapshots, so lookups stay safe while another thread registers.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, ComponentDescriptor] = {}
        self._lock = threading.Lock()

    def add(self, descriptor: ComponentDescriptor) -> None:
        """Store ``descriptor``.

        Raises:
            BeanWireDuplicateRegistrationError: If the name is already taken,
                ignoring case.

        """
        key = descriptor.key
        with self._lock:
            if key in self._descriptors:
                raise BeanWireDuplicateRegistrationError(descriptor.name)
            self._descriptors[key] = descriptor

    def get(self, name: str) -> ComponentDescriptor | None:
        return self._descriptors.get(name_key(name))

    def values(self) -> list[ComponentDescriptor]:
        with self._lock:
            return list(self._descriptors.values())

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name_key(name) in self._descriptors

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self._descriptors)
