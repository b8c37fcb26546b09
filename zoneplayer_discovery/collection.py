#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Device collections -- the stores that discovered devices are added to.

DeviceCollection is the abstract interface consumed by Discovery. Collection is a simple
in-memory implementation that is used when no other collection is supplied.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from zoneplayer_discovery.internal_types import *
from .pkg_logging import logger as pkg_logger

class Device:
    """A handle to a single device on the network, identified by its IP address.

    Applications that control devices typically supply their own device_factory that
    builds richer objects; this is the minimal handle used by default.
    """

    ip: str
    """The IP address (or host name) of the device."""

    def __init__(self, ip: str):
        self.ip = ip

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Device):
            return False
        return self.ip == other.ip

    def __hash__(self) -> int:
        return hash(self.ip)

    def __str__(self) -> str:
        return f"Device({self.ip!r})"

    def __repr__(self) -> str:
        return str(self)

DeviceFactory = Callable[[str], Device]
"""Builds a device handle from an IP address."""

class DeviceCollection(ABC):
    """Abstract store of device handles."""

    @abstractmethod
    def add_device(self, device: Device) -> Self:
        """Adds a device handle to the collection. Returns self."""
        raise NotImplementedError()

    @abstractmethod
    def add_ip(self, address: str) -> Self:
        """Adds a device to the collection by its IP address. Returns self."""
        raise NotImplementedError()

    @abstractmethod
    def clear(self) -> Self:
        """Removes all devices from the collection. Returns self."""
        raise NotImplementedError()

    @abstractmethod
    def get_devices(self) -> List[Device]:
        """Returns the devices in the collection."""
        raise NotImplementedError()

    @abstractmethod
    def get_logger(self) -> logging.Logger:
        raise NotImplementedError()

    @abstractmethod
    def set_logger(self, logger: logging.Logger) -> None:
        raise NotImplementedError()

class Collection(DeviceCollection):
    """An in-memory DeviceCollection, keyed by IP address in insertion order.

    Adding a device whose IP address is already present replaces the existing handle
    without changing its position.
    """

    _devices: Dict[str, Device]
    _logger: logging.Logger
    device_factory: DeviceFactory

    def __init__(self, device_factory: Optional[DeviceFactory]=None, logger: Optional[logging.Logger]=None):
        self._devices = {}
        self._logger = pkg_logger if logger is None else logger
        self.device_factory = Device if device_factory is None else device_factory

    def add_device(self, device: Device) -> Self:
        self._logger.debug(f"Adding device {device}")
        self._devices[device.ip] = device
        return self

    def add_ip(self, address: str) -> Self:
        return self.add_device(self.device_factory(address))

    def clear(self) -> Self:
        self._devices.clear()
        return self

    def get_devices(self) -> List[Device]:
        return list(self._devices.values())

    def get_logger(self) -> logging.Logger:
        return self._logger

    def set_logger(self, logger: logging.Logger) -> None:
        self._logger = logger

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(self.get_devices())

    def __contains__(self, ip: Any) -> bool:
        return ip in self._devices
