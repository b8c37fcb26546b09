#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Discovery -- finds the ZonePlayer devices on the local network and keeps them in a
DeviceCollection.

Network discovery runs at most once per Discovery instance; later calls to
get_devices() return the contents of the collection. Devices may also be added by
hand, before or after discovery, and are merged with the discovered ones.
"""

from __future__ import annotations

import asyncio
import logging

from .internal_types import *
from .config import DiscoveryConfig
from .collection import Device, DeviceCollection, Collection
from .parser import extract_devices
from .transport import TransportFactory, create_transport

class Discovery:
    """
    Usage:
        discovery = Discovery()
        for device in await discovery.get_devices():
            print(device.ip)
    """

    config: DiscoveryConfig
    """The configuration used for the next discovery run. A copy is taken when the run
       starts, so changes made after discovery has run have no effect until it runs again."""

    collection: DeviceCollection
    """The collection that discovered devices are added to."""

    transport_factory: TransportFactory

    _has_run: bool = False
    _reset_count: int = 0
    """Incremented by clear(reset_discovery=True); a run that overlaps a reset is discarded."""
    _lock: asyncio.Lock

    def __init__(
            self,
            collection: Optional[DeviceCollection]=None,
            discovery_url: Optional[str]=None,
            config: Optional[DiscoveryConfig]=None,
            transport_factory: Optional[TransportFactory]=None,
          ) -> None:
        """Create a Discovery.

        Parameters:
            collection:         The collection to add devices to. Defaults to a new in-memory Collection.
            discovery_url:      If not empty, replies are fetched from this discovery proxy instead of
                                  by multicast. Overrides the value in config.
            config:             The discovery configuration. Defaults to DiscoveryConfig().
            transport_factory:  Creates the transport for each discovery run. Defaults to create_transport.
        """
        self.collection = Collection() if collection is None else collection
        self.config = DiscoveryConfig() if config is None else config.copy()
        if discovery_url:
            self.config.discovery_url = discovery_url
        self.transport_factory = create_transport if transport_factory is None else transport_factory
        self._lock = asyncio.Lock()

    @property
    def has_run(self) -> bool:
        """True once network discovery has completed successfully."""
        return self._has_run

    def get_logger(self) -> logging.Logger:
        return self.collection.get_logger()

    def set_logger(self, logger: logging.Logger) -> None:
        self.collection.set_logger(logger)

    @property
    def network_interface(self) -> Optional[NetworkInterface]:
        return self.config.network_interface

    @network_interface.setter
    def network_interface(self, value: Optional[NetworkInterface]) -> None:
        self.config.network_interface = value

    def set_network_interface(self, value: Optional[NetworkInterface]) -> Discovery:
        """Set the interface used for outbound multicast (see IP_MULTICAST_IF). Returns self."""
        self.network_interface = value
        return self

    def get_network_interface(self) -> Optional[NetworkInterface]:
        return self.network_interface

    @property
    def multicast_address(self) -> str:
        return self.config.multicast_address

    @multicast_address.setter
    def multicast_address(self, value: str) -> None:
        self.config.multicast_address = value

    def set_multicast_address(self, value: str) -> Discovery:
        self.multicast_address = value
        return self

    def get_multicast_address(self) -> str:
        return self.multicast_address

    @property
    def discovery_url(self) -> Optional[str]:
        return self.config.discovery_url

    @discovery_url.setter
    def discovery_url(self, value: Optional[str]) -> None:
        self.config.discovery_url = value if value else None

    def set_discovery_url(self, value: Optional[str]) -> Discovery:
        self.discovery_url = value
        return self

    def add_device(self, device: Device) -> Discovery:
        self.collection.add_device(device)
        return self

    def add_ip(self, address: str) -> Discovery:
        self.collection.add_ip(address)
        return self

    async def get_devices(self) -> List[Device]:
        """Returns all of the devices on the local network.

        The first call runs network discovery and adds the devices found to the collection.
        Later calls return the contents of the collection without touching the network.

        Raises NetworkError if discovery could not complete; discovery is then not marked as
        having run, so a later call tries again.

        If clear(reset_discovery=True) is called while discovery is in progress, the hosts it
        finds are not added and discovery is not marked as having run.
        """
        async with self._lock:
            if not self._has_run:
                reset_count = self._reset_count
                hosts = await self.find_hosts()
                if reset_count == self._reset_count:
                    self._add_hosts(hosts)
                    self._has_run = True
            return self.collection.get_devices()

    async def discover_devices(self) -> List[str]:
        """Runs network discovery once, unconditionally, and adds the hosts found to the
           collection. Returns the hosts in the order they were found.

        The collection is left unchanged if the transport fails.
        """
        hosts = await self.find_hosts()
        self._add_hosts(hosts)
        return hosts

    async def find_hosts(self) -> List[str]:
        """Runs one discovery round trip and returns the hosts found, without adding them."""
        logger = self.get_logger()
        transport = self.transport_factory(self.config.copy(), logger)
        raw_text = await transport.request()
        return [ device.host for device in extract_devices(raw_text, logger=logger) ]

    def _add_hosts(self, hosts: List[str]) -> None:
        for host in hosts:
            self.collection.add_ip(host)

    def clear(self, reset_discovery: bool=False) -> Discovery:
        """Remove all devices from the collection.

        Discovery is still considered to have run, so a later get_devices() returns an empty
        list rather than discovering again, unless reset_discovery is True. A reset also
        discards the result of a discovery run that is in progress.
        """
        self.collection.clear()
        if reset_discovery:
            self._has_run = False
            self._reset_count += 1
        return self
