#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Discovery transports -- the ways the raw SSDP replies are obtained:

  1. MulticastTransport sends an M-SEARCH request to a multicast UDP address (typically
     239.255.255.250:1900) and collects the replies received within a fixed wait time.
  2. ProxyTransport fetches pre-aggregated replies from a discovery proxy over HTTP, for
     networks where multicast is blocked.

Both return the replies as one text blob, each reply terminated by '\r\n\r\n'. A transport
is created for a single discovery run, from a snapshot of the DiscoveryConfig.
"""

from __future__ import annotations

import asyncio
from asyncio import Future
import logging
import socket
from abc import ABC, abstractmethod

import requests

from .internal_types import *
from .pkg_logging import logger as pkg_logger
from .constants import ZONE_PLAYER_SEARCH_TARGET
from .config import DiscoveryConfig
from .exceptions import NetworkError
from .ssdp_datagram import SsdpDatagram
from .announcement import AnnouncementHeaders
from .util import frame_announcement, resolve_interface_address

MULTICAST_TTL = 2
"""The IP_MULTICAST_TTL of M-SEARCH requests; replies only come from the local network."""

class SsdpTransport(ABC):
    """Abstract base for a discovery transport."""

    config: DiscoveryConfig
    logger: logging.Logger

    def __init__(self, config: DiscoveryConfig, logger: Optional[logging.Logger]=None):
        self.config = config
        self.logger = pkg_logger if logger is None else logger

    async def request(self) -> str:
        """Performs the discovery round trip and returns the raw text of all replies.

        Raises NetworkError if the round trip could not be completed.
        """
        self.logger.info("discovering devices...")
        return await self.do_request()

    @abstractmethod
    async def do_request(self) -> str:
        """Abstract method that performs the round trip. Must be overridden by subclasses."""
        raise NotImplementedError()

class _MulticastSearchProtocol(asyncio.DatagramProtocol):
    """An adapter between the asyncio transport and a MulticastTransport."""
    owner: MulticastTransport

    def __init__(self, owner: MulticastTransport):
        self.owner = owner

    def datagram_received(self, data: bytes, addr: Tuple[str, int]):
        """Called when some datagram is received."""
        self.owner.datagram_received(addr, data)

    def error_received(self, exc: Exception):
        """Called when a send or receive operation raises an OSError.

        (Other than BlockingIOError or InterruptedError.)
        """
        self.owner.set_final_exception(exc)

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if exc is not None:
            self.owner.set_final_exception(exc)

class MulticastTransport(SsdpTransport):
    """Sends an SSDP M-SEARCH for ZonePlayer devices and collects the replies.

    The socket is bound to an ephemeral port, so only unicast replies to the search are
    received; unsolicited NOTIFY advertisements are not.
    """

    search_target: str
    replies: List[Tuple[HostAndPort, str]]
    """The (source address, text) of each reply received, in arrival order."""

    _final_result: Optional[Future[None]] = None

    def __init__(
            self,
            config: DiscoveryConfig,
            logger: Optional[logging.Logger]=None,
            search_target: str=ZONE_PLAYER_SEARCH_TARGET
          ):
        super().__init__(config, logger=logger)
        self.search_target = search_target
        self.replies = []

    @property
    def multicast_addr(self) -> HostAndPort:
        return (self.config.multicast_address, self.config.multicast_port)

    def create_socket(self) -> socket.socket:
        """Creates and binds the UDP socket used to send the search and receive replies.

        If the config names a network interface, outbound multicast is sent on it.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, MULTICAST_TTL)
            network_interface = self.config.network_interface
            if network_interface is not None and network_interface != '':
                if_addr = resolve_interface_address(network_interface)
                if if_addr is None:
                    raise NetworkError("unknown network interface", msg=f"unknown network interface: {network_interface}")
                self.logger.debug(f"Sending multicast on interface {network_interface} ({if_addr})")
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_IF, socket.inet_aton(if_addr))
            sock.bind(('', 0))
            sock.setblocking(False)
        except BaseException:
            sock.close()
            raise
        return sock

    def datagram_received(self, addr: HostAndPort, data: bytes) -> None:
        text = data.decode('utf-8', errors='replace')
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Received reply from {addr}: {AnnouncementHeaders.parse(text).to_dict()}")
        self.replies.append((addr, text))

    def set_final_exception(self, exc: BaseException) -> None:
        if self._final_result is not None and not self._final_result.done():
            self._final_result.set_exception(exc)

    def _fail(self, exc: BaseException) -> NetworkError:
        """Logs a failed round trip and returns the NetworkError to raise."""
        self.logger.error(f"SSDP discovery via {self.multicast_addr[0]}:{self.multicast_addr[1]} failed: {exc}")
        if isinstance(exc, NetworkError):
            return exc
        return NetworkError("multicast discovery failed", address=self.multicast_addr, msg=f"multicast discovery failed: {exc}")

    async def do_request(self) -> str:
        loop = asyncio.get_running_loop()
        self.replies = []
        try:
            sock = self.create_socket()
        except NetworkError as e:
            raise self._fail(e)
        except OSError as e:
            raise self._fail(e) from e
        self._final_result = loop.create_future()

        transport: Optional[asyncio.DatagramTransport] = None
        try:
            try:
                untyped_transport, _ = await loop.create_datagram_endpoint(
                    lambda: _MulticastSearchProtocol(self),
                    sock=sock
                  )
                transport = untyped_transport # type: ignore[assignment]
                search_datagram = SsdpDatagram.m_search(
                    search_target=self.search_target,
                    multicast_address=self.config.multicast_address,
                    multicast_port=self.config.multicast_port,
                  )
                self.logger.debug(f"Sending M-SEARCH to {self.multicast_addr}: {search_datagram}")
                transport.sendto(search_datagram.raw_data, self.multicast_addr)
                # Replies are collected by datagram_received() until the wait time elapses;
                # final_result only completes early if the socket reports an error.
                await asyncio.wait_for(asyncio.shield(self._final_result), self.config.response_wait_time)
            except asyncio.TimeoutError:
                pass
            except OSError as e:
                raise self._fail(e) from e
        finally:
            if transport is None:
                sock.close()
            else:
                transport.close()
            if not self._final_result.done():
                self._final_result.cancel()

        self.logger.debug(f"Received {len(self.replies)} replies to M-SEARCH")
        return ''.join(frame_announcement(text) for _, text in self.replies)

class ProxyTransport(SsdpTransport):
    """Fetches the aggregated replies from a discovery proxy with an HTTP GET."""

    @property
    def url(self) -> str:
        url = self.config.discovery_url
        if not url:
            raise NetworkError("proxy unreachable", url=url, msg="no discovery proxy URL is configured")
        return url

    def fetch(self) -> str:
        """Blocking HTTP GET of the proxy URL. Raises requests.RequestException on failure."""
        response = requests.get(self.url, timeout=self.config.proxy_timeout)
        try:
            response.raise_for_status()
            return response.text
        finally:
            response.close()

    async def do_request(self) -> str:
        try:
            url = self.url
        except NetworkError as e:
            self.logger.error(f"cannot use discovery server: {e}")
            raise
        self.logger.info(f"using discovery server at {url}")
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self.fetch)
        except requests.RequestException as e:
            self.logger.error(f"failed to contact discovery server at {url}: {e}")
            raise NetworkError("proxy unreachable", url=url) from e

TransportFactory = Callable[[DiscoveryConfig, logging.Logger], SsdpTransport]
"""Creates the transport for one discovery run."""

def create_transport(config: DiscoveryConfig, logger: Optional[logging.Logger]=None) -> SsdpTransport:
    """Returns a ProxyTransport if the config names a discovery proxy URL, otherwise a MulticastTransport."""
    if config.use_proxy:
        return ProxyTransport(config, logger=logger)
    return MulticastTransport(config, logger=logger)
