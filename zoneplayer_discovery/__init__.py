# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Package zoneplayer_discovery finds ZonePlayer media players on the local network.

Discovery uses the Simple Service Discovery Protocol (SSDP) defined by the UPnP Forum:
an M-SEARCH request for the device type "urn:schemas-upnp-org:device:ZonePlayer:1" is
multicast to 239.255.255.250:1900, and every player on the network replies with a
unicast datagram of HTTP-style headers. The LOCATION header of each reply is a URL
on the player itself, so its host is the player's network address.

On networks where multicast is blocked, a discovery proxy can be used instead: an HTTP
URL that returns the same replies, already aggregated.

Only discovery is implemented; the UPnP device-description and control protocols
are not.
"""

from .version import __version__

from .internal_types import Jsonable, JsonableDict

from .exceptions import DiscoveryError, NetworkError, ConfigError

from .config import DiscoveryConfig
from .ssdp_datagram import SsdpDatagram
from .announcement import AnnouncementHeaders, DiscoveredDevice
from .parser import extract_devices
from .transport import SsdpTransport, MulticastTransport, ProxyTransport, create_transport
from .collection import Device, DeviceCollection, Collection
from .discovery import Discovery
from .util import CaseInsensitiveDict
from .constants import (
    SSDP_MULTICAST_ADDRESS,
    SSDP_PORT,
    ZONE_PLAYER_SEARCH_TARGET,
    DEFAULT_RESPONSE_WAIT_TIME,
  )

__all__ = [
    '__version__',
    'Jsonable', 'JsonableDict',
    'DiscoveryError', 'NetworkError', 'ConfigError',
    'DiscoveryConfig',
    'SsdpDatagram',
    'AnnouncementHeaders', 'DiscoveredDevice',
    'extract_devices',
    'SsdpTransport', 'MulticastTransport', 'ProxyTransport', 'create_transport',
    'Device', 'DeviceCollection', 'Collection',
    'Discovery',
    'CaseInsensitiveDict',
    'SSDP_MULTICAST_ADDRESS', 'SSDP_PORT', 'ZONE_PLAYER_SEARCH_TARGET',
    'DEFAULT_RESPONSE_WAIT_TIME',
]
