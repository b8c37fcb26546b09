#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Simple utility functions used by this package
"""

from __future__ import annotations

import netifaces
import socket
from ipaddress import IPv4Address, AddressValueError
from urllib.parse import urlsplit

from zoneplayer_discovery.internal_types import *

from email.header import Header as EmailParserHeader
from requests.structures import CaseInsensitiveDict

from .constants import ANNOUNCEMENT_DELIMITER

def split_announcements(data: str) -> List[str]:
    """Split an aggregate SSDP response into the text of the individual replies.

    Replies are delimited by '\r\n\r\n'. Empty blocks are dropped.
    """
    return [ block for block in data.split(ANNOUNCEMENT_DELIMITER) if block != '' ]

def frame_announcement(data: str) -> str:
    """Returns a single reply terminated by exactly one '\r\n\r\n', so that replies
       can be concatenated and later split with split_announcements()."""
    return data.rstrip('\r\n') + ANNOUNCEMENT_DELIMITER

def encode_http_header(name: str, value: str) -> bytes:
    """Encodes a raw HTTP header name/value pair into a byte string.

    RFC 2822 line wrapping is provided.
    The result is terminated with '\r\n'.
    """
    h = EmailParserHeader(value, header_name=name)
    return name.encode() + b': ' + h.encode(linesep='\r\n').encode() + b'\r\n'

def host_from_url(url: Optional[str]) -> str:
    """Returns the host component of a URL, or '' if there is no URL or it has no
       parseable host.

    IPv6 hosts are returned without their enclosing brackets.
    """
    if not url:
        return ''
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return ''
    return '' if host is None else host

def is_ipv4_address(value: str) -> bool:
    try:
        IPv4Address(value)
    except AddressValueError:
        return False
    return True

def get_interface_ipv4_addresses(ifname: str) -> List[str]:
    """Returns the IPv4 addresses assigned to a named local network interface.

    Returns an empty list if the interface does not exist or has no IPv4 address.
    """
    if ifname not in netifaces.interfaces():
        return []
    ifinfo = netifaces.ifaddresses(ifname)
    return [ addrinfo['addr'] for addrinfo in ifinfo.get(netifaces.AF_INET, []) if 'addr' in addrinfo ]

def resolve_interface_address(network_interface: NetworkInterface) -> Optional[str]:
    """Resolves a network interface identifier into the local IPv4 address used to select
       the outbound multicast interface (IP_MULTICAST_IF).

    The identifier may be:
        - An IPv4 address string, which is returned unchanged.
        - An interface name (e.g., "eth0"), resolved to its first IPv4 address.
        - An interface index (a non-negative int, or a string of ASCII digits), resolved to an
          interface name first.

    Returns None if the identifier cannot be resolved.
    """
    if isinstance(network_interface, str):
        network_interface = network_interface.strip()
        if is_ipv4_address(network_interface):
            return network_interface
        if network_interface.isascii() and network_interface.isdecimal():
            network_interface = int(network_interface)
    if isinstance(network_interface, int):
        if network_interface < 0:
            return None
        try:
            ifname = socket.if_indextoname(network_interface)
        except (OSError, OverflowError, ValueError):
            return None
    else:
        ifname = network_interface
    addresses = get_interface_ipv4_addresses(ifname)
    return addresses[0] if len(addresses) > 0 else None
