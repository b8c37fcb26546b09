# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by this package"""

SSDP_MULTICAST_ADDRESS = "239.255.255.250"
"""The multicast address used by SSDP for UDP multicast."""

SSDP_PORT = 1900
"""The port number used by SSDP for UDP multicast."""

ZONE_PLAYER_SEARCH_TARGET = "urn:schemas-upnp-org:device:ZonePlayer:1"
"""The SSDP search target (ST) announced by ZonePlayer media devices."""

ANNOUNCEMENT_DELIMITER = "\r\n\r\n"
"""Separates one SSDP reply from the next in an aggregate response."""

DEFAULT_RESPONSE_WAIT_TIME = 1.0
"""The default amount of time (in seconds) to wait for replies to an M-SEARCH."""

DEFAULT_PROXY_TIMEOUT = 10.0
"""The default timeout (in seconds) for a request to a discovery proxy."""
