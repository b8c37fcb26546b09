#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Header maps parsed from individual SSDP replies, and the devices extracted from them.
"""

from __future__ import annotations

from zoneplayer_discovery.internal_types import *

from .util import CaseInsensitiveDict, host_from_url

class AnnouncementHeaders(CaseInsensitiveDict):
    """The headers of a single SSDP reply, keyed by lower-cased header name.

    A reply that describes a device carries at least these headers:

        st:       The search target (service type) being announced.
        usn:      The unique service name of the announcing device/service.
        location: A URL for the device description; its host is the device address.

    None of them are guaranteed to be present; the corresponding properties
    return None when a header is missing.
    """

    @classmethod
    def parse(cls, text: str) -> AnnouncementHeaders:
        """Parse the text of one reply into headers.

        The text is split into lines at '\r\n', and each line at its first colon. Lines
        without a colon, or that begin with one, are dropped (this includes the status
        line). Header names are lower-cased, values are trimmed, and a later duplicate
        header replaces an earlier one.
        """
        headers = cls()
        for line in text.split('\r\n'):
            i = line.find(':')
            if i <= 0:
                continue
            headers[line[:i].strip().lower()] = line[i + 1:].strip()
        return headers

    @property
    def st(self) -> Optional[str]:
        return self.get('st')

    @property
    def usn(self) -> Optional[str]:
        return self.get('usn')

    @property
    def location(self) -> Optional[str]:
        return self.get('location')

    def to_dict(self) -> Dict[str, str]:
        return dict(self.lower_items())

class DiscoveredDevice:
    """The network address of a device found by discovery."""

    host: str
    """The host component of the announcement's LOCATION URL; '' if it had none."""

    usn: Optional[str]
    """The unique service name the device announced."""

    def __init__(self, host: str, usn: Optional[str]=None):
        self.host = host
        self.usn = usn

    @classmethod
    def from_headers(cls, headers: AnnouncementHeaders) -> DiscoveredDevice:
        return cls(host_from_url(headers.location), usn=headers.usn)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DiscoveredDevice):
            return False
        return self.host == other.host and self.usn == other.usn

    def __hash__(self) -> int:
        return hash((self.host, self.usn))

    def __str__(self) -> str:
        return f"DiscoveredDevice(host={self.host!r}, usn={self.usn!r})"

    def __repr__(self) -> str:
        return str(self)
