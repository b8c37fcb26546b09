#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Abstraction of an outbound SSDP datagram (the M-SEARCH request).
"""

from __future__ import annotations

from zoneplayer_discovery.internal_types import *

from .constants import SSDP_MULTICAST_ADDRESS, SSDP_PORT, ZONE_PLAYER_SEARCH_TARGET

from .util import (
    CaseInsensitiveDict,
    encode_http_header,
)

class SsdpDatagram:
    """An HTTP-like SSDP request, formatted for sending.

    Unlike HTTP, the header order of an SSDP packet is not significant; headers are
    emitted in the order they were given. Received replies are parsed with
    AnnouncementHeaders instead.
    """

    _raw_data: bytes
    """The raw UDP datagram contents"""

    _statement_line: str
    """The first line of the datagram; e.g., "M-SEARCH * HTTP/1.1"."""

    _headers: CaseInsensitiveDict[str]

    def __init__(
            self,
            statement: Optional[str]=None,
            headers: Optional[Mapping[str, str]]=None,
          ):
        if statement is None:
            raise ValueError("A statement line is required")
        self._statement_line = statement
        self._headers = CaseInsensitiveDict()
        if not headers is None:
            for name, value in headers.items():
                self._headers[name] = value
        self._rebuild_raw_data()

    @classmethod
    def m_search(
            cls,
            search_target: str=ZONE_PLAYER_SEARCH_TARGET,
            multicast_address: str=SSDP_MULTICAST_ADDRESS,
            multicast_port: int=SSDP_PORT,
            mx: int=1,
          ) -> SsdpDatagram:
        """Creates an M-SEARCH discovery request for the given search target."""
        return cls(
            "M-SEARCH * HTTP/1.1",
            headers={
                "HOST": f"{multicast_address}:{multicast_port}",
                "MAN": '"ssdp:discover"',
                "MX": str(mx),
                "ST": search_target,
              }
          )

    def __str__(self) -> str:
        return f"SsdpDatagram('{self._statement_line}', headers={dict(self._headers)})"

    def __repr__(self) -> str:
        return str(self)

    @property
    def raw_data(self) -> bytes:
        """The raw UDP datagram contents"""
        return self._raw_data

    @property
    def statement_line(self) -> str:
        return self._statement_line

    @property
    def headers(self) -> CaseInsensitiveDict[str]:
        return self._headers

    def _rebuild_raw_data(self) -> None:
        """Rebuild the raw data from the statement line and headers."""
        raw_data = self.statement_line.encode('utf-8') + b'\r\n'
        for k, v in self._headers.items():
            raw_data += encode_http_header(k, v)
        # SSDP requests are always terminated by an empty line
        raw_data += b'\r\n'
        self._raw_data = raw_data
