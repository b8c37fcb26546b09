#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Extraction of ZonePlayer devices from the aggregate text of SSDP replies.
"""

from __future__ import annotations

import logging

from zoneplayer_discovery.internal_types import *
from .pkg_logging import logger as pkg_logger
from .constants import ZONE_PLAYER_SEARCH_TARGET

from .announcement import AnnouncementHeaders, DiscoveredDevice
from .util import split_announcements

def iter_announcements(raw_text: str, search_target: str=ZONE_PLAYER_SEARCH_TARGET) -> Iterator[AnnouncementHeaders]:
    """Yields the parsed headers of each reply in raw_text that mentions search_target.

    This is only a cheap substring filter; a reply that mentions the search target
    anywhere (for instance in its USN) is yielded even if its ST header differs.
    """
    for block in split_announcements(raw_text):
        if search_target not in block:
            continue
        yield AnnouncementHeaders.parse(block)

def extract_devices(
        raw_text: str,
        logger: Optional[logging.Logger]=None,
        search_target: str=ZONE_PLAYER_SEARCH_TARGET
      ) -> List[DiscoveredDevice]:
    """Extracts the unique devices announcing search_target from an aggregate SSDP response.

    Parameters:
        raw_text:       The replies, each terminated by '\r\n\r\n'.
        logger:         The logger to report found devices to. Defaults to the package logger.
        search_target:  The ST header value a reply must carry. Defaults to the ZonePlayer device type.

    Returns the devices in the order their replies appear in raw_text. When several replies
    share a USN, only the first is kept. Replies without an ST or USN header never match; a
    reply without a parseable LOCATION yields a device whose host is ''.
    """
    if logger is None:
        logger = pkg_logger
    results: List[DiscoveredDevice] = []
    seen_usns: Set[str] = set()
    for headers in iter_announcements(raw_text, search_target):
        if headers.st != search_target:
            logger.debug(f"Skipping reply with ST={headers.st!r}")
            continue
        usn = headers.usn
        if usn is None:
            logger.debug(f"Skipping reply without USN: {headers.to_dict()}")
            continue
        if usn in seen_usns:
            continue
        seen_usns.add(usn)
        logger.info(f"found device: {usn}", extra={ 'usn': usn })
        results.append(DiscoveredDevice.from_headers(headers))
    return results
