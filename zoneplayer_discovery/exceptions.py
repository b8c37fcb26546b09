#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from __future__ import annotations

from .internal_types import *

class DiscoveryError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class ConfigError(DiscoveryError):
  """Raised when discovery configuration cannot be loaded or has the wrong type."""
  pass

class NetworkError(DiscoveryError):
  """Raised when the discovery transport could not complete its round trip.

  Discovery is not marked as completed when this is raised, so a later call may retry.
  """

  reason: str
  """A short description of what failed, e.g. "proxy unreachable"."""

  url: Optional[str]
  """The discovery proxy URL, if the failure came from the proxy transport."""

  address: Optional[HostAndPort]
  """The multicast (host, port), if the failure came from the multicast transport."""

  def __init__(
        self,
        reason: str,
        url: Optional[str]=None,
        address: Optional[HostAndPort]=None,
        msg: Optional[str]=None
      ):
    if msg is None:
      if url is not None:
        msg = f"{reason}: {url}"
      elif address is not None:
        msg = f"{reason}: {address[0]}:{address[1]}"
      else:
        msg = reason
    super().__init__(msg)
    self.reason = reason
    self.url = url
    self.address = address
