# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Discovery configuration.

A DiscoveryConfig can be built directly, or loaded from JSON text or a JSON file
with keys matching its attribute names:

  {
    "network_interface": "eth0",
    "multicast_address": "239.255.255.250",
    "multicast_port": 1900,
    "discovery_url": "",
    "response_wait_time": 1.0,
    "proxy_timeout": 10.0
  }

Unknown keys are ignored. An empty discovery_url disables the discovery proxy.
"""

from __future__ import annotations

from typing import Optional, Any, TypeVar, Union, overload
from .internal_types import Jsonable, JsonableDict, JsonableTypes, NetworkInterface

import os
import json
from copy import copy

from .exceptions import ConfigError
from .constants import (
    SSDP_MULTICAST_ADDRESS,
    SSDP_PORT,
    DEFAULT_RESPONSE_WAIT_TIME,
    DEFAULT_PROXY_TIMEOUT,
  )

_T = TypeVar('_T')

class DiscoveryConfig:
  network_interface: Optional[NetworkInterface] = None
  """The interface used for outbound multicast: an IPv4 address, interface name, or index.
     If None, the operating system chooses."""

  multicast_address: str = SSDP_MULTICAST_ADDRESS
  multicast_port: int = SSDP_PORT

  discovery_url: Optional[str] = None
  """If set, replies are fetched from this discovery proxy URL instead of by multicast."""

  response_wait_time: float = DEFAULT_RESPONSE_WAIT_TIME
  proxy_timeout: float = DEFAULT_PROXY_TIMEOUT

  config_file: Optional[str] = None
  """The fully qualified pathname of the configuration file from which this config
     originated, or None if not from a file"""

  _json_data: Optional[JsonableDict] = None

  def __init__(
        self,
        network_interface: Optional[NetworkInterface]=None,
        multicast_address: str=SSDP_MULTICAST_ADDRESS,
        multicast_port: int=SSDP_PORT,
        discovery_url: Optional[str]=None,
        response_wait_time: float=DEFAULT_RESPONSE_WAIT_TIME,
        proxy_timeout: float=DEFAULT_PROXY_TIMEOUT,
      ):
    self.network_interface = network_interface
    self.multicast_address = multicast_address
    self.multicast_port = multicast_port
    self.discovery_url = discovery_url
    self.response_wait_time = response_wait_time
    self.proxy_timeout = proxy_timeout

  def __repr__(self) -> str:
    return f"DiscoveryConfig({self.to_json_data()!r})"

  def __eq__(self, other: Any) -> bool:
    if not isinstance(other, DiscoveryConfig):
      return False
    return self.to_json_data() == other.to_json_data()

  @property
  def use_proxy(self) -> bool:
    return bool(self.discovery_url)

  def copy(self) -> DiscoveryConfig:
    return copy(self)

  def bake(self) -> None:
    """Sets attributes from the loaded JSON data. Missing keys keep their current values."""
    if 'network_interface' in self._json_data:
      value = self.get_cfg_property('network_interface')
      if not value is None and not isinstance(value, (str, int)):
        raise ConfigError(f"Config: Expected property network_interface to be str or int, got {type(value)}")
      self.network_interface = value
    self.multicast_address = self.get_cfg_property_str('multicast_address', self.multicast_address)
    self.multicast_port = self.get_cfg_property_int('multicast_port', self.multicast_port)
    discovery_url = self.get_cfg_property('discovery_url', self.discovery_url)
    if not discovery_url is None and not isinstance(discovery_url, str):
      raise ConfigError(f"Config: Expected property discovery_url to be str, got {type(discovery_url)}")
    self.discovery_url = discovery_url if discovery_url else None
    self.response_wait_time = self.get_cfg_property_float('response_wait_time', self.response_wait_time)
    self.proxy_timeout = self.get_cfg_property_float('proxy_timeout', self.proxy_timeout)

  def loads(self, config_text: str) -> DiscoveryConfig:
    try:
      json_data = json.loads(config_text)
    except json.JSONDecodeError as e:
      raise ConfigError(f"Config: Invalid JSON: {e}") from e
    if not isinstance(json_data, dict):
      raise ConfigError(f"Config: Expected config data to be dict, got {type(json_data)}")
    self._json_data = json_data
    self.bake()
    return self

  def load_json_data(self, json_data: JsonableDict) -> DiscoveryConfig:
    config_text = json.dumps(json_data)
    return self.loads(config_text)

  def load_file(self, pathname: str) -> DiscoveryConfig:
    pathname = os.path.abspath(os.path.expanduser(pathname))
    try:
      with open(pathname, 'r', encoding='utf-8') as f:
        config_text = f.read()
    except OSError as e:
      raise ConfigError(f"Config: Unable to read config file {pathname}: {e}") from e
    self.loads(config_text)
    self.config_file = pathname
    return self

  @classmethod
  def from_file(cls, pathname: str) -> DiscoveryConfig:
    return cls().load_file(pathname)

  def to_json_data(self) -> JsonableDict:
    return {
        'network_interface': self.network_interface,
        'multicast_address': self.multicast_address,
        'multicast_port': self.multicast_port,
        'discovery_url': self.discovery_url,
        'response_wait_time': self.response_wait_time,
        'proxy_timeout': self.proxy_timeout,
      }

  _no_default = object()

  @overload
  def get_cfg_property(self, key: str, default: _T) -> Union[Jsonable, _T]: pass

  @overload
  def get_cfg_property(self, key: str) -> Jsonable: pass

  def get_cfg_property(self, key: str, default = _no_default):
    if not isinstance(self._json_data, dict):
      raise ConfigError(f"Config: Expected config data {key} to be dict, got {type(self._json_data)}")
    result = self._json_data.get(key, default)
    if result is self._no_default:
      raise ConfigError(f"Config: Property {key} does not exist and has no default")
    if not result is None and not isinstance(result, JsonableTypes):
      raise ConfigError(f"Config: Expected property {key} to be JSON-able, got {type(result)}")
    return result

  @overload
  def get_cfg_property_str(self, key: str, default: _T) -> Union[str, _T]: pass

  @overload
  def get_cfg_property_str(self, key: str) -> str: pass

  def get_cfg_property_str(self, key: str, default: Any=_no_default):
    result = self.get_cfg_property(key, default)
    if not isinstance(result, str):
      raise ConfigError(f"Config: Expected property {key} to be str, got {type(result)}")
    return result

  @overload
  def get_cfg_property_int(self, key: str, default: _T) -> Union[int, _T]: pass

  @overload
  def get_cfg_property_int(self, key: str) -> int: pass

  def get_cfg_property_int(self, key: str, default: Any=_no_default):
    result = self.get_cfg_property(key, default)
    if not isinstance(result, int):
      if isinstance(result, str):
        try:
          result = int(result)
        except ValueError:
          pass
    if not isinstance(result, int) or isinstance(result, bool):
      raise ConfigError(f"Config: Expected property {key} to be int, got {type(result)}")
    return result

  @overload
  def get_cfg_property_float(self, key: str, default: _T) -> Union[float, _T]: pass

  @overload
  def get_cfg_property_float(self, key: str) -> float: pass

  def get_cfg_property_float(self, key: str, default: Any=_no_default):
    result = self.get_cfg_property(key, default)
    if isinstance(result, str):
      try:
        result = float(result)
      except ValueError:
        pass
    if not isinstance(result, (int, float)) or isinstance(result, bool):
      raise ConfigError(f"Config: Expected property {key} to be a number, got {type(result)}")
    return float(result)
