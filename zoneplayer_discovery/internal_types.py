#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Type hints used internally by this package"""

from __future__ import annotations

from typing import (
    Dict, List, Optional, Union, Any, Tuple, Set, Iterable, Iterator, Mapping, MutableMapping,
    Sequence, Callable, Awaitable, AsyncIterator, AsyncIterable, AsyncContextManager, TypeVar, Type,
    TYPE_CHECKING,
  )

from types import TracebackType
from typing_extensions import Self

Jsonable = Union[str, int, float, bool, None, Dict[str, 'Jsonable'], List['Jsonable']]
"""A type hint for a simple JSON-serializable value; i.e., str, int, float, bool, None, Dict[str, Jsonable], List[Jsonable]"""

JsonableDict = Dict[str, Jsonable]
"""A type hint for a simple JSON-serializable dict; i.e., Dict[str, Jsonable]"""

JsonableTypes = (str, int, float, bool, dict, list)
"""A tuple of the non-None types that make up Jsonable, suitable for isinstance()"""

HostAndPort = Tuple[str, int]
"""A type hint for a (host, port) address tuple as used by the socket module."""

NetworkInterface = Union[str, int]
"""A network interface identifier: an IPv4 address, an interface name, or an interface index."""
