# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Fixed-width byte layouts for tokens, cookies and their plaintexts.

Every field has a fixed width and a fixed offset; nothing is
length-prefixed. The expiry timestamp is a signed 64-bit integer stored
little-endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

_EXPIRES = struct.Struct("<q")

EXPIRES_LENGTH: int = _EXPIRES.size


def encode_expires(expires: int) -> bytes:
    """Encode an epoch timestamp as 8 little-endian bytes (signed)."""
    if not -(2**63) <= expires < 2**63:
        raise ValueError(f"expiry {expires} does not fit in a signed 64-bit integer")
    return _EXPIRES.pack(expires)


def decode_expires(data: bytes) -> int:
    """Decode 8 little-endian bytes into a signed epoch timestamp."""
    return _EXPIRES.unpack(data)[0]


@dataclass(frozen=True)
class Layout:
    """An ordered sequence of fixed-width fields.

    Args:
        name: Human-readable name, used in error messages.
        fields: (field_name, width) pairs in wire order.
    """

    name: str
    fields: tuple[tuple[str, int], ...]
    _slices: dict[str, slice] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        slices: dict[str, slice] = {}
        offset = 0
        for field_name, width in self.fields:
            if width <= 0 or field_name in slices:
                raise ValueError(f"invalid field '{field_name}' in layout '{self.name}'")
            slices[field_name] = slice(offset, offset + width)
            offset += width
        object.__setattr__(self, "_slices", slices)

    @property
    def size(self) -> int:
        """Total length in bytes."""
        return sum(width for _, width in self.fields)

    def width(self, field_name: str) -> int:
        """Width in bytes of *field_name*."""
        s = self._slices[field_name]
        return s.stop - s.start

    def pack(self, **values: bytes) -> bytes:
        """Concatenate field values in layout order, checking every width."""
        if set(values) != set(self._slices):
            raise ValueError(f"layout '{self.name}' expects fields {sorted(self._slices)}, got {sorted(values)}")
        parts = []
        for field_name, width in self.fields:
            value = values[field_name]
            if len(value) != width:
                raise ValueError(f"field '{field_name}' of layout '{self.name}' must be {width} bytes, got {len(value)}")
            parts.append(bytes(value))
        return b"".join(parts)

    def unpack(self, data: bytes) -> dict[str, bytes]:
        """Split *data* into fields. *data* must be exactly :attr:`size` bytes."""
        if len(data) != self.size:
            raise ValueError(f"layout '{self.name}' is {self.size} bytes, got {len(data)}")
        view = bytes(data)
        return {field_name: view[s] for field_name, s in self._slices.items()}
