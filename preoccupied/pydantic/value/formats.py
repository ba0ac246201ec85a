# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.pydantic.value.formats
Detection and encoding of the serialized forms of a wrapped value.

Two encodings are understood:

* the compact form, a JSON array holding only the value, ``["61234"]``
* the legacy form, a JSON object keyed by the name-mangled private
  attributes an older release dumped, ``{"_ValueWrapper__value": "61234",
  "_ValueWrapper__is_set": true}``

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from dataclasses import dataclass
from typing import Any, Union
from typing_extensions import TypeAlias

from pydantic_core import from_json, to_json


__all__ = (
    "CompactForm",
    "DetectedForm",
    "LegacyForm",
    "Unrecognized",
    "decode",
    "detect_format",
    "encode_compact",
    "encode_legacy",
    "legacy_key",
    "survives_json",
)


@dataclass(frozen=True)
class CompactForm:
    """
    A payload in the current positional encoding.
    """

    value: Any


@dataclass(frozen=True)
class LegacyForm:
    """
    A payload in the older field-name keyed encoding.
    """

    value: Any


@dataclass(frozen=True)
class Unrecognized:
    """
    A payload matching neither encoding.
    """

    reason: str


DetectedForm: TypeAlias = Union[CompactForm, LegacyForm, Unrecognized]


def legacy_key(namespace: str, field: str = "value") -> str:
    """
    The mangled attribute name used as a key by the legacy encoding.
    """

    return f"_{namespace}__{field}"


def survives_json(value: Any) -> bool:
    """
    True when ``value`` decodes back from JSON with the same type and value.
    Bytes and tuples, for example, come back as strings and lists.
    """

    try:
        decoded = from_json(to_json(value))
    except ValueError:
        return False

    if type(decoded) is not type(value):
        return False
    # NaN never equals itself
    return decoded == value or (decoded != decoded and value != value)


def encode_compact(value: Any) -> bytes:
    return to_json([value])


def encode_legacy(value: Any, namespace: str) -> bytes:
    return to_json({
        legacy_key(namespace): value,
        legacy_key(namespace, "is_set"): True,
    })


def decode(
        data: Union[bytes, bytearray, str],
        namespace: str = "ValueWrapper") -> DetectedForm:
    """
    Parse JSON ``data`` and identify which encoding it uses. Input that is
    not valid JSON is reported as :class:`Unrecognized`.
    """

    try:
        payload = from_json(data)
    except ValueError as error:
        return Unrecognized(f"undecodable payload ({error})")
    return detect_format(payload, namespace)


def detect_format(payload: Any, namespace: str = "ValueWrapper") -> DetectedForm:
    """
    Identify the encoding of an already-parsed payload.
    """

    if isinstance(payload, list):
        if len(payload) == 1:
            return CompactForm(payload[0])
        return Unrecognized(f"expected a single element, got {len(payload)}")

    if isinstance(payload, dict):
        key = legacy_key(namespace)
        if key in payload:
            return LegacyForm(payload[key])
        return Unrecognized(f"missing legacy key {key!r}")

    return Unrecognized(f"unexpected {type(payload).__name__} payload")


# The end.
