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
preoccupied.pydantic.value.serializable
Value wrappers that can be stringified, dumped, and stored.

Serialized payloads may sit in a database for a long time, and a class's
``is_valid`` rules may have been tightened since they were written. Loading
therefore always goes back through the validating constructor, and a payload
that is no longer valid is refused.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from typing import Any, Optional, Type, TypeVar, Union

from pydantic_core import core_schema

from .errors import InvalidValueError, render_candidate
from .formats import (
    LegacyForm, Unrecognized,
    decode, encode_compact, encode_legacy, survives_json, )
from .wrapper import T, ValueWrapper


__all__ = (
    "SerializableValueWrapper",
)


logger = logging.getLogger(__name__)


S = TypeVar("S", bound="SerializableValueWrapper")


def _to_serializable(instance: "SerializableValueWrapper") -> Any:
    return instance.to_serializable()


class SerializableValueWrapper(ValueWrapper[T]):
    """
    A :class:`ValueWrapper` that converts to a string, dumps as its bare
    value in pydantic models, and round-trips through :meth:`serialize` and
    :meth:`deserialize`.
    """

    __slots__ = ()


    def __str__(self) -> str:
        return str(self.value())


    def to_serializable(self) -> T:
        """
        The wrapped value, for encoders that should see a bare scalar rather
        than the wrapper.
        """

        return self.value()


    def serialize(self) -> bytes:
        """
        Encode the wrapped value in the compact form, ``[value]``.

        :raises InvalidValueError: the value would not decode back to
          itself, eg. ``bytes`` or a ``tuple``
        """

        return encode_compact(self._storable_value())


    def serialize_legacy(self) -> bytes:
        """
        Encode the wrapped value in the legacy keyed form, as older releases
        wrote it.
        """

        return encode_legacy(self._storable_value(), self.__legacy_namespace__)


    def _storable_value(self) -> T:
        value = self.value()
        if not survives_json(value):
            cls = type(self)
            rendered = render_candidate(value)
            raise InvalidValueError(
                f"not a serializable {cls.__qualname__}: {rendered}",
                wrapper=cls.__qualname__,
                rendered=rendered,
            )
        return value


    @classmethod
    def deserialize(cls: Type[S], data: Union[bytes, bytearray, str]) -> S:
        """
        Load an instance from either the compact or the legacy form. The
        value is validated again on the way in.

        :raises InvalidValueError: the payload is in neither form, or its
          value is not valid for this class
        """

        found = decode(data, cls.__legacy_namespace__)

        if isinstance(found, Unrecognized):
            logger.debug("Unrecognized payload for %s: %s",
                         cls.__qualname__, found.reason)
            raise InvalidValueError(
                f"not a valid serialized {cls.__qualname__}: unrecognized"
                f" format, {found.reason}",
                wrapper=cls.__qualname__,
            )

        if isinstance(found, LegacyForm):
            logger.debug("Loading %s from the legacy format", cls.__qualname__)

        return cls._revalidate(found.value)


    @classmethod
    def _revalidate(cls: Type[S], value: Any) -> S:
        # a decoded JSON value is never an instance, so is_valid always runs
        try:
            return cls(value)
        except InvalidValueError:
            rendered = render_candidate(value)
            logger.debug("Rejected stored %s value %s",
                         cls.__qualname__, rendered)
            raise InvalidValueError(
                f"not a valid serialized {cls.__qualname__}: {rendered}",
                wrapper=cls.__qualname__,
                rendered=rendered,
            ) from None


    @classmethod
    def __value_serialization__(cls) -> Optional[core_schema.SerSchema]:
        return core_schema.plain_serializer_function_ser_schema(
            _to_serializable)


# The end.
