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
preoccupied.pydantic.value.wrapper

Immutable wrappers around a single validated value.

Each subclass supplies an ``is_valid`` class method. The constructor runs it
against the incoming value and refuses anything it rejects, so every live
instance holds a value its class considered valid. Instances of the same
class are always accepted without re-running the check.

Example:

```python
class ZipCode(ValueWrapper[str]):
    @classmethod
    def is_valid(cls, candidate):
        if isinstance(candidate, cls):
            return True
        return (isinstance(candidate, str) and
                len(candidate) == 5 and candidate.isdigit())

zc = ZipCode("02134")
assert zc.value() == "02134"
assert zc == "02134"
assert ZipCode(zc) == zc

ZipCode("hello")  # raises InvalidValueError
```

Wrapper classes may also be used directly as pydantic field types.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import warnings
from typing import (
    Any, Callable, Generic, Mapping, MutableMapping, MutableSequence,
    Optional, Sequence, Type, TypeVar, Union, )

from pydantic import GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import (
    DoubleInitializationError, ImmutableValueError, InvalidValueError,
    IsValidNotImplementedError, render_candidate, )


__all__ = (
    "ValueWrapper",
)


T = TypeVar("T")
W = TypeVar("W", bound="ValueWrapper")


def _identical(left: Any, right: Any) -> bool:
    """
    Strict equality. The runtime types have to agree, so ``1``, ``1.0`` and
    ``True`` are never considered the same value. The same object is always
    identical to itself, even a NaN, but two distinct NaN objects are not.
    """

    if left is right:
        return True
    return type(left) is type(right) and left == right


class ValueWrapper(Generic[T]):
    """
    Immutable container for exactly one value accepted by the class's
    :meth:`is_valid` predicate.
    """

    __slots__ = ("__value", )

    __legacy_namespace__: str = "ValueWrapper"


    def __init__(self, raw: Union[T, "ValueWrapper[T]"]) -> None:
        """
        Validate ``raw`` and store it. An instance of this class (or of a
        subclass of it) is re-wrapped by copying its already-validated
        value.

        :raises InvalidValueError: ``raw`` was rejected by :meth:`is_valid`
        :raises DoubleInitializationError: this instance was already
          initialized
        """

        if self._initialized():
            raise DoubleInitializationError(
                f"{type(self).__qualname__} instance is already initialized"
            )

        cls = type(self)
        if isinstance(raw, cls):
            value = raw.value()

        elif cls.is_valid(raw):
            value = raw

        else:
            rendered = render_candidate(raw)
            raise InvalidValueError(
                f"not a valid {cls.__qualname__}: {rendered}",
                wrapper=cls.__qualname__,
                rendered=rendered,
            )

        object.__setattr__(self, "_ValueWrapper__value", value)


    def _initialized(self) -> bool:
        try:
            self.__value
        except AttributeError:
            return False
        return True


    @classmethod
    def is_valid(cls, candidate: Any) -> bool:
        """
        Decide whether ``candidate`` may be wrapped by this class. Every
        subclass must override this, and must answer True for instances of
        itself.

        This is a class method so values can be checked without wrapping
        them.
        """

        raise IsValidNotImplementedError(
            f"{cls.__qualname__}.is_valid is not implemented"
        )


    @classmethod
    def optional(cls: Type[W], raw: Any) -> Optional[W]:
        """
        Like the constructor, but ``None`` is returned unchanged.
        """

        if raw is None:
            return None
        return cls(raw)


    def value(self) -> T:
        """
        The wrapped value.
        """

        return self.__value


    def equals(self, other: Any) -> bool:
        """
        Instances of the same class are equal when they carry the same value.
        Instances of any other wrapper class are never equal. Anything else
        is compared directly against the wrapped value.
        """

        if type(other) is type(self):
            return _identical(self.__value, other.value())
        if isinstance(other, ValueWrapper):
            return False
        return _identical(self.__value, other)


    def __eq__(self, other: Any) -> bool:
        return self.equals(other)


    def __ne__(self, other: Any) -> bool:
        return not self.equals(other)


    def __hash__(self) -> int:
        # matches the raw value, since the two compare equal
        return hash(self.__value)


    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__value!r})"


    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutableValueError(
            f"{type(self).__qualname__} is immutable; cannot set {name!r}"
        )


    def __delattr__(self, name: str) -> None:
        raise ImmutableValueError(
            f"{type(self).__qualname__} is immutable; cannot delete {name!r}"
        )


    def __reduce__(self):
        # unpickling goes back through the constructor and re-validates
        return (type(self), (self.__value, ))


    def __copy__(self: W) -> W:
        return self


    def __deepcopy__(self: W, memo: Any) -> W:
        return self


    @classmethod
    def wrap(cls: Type[W], value: Any) -> W:
        """
        Return ``value`` if it is already an instance of this class,
        otherwise a new instance wrapping it.
        """

        if isinstance(value, cls):
            return value
        return cls(value)


    @classmethod
    def wrap_optional(cls: Type[W], value: Any) -> Optional[W]:
        """
        Like :meth:`wrap`, but ``None`` is returned unchanged.
        """

        if value is None:
            return None
        return cls.wrap(value)


    @classmethod
    def wrap_all(cls, collection: Union[Mapping, Sequence]) -> Any:
        """
        Replace every element of ``collection`` with an instance of this
        class. Mappings keep their keys and key order.

        The elements are wrapped into a copy first. A mutable collection is
        only updated in place once every element has been accepted, and is
        then returned. An immutable collection is left alone and a new
        ``dict`` or ``list`` is returned. If any element is rejected the
        error propagates and the caller's collection is unchanged.
        """

        return cls._wrap_collection(collection, cls.wrap)


    @classmethod
    def wrap_optional_all(cls, collection: Union[Mapping, Sequence]) -> Any:
        """
        Like :meth:`wrap_all`, but ``None`` elements are left as ``None``.
        """

        return cls._wrap_collection(collection, cls.wrap_optional)


    @classmethod
    def _wrap_collection(
            cls,
            collection: Union[Mapping, Sequence],
            wrap: Callable[[Any], Any]) -> Any:

        if isinstance(collection, Mapping):
            wrapped = {key: wrap(item) for key, item in collection.items()}
            if isinstance(collection, MutableMapping):
                collection.update(wrapped)
                return collection
            return wrapped

        if isinstance(collection, Sequence) and \
           not isinstance(collection, (str, bytes, bytearray)):
            items = [wrap(item) for item in collection]
            if isinstance(collection, MutableSequence):
                collection[:] = items
                return collection
            return items

        raise TypeError(
            f"{cls.__qualname__} can only wrap the elements of a mapping or"
            f" sequence, not {type(collection).__name__}"
        )


    @classmethod
    def wrap_or_null(cls: Type[W], value: Any) -> Optional[W]:
        """
        Deprecated alias for :meth:`wrap_optional`.
        """

        warnings.warn(
            "wrap_or_null is deprecated, use wrap_optional instead",
            DeprecationWarning, stacklevel=2)
        return cls.wrap_optional(value)


    @classmethod
    def wrap_or_null_all(cls, collection: Union[Mapping, Sequence]) -> Any:
        """
        Deprecated alias for :meth:`wrap_optional_all`.
        """

        warnings.warn(
            "wrap_or_null_all is deprecated, use wrap_optional_all instead",
            DeprecationWarning, stacklevel=2)
        return cls.wrap_optional_all(collection)


    @classmethod
    def __value_serialization__(cls) -> Optional[core_schema.SerSchema]:
        """
        Serialization schema for pydantic dumps. Plain wrappers have none,
        so pydantic treats them as opaque objects.
        """

        return None


    @classmethod
    def __get_pydantic_core_schema__(
            cls,
            _source_type: Any,
            _handler: Callable[[Any], core_schema.CoreSchema]) -> core_schema.CoreSchema:

        return core_schema.no_info_plain_validator_function(
            cls.wrap,
            serialization=cls.__value_serialization__(),
        )


    @classmethod
    def __get_pydantic_json_schema__(
            cls,
            _core_schema: core_schema.CoreSchema,
            handler: GetJsonSchemaHandler) -> JsonSchemaValue:

        return handler(core_schema.any_schema())


# The end.
