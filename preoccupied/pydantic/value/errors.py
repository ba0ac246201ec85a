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
preoccupied.pydantic.value.errors
Exception types raised by value wrappers.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Optional


__all__ = (
    "DoubleInitializationError",
    "ImmutableValueError",
    "InvalidValueError",
    "IsValidNotImplementedError",
    "ValueWrapperError",
    "render_candidate",
)


class ValueWrapperError(Exception):
    """
    Base class for all errors raised by this package.
    """


class InvalidValueError(ValueWrapperError, ValueError):
    """
    A candidate value was rejected by a wrapper class's ``is_valid``
    predicate, or a serialized payload could not be decoded into one.

    Subclasses :class:`ValueError` so that pydantic reports it as an
    ordinary validation failure.
    """

    def __init__(
            self,
            message: str,
            *,
            wrapper: Optional[str] = None,
            rendered: Optional[str] = None) -> None:

        super().__init__(message)
        self.wrapper = wrapper
        self.rendered = rendered


class DoubleInitializationError(ValueWrapperError, RuntimeError):
    """
    ``__init__`` was invoked a second time on a live wrapper.
    """


class IsValidNotImplementedError(ValueWrapperError, NotImplementedError):
    """
    A wrapper class was used without overriding ``is_valid``.
    """


class ImmutableValueError(ValueWrapperError, AttributeError):
    """
    An attribute was assigned or deleted on an immutable wrapper.
    """


def render_candidate(candidate: Any) -> str:
    """
    Render a rejected candidate for an error message. Scalars are quoted,
    anything else is reduced to its type name so structured data never
    ends up in a message.
    """

    if isinstance(candidate, (str, int, float)) and \
       not isinstance(candidate, bool):
        return f"'{candidate}'"
    return type(candidate).__name__


# The end.
