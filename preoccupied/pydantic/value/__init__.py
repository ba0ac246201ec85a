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
preoccupied.pydantic.value
Namespace package segment providing immutable, self-validating value
wrappers usable as Pydantic field types.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from .errors import (
    DoubleInitializationError, ImmutableValueError, InvalidValueError,
    IsValidNotImplementedError, ValueWrapperError, )
from .formats import CompactForm, LegacyForm, Unrecognized, detect_format
from .serializable import SerializableValueWrapper
from .wrapper import ValueWrapper


__all__ = (
    "ValueWrapper",
    "SerializableValueWrapper",

    "CompactForm",
    "LegacyForm",
    "Unrecognized",
    "detect_format",

    "ValueWrapperError",
    "InvalidValueError",
    "DoubleInitializationError",
    "IsValidNotImplementedError",
    "ImmutableValueError",
)


# The end.
