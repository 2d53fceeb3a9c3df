# -*- coding: utf-8 -*-
# cython: language_level=3
# BSD 3-Clause License
#
# Copyright (c) 2020-2022, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Declarative argument sets for commands.

Examples
--------
```py
class BanArguments(commandeer.Arguments):
    user = commandeer.Argument(commandeer.UserConverter(), "The user to ban")
    reason = commandeer.Argument(commandeer.CoalescingStringConverter(), "Why they're banned", default=None)
```
"""
from __future__ import annotations

__all__: list[str] = ["Argument", "Arguments", "UNDEFINED", "UndefinedT"]

import typing
from collections import abc as collections

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import conversion

_T = typing.TypeVar("_T")


class UndefinedT:
    """Type of the [UNDEFINED][commandeer.arguments.UNDEFINED] singleton sentinel value."""

    __slots__ = ()
    __singleton: typing.Optional[UndefinedT] = None

    def __new__(cls) -> UndefinedT:
        if cls.__singleton is None:
            cls.__singleton = super().__new__(cls)

        return cls.__singleton

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> typing.Literal[False]:
        return False


UNDEFINED = UndefinedT()
"""A singleton used to mark an argument as having no default."""


class Argument(typing.Generic[_T]):
    """Descriptor which declares an argument on an [Arguments][commandeer.arguments.Arguments] subclass.

    Reading this from a parsed argument set returns the argument's value.
    """

    __slots__ = ("_attribute", "_converter", "_default", "_description", "_name")

    def __init__(
        self,
        converter: conversion.BaseConverter[_T],
        description: str,
        /,
        *,
        default: typing.Any = UNDEFINED,
        name: typing.Optional[str] = None,
    ) -> None:
        """Initialise an argument.

        Parameters
        ----------
        converter
            The converter used to parse this argument.
        description
            The argument's description.
        default
            The value to use when nothing could be consumed for this argument.

            If left as [UNDEFINED][commandeer.arguments.UNDEFINED] then this
            argument will be required.
        name
            The argument's name.

            Defaults to the attribute name it's declared under.
        """
        self._attribute: typing.Optional[str] = None
        self._converter = converter
        self._default = default
        self._description = description
        self._name = name

    def __set_name__(self, owner: type[typing.Any], name: str, /) -> None:
        self._attribute = name
        if self._name is None:
            self._name = name

    @typing.overload
    def __get__(self, instance: None, owner: type[typing.Any], /) -> Self:
        ...

    @typing.overload
    def __get__(self, instance: Arguments, owner: type[typing.Any], /) -> _T:
        ...

    def __get__(self, instance: typing.Optional[Arguments], owner: type[typing.Any], /) -> typing.Union[Self, _T]:
        if instance is None:
            return self

        return instance.values()[self.key]

    def __set__(self, instance: Arguments, value: typing.Any, /) -> typing.NoReturn:
        raise AttributeError("Argument values can't be reassigned")

    @property
    def attribute(self) -> typing.Optional[str]:
        """Name of the attribute this argument is declared under."""
        return self._attribute

    @property
    def converter(self) -> conversion.BaseConverter[_T]:
        """The converter used to parse this argument."""
        return self._converter

    @property
    def default(self) -> typing.Any:
        """The argument's default."""
        return self._default

    @property
    def description(self) -> str:
        """The argument's description."""
        return self._description

    @property
    def is_required(self) -> bool:
        """Whether this argument has no default."""
        return self._default is UNDEFINED

    @property
    def key(self) -> str:
        """The argument's name."""
        if self._name is None:
            raise RuntimeError("Argument hasn't been bound to an Arguments class")

        return self._name


class Arguments:
    """Base class for declaring a command's arguments.

    Subclasses declare [Argument][commandeer.arguments.Argument]s in their
    class body and the order of declaration is the order arguments are parsed
    in. The class is used as the factory for fresh argument sets, one per
    command call.
    """

    __slots__ = ("_converters", "_values")

    _declarations: typing.ClassVar[dict[str, Argument[typing.Any]]] = {}

    def __init_subclass__(cls, **kwargs: typing.Any) -> None:
        super().__init_subclass__(**kwargs)
        declarations = cls._declarations.copy()
        for attribute, value in cls.__dict__.items():
            if not isinstance(value, Argument):
                continue

            # Overriding an attribute drops its inherited declaration.
            for key in [key for key, argument in declarations.items() if argument.attribute == attribute]:
                if key != value.key:
                    del declarations[key]

            if (existing := declarations.get(value.key)) and existing.attribute != attribute:
                raise ValueError(f"Argument name `{value.key}` is declared more than once in {cls.__name__}")

            declarations[value.key] = value

        cls._declarations = declarations

    def __init__(self) -> None:
        self._converters: dict[str, conversion.BaseConverter[typing.Any]] = {
            key: argument.converter.copy() for key, argument in self._declarations.items()
        }
        self._values: typing.Optional[dict[str, typing.Any]] = None

    def __repr__(self) -> str:
        if self._values is None:
            return f"{type(self).__name__}(<unparsed>)"

        values = ", ".join(f"{key}={value!r}" for key, value in self._values.items())
        return f"{type(self).__name__}({values})"

    @classmethod
    def declarations(cls) -> collections.Mapping[str, Argument[typing.Any]]:
        """Ordered mapping of argument names to their declarations."""
        return cls._declarations.copy()

    @property
    def converters(self) -> collections.Mapping[str, conversion.BaseConverter[typing.Any]]:
        """Ordered mapping of argument names to this set's own converter instances."""
        return self._converters.copy()

    @property
    def is_parsed(self) -> bool:
        """Whether this set has been populated."""
        return self._values is not None

    def values(self) -> collections.Mapping[str, typing.Any]:
        """Get the parsed values of this set.

        Returns
        -------
        collections.abc.Mapping[str, typing.Any]
            Ordered mapping of argument names to their values.

        Raises
        ------
        RuntimeError
            If this set hasn't been populated yet.
        """
        if self._values is None:
            raise RuntimeError("Arguments can't be read before parsing has finished")

        return self._values.copy()

    def populate(self, values: collections.Mapping[str, typing.Any], /) -> None:
        """Commit the parsed values for this set.

        This is called once by the parser after every argument has been parsed.

        Parameters
        ----------
        values
            Mapping of argument names to their values.

        Raises
        ------
        RuntimeError
            If this set has already been populated.
        ValueError
            If `values` doesn't provide a value for every declared argument.
        """
        if self._values is not None:
            raise RuntimeError("Arguments have already been populated")

        if missing := self._declarations.keys() - values.keys():
            raise ValueError(f"Missing values for {', '.join(sorted(missing))}")

        self._values = {key: values[key] for key in self._declarations}
