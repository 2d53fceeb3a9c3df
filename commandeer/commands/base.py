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
"""Base command implementations."""
from __future__ import annotations

__all__: list[str] = ["CheckSig", "PartialCommand"]

import re
import typing
from collections import abc as collections

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from .. import extensions

    _CheckSigT = typing.TypeVar("_CheckSigT", bound="CheckSig")

CheckSig = collections.Callable[..., typing.Union[bool, collections.Coroutine[typing.Any, typing.Any, bool]]]
"""Type hint of a command check.

The first positional argument is the command's context. Checks may take
further dependency injected arguments, may be sync or async and should
return [True][] to let the command run.
"""

_NAME_REGEX: typing.Final[re.Pattern[str]] = re.compile(r"^[-_\w]{1,32}$")


class PartialCommand:
    """Base class for the standard command tree nodes."""

    __slots__ = ("_checks", "_description", "_extension", "_metadata", "_name")

    def __init__(self, name: str, description: str, /) -> None:
        if not _NAME_REGEX.fullmatch(name) or name.lower() != name:
            raise ValueError(f"Invalid name provided, {name!r} must be 1-32 lowercase word characters or dashes")

        self._checks: list[CheckSig] = []
        self._description = description
        self._extension: typing.Optional[extensions.Extension] = None
        self._metadata: dict[typing.Any, typing.Any] = {}
        self._name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__} <{self._name!r}>"

    @property
    def checks(self) -> collections.Sequence[CheckSig]:
        """The checks registered for this node in the order they're run in."""
        return self._checks.copy()

    @property
    def description(self) -> str:
        """The node's description."""
        return self._description

    @property
    def extension(self) -> typing.Optional[extensions.Extension]:
        """The extension this node's tree is bound to, if any."""
        return self._extension

    @property
    def metadata(self) -> collections.MutableMapping[typing.Any, typing.Any]:
        """Mutable mapping of metadata set for this node."""
        return self._metadata

    @property
    def name(self) -> str:
        """The node's name."""
        return self._name

    def set_metadata(self, key: typing.Any, value: typing.Any, /) -> Self:
        """Set a field in this node's metadata.

        Parameters
        ----------
        key
            Metadata key to set.
        value
            Metadata value to set.

        Returns
        -------
        Self
            The node to enable chained calls.
        """
        self._metadata[key] = value
        return self

    def add_check(self, check: CheckSig, /) -> Self:
        """Add a check to this node.

        Checks are run in the order they're added, after the checks of
        every node above this one.

        Parameters
        ----------
        check
            The check to add.

        Returns
        -------
        Self
            The node to enable chained calls.
        """
        if check not in self._checks:
            self._checks.append(check)

        return self

    def remove_check(self, check: CheckSig, /) -> Self:
        """Remove a check from this node.

        Raises
        ------
        ValueError
            If the check isn't registered.
        """
        self._checks.remove(check)
        return self

    def with_check(self, check: _CheckSigT, /) -> _CheckSigT:
        """Add a check to this node through a decorator call.

        Parameters
        ----------
        check
            The check to add.

        Returns
        -------
        CheckSig
            The added check.
        """
        self.add_check(check)
        return check

    def bind_extension(self, extension: typing.Optional[extensions.Extension], /) -> Self:
        """Bind this node to an extension."""
        self._extension = extension
        return self
