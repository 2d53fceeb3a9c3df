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
"""The errors raised within and by Commandeer."""
from __future__ import annotations

__all__: list[str] = [
    "CommandError",
    "CommandRegistrationError",
    "CommandeerError",
    "ConversionError",
    "FailedCheck",
    "InvalidCommandError",
    "NotEnoughArgumentsError",
    "ParserError",
    "ResolutionError",
]

import typing
from collections import abc as collections

if typing.TYPE_CHECKING:
    from . import context as context_


class CommandeerError(Exception):
    """The base class for all errors raised by Commandeer."""


class InvalidCommandError(CommandeerError, ValueError):
    """Error raised when a command's definition breaks one of its structural rules.

    This is raised by `validate()` before a command becomes callable and is
    never shown to the user invoking a command.
    """

    name: str
    """Name of the command which failed validation."""

    reason: str
    """Human readable explanation of the failure."""

    def __init__(self, name: str, reason: str, /) -> None:
        """Initialise an invalid command error.

        Parameters
        ----------
        name
            Name of the offending command.
        reason
            Explanation of which rule the command broke.
        """
        super().__init__(name, reason)
        self.name = name
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid command `{self.name}`: {self.reason}"


class CommandRegistrationError(CommandeerError, ValueError):
    """Error raised when a sub-command or group couldn't be added to its parent.

    The parent command is left unchanged when this is raised.
    """

    name: str
    """Name of the command or group which was refused."""

    reason: str
    """Human readable explanation of the refusal."""

    def __init__(self, name: str, reason: str, /) -> None:
        super().__init__(name, reason)
        self.name = name
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to register `{self.name}`: {self.reason}"


class ResolutionError(CommandeerError, RuntimeError):
    """Error raised when an invocation's command path doesn't match the command tree.

    For slash commands this indicates that the declared commands are out of
    sync with the registered tree.
    """

    path: collections.Sequence[str]
    """The command path which couldn't be resolved."""

    def __init__(self, message: str, path: collections.Sequence[str], /) -> None:
        super().__init__(message)
        self.path = tuple(path)


class FailedCheck(CommandeerError, RuntimeError):
    """Error raised as an alternative to returning `False` in a check."""


class CommandError(CommandeerError):
    """An error which is sent as a response to the command call."""

    content: str
    """The response error message's content."""

    def __init__(self, content: str, /) -> None:
        """Initialise a command error.

        Parameters
        ----------
        content
            The content to respond with.
        """
        super().__init__(content)
        self.content = content

    def __str__(self) -> str:
        return self.content

    async def send(self, ctx: context_.Context[typing.Any], /, *, public: bool = False) -> None:
        """Send this error as a command response.

        Parameters
        ----------
        ctx
            The command call context to respond to.
        public
            Whether a fresh acknowledgment should be publicly visible.
        """
        await ctx.respond(self.content, public=public)


class ParserError(CommandeerError, ValueError):
    """Base error raised by a parser or converter during parsing.

    !!! note
        Expected errors raised by the parser will subclass this error and the
        message will be used as the command response.
    """

    message: str
    """String message for this error."""

    parameter: typing.Optional[str]
    """Name of the argument this was raised for.

    This will be [None][] if it was raised while tokenizing the provided
    message content.
    """

    def __init__(self, message: str, parameter: typing.Optional[str], /) -> None:
        """Initialise a parser error.

        Parameters
        ----------
        message
            String message for this error.
        parameter
            Name of the argument which caused this error, should be [None][]
            if not applicable.
        """
        super().__init__(message)
        self.message = message
        self.parameter = parameter

    def __str__(self) -> str:
        return self.message


class ConversionError(ParserError):
    """Error raised when a converter rejected the value passed for an argument."""

    errors: collections.Sequence[Exception]
    """Sequence of the errors that were caught during conversion for this argument."""

    parameter: str
    """Name of the argument this error was raised for."""

    def __init__(self, message: str, parameter: str, /, errors: collections.Iterable[Exception] = ()) -> None:
        """Initialise a conversion error.

        Parameters
        ----------
        message
            The error message.
        parameter
            The argument this was raised for.
        errors
            An iterable of the source errors which were raised during conversion.
        """
        super().__init__(message, parameter)
        self.errors = tuple(errors)


class NotEnoughArgumentsError(ParserError):
    """Error raised when nothing could be consumed for a required argument."""

    parameter: str
    """Name of the argument this error was raised for."""

    def __init__(self, message: str, parameter: str, /) -> None:
        super().__init__(message, parameter)
