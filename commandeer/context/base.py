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
"""Base command context implementation."""
from __future__ import annotations

__all__: list[str] = ["Context"]

import abc
import typing

import hikari

from .. import reporting

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from typing_extensions import Self

    from .. import clients
    from ..commands import slash

_ArgumentsT = typing.TypeVar("_ArgumentsT")


class Context(abc.ABC, typing.Generic[_ArgumentsT]):
    """Base class for the per-call command contexts.

    A fresh context is created for every command call.
    """

    __slots__ = ("_arguments", "_breadcrumbs", "_client", "_command")

    def __init__(self, client: clients.Client, /) -> None:
        self._arguments: typing.Optional[_ArgumentsT] = None
        self._breadcrumbs: list[reporting.Breadcrumb] = []
        self._client = client
        self._command: typing.Optional[slash.SlashCommand[typing.Any]] = None

    @property
    def arguments(self) -> _ArgumentsT:
        """The parsed arguments for this call.

        Raises
        ------
        RuntimeError
            If the arguments haven't been parsed yet or the command takes no arguments.
        """
        if self._arguments is None:
            raise RuntimeError("Arguments haven't been parsed for this context")

        return self._arguments

    @property
    @abc.abstractmethod
    def author(self) -> hikari.User:
        """Object of the user who triggered this command."""

    @property
    def breadcrumbs(self) -> collections.Sequence[reporting.Breadcrumb]:
        """The steps recorded while handling this call, in order."""
        return self._breadcrumbs.copy()

    @property
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        """Hikari cache instance this context's client was initialised with."""
        return self._client.cache

    @property
    @abc.abstractmethod
    def channel_id(self) -> hikari.Snowflake:
        """ID of the channel this command was triggered in."""

    @property
    def client(self) -> clients.Client:
        """The client this context is bound to."""
        return self._client

    @property
    def command(self) -> typing.Optional[slash.SlashCommand[typing.Any]]:
        """The command this context is bound to.

        This will be [None][] until the command has been resolved.
        """
        return self._command

    @property
    @abc.abstractmethod
    def command_path(self) -> collections.Sequence[str]:
        """The names which were used to trigger this command, starting with the root command's."""

    @property
    @abc.abstractmethod
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild this command was executed in.

        Will be [None][] for all DM command executions.
        """

    @property
    @abc.abstractmethod
    def has_acknowledged(self) -> bool:
        """Whether this call has been acknowledged yet."""

    @property
    def is_private(self) -> bool:
        """Whether this command was triggered in a DM channel."""
        return self.guild_id is None

    @property
    def options(self) -> typing.Optional[collections.Mapping[str, typing.Any]]:
        """Mapping of option names to their raw values for structured calls.

        This will be [None][] for calls which provide a token stream.
        """
        return None

    @property
    def rest(self) -> hikari.api.RESTClient:
        """Hikari REST client this context's client was initialised with."""
        return self._client.rest

    @property
    def tokens(self) -> collections.Sequence[str]:
        """The argument tokens for token stream calls."""
        return ()

    def add_breadcrumb(
        self,
        message: str,
        /,
        *,
        category: str = "command",
        type_: str = "default",
        level: str = "info",
        data: typing.Optional[collections.Mapping[str, typing.Any]] = None,
    ) -> Self:
        """Record a step taken while handling this call.

        Parameters
        ----------
        message
            Description of the step.
        category
            Category of the step.
        type_
            Type of the step.
        level
            Severity level of the step.
        data
            Extra data to attach to the step.

        Returns
        -------
        Self
            The context to allow chaining.
        """
        self._breadcrumbs.append(
            reporting.Breadcrumb(message, category=category, type=type_, level=level, data=dict(data or {}))
        )
        return self

    def set_arguments(self, arguments: _ArgumentsT, /) -> Self:
        """Set this context's parsed arguments."""
        self._arguments = arguments
        return self

    def set_command(self, command: slash.SlashCommand[typing.Any], /, *, consumed: int = 0) -> Self:
        """Bind this context to the resolved command.

        Parameters
        ----------
        command
            The resolved command.
        consumed
            How many names from the start of the command path were used to resolve it.

        Returns
        -------
        Self
            The context to allow chaining.
        """
        self._command = command
        return self

    async def call_with_async_di(
        self, callback: collections.Callable[..., typing.Any], /, *args: typing.Any
    ) -> typing.Any:
        """Call a sync or async callback with dependency injection.

        Parameters
        ----------
        callback
            The callback to call.
        *args
            Positional arguments to pass to the callback.

        Returns
        -------
        typing.Any
            The callback's result.
        """
        return await self._client.injector.call_with_async_di(callback, *args)

    @abc.abstractmethod
    async def acknowledge(self, *, public: bool = False, content: typing.Optional[str] = None) -> None:
        """Acknowledge this call.

        Parameters
        ----------
        public
            Whether the acknowledgment should be visible to everyone.
        content
            Content to respond with.

            If left as [None][] then a "thinking" state is shown instead.

        Raises
        ------
        RuntimeError
            If this call has already been acknowledged.
        """

    @abc.abstractmethod
    async def reply(self, content: str, /) -> None:
        """Send a response to an acknowledged call.

        Parameters
        ----------
        content
            The content to send.

        Raises
        ------
        RuntimeError
            If this call hasn't been acknowledged yet.
        """

    async def respond(self, content: str, /, *, public: bool = False) -> None:
        """Respond to this call, acknowledging it first if needed.

        Parameters
        ----------
        content
            The content to send.
        public
            Whether a fresh acknowledgment should be visible to everyone.
        """
        if self.has_acknowledged:
            await self.reply(content)

        else:
            await self.acknowledge(public=public, content=content)
