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
"""Message command context implementation."""
from __future__ import annotations

__all__: list[str] = ["MessageContext"]

import typing

import hikari

from . import base

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from typing_extensions import Self

    from .. import clients
    from ..commands import slash

_ArgumentsT = typing.TypeVar("_ArgumentsT")


class MessageContext(base.Context[_ArgumentsT]):
    """Context of a prefixed message command call."""

    __slots__ = ("_command_path", "_has_responded", "_message", "_prefix", "_tokens")

    def __init__(
        self, client: clients.Client, message: hikari.Message, tokens: collections.Sequence[str], /, *, prefix: str
    ) -> None:
        """Initialise a message command context.

        Parameters
        ----------
        client
            The client this context is bound to.
        message
            The message which triggered the command.
        tokens
            The tokens of the message's content after the prefix, starting
            with the root command's name.
        prefix
            The prefix the command was triggered with.
        """
        super().__init__(client)
        self._command_path = tuple(tokens)
        self._has_responded = False
        self._message = message
        self._prefix = prefix
        self._tokens = tuple(tokens)

    @property
    def author(self) -> hikari.User:
        # <<inherited docstring from Context>>.
        return self._message.author

    @property
    def channel_id(self) -> hikari.Snowflake:
        # <<inherited docstring from Context>>.
        return self._message.channel_id

    @property
    def command_path(self) -> collections.Sequence[str]:
        # <<inherited docstring from Context>>.
        return self._command_path

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        # <<inherited docstring from Context>>.
        return self._message.guild_id

    @property
    def has_acknowledged(self) -> bool:
        # <<inherited docstring from Context>>.
        return self._has_responded

    @property
    def message(self) -> hikari.Message:
        """The message which triggered this command."""
        return self._message

    @property
    def prefix(self) -> str:
        """The prefix this command was triggered with."""
        return self._prefix

    @property
    def tokens(self) -> collections.Sequence[str]:
        # <<inherited docstring from Context>>.
        return self._tokens

    def set_command(self, command: slash.SlashCommand[typing.Any], /, *, consumed: int = 0) -> Self:
        # <<inherited docstring from Context>>.
        self._tokens = self._command_path[consumed:]
        return super().set_command(command, consumed=consumed)

    async def acknowledge(self, *, public: bool = False, content: typing.Optional[str] = None) -> None:
        # <<inherited docstring from Context>>.
        if self._has_responded:
            raise RuntimeError("Context has already been acknowledged")

        self._has_responded = True
        if content is None:
            await self.rest.trigger_typing(self._message.channel_id)

        else:
            await self._message.respond(content, reply=self._message)

    async def reply(self, content: str, /) -> None:
        # <<inherited docstring from Context>>.
        if not self._has_responded:
            raise RuntimeError("Context must be acknowledged before replying")

        await self._message.respond(content, reply=self._message)
