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
"""Slash command context implementation."""
from __future__ import annotations

__all__: list[str] = ["SlashContext"]

import asyncio
import typing

import hikari

from .. import _internal
from . import base

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from .. import clients

_ArgumentsT = typing.TypeVar("_ArgumentsT")


def _resolve_value(
    option: hikari.CommandInteractionOption, resolved: typing.Optional[hikari.ResolvedOptionData], /
) -> typing.Any:
    if resolved and option.type is hikari.OptionType.USER:
        user_id = hikari.Snowflake(option.value)
        return resolved.members.get(user_id) or resolved.users.get(user_id) or option.value

    return option.value


class SlashContext(base.Context[_ArgumentsT]):
    """Context of a slash command call."""

    __slots__ = (
        "_command_path",
        "_has_been_deferred",
        "_has_responded",
        "_interaction",
        "_is_ephemeral",
        "_options",
        "_response_lock",
    )

    def __init__(self, client: clients.Client, interaction: hikari.CommandInteraction, /) -> None:
        """Initialise a slash command context.

        Parameters
        ----------
        client
            The client this context is bound to.
        interaction
            The command interaction this context is for.
        """
        super().__init__(client)
        command_path, options = _internal.flatten_options(interaction.command_name, interaction.options)
        self._command_path = command_path
        self._has_been_deferred = False
        self._has_responded = False
        self._interaction = interaction
        self._is_ephemeral = True
        self._options = {option.name: _resolve_value(option, interaction.resolved) for option in options}
        self._response_lock = asyncio.Lock()

    @property
    def author(self) -> hikari.User:
        # <<inherited docstring from Context>>.
        return self._interaction.user

    @property
    def channel_id(self) -> hikari.Snowflake:
        # <<inherited docstring from Context>>.
        return self._interaction.channel_id

    @property
    def command_path(self) -> collections.Sequence[str]:
        # <<inherited docstring from Context>>.
        return tuple(self._command_path)

    @property
    def guild_id(self) -> typing.Optional[hikari.Snowflake]:
        # <<inherited docstring from Context>>.
        return self._interaction.guild_id

    @property
    def has_acknowledged(self) -> bool:
        # <<inherited docstring from Context>>.
        return self._has_been_deferred or self._has_responded

    @property
    def interaction(self) -> hikari.CommandInteraction:
        """Object of the interaction this context is for."""
        return self._interaction

    @property
    def member(self) -> typing.Optional[hikari.InteractionMember]:
        """Object of the member who triggered this command if it was triggered in a guild."""
        return self._interaction.member

    @property
    def options(self) -> collections.Mapping[str, typing.Any]:
        # <<inherited docstring from Context>>.
        return self._options.copy()

    def _get_flags(self) -> hikari.MessageFlag:
        return hikari.MessageFlag.EPHEMERAL if self._is_ephemeral else hikari.MessageFlag.NONE

    async def acknowledge(self, *, public: bool = False, content: typing.Optional[str] = None) -> None:
        # <<inherited docstring from Context>>.
        async with self._response_lock:
            if self.has_acknowledged:
                raise RuntimeError("Context has already been acknowledged")

            self._is_ephemeral = not public
            if content is None:
                self._has_been_deferred = True
                await self._interaction.create_initial_response(
                    hikari.ResponseType.DEFERRED_MESSAGE_CREATE, flags=self._get_flags()
                )

            else:
                self._has_responded = True
                await self._interaction.create_initial_response(
                    hikari.ResponseType.MESSAGE_CREATE, content, flags=self._get_flags()
                )

    async def reply(self, content: str, /) -> None:
        # <<inherited docstring from Context>>.
        async with self._response_lock:
            if not self.has_acknowledged:
                raise RuntimeError("Context must be acknowledged before replying")

            if not self._has_responded:
                self._has_responded = True
                await self._interaction.edit_initial_response(content)

            else:
                await self._interaction.execute(content, flags=self._get_flags())
