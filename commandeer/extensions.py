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
"""Extensions which group root commands together to be loaded into a client."""
from __future__ import annotations

__all__: list[str] = ["Extension"]

import logging
import typing
from collections import abc as collections

from . import errors

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import clients
    from .commands import slash

    _SlashCommandT = typing.TypeVar("_SlashCommandT", bound=slash.SlashCommand[typing.Any])

_LOGGER = logging.getLogger("hikari.commandeer.extensions")


class Extension:
    """A named collection of root slash commands.

    Examples
    --------
    ```py
    extension = commandeer.Extension("fun")

    @extension.with_command
    @commandeer.as_slash_command("roll", "Roll a dice")
    async def roll(ctx: commandeer.Context[typing.Any]) -> None:
        await ctx.respond(str(random.randint(1, 6)))

    @commandeer.as_loader
    def load(client: commandeer.Client) -> None:
        client.add_extension(extension)
    ```
    """

    __slots__ = ("_client", "_commands", "_name")

    def __init__(self, name: str, /) -> None:
        """Initialise an extension.

        Parameters
        ----------
        name
            The extension's name.

            This is attached to the error reports of its commands.
        """
        self._client: typing.Optional[clients.Client] = None
        self._commands: dict[str, slash.SlashCommand[typing.Any]] = {}
        self._name = name

    def __repr__(self) -> str:
        return f"Extension <{self._name!r}: {len(self._commands)} commands>"

    @property
    def client(self) -> typing.Optional[clients.Client]:
        """The client this extension is bound to, if any."""
        return self._client

    @property
    def commands(self) -> collections.Mapping[str, slash.SlashCommand[typing.Any]]:
        """Mapping of names to the root commands in this extension."""
        return self._commands.copy()

    @property
    def name(self) -> str:
        """The extension's name."""
        return self._name

    def add_command(self, command: slash.SlashCommand[typing.Any], /) -> Self:
        """Add a root command to this extension.

        Commands which fail validation are logged and skipped.

        Parameters
        ----------
        command
            The command to add.

        Returns
        -------
        Self
            The extension to enable chained calls.

        Raises
        ------
        ValueError
            If the command is a sub-command or a command with the same name
            is already in this extension.
        """
        if command.is_sub_command:
            raise ValueError(f"Cannot add sub-command {command.name!r} to an extension directly")

        if command.name in self._commands:
            raise ValueError(f"Command with name {command.name!r} already exists in this extension")

        try:
            command.validate()

        except errors.InvalidCommandError:
            _LOGGER.error("Skipping invalid command %r in extension %r", command.name, self._name, exc_info=True)
            return self

        command.bind_extension(self)
        self._commands[command.name] = command
        return self

    def with_command(self, command: _SlashCommandT, /) -> _SlashCommandT:
        """Add a root command to this extension through a decorator call."""
        self.add_command(command)
        return command

    def remove_command(self, command: slash.SlashCommand[typing.Any], /) -> Self:
        """Remove a root command from this extension.

        Raises
        ------
        KeyError
            If the command isn't in this extension.
        """
        del self._commands[command.name]
        command.bind_extension(None)
        return self

    def bind_client(self, client: typing.Optional[clients.Client], /) -> Self:
        """Bind this extension to a client."""
        self._client = client
        return self
