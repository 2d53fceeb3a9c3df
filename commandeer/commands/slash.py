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
"""Slash command tree implementations.

A root [SlashCommand][commandeer.commands.slash.SlashCommand] may either have
an action, sub-commands or groups of sub-commands. Groups can only contain
sub-commands and sub-commands can't be nested any further.
"""
from __future__ import annotations

__all__: list[str] = ["CommandCallbackSig", "DISCORD_LIMIT", "SlashCommand", "SlashGroup", "as_slash_command"]

import logging
import typing
from collections import abc as collections

import hikari

from .. import arguments as arguments_
from .. import errors
from . import base

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from .. import context as context_
    from .. import extensions

    _CommandCallbackSigT = typing.TypeVar("_CommandCallbackSigT", bound="CommandCallbackSig")

_ArgumentsT = typing.TypeVar("_ArgumentsT", bound=arguments_.Arguments)
_LOGGER = logging.getLogger("hikari.commandeer.commands")

CommandCallbackSig = collections.Callable[..., collections.Coroutine[typing.Any, typing.Any, None]]
"""Type hint of a command's action.

The first positional argument is the command's context and further arguments
may be dependency injected.
"""

DISCORD_LIMIT: typing.Final[int] = 10
"""The most sub-commands or groups a single node may hold."""


def _refuse(name: str, reason: str, /) -> errors.CommandRegistrationError:
    error = errors.CommandRegistrationError(name, reason)
    _LOGGER.error("Failed to register %r: %s", name, reason)
    return error


def _sort_options(options: collections.Iterable[hikari.CommandOption], /) -> list[hikari.CommandOption]:
    return sorted(options, key=lambda option: not option.is_required)


def as_slash_command(
    name: str,
    description: str,
    /,
    *,
    arguments: typing.Optional[type[arguments_.Arguments]] = None,
    auto_ack: bool = True,
    public_ack: bool = False,
    guild: typing.Optional[hikari.SnowflakeishOr[hikari.PartialGuild]] = None,
) -> collections.Callable[[CommandCallbackSig], SlashCommand[typing.Any]]:
    """Build a [SlashCommand][commandeer.commands.slash.SlashCommand] by decorating a function.

    Examples
    --------
    ```py
    class EchoArguments(commandeer.Arguments):
        text = commandeer.Argument(commandeer.CoalescingStringConverter(), "The text to echo")

    @commandeer.as_slash_command("echo", "Repeat some text", arguments=EchoArguments)
    async def echo(ctx: commandeer.Context[EchoArguments]) -> None:
        await ctx.respond(ctx.arguments.text)
    ```

    Parameters
    ----------
    name
        The command's name.

        This must be 1-32 lowercase word characters or dashes.
    description
        The command's description.
    arguments
        The argument set class used to parse this command's arguments.
    auto_ack
        Whether calls should be acknowledged before arguments are parsed.
    public_ack
        Whether the automatic acknowledgment should be visible to everyone.
    guild
        The guild this command should be declared in.

        If left as [None][] then the command is declared globally.

    Returns
    -------
    collections.abc.Callable[[CommandCallbackSig], SlashCommand]
        The decorator callback used to make a slash command.

    Raises
    ------
    ValueError
        If the command name isn't valid.
    """

    def decorator(callback: CommandCallbackSig, /) -> SlashCommand[typing.Any]:
        return SlashCommand(
            callback,
            name,
            description,
            arguments=arguments,
            auto_ack=auto_ack,
            public_ack=public_ack,
            guild=guild,
        )

    return decorator


class SlashCommand(base.PartialCommand, typing.Generic[_ArgumentsT]):
    """Standard implementation of a slash command tree node."""

    __slots__ = (
        "_arguments",
        "_auto_ack",
        "_callback",
        "_groups",
        "_guild",
        "_parent",
        "_public_ack",
        "_sub_commands",
    )

    def __init__(
        self,
        callback: typing.Optional[CommandCallbackSig],
        name: str,
        description: str,
        /,
        *,
        arguments: typing.Optional[type[_ArgumentsT]] = None,
        auto_ack: bool = True,
        public_ack: bool = False,
        guild: typing.Optional[hikari.SnowflakeishOr[hikari.PartialGuild]] = None,
    ) -> None:
        """Initialise a slash command.

        Parameters
        ----------
        callback
            The command's action.

            This should be left as [None][] for commands which only hold
            sub-commands or groups.
        name
            The command's name.

            This must be 1-32 lowercase word characters or dashes.
        description
            The command's description.
        arguments
            The argument set class used to parse this command's arguments.
        auto_ack
            Whether calls should be acknowledged before arguments are parsed.
        public_ack
            Whether the automatic acknowledgment should be visible to everyone.
        guild
            The guild this command should be declared in.

            Only root commands may have a guild scope.

        Raises
        ------
        ValueError
            If the command name isn't valid.
        """
        super().__init__(name, description)
        self._arguments = arguments
        self._auto_ack = auto_ack
        self._callback = callback
        self._groups: dict[str, SlashGroup] = {}
        self._guild = hikari.Snowflake(guild) if guild is not None else None
        self._parent: typing.Union[SlashCommand[typing.Any], SlashGroup, None] = None
        self._public_ack = public_ack
        self._sub_commands: dict[str, SlashCommand[typing.Any]] = {}

    @property
    def arguments(self) -> typing.Optional[type[_ArgumentsT]]:
        """The argument set class used to parse this command's arguments."""
        return self._arguments

    @property
    def auto_ack(self) -> bool:
        """Whether calls are acknowledged before arguments are parsed."""
        return self._auto_ack

    @property
    def callback(self) -> typing.Optional[CommandCallbackSig]:
        """The command's action."""
        return self._callback

    @property
    def group(self) -> typing.Optional[SlashGroup]:
        """The group this sub-command is in, if any."""
        return self._parent if isinstance(self._parent, SlashGroup) else None

    @property
    def groups(self) -> collections.Mapping[str, SlashGroup]:
        """Mapping of names to the groups registered under this command."""
        return self._groups.copy()

    @property
    def guild(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the guild this command is declared in.

        This will be [None][] for global commands.
        """
        return self._guild

    @property
    def has_children(self) -> bool:
        """Whether this command holds any sub-commands or groups."""
        return bool(self._sub_commands or self._groups)

    @property
    def is_sub_command(self) -> bool:
        """Whether this command has been added under another node."""
        return self._parent is not None

    @property
    def parent(self) -> typing.Optional[SlashCommand[typing.Any]]:
        """The root command this sub-command is registered under, if any."""
        if isinstance(self._parent, SlashGroup):
            return self._parent.parent

        return self._parent

    @property
    def public_ack(self) -> bool:
        """Whether the automatic acknowledgment is visible to everyone."""
        return self._public_ack

    @property
    def root(self) -> SlashCommand[typing.Any]:
        """The root command of this command's tree."""
        return self.parent or self

    @property
    def sub_commands(self) -> collections.Mapping[str, SlashCommand[typing.Any]]:
        """Mapping of names to the sub-commands registered directly under this command."""
        return self._sub_commands.copy()

    @property
    def extension(self) -> typing.Optional[extensions.Extension]:
        # <<inherited docstring from PartialCommand>>.
        if (root := self.parent) is not None:
            return root.extension

        return self._extension

    def iter_lineage(self) -> collections.Iterator[base.PartialCommand]:
        """Iterate over the nodes from this command's root down to this command."""
        if (parent := self.parent) is not None:
            yield parent

        if (group := self.group) is not None:
            yield group

        yield self

    def set_callback(self, callback: typing.Optional[CommandCallbackSig], /) -> Self:
        """Set this command's action.

        Parameters
        ----------
        callback
            The action to set.

        Returns
        -------
        Self
            The command to enable chained calls.
        """
        self._callback = callback
        return self

    def with_action(self, callback: _CommandCallbackSigT, /) -> _CommandCallbackSigT:
        """Set this command's action through a decorator call."""
        self.set_callback(callback)
        return callback

    def _set_parent(self, parent: typing.Union[SlashCommand[typing.Any], SlashGroup, None], /) -> None:
        self._parent = parent

    def add_sub_command(self, command: SlashCommand[typing.Any], /) -> Self:
        """Add a sub-command to this command.

        Sub-commands which fail validation are logged and skipped.

        Parameters
        ----------
        command
            The sub-command to add.

        Returns
        -------
        Self
            The command to enable chained calls.

        Raises
        ------
        commandeer.errors.CommandRegistrationError
            If the sub-command was refused, leaving this command unchanged.

            This happens when this command is itself a sub-command, already
            has groups or already has the maximum amount of sub-commands, or
            when the name is already in use.
        """
        if self._parent is not None:
            raise _refuse(command.name, "Sub-commands can't have their own sub-commands")

        if self._groups:
            raise _refuse(command.name, "A command can't have both groups and sub-commands")

        if len(self._sub_commands) >= DISCORD_LIMIT:
            raise _refuse(command.name, f"A command can't have more than {DISCORD_LIMIT} sub-commands")

        if command.name in self._sub_commands:
            raise _refuse(command.name, "A sub-command with this name already exists")

        if command.is_sub_command:
            raise _refuse(command.name, "This command has already been added to another node")

        _add_validated(self._sub_commands, command, self)
        return self

    def as_sub_command(
        self,
        name: str,
        description: str,
        /,
        *,
        arguments: typing.Optional[type[arguments_.Arguments]] = None,
        auto_ack: bool = True,
        public_ack: bool = False,
    ) -> collections.Callable[[CommandCallbackSig], SlashCommand[typing.Any]]:
        """Build a sub-command under this command by decorating a function.

        Parameters
        ----------
        name
            The sub-command's name.
        description
            The sub-command's description.
        arguments
            The argument set class used to parse the sub-command's arguments.
        auto_ack
            Whether calls should be acknowledged before arguments are parsed.
        public_ack
            Whether the automatic acknowledgment should be visible to everyone.

        Returns
        -------
        collections.abc.Callable[[CommandCallbackSig], SlashCommand]
            The decorator callback used to make the sub-command.
        """

        def decorator(callback: CommandCallbackSig, /) -> SlashCommand[typing.Any]:
            command = SlashCommand(
                callback, name, description, arguments=arguments, auto_ack=auto_ack, public_ack=public_ack
            )
            self.add_sub_command(command)
            return command

        return decorator

    def add_group(self, group: SlashGroup, /) -> Self:
        """Add a group of sub-commands to this command.

        Parameters
        ----------
        group
            The group to add.

        Returns
        -------
        Self
            The command to enable chained calls.

        Raises
        ------
        commandeer.errors.CommandRegistrationError
            If the group was refused, leaving this command unchanged.

            This happens when this command is a sub-command, already has
            sub-commands or already has the maximum amount of groups, or when
            the name is already in use.
        """
        if self._parent is not None:
            raise _refuse(group.name, "Sub-commands can't have groups")

        if self._sub_commands:
            raise _refuse(group.name, "A command can't have both groups and sub-commands")

        if len(self._groups) >= DISCORD_LIMIT:
            raise _refuse(group.name, f"A command can't have more than {DISCORD_LIMIT} groups")

        if group.name in self._groups:
            raise _refuse(group.name, "A group with this name already exists")

        if group.parent is not None:
            raise _refuse(group.name, "This group has already been added to another command")

        group._set_parent(self)
        self._groups[group.name] = group
        return self

    def make_group(self, name: str, description: str, /) -> SlashGroup:
        """Create a group of sub-commands under this command.

        Parameters
        ----------
        name
            The group's name.
        description
            The group's description.

        Returns
        -------
        SlashGroup
            The created group.

        Raises
        ------
        commandeer.errors.CommandRegistrationError
            If the group was refused.
        """
        group = SlashGroup(name, description)
        self.add_group(group)
        return group

    def validate(self) -> None:
        """Check this command and everything under it against the tree's structural rules.

        Raises
        ------
        commandeer.errors.InvalidCommandError
            If any node in this command's tree breaks a rule.
        """
        if not self._description:
            raise errors.InvalidCommandError(self._name, "Commands must have a description")

        if len(self._description) > 100:
            raise errors.InvalidCommandError(self._name, "Command descriptions can't be longer than 100 characters")

        if self._parent is not None:
            if self._guild is not None:
                raise errors.InvalidCommandError(self._name, "Sub-commands can't have a guild scope")

            if self.has_children:
                raise errors.InvalidCommandError(self._name, "Sub-commands can't have sub-commands or groups")

        if self._groups and self._sub_commands:
            raise errors.InvalidCommandError(self._name, "Commands can't have both groups and sub-commands")

        if len(self._groups) > DISCORD_LIMIT:
            raise errors.InvalidCommandError(self._name, f"Commands can't have more than {DISCORD_LIMIT} groups")

        if len(self._sub_commands) > DISCORD_LIMIT:
            raise errors.InvalidCommandError(
                self._name, f"Commands can't have more than {DISCORD_LIMIT} sub-commands"
            )

        if self._callback is not None and self.has_children:
            raise errors.InvalidCommandError(
                self._name, "Commands can't have both an action and sub-commands or groups"
            )

        if self._callback is None and not self.has_children:
            raise errors.InvalidCommandError(
                self._name, "Commands must have either an action or sub-commands or groups"
            )

        for group in self._groups.values():
            group.validate()

        for command in self._sub_commands.values():
            command.validate()

    def build_options(self) -> list[hikari.CommandOption]:
        """Build the slash command options for this command's arguments.

        Returns
        -------
        list[hikari.commands.CommandOption]
            The built options, with required options listed first.
        """
        if self._arguments is None:
            return []

        return _sort_options(
            argument.converter.build_option(argument.key, argument.description, is_required=argument.is_required)
            for argument in self._arguments.declarations().values()
        )

    def build(self) -> hikari.api.SlashCommandBuilder:
        """Get a builder object for this command.

        Returns
        -------
        hikari.api.special_endpoints.SlashCommandBuilder
            A builder object for this command.
        """
        builder = hikari.impl.SlashCommandBuilder(name=self._name, description=self._description)
        if self._groups:
            for group in self._groups.values():
                builder.add_option(group.build())

        elif self._sub_commands:
            for command in self._sub_commands.values():
                builder.add_option(
                    hikari.CommandOption(
                        type=hikari.OptionType.SUB_COMMAND,
                        name=command.name,
                        description=command.description,
                        is_required=False,
                        options=command.build_options(),
                    )
                )

        else:
            for option in self.build_options():
                builder.add_option(option)

        return builder


class SlashGroup(base.PartialCommand):
    """A named group of sub-commands under a root slash command."""

    __slots__ = ("_parent", "_sub_commands")

    def __init__(self, name: str, description: str, /) -> None:
        """Initialise a slash command group.

        Parameters
        ----------
        name
            The group's name.

            This must be 1-32 lowercase word characters or dashes.
        description
            The group's description.

        Raises
        ------
        ValueError
            If the group name isn't valid.
        """
        super().__init__(name, description)
        self._parent: typing.Optional[SlashCommand[typing.Any]] = None
        self._sub_commands: dict[str, SlashCommand[typing.Any]] = {}

    @property
    def extension(self) -> typing.Optional[extensions.Extension]:
        # <<inherited docstring from PartialCommand>>.
        return self._parent.extension if self._parent else self._extension

    @property
    def parent(self) -> typing.Optional[SlashCommand[typing.Any]]:
        """The root command this group is registered under."""
        return self._parent

    @property
    def sub_commands(self) -> collections.Mapping[str, SlashCommand[typing.Any]]:
        """Mapping of names to the sub-commands in this group."""
        return self._sub_commands.copy()

    def _set_parent(self, parent: typing.Optional[SlashCommand[typing.Any]], /) -> None:
        self._parent = parent

    def add_sub_command(self, command: SlashCommand[typing.Any], /) -> Self:
        """Add a sub-command to this group.

        Sub-commands which fail validation are logged and skipped.

        Parameters
        ----------
        command
            The sub-command to add.

        Returns
        -------
        Self
            The group to enable chained calls.

        Raises
        ------
        commandeer.errors.CommandRegistrationError
            If this group already has the maximum amount of sub-commands or
            the name is already in use, leaving this group unchanged.
        """
        if len(self._sub_commands) >= DISCORD_LIMIT:
            raise _refuse(command.name, f"A group can't have more than {DISCORD_LIMIT} sub-commands")

        if command.name in self._sub_commands:
            raise _refuse(command.name, "A sub-command with this name already exists in this group")

        if command.is_sub_command:
            raise _refuse(command.name, "This command has already been added to another node")

        _add_validated(self._sub_commands, command, self)
        return self

    def as_sub_command(
        self,
        name: str,
        description: str,
        /,
        *,
        arguments: typing.Optional[type[arguments_.Arguments]] = None,
        auto_ack: bool = True,
        public_ack: bool = False,
    ) -> collections.Callable[[CommandCallbackSig], SlashCommand[typing.Any]]:
        """Build a sub-command in this group by decorating a function.

        Parameters
        ----------
        name
            The sub-command's name.
        description
            The sub-command's description.
        arguments
            The argument set class used to parse the sub-command's arguments.
        auto_ack
            Whether calls should be acknowledged before arguments are parsed.
        public_ack
            Whether the automatic acknowledgment should be visible to everyone.

        Returns
        -------
        collections.abc.Callable[[CommandCallbackSig], SlashCommand]
            The decorator callback used to make the sub-command.
        """

        def decorator(callback: CommandCallbackSig, /) -> SlashCommand[typing.Any]:
            command = SlashCommand(
                callback, name, description, arguments=arguments, auto_ack=auto_ack, public_ack=public_ack
            )
            self.add_sub_command(command)
            return command

        return decorator

    def validate(self) -> None:
        """Check this group and its sub-commands against the tree's structural rules.

        Raises
        ------
        commandeer.errors.InvalidCommandError
            If the group or one of its sub-commands breaks a rule.
        """
        if not self._description:
            raise errors.InvalidCommandError(self._name, "Groups must have a description")

        if not self._sub_commands:
            raise errors.InvalidCommandError(self._name, "Groups must have at least one sub-command")

        if len(self._sub_commands) > DISCORD_LIMIT:
            raise errors.InvalidCommandError(
                self._name, f"Groups can't have more than {DISCORD_LIMIT} sub-commands"
            )

        for command in self._sub_commands.values():
            command.validate()

    def build(self) -> hikari.CommandOption:
        """Build the slash command option for this group.

        Returns
        -------
        hikari.commands.CommandOption
            The built option.
        """
        return hikari.CommandOption(
            type=hikari.OptionType.SUB_COMMAND_GROUP,
            name=self._name,
            description=self._description,
            is_required=False,
            options=[
                hikari.CommandOption(
                    type=hikari.OptionType.SUB_COMMAND,
                    name=command.name,
                    description=command.description,
                    is_required=False,
                    options=command.build_options(),
                )
                for command in self._sub_commands.values()
            ],
        )


def _add_validated(
    container: dict[str, SlashCommand[typing.Any]],
    command: SlashCommand[typing.Any],
    parent: typing.Union[SlashCommand[typing.Any], SlashGroup],
    /,
) -> None:
    command._set_parent(parent)
    try:
        command.validate()

    except errors.InvalidCommandError:
        command._set_parent(None)
        _LOGGER.error("Skipping invalid sub-command %r", command.name, exc_info=True)

    else:
        container[command.name] = command
