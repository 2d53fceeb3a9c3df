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
"""The command dispatcher which runs a command call from resolution to response."""
from __future__ import annotations

__all__: list[str] = ["Dispatcher", "GENERIC_ERROR_MESSAGE", "FEEDBACK_ERROR_MESSAGE", "resolve"]

import logging
import typing

from . import _internal
from . import errors
from . import parsing
from . import reporting as reporting_

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from . import context as context_
    from .commands import slash

_LOGGER = logging.getLogger("hikari.commandeer.dispatch")

GENERIC_ERROR_MESSAGE: typing.Final[str] = (
    "Unfortunately, an error occurred while running this command. Please let a staff member know."
)
"""Message sent when a command fails and the error can't be given feedback."""

FEEDBACK_ERROR_MESSAGE: typing.Final[str] = (
    "Unfortunately, an error occurred while running this command. "
    "It has been reported with the ID `{event_id}`.\n\n"
    "If you'd like to tell us what happened, use `/feedback {event_id} <message>`."
)
"""Message sent when a command fails and the error was reported to a sink which accepts feedback."""


def resolve(
    root: slash.SlashCommand[typing.Any], path: collections.Sequence[str], /, *, strict: bool
) -> tuple[slash.SlashCommand[typing.Any], int]:
    """Find the command node a command path targets.

    Parameters
    ----------
    root
        The root command of the tree to search.
    path
        The command path, starting with the root command's name.
    strict
        Whether every name in the path must match a node.

        When [False][] the names after the deepest match are left to be
        parsed as arguments.

    Returns
    -------
    tuple[commandeer.commands.SlashCommand, int]
        The resolved command and how many names from the path were used to
        resolve it.

    Raises
    ------
    commandeer.errors.ResolutionError
        If the path doesn't lead to a command with an action.
    """
    if not path or path[0] != root.name:
        raise errors.ResolutionError(f"Command path doesn't start with `{root.name}`", path)

    if root.groups:
        if len(path) > 1 and (group := root.groups.get(path[1])):
            if len(path) > 2 and (command := group.sub_commands.get(path[2])):
                return _resolved(command, 3, path, strict=strict)

            raise errors.ResolutionError(f"No sub-command found in group `{group.name}`", path)

    elif root.sub_commands:
        if len(path) > 1 and (command := root.sub_commands.get(path[1])):
            return _resolved(command, 2, path, strict=strict)

    return _resolved(root, 1, path, strict=strict)


def _resolved(
    command: slash.SlashCommand[typing.Any], consumed: int, path: collections.Sequence[str], /, *, strict: bool
) -> tuple[slash.SlashCommand[typing.Any], int]:
    if strict and len(path) > consumed:
        raise errors.ResolutionError(f"Unknown sub-command `{path[consumed]}`", path)

    if command.callback is None:
        raise errors.ResolutionError(f"Command `{command.name}` has no action", path)

    return command, consumed


def _qualified_name(command: slash.SlashCommand[typing.Any], /) -> str:
    return " ".join(node.name for node in command.iter_lineage())


class Dispatcher:
    """Standard command dispatcher.

    This resolves the called node, runs its checks, acknowledges the call,
    parses its arguments and runs its action.
    """

    __slots__ = ("_parser", "_reporter")

    def __init__(
        self,
        *,
        parser: typing.Optional[parsing.ArgumentParser] = None,
        reporter: typing.Optional[reporting_.AbstractErrorReporter] = None,
    ) -> None:
        """Initialise a dispatcher.

        Parameters
        ----------
        parser
            The parser to use for arguments.

            Defaults to [ArgumentParser][commandeer.parsing.ArgumentParser].
        reporter
            The sink unexpected errors are reported to.
        """
        self._parser = parser or parsing.ArgumentParser()
        self._reporter = reporter

    @property
    def parser(self) -> parsing.ArgumentParser:
        """The parser used for arguments."""
        return self._parser

    @property
    def reporter(self) -> typing.Optional[reporting_.AbstractErrorReporter]:
        """The sink unexpected errors are reported to."""
        return self._reporter

    def set_reporter(self, reporter: typing.Optional[reporting_.AbstractErrorReporter], /) -> None:
        """Set the sink unexpected errors are reported to."""
        self._reporter = reporter

    async def run_checks(self, command: slash.SlashCommand[typing.Any], ctx: context_.Context[typing.Any], /) -> bool:
        """Run the checks for a command and every node above it.

        Checks run from the root node down to the command, one at a time.

        Parameters
        ----------
        command
            The command to run the checks for.
        ctx
            The context of the call.

        Returns
        -------
        bool
            Whether every check passed.
        """
        checks = (check for node in command.iter_lineage() for check in node.checks)
        return await _internal.gather_checks(ctx, checks)

    async def call(self, root: slash.SlashCommand[typing.Any], ctx: context_.Context[typing.Any], /) -> None:
        """Run a command call against a command tree.

        Parameters
        ----------
        root
            The root command which was called.
        ctx
            The context of the call.

        Raises
        ------
        commandeer.errors.ResolutionError
            If the context's command path doesn't lead to a command in this
            tree.
        """
        command, consumed = resolve(root, ctx.command_path, strict=ctx.options is not None)
        ctx.set_command(command, consumed=consumed)

        try:
            if not await self.run_checks(command, ctx):
                _LOGGER.debug("Checks failed for %r", command)
                return

            if command.auto_ack:
                await ctx.acknowledge(public=command.public_ack)

            ctx.add_breadcrumb(
                f"Command called: {_qualified_name(command)}",
                data={"arguments": " ".join(map(str, ctx.tokens)) if ctx.options is None else dict(ctx.options)},
            )

            if command.arguments is not None:
                try:
                    ctx.set_arguments(await self._parser.parse(command.arguments, ctx))

                except errors.ParserError as exc:
                    await self._send_safely(ctx, exc.message, public=command.public_ack)
                    return

            await ctx.call_with_async_di(typing.cast("slash.CommandCallbackSig", command.callback), ctx)

        except errors.CommandError as exc:
            await self._send_safely(ctx, exc.content, public=command.public_ack)

        except Exception as exc:
            _LOGGER.error("Error running command %r", command, exc_info=exc)
            await self._handle_fault(command, ctx, exc)

    async def _handle_fault(
        self, command: slash.SlashCommand[typing.Any], ctx: context_.Context[typing.Any], error: Exception, /
    ) -> None:
        message = GENERIC_ERROR_MESSAGE
        if self._reporter is not None:
            tags = {
                "command": _qualified_name(command),
                "extension": command.extension.name if command.extension else "",
                "private": str(ctx.is_private).lower(),
            }
            try:
                event_id = await self._reporter.report(
                    error, tags=tags, breadcrumbs=ctx.breadcrumbs, user=ctx.author
                )

            except Exception:
                _LOGGER.exception("Failed to report error for %r", command)

            else:
                _LOGGER.debug("Reported error for %r as %s", command, event_id)
                if self._reporter.accepts_feedback:
                    message = FEEDBACK_ERROR_MESSAGE.format(event_id=event_id)

        await self._send_safely(ctx, message, public=command.public_ack)

    async def _send_safely(self, ctx: context_.Context[typing.Any], content: str, /, *, public: bool) -> None:
        try:
            await ctx.respond(content, public=public)

        except Exception:
            _LOGGER.exception("Failed to send error response")
