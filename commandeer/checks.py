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
"""Collection of common checks and the decorators used to add them to commands.

Checks are run in order through dependency injection and a failed check
silently stops the command from running.
"""
from __future__ import annotations

__all__: list[str] = [
    "DmCheck",
    "GuildCheck",
    "all_checks",
    "any_checks",
    "with_all_checks",
    "with_any_checks",
    "with_check",
    "with_dm_check",
    "with_guild_check",
]

import typing
from collections import abc as collections

from . import context as context_
from . import errors

if typing.TYPE_CHECKING:
    from .commands import base

    _CommandT = typing.TypeVar("_CommandT", bound=base.PartialCommand)


class DmCheck:
    """Standard DM check callback registered by [with_dm_check][commandeer.checks.with_dm_check].

    This check will only pass if the current channel is a DM channel.
    """

    __slots__ = ("__weakref__",)

    def __call__(self, ctx: context_.Context[typing.Any], /) -> bool:
        return ctx.is_private


class GuildCheck:
    """Standard guild check callback registered by [with_guild_check][commandeer.checks.with_guild_check].

    This check will only pass if the current channel is in a guild.
    """

    __slots__ = ("__weakref__",)

    def __call__(self, ctx: context_.Context[typing.Any], /) -> bool:
        return not ctx.is_private


def with_dm_check(command: _CommandT, /) -> _CommandT:
    """Only let a command run in DMs.

    Parameters
    ----------
    command
        The command to add this check to.

    Returns
    -------
    _CommandT
        The command this check was added to.
    """
    return command.add_check(DmCheck())


def with_guild_check(command: _CommandT, /) -> _CommandT:
    """Only let a command run in guild channels.

    Parameters
    ----------
    command
        The command to add this check to.

    Returns
    -------
    _CommandT
        The command this check was added to.
    """
    return command.add_check(GuildCheck())


def with_check(check: base.CheckSig, /) -> collections.Callable[[_CommandT], _CommandT]:
    """Add a generic check to a command.

    Parameters
    ----------
    check
        The check to add to this command.

    Returns
    -------
    collections.abc.Callable[[PartialCommand], PartialCommand]
        A command decorator callback which adds the check.
    """
    return lambda command: command.add_check(check)


class _AllChecks:
    __slots__ = ("_checks", "__weakref__")

    def __init__(self, checks: list[base.CheckSig]) -> None:
        self._checks = checks

    async def __call__(self, ctx: context_.Context[typing.Any], /) -> bool:
        for check in self._checks:
            if not await ctx.call_with_async_di(check, ctx):
                return False

        return True


def all_checks(
    check: base.CheckSig, /, *checks: base.CheckSig
) -> collections.Callable[[context_.Context[typing.Any]], collections.Coroutine[typing.Any, typing.Any, bool]]:
    """Combine multiple check callbacks into a check which will only pass if all the callbacks pass.

    The callbacks are run in the order they were supplied in and stop at the
    first which fails.

    Parameters
    ----------
    check
        The first check callback to combine.
    *checks
        Additional check callbacks to combine.

    Returns
    -------
    collections.abc.Callable[[commandeer.context.Context], collections.abc.Coroutine[typing.Any, typing.Any, bool]]
        A check which will pass if all of the provided check callbacks pass.
    """
    return _AllChecks([check, *checks])


def with_all_checks(check: base.CheckSig, /, *checks: base.CheckSig) -> collections.Callable[[_CommandT], _CommandT]:
    """Add a check which will pass if all the provided checks pass through a decorator call.

    Parameters
    ----------
    check
        The first check callback to combine.
    *checks
        Additional check callbacks to combine.

    Returns
    -------
    collections.abc.Callable[[PartialCommand], PartialCommand]
        A command decorator callback which adds the combined check.
    """
    return lambda command: command.add_check(all_checks(check, *checks))


class _AnyChecks:
    __slots__ = ("_checks", "_suppress", "__weakref__")

    def __init__(self, checks: list[base.CheckSig], suppress: tuple[type[Exception], ...]) -> None:
        self._checks = checks
        self._suppress = suppress

    async def __call__(self, ctx: context_.Context[typing.Any], /) -> bool:
        for check in self._checks:
            try:
                if await ctx.call_with_async_di(check, ctx):
                    return True

            except errors.FailedCheck:
                pass

            except self._suppress:
                pass

        return False


def any_checks(
    check: base.CheckSig,
    /,
    *checks: base.CheckSig,
    suppress: tuple[type[Exception], ...] = (errors.CommandError,),
) -> collections.Callable[[context_.Context[typing.Any]], collections.Coroutine[typing.Any, typing.Any, bool]]:
    """Combine multiple checks into a check which'll pass if any of the callbacks pass.

    The callbacks are run in the order they were supplied in and stop at the
    first which passes.

    Parameters
    ----------
    check
        The first check callback to combine.
    *checks
        Additional check callbacks to combine.
    suppress
        Tuple of the exceptions to suppress when a check fails.

    Returns
    -------
    collections.abc.Callable[[commandeer.context.Context], collections.abc.Coroutine[typing.Any, typing.Any, bool]]
        A check which will pass if any of the provided check callbacks pass.
    """
    return _AnyChecks([check, *checks], suppress)


def with_any_checks(
    check: base.CheckSig,
    /,
    *checks: base.CheckSig,
    suppress: tuple[type[Exception], ...] = (errors.CommandError,),
) -> collections.Callable[[_CommandT], _CommandT]:
    """Add a check which'll pass if any of the provided checks pass through a decorator call.

    Parameters
    ----------
    check
        The first check callback to combine.
    *checks
        Additional check callbacks to combine.
    suppress
        Tuple of the exceptions to suppress when a check fails.

    Returns
    -------
    collections.abc.Callable[[PartialCommand], PartialCommand]
        A command decorator callback which adds the combined check.
    """
    return lambda command: command.add_check(any_checks(check, *checks, suppress=suppress))
