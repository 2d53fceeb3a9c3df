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
"""Internal utility functions used within Commandeer."""
from __future__ import annotations

__all__: list[str] = ["SUB_COMMAND_OPTION_TYPES", "flatten_options", "gather_checks"]

import typing
from collections import abc as collections

import hikari

from . import errors

if typing.TYPE_CHECKING:
    from . import context as context_

_OptionT = typing.TypeVar("_OptionT", bound=hikari.CommandInteractionOption)


SUB_COMMAND_OPTION_TYPES: typing.Final[frozenset[hikari.OptionType]] = frozenset(
    [hikari.OptionType.SUB_COMMAND, hikari.OptionType.SUB_COMMAND_GROUP]
)
"""Set of the option types which represent a sub-command or sub-command group."""


def flatten_options(
    name: str, options: typing.Optional[collections.Sequence[_OptionT]], /
) -> tuple[list[str], collections.Sequence[_OptionT]]:
    """Flatten the options of a slash command interaction.

    Parameters
    ----------
    name
        Name of the top-level command which was triggered.
    options
        The interaction's options.

    Returns
    -------
    tuple[list[str], collections.abc.Sequence[_OptionT]]
        The full path of command names which were triggered and a sequence of
        the actual command options.
    """
    path = [name]
    while options and (first_option := options[0]).type in SUB_COMMAND_OPTION_TYPES:
        path.append(first_option.name)
        options = typing.cast("collections.Sequence[_OptionT]", first_option.options)

    return path, options or ()


async def gather_checks(
    ctx: context_.Context[typing.Any],
    checks: collections.Iterable[collections.Callable[..., typing.Any]],
    /,
) -> bool:
    """Sequentially run checks through dependency injection.

    Parameters
    ----------
    ctx
        The context to run the checks with.
    checks
        The checks to run.

    Returns
    -------
    bool
        Whether all the checks passed.
        This stops at the first check which returns [False][] or raises
        [FailedCheck][commandeer.errors.FailedCheck].
    """
    try:
        for check in checks:
            if not await ctx.call_with_async_di(check, ctx):
                return False

    except errors.FailedCheck:
        return False

    return True

