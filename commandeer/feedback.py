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
"""The `/feedback` command used to attach user feedback to error reports."""
from __future__ import annotations

__all__: list[str] = ["FeedbackArguments", "make_feedback_command"]

import typing

from . import arguments
from . import context as context_
from . import conversion
from . import errors
from .commands import slash

if typing.TYPE_CHECKING:
    from . import reporting


class FeedbackArguments(arguments.Arguments):
    """Arguments taken by the `/feedback` command."""

    event_id = arguments.Argument(conversion.StringConverter(), "The error ID you were given", name="id")
    message = arguments.Argument(conversion.CoalescingStringConverter(), "What happened")


def make_feedback_command(reporter: reporting.AbstractErrorReporter, /) -> slash.SlashCommand[FeedbackArguments]:
    """Make a `/feedback <id> <message>` command which forwards feedback to a reporter.

    Parameters
    ----------
    reporter
        The reporter to forward feedback to.

    Returns
    -------
    commandeer.commands.SlashCommand
        The feedback command.

    Raises
    ------
    ValueError
        If the reporter doesn't accept feedback.
    """
    if not reporter.accepts_feedback:
        raise ValueError("This error reporter doesn't accept feedback")

    async def feedback(ctx: context_.Context[FeedbackArguments]) -> None:
        event_id = ctx.arguments.event_id.strip("`")
        if not await reporter.submit_feedback(event_id, user=ctx.author, comments=ctx.arguments.message):
            raise errors.CommandError(f"Couldn't find an error with the ID `{event_id}`")

        await ctx.respond("Thanks, your feedback has been submitted.")

    return slash.SlashCommand(
        feedback, "feedback", "Tell us what happened when a command failed", arguments=FeedbackArguments
    )
