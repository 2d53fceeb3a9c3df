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
"""A command framework for Hikari with declarative arguments and command trees.

Examples
--------
A Commandeer client can be quickly initialised from a Hikari gateway bot
through [Client.from_gateway_bot][commandeer.clients.Client.from_gateway_bot],
this enables both slash command and prefixed message command execution:

```py
bot = hikari.GatewayBot("BOT_TOKEN")

# Unless event_managed=False is passed here then this client will be managed
# based on gateway startup and stopping events.
client = commandeer.Client.from_gateway_bot(bot, prefixes=["!"], declare_commands=True)

extension = commandeer.Extension("greetings")
client.add_extension(extension)


class HelloArguments(commandeer.Arguments):
    user = commandeer.Argument(commandeer.UserConverter(), "Who to greet", default=None)


@extension.with_command
@commandeer.as_slash_command("hello", "Say hello", arguments=HelloArguments)
async def hello(ctx: commandeer.Context[HelloArguments]) -> None:
    user = ctx.arguments.user or ctx.author
    await ctx.respond(f"Hello, {user}!")
```
"""
from __future__ import annotations as _

__all__: list[str] = [
    "Argument",
    "ArgumentParser",
    "Arguments",
    "BaseConverter",
    "BooleanConverter",
    "BotState",
    "Breadcrumb",
    "ChoiceConverter",
    "Client",
    "CoalescingStringConverter",
    "CommandError",
    "CommandRegistrationError",
    "CommandeerError",
    "Context",
    "ConversionError",
    "Dispatcher",
    "DurationConverter",
    "Extension",
    "FailedCheck",
    "IntConverter",
    "InvalidCommandError",
    "LoggingErrorReporter",
    "MessageContext",
    "MultiConverter",
    "NotEnoughArgumentsError",
    "NumberConverter",
    "ParserError",
    "ResolutionError",
    "SlashCommand",
    "SlashContext",
    "SlashGroup",
    "SnowflakeConverter",
    "StringConverter",
    "UNDEFINED",
    "UserConverter",
    "arguments",
    "as_loader",
    "as_slash_command",
    "checks",
    "clients",
    "commands",
    "context",
    "conversion",
    "dispatch",
    "errors",
    "extensions",
    "feedback",
    "inject",
    "parsing",
    "reporting",
    "utilities",
    "with_all_checks",
    "with_any_checks",
    "with_check",
    "with_dm_check",
    "with_guild_check",
]

from alluka import inject

from . import arguments
from . import checks
from . import clients
from . import commands
from . import context
from . import conversion
from . import dispatch
from . import errors
from . import extensions
from . import feedback
from . import parsing
from . import reporting
from . import utilities
from .arguments import UNDEFINED
from .arguments import Argument
from .arguments import Arguments
from .checks import with_all_checks
from .checks import with_any_checks
from .checks import with_check
from .checks import with_dm_check
from .checks import with_guild_check
from .clients import BotState
from .clients import Client
from .clients import as_loader
from .commands import SlashCommand
from .commands import SlashGroup
from .commands import as_slash_command
from .context import Context
from .context import MessageContext
from .context import SlashContext
from .conversion import BaseConverter
from .conversion import BooleanConverter
from .conversion import ChoiceConverter
from .conversion import CoalescingStringConverter
from .conversion import DurationConverter
from .conversion import IntConverter
from .conversion import MultiConverter
from .conversion import NumberConverter
from .conversion import SnowflakeConverter
from .conversion import StringConverter
from .conversion import UserConverter
from .dispatch import Dispatcher
from .errors import CommandeerError
from .errors import CommandError
from .errors import CommandRegistrationError
from .errors import ConversionError
from .errors import FailedCheck
from .errors import InvalidCommandError
from .errors import NotEnoughArgumentsError
from .errors import ParserError
from .errors import ResolutionError
from .extensions import Extension
from .parsing import ArgumentParser
from .reporting import Breadcrumb
from .reporting import LoggingErrorReporter
