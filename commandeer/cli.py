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
"""Commandeer's standard command-line interface entry point."""
from __future__ import annotations

__all__: list[str] = ["main"]

import argparse
import pathlib
import typing

import hikari

from ._about import __version__
from . import clients
from . import config as config_
from . import extensions
from . import feedback
from . import reporting

if typing.TYPE_CHECKING:
    from collections import abc as collections

_parser = argparse.ArgumentParser("Commandeer", description="Commandeer command-line interface entry point.")
_parser.add_argument(
    "-v", "--version", action="version", version=f"Commandeer: {__version__}; hikari {hikari.__version__}"
)
_parser.add_argument(
    "-l",
    "--log-level",
    choices=["debug", "info", "warning", "error", "critical"],
    default=None,
    help="Logging level.",
)
_parser.add_argument("-c", "--config", help="Path to a JSON configuration file.", default=None, type=pathlib.Path)
_parser.add_argument(
    "-m", "--modules", nargs="*", help="Modules to load extensions from.", default=(), metavar="MODULE"
)
_parser.add_argument("-p", "--prefix", action="append", help="Prefix for message commands.", default=[])
_parser.add_argument(
    "--declare-commands", action="store_true", help="Declare slash commands globally when the bot starts."
)
_parser.add_argument(
    "--intents",
    help="Intents to declare for the gateway bot.",
    default=hikari.Intents.ALL_UNPRIVILEGED,
    type=lambda v: hikari.Intents(int(v)),
)
_parser.add_argument("token", nargs="?", help="Token to use for authentication.", default=None)


def _build_config(args: argparse.Namespace, /) -> config_.Config:
    if args.config:
        config = config_.load_config(args.config)
        if args.token:
            config["token"] = args.token

        if args.log_level:
            config["log_level"] = args.log_level.upper()

        config["modules"] = [*config["modules"], *args.modules]
        config["prefixes"] = [*config["prefixes"], *args.prefix]
        config["declare_commands"] = config["declare_commands"] or args.declare_commands
        return config

    if not args.token:
        _parser.error("a token or config file must be provided")

    return config_.from_raw(
        {
            "token": args.token,
            "prefixes": args.prefix,
            "declare_commands": args.declare_commands,
            "modules": list(args.modules),
            "log_level": args.log_level or "info",
        }
    )


def build_bot(
    config: config_.Config, /, *, intents: hikari.Intents = hikari.Intents.ALL_UNPRIVILEGED
) -> tuple[hikari.GatewayBot, clients.Client]:
    """Build a gateway bot and Commandeer client from a configuration.

    Parameters
    ----------
    config
        The configuration to build from.
    intents
        Intents to declare for the gateway bot.

    Returns
    -------
    tuple[hikari.impl.GatewayBot, commandeer.clients.Client]
        The bot and the client bound to it.
    """
    bot = hikari.GatewayBot(config["token"], logs=config["log_level"], intents=intents)
    declare_commands: typing.Union[bool, collections.Sequence[int]] = config["declare_commands"]
    reporter = reporting.LoggingErrorReporter() if config["report_errors"] else None
    client = clients.Client.from_gateway_bot(
        bot, reporter=reporter, prefixes=config["prefixes"], declare_commands=declare_commands
    )
    if reporter:
        client.add_extension(_feedback_extension(reporter))

    client.load_modules(*config["modules"])
    return bot, client


def _feedback_extension(reporter: reporting.AbstractErrorReporter, /) -> extensions.Extension:
    return extensions.Extension("feedback").add_command(feedback.make_feedback_command(reporter))


def main() -> None:
    """Standard CLI entry-point for Commandeer bots."""
    args = _parser.parse_args()
    bot, _ = build_bot(_build_config(args), intents=args.intents)
    bot.run()
