# -*- coding: utf-8 -*-
# cython: language_level=3
# Commandeer Examples - A collection of examples for Commandeer.
# Written in 2022 by Faster Speeding luke@lmbyrne.dev
#
# To the extent possible under law, the author(s) have dedicated all copyright
# and related and neighboring rights to this software to the public domain worldwide.
# This software is distributed without any warranty.
#
# You should have received a copy of the CC0 Public Domain Dedication along with this software.
# If not, see <https://creativecommons.org/publicdomain/zero/1.0/>.
"""Example of running a bot with a Commandeer client.

This is roughly equivalent to `python -m commandeer -p ! -m examples.moderation TOKEN`.
"""
import os

import hikari

import commandeer


def run() -> None:
    bot = hikari.GatewayBot(os.environ["BOT_TOKEN"])
    reporter = commandeer.LoggingErrorReporter()
    feedback = commandeer.Extension("feedback").add_command(commandeer.feedback.make_feedback_command(reporter))
    # Unscoped commands are declared in this guild when the client starts.
    (
        commandeer.Client.from_gateway_bot(bot, prefixes=["!"], declare_commands=[int(os.environ["GUILD_ID"])])
        .set_reporter(reporter)
        .add_extension(feedback)
        .load_modules("examples.moderation")
    )
    bot.run()


if __name__ == "__main__":
    run()
