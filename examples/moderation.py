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
"""Example extension with a command tree, checks and declarative arguments."""
import datetime
import typing

import hikari

import commandeer

extension = commandeer.Extension("moderation")


class MuteArguments(commandeer.Arguments):
    # Message calls consume these in order, so `!mod user mute @someone 1h30m being loud` works.
    user = commandeer.Argument(commandeer.UserConverter(), "The user to mute")
    duration = commandeer.Argument(commandeer.DurationConverter(), "How long for", default=datetime.timedelta(hours=1))
    reason = commandeer.Argument(commandeer.CoalescingStringConverter(), "Why they're muted", default=None)


class PurgeArguments(commandeer.Arguments):
    count = commandeer.Argument(commandeer.IntConverter(min_value=1, max_value=100), "How many messages to delete")


# Checks on the root run before the checks and actions of everything under it.
mod = commandeer.with_guild_check(commandeer.SlashCommand(None, "mod", "Moderation commands"))
user_group = mod.make_group("user", "Moderate users")
channel_group = mod.make_group("channel", "Moderate channels")


@user_group.as_sub_command("mute", "Mute a user", arguments=MuteArguments)
async def mute(ctx: commandeer.Context[MuteArguments]) -> None:
    duration = commandeer.utilities.format_duration(ctx.arguments.duration)
    reason = ctx.arguments.reason or "No reason given"
    await ctx.respond(f"Muted {ctx.arguments.user} for {duration}: {reason}")


@user_group.as_sub_command("whois", "Get a user's ID", public_ack=True)
async def whois(ctx: commandeer.Context[typing.Any]) -> None:
    await ctx.respond(f"You are {ctx.author.id}")


@channel_group.as_sub_command("purge", "Delete recent messages", arguments=PurgeArguments)
async def purge(ctx: commandeer.Context[PurgeArguments], rest: hikari.api.RESTClient = commandeer.inject()) -> None:
    if ctx.arguments.count > 50:
        # CommandErrors are sent to the user as-is.
        raise commandeer.CommandError("Slow down, that's a lot of messages")

    messages = await rest.fetch_messages(ctx.channel_id).limit(ctx.arguments.count)
    await rest.delete_messages(ctx.channel_id, messages)
    await ctx.respond(f"Deleted {len(messages)} messages")


extension.add_command(mod)


@extension.with_command
@commandeer.as_slash_command("ping", "Check the bot is alive", auto_ack=False)
async def ping(ctx: commandeer.Context[typing.Any]) -> None:
    await ctx.respond("Pong!")


@commandeer.as_loader
def load(client: commandeer.Client) -> None:
    client.add_extension(extension)
