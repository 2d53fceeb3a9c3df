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
"""The standard client which connects Commandeer's command trees to Hikari."""
from __future__ import annotations

__all__: list[str] = ["BotState", "Client", "as_loader"]

import collections as collections_
import functools
import importlib
import logging
import typing
from collections import abc as collections

import alluka
import hikari

from . import context
from . import dispatch
from . import errors
from . import parsing

if typing.TYPE_CHECKING:
    import types

    from typing_extensions import Self

    from . import extensions as extensions_
    from . import reporting
    from .commands import slash

    _T = typing.TypeVar("_T")
    _DefaultT = typing.TypeVar("_DefaultT")

_LOGGER = logging.getLogger("hikari.commandeer.clients")


class _LoaderDescriptor:  # Slots mess with functools.update_wrapper
    def __init__(self, callback: collections.Callable[[Client], None], /) -> None:
        self._callback = callback
        functools.update_wrapper(self, callback)

    def __call__(self, *args: typing.Any, **kwargs: typing.Any) -> None:
        self._callback(*args, **kwargs)

    def load(self, client: Client, /) -> None:
        if not isinstance(client, Client):
            raise ValueError("This loader requires instances of the standard Client implementation")

        self._callback(client)


def as_loader(callback: collections.Callable[[Client], None], /) -> collections.Callable[[Client], None]:
    """Mark a callback as being used to load extensions from a module.

    !!! note
        This is only necessary if you wish to use [Client.load_modules][commandeer.clients.Client.load_modules].

    Parameters
    ----------
    callback
        The callback used to load extensions from a module.

        This should take one argument of type [Client][commandeer.clients.Client],
        return nothing and will be expected to add extensions to the client.

    Returns
    -------
    collections.abc.Callable[[Client], None]
        The decorated load callback.
    """
    return _LoaderDescriptor(callback)


class BotState:
    """Read-only view of the bot's state.

    This is passed to every converter call.
    """

    __slots__ = ("_client",)

    def __init__(self, client: Client, /) -> None:
        self._client = client

    @property
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        """The Hikari cache, if the bot has one."""
        return self._client.cache

    @property
    def commands(self) -> collections.Mapping[str, slash.SlashCommand[typing.Any]]:
        """Mapping of names to the bot's root commands."""
        return self._client.commands

    @property
    def extensions(self) -> collections.Mapping[str, extensions_.Extension]:
        """Mapping of names to the bot's loaded extensions."""
        return self._client.extensions

    @property
    def rest(self) -> hikari.api.RESTClient:
        """The Hikari REST client."""
        return self._client.rest

    @typing.overload
    def get_type_dependency(self, type_: type[_T], /) -> typing.Optional[_T]:
        ...

    @typing.overload
    def get_type_dependency(self, type_: type[_T], /, *, default: _DefaultT) -> typing.Union[_T, _DefaultT]:
        ...

    def get_type_dependency(self, type_: type[_T], /, *, default: typing.Any = None) -> typing.Any:
        """Get a type dependency registered with the bot's injector.

        Parameters
        ----------
        type_
            The type of the dependency.
        default
            The value to return if the dependency isn't registered.

        Returns
        -------
        _T | _DefaultT
            The dependency.
        """
        return self._client.injector.get_type_dependency(type_, default=default)


class Client:
    """The standard Commandeer client.

    This dispatches slash command interactions and prefixed message commands
    to the root commands of the extensions added to it.
    """

    __slots__ = (
        "_cache",
        "_declare_commands",
        "_dispatcher",
        "_events",
        "_extensions",
        "_injector",
        "_is_alive",
        "_modules",
        "_prefixes",
        "_rest",
        "_state",
    )

    def __init__(
        self,
        rest: hikari.api.RESTClient,
        *,
        cache: typing.Optional[hikari.api.Cache] = None,
        events: typing.Optional[hikari.api.EventManager] = None,
        event_managed: bool = False,
        injector: typing.Optional[alluka.abc.Client] = None,
        reporter: typing.Optional[reporting.AbstractErrorReporter] = None,
        prefixes: collections.Iterable[str] = (),
        declare_commands: typing.Union[hikari.SnowflakeishSequence[hikari.PartialGuild], bool] = False,
    ) -> None:
        """Initialise a Commandeer client.

        !!! note
            For a quicker way to initiate this client around a standard bot
            aware client, see [Client.from_gateway_bot][commandeer.clients.Client.from_gateway_bot].

        Parameters
        ----------
        rest
            The Hikari REST client this will use.
        cache
            The Hikari cache client this will use if applicable.
        events
            The Hikari event manager client this will use if applicable.

            This is necessary for commands to be dispatched automatically.
        event_managed
            Whether or not this client is managed by the event manager.

            An event managed client will be automatically started and closed
            based on Hikari's lifetime events.
        injector
            The alluka client this should use for dependency injection.

            If not provided then the client will initialise its own DI client.
        reporter
            The sink unexpected command errors are reported to.
        prefixes
            The prefixes message commands are triggered by.
        declare_commands
            Whether to declare the slash commands when the client opens.

            If a sequence of guilds is passed then commands without a guild
            scope will be declared in those guilds rather than globally.

        Raises
        ------
        ValueError
            If `event_managed` is [True][] when `events` is [None][].
        """
        if not events:
            _LOGGER.warning(
                "Client initiated without an event manager, automatic command dispatch will be unavailable."
            )

        self._cache = cache
        self._declare_commands = declare_commands
        self._dispatcher = dispatch.Dispatcher(reporter=reporter)
        self._events = events
        self._extensions: dict[str, extensions_.Extension] = {}
        self._injector = injector or alluka.Client()
        self._is_alive = False
        self._modules: dict[str, types.ModuleType] = {}
        self._prefixes = list(prefixes)
        self._rest = rest
        self._state = BotState(self)

        (
            self._injector.set_type_dependency(Client, self)
            .set_type_dependency(BotState, self._state)
            .set_type_dependency(hikari.api.RESTClient, rest)
        )
        if cache:
            self._injector.set_type_dependency(hikari.api.Cache, cache)

        if event_managed:
            if not events:
                raise ValueError("Client cannot be event managed without an event manager")

            events.subscribe(hikari.StartingEvent, self._on_starting)
            events.subscribe(hikari.StoppingEvent, self._on_stopping)

    @classmethod
    def from_gateway_bot(
        cls,
        bot: hikari.GatewayBotAware,
        /,
        *,
        event_managed: bool = True,
        injector: typing.Optional[alluka.abc.Client] = None,
        reporter: typing.Optional[reporting.AbstractErrorReporter] = None,
        prefixes: collections.Iterable[str] = (),
        declare_commands: typing.Union[hikari.SnowflakeishSequence[hikari.PartialGuild], bool] = False,
    ) -> Client:
        """Build a [Client][commandeer.clients.Client] from a gateway bot.

        Parameters
        ----------
        bot
            The bot client to build from.

            This will be used to infer the relevant Hikari clients to use.
        event_managed
            Whether or not this client is managed by the event manager.
        injector
            The alluka client this should use for dependency injection.
        reporter
            The sink unexpected command errors are reported to.
        prefixes
            The prefixes message commands are triggered by.
        declare_commands
            Whether to declare the slash commands when the client opens.

        Returns
        -------
        Client
            The created client.
        """
        return cls(
            rest=bot.rest,
            cache=bot.cache,
            events=bot.event_manager,
            event_managed=event_managed,
            injector=injector,
            reporter=reporter,
            prefixes=prefixes,
            declare_commands=declare_commands,
        )

    @property
    def cache(self) -> typing.Optional[hikari.api.Cache]:
        """Hikari cache instance this client was initialised with."""
        return self._cache

    @property
    def commands(self) -> collections.Mapping[str, slash.SlashCommand[typing.Any]]:
        """Mapping of names to the root commands of every loaded extension."""
        return {
            name: command for extension in self._extensions.values() for name, command in extension.commands.items()
        }

    @property
    def dispatcher(self) -> dispatch.Dispatcher:
        """The dispatcher used to run command calls."""
        return self._dispatcher

    @property
    def events(self) -> typing.Optional[hikari.api.EventManager]:
        """Object of the event manager this client was initialised with."""
        return self._events

    @property
    def extensions(self) -> collections.Mapping[str, extensions_.Extension]:
        """Mapping of names to the extensions loaded into this client."""
        return self._extensions.copy()

    @property
    def injector(self) -> alluka.abc.Client:
        """The alluka client used for dependency injection."""
        return self._injector

    @property
    def is_alive(self) -> bool:
        """Whether this client is alive."""
        return self._is_alive

    @property
    def prefixes(self) -> collections.Sequence[str]:
        """The prefixes message commands are triggered by."""
        return self._prefixes.copy()

    @property
    def reporter(self) -> typing.Optional[reporting.AbstractErrorReporter]:
        """The sink unexpected command errors are reported to."""
        return self._dispatcher.reporter

    @property
    def rest(self) -> hikari.api.RESTClient:
        """Object of the Hikari REST client this client was initialised with."""
        return self._rest

    @property
    def state(self) -> BotState:
        """Read-only view of the bot's state."""
        return self._state

    async def _on_starting(self, _: hikari.StartingEvent, /) -> None:
        await self.open()

    async def _on_stopping(self, _: hikari.StoppingEvent, /) -> None:
        await self.close()

    def add_prefix(self, prefixes: typing.Union[collections.Iterable[str], str], /) -> Self:
        """Add a prefix used to filter message command calls.

        Parameters
        ----------
        prefixes
            Either a single string or an iterable of strings to be used as
            prefixes.

        Returns
        -------
        Self
            The client instance to enable chained calls.
        """
        if isinstance(prefixes, str):
            prefixes = (prefixes,)

        for prefix in prefixes:
            if prefix not in self._prefixes:
                self._prefixes.append(prefix)

        return self

    def set_reporter(self, reporter: typing.Optional[reporting.AbstractErrorReporter], /) -> Self:
        """Set the sink unexpected command errors are reported to.

        Parameters
        ----------
        reporter
            The reporter to set.

            Passing [None][] disables error reporting.

        Returns
        -------
        Self
            The client instance to enable chained calls.
        """
        self._dispatcher.set_reporter(reporter)
        if reporter:
            self._injector.set_type_dependency(type(reporter), reporter)

        return self

    def add_extension(self, extension: extensions_.Extension, /) -> Self:
        """Add an extension to this client.

        Parameters
        ----------
        extension
            The extension to add.

        Returns
        -------
        Self
            The client instance to enable chained calls.

        Raises
        ------
        ValueError
            If an extension with the same name is already loaded or one of
            its commands clashes with an already loaded command.
        """
        if extension.name in self._extensions:
            raise ValueError(f"An extension named {extension.name!r} is already loaded")

        commands = self.commands
        if clashes := [name for name in extension.commands if name in commands]:
            raise ValueError(f"Extension {extension.name!r} has commands which are already loaded: {clashes}")

        extension.bind_client(self)
        self._extensions[extension.name] = extension
        _LOGGER.debug("Added extension %r", extension.name)
        return self

    def remove_extension(self, name: str, /) -> Self:
        """Remove an extension from this client.

        Raises
        ------
        KeyError
            If no extension with this name is loaded.
        """
        self._extensions.pop(name).bind_client(None)
        return self

    def get_command(self, name: str, /) -> typing.Optional[slash.SlashCommand[typing.Any]]:
        """Get a root command by its name."""
        for extension in self._extensions.values():
            if command := extension.commands.get(name):
                return command

        return None

    def load_modules(self, *modules: str) -> Self:
        """Load extensions from modules by calling their loaders.

        Parameters
        ----------
        *modules
            Import paths of the modules to load.

        Returns
        -------
        Self
            The client instance to enable chained calls.

        Raises
        ------
        ValueError
            If a module was already loaded or has no loaders.
        ModuleNotFoundError
            If a module couldn't be found.
        """
        for module_path in modules:
            if module_path in self._modules:
                raise ValueError(f"Module {module_path} already loaded")

            _LOGGER.info("Loading from %s", module_path)
            module = importlib.import_module(module_path)
            loaders = [value for value in vars(module).values() if isinstance(value, _LoaderDescriptor)]
            if not loaders:
                raise ValueError(f"Didn't find any loaders in {module_path}")

            for loader in loaders:
                loader.load(self)

            self._modules[module_path] = module

        return self

    async def declare_commands(
        self, *, guilds: typing.Optional[hikari.SnowflakeishSequence[hikari.PartialGuild]] = None
    ) -> None:
        """Declare the slash commands of every loaded extension.

        Commands with a guild scope are always declared in their guild.

        Parameters
        ----------
        guilds
            Guilds to declare unscoped commands in.

            If left as [None][] then unscoped commands are declared globally.
        """
        application = await self._rest.fetch_application()
        unscoped: list[hikari.api.CommandBuilder] = []
        scoped: dict[hikari.Snowflake, list[hikari.api.CommandBuilder]] = collections_.defaultdict(list)
        for command in self.commands.values():
            if command.guild is None:
                unscoped.append(command.build())

            else:
                scoped[command.guild].append(command.build())

        if guilds is None:
            _LOGGER.info("Declaring %s global commands", len(unscoped))
            await self._rest.set_application_commands(application, unscoped)

        else:
            for guild in guilds:
                scoped[hikari.Snowflake(guild)].extend(unscoped)

        for guild_id, builders in scoped.items():
            _LOGGER.info("Declaring %s commands in %s", len(builders), guild_id)
            await self._rest.set_application_commands(application, builders, guild=guild_id)

    async def open(self, *, register_listeners: bool = True) -> None:
        """Start the client.

        Raises
        ------
        RuntimeError
            If the client is already active.
        """
        if self._is_alive:
            raise RuntimeError("Client is already alive")

        self._is_alive = True
        if register_listeners and self._events:
            self._events.subscribe(hikari.InteractionCreateEvent, self.on_interaction_create_event)
            if self._prefixes:
                self._events.subscribe(hikari.MessageCreateEvent, self.on_message_create_event)

        if self._declare_commands is True:
            await self.declare_commands()

        elif self._declare_commands:
            await self.declare_commands(guilds=self._declare_commands)

        _LOGGER.info("Client started with %s commands", len(self.commands))

    async def close(self, *, deregister_listeners: bool = True) -> None:
        """Close the client.

        Raises
        ------
        RuntimeError
            If the client isn't running.
        """
        if not self._is_alive:
            raise RuntimeError("Client isn't active")

        self._is_alive = False
        if deregister_listeners and self._events:
            _try_unsubscribe(self._events, hikari.InteractionCreateEvent, self.on_interaction_create_event)
            _try_unsubscribe(self._events, hikari.MessageCreateEvent, self.on_message_create_event)

    async def on_interaction_create_event(self, event: hikari.InteractionCreateEvent, /) -> None:
        """Execute a slash command based on a gateway event.

        Parameters
        ----------
        event
            The event to handle.
        """
        if not isinstance(event.interaction, hikari.CommandInteraction):
            return

        interaction = event.interaction
        if (command := self.get_command(interaction.command_name)) is None:
            _LOGGER.debug("Ignoring interaction for unknown command %r", interaction.command_name)
            return

        try:
            await self._dispatcher.call(command, context.SlashContext(self, interaction))

        except errors.ResolutionError as exc:
            _LOGGER.error("Declared commands are out of sync with %r: %s", command, exc)

    async def on_message_create_event(self, event: hikari.MessageCreateEvent, /) -> None:
        """Execute a message command based on a gateway event.

        Parameters
        ----------
        event
            The event to handle.
        """
        content = event.message.content
        if not content or not event.is_human:
            return

        content = content.lstrip()
        prefix = next((prefix for prefix in self._prefixes if content.startswith(prefix)), None)
        if prefix is None:
            return

        try:
            tokens = parsing.tokenize(content[len(prefix) :])

        except errors.ParserError as exc:
            _LOGGER.debug("Ignoring message with invalid content: %s", exc)
            return

        if not tokens or (command := self.get_command(tokens[0])) is None:
            return

        try:
            await self._dispatcher.call(command, context.MessageContext(self, event.message, tokens, prefix=prefix))

        except errors.ResolutionError as exc:
            _LOGGER.debug("Couldn't resolve message command: %s", exc)


def _try_unsubscribe(
    event_manager: hikari.api.EventManager,
    event_type: type[typing.Any],
    callback: collections.Callable[[typing.Any], collections.Coroutine[typing.Any, typing.Any, None]],
) -> None:
    try:
        event_manager.unsubscribe(event_type, callback)

    except (ValueError, LookupError):
        pass
