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
"""Converters used to turn raw command input into typed argument values.

A converter is offered the remaining tokens of a command call and reports one
of three results:

* [Consumed][commandeer.conversion.Consumed] when it committed a value after
  consuming one or more leading tokens.
* [NO_MATCH][commandeer.conversion.NO_MATCH] when nothing could be interpreted.
* [Invalid][commandeer.conversion.Invalid] when the leading tokens were
  recognisably wrong.

Whether an argument is required or falls back to a default is decided by the
[Argument][commandeer.arguments.Argument] declaration, not the converter.
"""
from __future__ import annotations

__all__: list[str] = [
    "BaseConverter",
    "BooleanConverter",
    "ChoiceConverter",
    "CoalescingConverter",
    "CoalescingStringConverter",
    "Consumed",
    "DurationConverter",
    "IntConverter",
    "Invalid",
    "MultiConverter",
    "NO_MATCH",
    "NumberConverter",
    "ParseResult",
    "SingleConverter",
    "SnowflakeConverter",
    "StringConverter",
    "UserConverter",
    "parse_snowflake",
    "to_bool",
]

import abc
import copy
import datetime
import re
import typing
from collections import abc as collections

import hikari

from . import errors

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import clients
    from . import context as context_

_T = typing.TypeVar("_T")
_T_co = typing.TypeVar("_T_co", covariant=True)


class Consumed(typing.Generic[_T_co]):
    """Result of a converter which committed a value.

    Parameters
    ----------
    value
        The converted value.
    count
        How many leading tokens were consumed to produce the value.
    """

    __slots__ = ("count", "value")

    def __init__(self, value: _T_co, count: int = 1, /) -> None:
        self.value = value
        self.count = count

    def __repr__(self) -> str:
        return f"Consumed({self.value!r}, {self.count})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Consumed) and other.value == self.value and other.count == self.count

    def __hash__(self) -> int:
        return hash((Consumed, self.count))


class _NoMatchType:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __bool__(self) -> typing.Literal[False]:
        return False


NO_MATCH: typing.Final[_NoMatchType] = _NoMatchType()
"""Result of a converter which couldn't interpret any of the provided tokens."""


class Invalid:
    """Result of a converter which found its leading tokens recognisably wrong.

    Parameters
    ----------
    reason
        User facing explanation of what was wrong.
    """

    __slots__ = ("reason",)

    def __init__(self, reason: str, /) -> None:
        self.reason = reason

    def __repr__(self) -> str:
        return f"Invalid({self.reason!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Invalid) and other.reason == self.reason

    def __hash__(self) -> int:
        return hash((Invalid, self.reason))


ParseResult = typing.Union[Consumed[_T], _NoMatchType, Invalid]
"""Union of the results a converter may return."""


class BaseConverter(abc.ABC, typing.Generic[_T]):
    """Base class for all converters.

    Converters must not mutate shared state; each argument set gets its own
    copy of a converter through [BaseConverter.copy][].
    """

    __slots__ = ()

    @property
    def is_coalescing(self) -> bool:
        """Whether this converter may consume more than one token."""
        return False

    @property
    @abc.abstractmethod
    def option_type(self) -> hikari.OptionType:
        """The slash command option type values for this converter are declared as."""

    @abc.abstractmethod
    async def parse(
        self,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> ParseResult[_T]:
        """Attempt to convert the leading tokens.

        Parameters
        ----------
        tokens
            The remaining tokens of the call.

            For slash commands these come from [BaseConverter.option_tokens][].
        ctx
            The context of the command call.
        state
            Read-only view of the bot's state.

        Returns
        -------
        ParseResult[_T]
            The result of the conversion attempt.
        """

    async def handle_error(
        self,
        error: Exception,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> str:
        """Turn an unexpected error raised by [BaseConverter.parse][] into a user facing message.

        The default implementation re-raises the error.

        Parameters
        ----------
        error
            The error which was raised.
        tokens
            The tokens [BaseConverter.parse][] was called with.
        ctx
            The context of the command call.
        state
            Read-only view of the bot's state.

        Returns
        -------
        str
            The message to show the user.

        Raises
        ------
        Exception
            If the error can't be humanised.
        """
        raise error

    def option_tokens(self, value: typing.Any, /) -> collections.Sequence[typing.Any]:
        """Turn a structured option value into the tokens passed to [BaseConverter.parse][].

        Parameters
        ----------
        value
            The raw option value.

        Returns
        -------
        collections.abc.Sequence[typing.Any]
            The tokens to parse.
        """
        return [value]

    def copy(self) -> Self:
        """Create a fresh copy of this converter."""
        return copy.copy(self)

    def build_option(self, name: str, description: str, /, *, is_required: bool) -> hikari.CommandOption:
        """Build the slash command option for an argument which uses this converter.

        Parameters
        ----------
        name
            The argument's name.
        description
            The argument's description.
        is_required
            Whether the argument is required.

        Returns
        -------
        hikari.commands.CommandOption
            The built option.
        """
        return hikari.CommandOption(
            type=self.option_type, name=name, description=description, is_required=is_required
        )


class SingleConverter(BaseConverter[_T], abc.ABC):
    """Base class for converters which consume exactly one token.

    Subclasses implement [SingleConverter.convert][] and raise [ValueError][]
    for a bad token.
    """

    __slots__ = ()

    async def parse(
        self,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> ParseResult[_T]:
        # <<inherited docstring from BaseConverter>>.
        if not tokens:
            return NO_MATCH

        try:
            value = await self.convert(tokens[0], ctx, state)

        except errors.ParserError:
            raise

        except ValueError as exc:
            return Invalid(str(exc))

        return Consumed(value, 1)

    @abc.abstractmethod
    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> _T:
        """Convert a single token.

        Parameters
        ----------
        token
            The token to convert.
        ctx
            The context of the command call.
        state
            Read-only view of the bot's state.

        Returns
        -------
        _T
            The converted value.

        Raises
        ------
        ValueError
            If the token isn't valid for this converter.
        """


class CoalescingConverter(BaseConverter[_T], abc.ABC):
    """Base class for converters which may consume more than one token."""

    __slots__ = ()

    @property
    def is_coalescing(self) -> bool:
        # <<inherited docstring from BaseConverter>>.
        return True

    def option_tokens(self, value: typing.Any, /) -> collections.Sequence[typing.Any]:
        # <<inherited docstring from BaseConverter>>.
        if isinstance(value, str):
            return value.split()

        return [value]


class StringConverter(SingleConverter[str]):
    """Single token string converter."""

    __slots__ = ("_max_length", "_min_length")

    def __init__(self, *, min_length: typing.Optional[int] = None, max_length: typing.Optional[int] = None) -> None:
        self._max_length = max_length
        self._min_length = min_length

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> str:
        # <<inherited docstring from SingleConverter>>.
        value = str(token)
        if self._min_length is not None and len(value) < self._min_length:
            raise ValueError(f"Value must be at least {self._min_length} characters long")

        if self._max_length is not None and len(value) > self._max_length:
            raise ValueError(f"Value can't be more than {self._max_length} characters long")

        return value

    def build_option(self, name: str, description: str, /, *, is_required: bool) -> hikari.CommandOption:
        # <<inherited docstring from BaseConverter>>.
        return hikari.CommandOption(
            type=self.option_type,
            name=name,
            description=description,
            is_required=is_required,
            min_length=self._min_length,
            max_length=self._max_length,
        )


class _RangedConverter(SingleConverter[_T], abc.ABC):
    __slots__ = ("_max_value", "_min_value")

    def __init__(
        self, *, min_value: typing.Union[int, float, None] = None, max_value: typing.Union[int, float, None] = None
    ) -> None:
        self._max_value = max_value
        self._min_value = min_value

    def _check_range(self, value: typing.Union[int, float], /) -> None:
        if self._min_value is not None and value < self._min_value:
            raise ValueError(f"Value must be greater than or equal to {self._min_value}")

        if self._max_value is not None and value > self._max_value:
            raise ValueError(f"Value must be less than or equal to {self._max_value}")

    def build_option(self, name: str, description: str, /, *, is_required: bool) -> hikari.CommandOption:
        # <<inherited docstring from BaseConverter>>.
        return hikari.CommandOption(
            type=self.option_type,
            name=name,
            description=description,
            is_required=is_required,
            min_value=self._min_value,
            max_value=self._max_value,
        )


class IntConverter(_RangedConverter[int]):
    """Base 10 integer converter."""

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.INTEGER

    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> int:
        # <<inherited docstring from SingleConverter>>.
        if isinstance(token, bool):
            raise ValueError("Value must be a whole number")

        try:
            value = int(token)

        except (TypeError, ValueError):
            raise ValueError(f"`{token}` isn't a whole number") from None

        self._check_range(value)
        return value


class NumberConverter(_RangedConverter[float]):
    """Floating point number converter."""

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.FLOAT

    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> float:
        # <<inherited docstring from SingleConverter>>.
        try:
            value = float(token)

        except (TypeError, ValueError):
            raise ValueError(f"`{token}` isn't a number") from None

        self._check_range(value)
        return value


_YES_VALUES = frozenset(("y", "yes", "t", "true", "on", "1"))
_NO_VALUES = frozenset(("n", "no", "f", "false", "off", "0"))


def to_bool(value: str, /) -> bool:
    """Convert user string input into a boolean value.

    Parameters
    ----------
    value
        The value to convert.

    Returns
    -------
    bool
        The converted value.

    Raises
    ------
    ValueError
        If the value isn't a recognised yes or no value.
    """
    value = value.lower().strip()
    if value in _YES_VALUES:
        return True

    if value in _NO_VALUES:
        return False

    raise ValueError(f"Invalid bool value `{value}`")


class BooleanConverter(SingleConverter[bool]):
    """Converter for yes/no style input."""

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.BOOLEAN

    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> bool:
        # <<inherited docstring from SingleConverter>>.
        if isinstance(token, bool):
            return token

        return to_bool(str(token))


_MENTION_REGEX = re.compile(r"^<(?:@[!&]?|#)(\d+)>$")


def parse_snowflake(
    value: typing.Union[str, int], /, *, message: str = "No valid mention or ID found"
) -> hikari.Snowflake:
    """Parse a snowflake from a raw ID or a mention.

    Parameters
    ----------
    value
        The value to parse.
    message
        The error message to raise if the value can't be parsed.

    Returns
    -------
    hikari.snowflakes.Snowflake
        The parsed snowflake.

    Raises
    ------
    ValueError
        If the value can't be parsed.
    """
    result: typing.Optional[hikari.Snowflake] = None
    if isinstance(value, int) or value.isdigit():
        result = hikari.Snowflake(value)

    elif match := _MENTION_REGEX.match(value):
        result = hikari.Snowflake(match.group(1))

    if result is not None and hikari.Snowflake.min() <= result <= hikari.Snowflake.max():
        return result

    raise ValueError(message)


class SnowflakeConverter(SingleConverter[hikari.Snowflake]):
    """Converter for raw IDs and mentions."""

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    async def convert(
        self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /
    ) -> hikari.Snowflake:
        # <<inherited docstring from SingleConverter>>.
        return parse_snowflake(token)


class UserConverter(SingleConverter[hikari.User]):
    """Converter for user mentions and IDs.

    This tries the cache before falling back to a REST request.
    """

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.USER

    async def convert(
        self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /
    ) -> hikari.User:
        # <<inherited docstring from SingleConverter>>.
        if isinstance(token, hikari.User):
            return token

        user_id = parse_snowflake(token, message="No valid user mention or ID found")
        if state.cache and (user := state.cache.get_user(user_id)):
            return user

        try:
            return await state.rest.fetch_user(user_id)

        except hikari.NotFoundError:
            raise ValueError("Couldn't find user") from None


class ChoiceConverter(SingleConverter[_T]):
    """Converter which maps a case-insensitive set of keys to values.

    Parameters
    ----------
    choices
        Mapping of choice names to the values they convert to.
    """

    __slots__ = ("_choices",)

    def __init__(self, choices: collections.Mapping[str, _T], /) -> None:
        if not choices:
            raise ValueError("At least one choice must be provided")

        self._choices = {key.lower(): value for key, value in choices.items()}

    @property
    def choices(self) -> collections.Mapping[str, _T]:
        """Mapping of the lowercased choice names to their values."""
        return self._choices.copy()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    async def convert(self, token: typing.Any, ctx: context_.Context[typing.Any], state: clients.BotState, /) -> _T:
        # <<inherited docstring from SingleConverter>>.
        try:
            return self._choices[str(token).lower()]

        except KeyError:
            options = ", ".join(f"`{key}`" for key in self._choices)
            raise ValueError(f"Value must be one of {options}") from None

    def build_option(self, name: str, description: str, /, *, is_required: bool) -> hikari.CommandOption:
        # <<inherited docstring from BaseConverter>>.
        return hikari.CommandOption(
            type=self.option_type,
            name=name,
            description=description,
            is_required=is_required,
            choices=[hikari.CommandChoice(name=key, value=key) for key in self._choices],
        )


class CoalescingStringConverter(CoalescingConverter[str]):
    """Converter which joins every remaining token into one string."""

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    def option_tokens(self, value: typing.Any, /) -> collections.Sequence[typing.Any]:
        # <<inherited docstring from BaseConverter>>.
        return [value]

    async def parse(
        self,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> ParseResult[str]:
        # <<inherited docstring from BaseConverter>>.
        if not tokens:
            return NO_MATCH

        return Consumed(" ".join(map(str, tokens)), len(tokens))


_DURATION_UNITS: dict[str, datetime.timedelta] = {}
for _names, _delta in (
    (("s", "sec", "secs", "second", "seconds"), datetime.timedelta(seconds=1)),
    (("m", "min", "mins", "minute", "minutes"), datetime.timedelta(minutes=1)),
    (("h", "hr", "hrs", "hour", "hours"), datetime.timedelta(hours=1)),
    (("d", "day", "days"), datetime.timedelta(days=1)),
    (("w", "week", "weeks"), datetime.timedelta(weeks=1)),
):
    _DURATION_UNITS.update((_name, _delta) for _name in _names)

_DURATION_PART_REGEX = re.compile(r"(\d+)([a-z]+)")
_COMPOUND_DURATION_REGEX = re.compile(r"^(?:\d+[a-z]+)+$")


class DurationConverter(CoalescingConverter[datetime.timedelta]):
    """Converter for durations such as `1h30m`, `2 days` or `5m 10s`.

    This consumes tokens for as long as they continue the duration.
    """

    __slots__ = ()

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    async def parse(
        self,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> ParseResult[datetime.timedelta]:
        # <<inherited docstring from BaseConverter>>.
        total = datetime.timedelta()
        index = 0
        while index < len(tokens):
            token = str(tokens[index]).lower()
            if _COMPOUND_DURATION_REGEX.match(token):
                parts = _DURATION_PART_REGEX.findall(token)
                if unknown := next((unit for _, unit in parts if unit not in _DURATION_UNITS), None):
                    if index == 0:
                        return Invalid(f"Unknown time unit `{unknown}`")

                    break

                total += sum((int(amount) * _DURATION_UNITS[unit] for amount, unit in parts), datetime.timedelta())
                index += 1

            elif token.isdigit() and index + 1 < len(tokens):
                unit = str(tokens[index + 1]).lower()
                if unit not in _DURATION_UNITS:
                    break

                total += int(token) * _DURATION_UNITS[unit]
                index += 2

            else:
                break

        if index == 0:
            if tokens and str(tokens[0]).isdigit():
                return Invalid("Missing time unit")

            return NO_MATCH

        return Consumed(total, index)


class MultiConverter(CoalescingConverter[list[_T]]):
    """Converter which applies a single token converter to as many tokens as it accepts.

    Parameters
    ----------
    inner
        The converter to apply to each token.
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: SingleConverter[_T], /) -> None:
        self._inner = inner

    @property
    def inner(self) -> SingleConverter[_T]:
        """The converter applied to each token."""
        return self._inner

    @property
    def option_type(self) -> hikari.OptionType:
        # <<inherited docstring from BaseConverter>>.
        return hikari.OptionType.STRING

    async def parse(
        self,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> ParseResult[list[_T]]:
        # <<inherited docstring from BaseConverter>>.
        values: list[_T] = []
        for index in range(len(tokens)):
            result = await self._inner.parse(tokens[index:], ctx, state)
            if not isinstance(result, Consumed):
                if values:
                    break

                return result

            values.append(result.value)

        if not values:
            return NO_MATCH

        return Consumed(values, len(values))

    async def handle_error(
        self,
        error: Exception,
        tokens: collections.Sequence[typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> str:
        # <<inherited docstring from BaseConverter>>.
        return await self._inner.handle_error(error, tokens, ctx, state)

    def copy(self) -> Self:
        # <<inherited docstring from BaseConverter>>.
        new = copy.copy(self)
        new._inner = self._inner.copy()
        return new
