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
"""Parser used to drive command input through an argument set's converters."""
from __future__ import annotations

__all__: list[str] = ["ArgumentParser", "tokenize"]

import logging
import shlex
import typing

from . import arguments as arguments_
from . import conversion
from . import errors

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from . import clients
    from . import context as context_

_ArgumentsT = typing.TypeVar("_ArgumentsT", bound=arguments_.Arguments)
_LOGGER = logging.getLogger("hikari.commandeer.parsing")


def tokenize(content: str, /) -> list[str]:
    """Split message content into tokens.

    Tokens are separated by spaces and double quotes group text into one token.

    Parameters
    ----------
    content
        The content to split.

    Returns
    -------
    list[str]
        The content's tokens.

    Raises
    ------
    commandeer.errors.ParserError
        If the content contains an unterminated quote.
    """
    lexer = shlex.shlex(content, posix=True)
    lexer.commenters = ""
    lexer.quotes = '"'
    lexer.whitespace = " \n\t"
    lexer.whitespace_split = True

    try:
        return list(lexer)

    except ValueError as exc:
        raise errors.ParserError(str(exc), None) from None


class ArgumentParser:
    """Standard argument parser.

    Arguments are parsed in the order they're declared in and the first
    required argument which fails stops parsing.
    """

    __slots__ = ()

    async def parse(
        self, factory: type[_ArgumentsT], ctx: context_.Context[typing.Any], /
    ) -> _ArgumentsT:
        """Parse a fresh argument set from a command call.

        Structured options are used when the context provides them, otherwise
        the context's tokens are consumed in order.

        Parameters
        ----------
        factory
            The argument set class to create and populate.
        ctx
            The context of the command call.

        Returns
        -------
        _ArgumentsT
            The populated argument set.

        Raises
        ------
        commandeer.errors.NotEnoughArgumentsError
            If nothing could be consumed for a required argument.
        commandeer.errors.ConversionError
            If a converter rejected its input.
        """
        arguments = factory()
        state = ctx.client.state
        if (options := ctx.options) is not None:
            values = await self._parse_options(arguments, options, ctx, state)

        else:
            values = await self._parse_tokens(arguments, ctx.tokens, ctx, state)

        arguments.populate(values)
        return arguments

    async def _parse_tokens(
        self,
        arguments: arguments_.Arguments,
        tokens: collections.Sequence[str],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> dict[str, typing.Any]:
        declarations = arguments.declarations()
        remaining = tuple(tokens)
        values: dict[str, typing.Any] = {}
        for key, converter in arguments.converters.items():
            result = await _attempt(key, converter, remaining, ctx, state)
            if isinstance(result, conversion.Consumed):
                values[key] = result.value
                remaining = remaining[result.count :]

            else:
                values[key] = _fallback(declarations[key], result)

        if remaining:
            _LOGGER.debug("Ignoring %s trailing tokens", len(remaining))

        return values

    async def _parse_options(
        self,
        arguments: arguments_.Arguments,
        options: collections.Mapping[str, typing.Any],
        ctx: context_.Context[typing.Any],
        state: clients.BotState,
        /,
    ) -> dict[str, typing.Any]:
        declarations = arguments.declarations()
        values: dict[str, typing.Any] = {}
        for key, converter in arguments.converters.items():
            if key not in options:
                values[key] = _fallback(declarations[key], conversion.NO_MATCH)
                continue

            result = await _attempt(key, converter, converter.option_tokens(options[key]), ctx, state)
            if isinstance(result, conversion.Consumed):
                values[key] = result.value

            else:
                values[key] = _fallback(declarations[key], result)

        return values


async def _attempt(
    key: str,
    converter: conversion.BaseConverter[typing.Any],
    tokens: collections.Sequence[typing.Any],
    ctx: context_.Context[typing.Any],
    state: clients.BotState,
    /,
) -> conversion.ParseResult[typing.Any]:
    try:
        result = await converter.parse(tokens, ctx, state)

    except errors.ParserError:
        raise

    except Exception as exc:
        message = await converter.handle_error(exc, tokens, ctx, state)
        raise errors.ConversionError(message, key, errors=[exc]) from exc

    if isinstance(result, conversion.Consumed) and result.count < 1:
        return conversion.NO_MATCH

    return result


def _fallback(
    argument: arguments_.Argument[typing.Any], result: typing.Union[conversion.Invalid, typing.Any], /
) -> typing.Any:
    if not argument.is_required:
        return argument.default

    if isinstance(result, conversion.Invalid):
        raise errors.ConversionError(f"Invalid value for argument `{argument.key}`: {result.reason}", argument.key)

    raise errors.NotEnoughArgumentsError(f"Missing value for required argument `{argument.key}`", argument.key)
