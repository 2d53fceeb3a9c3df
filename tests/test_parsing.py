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

# pyright: reportUnknownMemberType=none
# pyright: reportPrivateUsage=none
# This leads to too many false-positives around mocks.

import datetime
import typing
from unittest import mock

import pytest

import commandeer
from commandeer import conversion
from commandeer import parsing


def _token_ctx(*tokens: str) -> typing.Any:
    return mock.Mock(options=None, tokens=list(tokens))


def _option_ctx(**options: typing.Any) -> typing.Any:
    return mock.Mock(options=options, tokens=())


class _MuteArguments(commandeer.Arguments):
    user = commandeer.Argument(commandeer.SnowflakeConverter(), "Who to mute")
    duration = commandeer.Argument(commandeer.DurationConverter(), "How long for", default=None)
    reason = commandeer.Argument(commandeer.CoalescingStringConverter(), "Why", default="No reason given")


class _TwoIntArguments(commandeer.Arguments):
    first = commandeer.Argument(commandeer.IntConverter(), "First")
    second = commandeer.Argument(commandeer.IntConverter(), "Second")


class _OptionalIntArguments(commandeer.Arguments):
    count = commandeer.Argument(commandeer.IntConverter(), "How many", default=1)
    text = commandeer.Argument(commandeer.CoalescingStringConverter(), "What")


class TestTokenize:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("", []),
            ("a b  c", ["a", "b", "c"]),
            ('say "hello there" friend', ["say", "hello there", "friend"]),
            ("line\nbreak\ttab", ["line", "break", "tab"]),
            ("it's fine", ["it's", "fine"]),
            ("# not a comment", ["#", "not", "a", "comment"]),
        ],
    )
    def test(self, content: str, expected: list[str]):
        assert parsing.tokenize(content) == expected

    def test_with_unterminated_quote(self):
        with pytest.raises(commandeer.ParserError) as exc_info:
            parsing.tokenize('say "hello')

        assert exc_info.value.parameter is None


class TestArgumentParserTokens:
    @pytest.mark.asyncio()
    async def test_parse_consumes_in_declaration_order(self):
        result = await parsing.ArgumentParser().parse(
            _MuteArguments, _token_ctx("<@1234>", "1h30m", "being", "loud")
        )

        assert result.user == 1234
        assert result.duration == datetime.timedelta(hours=1, minutes=30)
        assert result.reason == "being loud"

    @pytest.mark.asyncio()
    async def test_parse_keeps_duration_prefix_before_unknown_unit(self):
        result = await parsing.ArgumentParser().parse(_MuteArguments, _token_ctx("<@1234>", "10m", "3rd", "floor"))

        assert result.duration == datetime.timedelta(minutes=10)
        assert result.reason == "3rd floor"

    @pytest.mark.asyncio()
    async def test_parse_skips_optional_argument_which_does_not_match(self):
        result = await parsing.ArgumentParser().parse(_MuteArguments, _token_ctx("1234", "being", "loud"))

        assert result.user == 1234
        assert result.duration is None
        assert result.reason == "being loud"

    @pytest.mark.asyncio()
    async def test_parse_uses_defaults_when_tokens_run_out(self):
        result = await parsing.ArgumentParser().parse(_MuteArguments, _token_ctx("1234"))

        assert result.values() == {"user": 1234, "duration": None, "reason": "No reason given"}

    @pytest.mark.asyncio()
    async def test_parse_optional_argument_falls_through_to_next(self):
        result = await parsing.ArgumentParser().parse(_OptionalIntArguments, _token_ctx("hello", "world"))

        assert result.count == 1
        assert result.text == "hello world"

    @pytest.mark.asyncio()
    async def test_parse_when_required_argument_missing(self):
        with pytest.raises(commandeer.NotEnoughArgumentsError) as exc_info:
            await parsing.ArgumentParser().parse(_TwoIntArguments, _token_ctx("1"))

        assert exc_info.value.parameter == "second"
        assert exc_info.value.message == "Missing value for required argument `second`"

    @pytest.mark.asyncio()
    async def test_parse_when_required_argument_invalid(self):
        with pytest.raises(commandeer.ConversionError) as exc_info:
            await parsing.ArgumentParser().parse(_TwoIntArguments, _token_ctx("1", "two"))

        assert exc_info.value.parameter == "second"
        assert exc_info.value.message == "Invalid value for argument `second`: `two` isn't a whole number"

    @pytest.mark.asyncio()
    async def test_parse_ignores_trailing_tokens(self):
        result = await parsing.ArgumentParser().parse(_TwoIntArguments, _token_ctx("1", "2", "3"))

        assert result.values() == {"first": 1, "second": 2}

    @pytest.mark.asyncio()
    async def test_parse_gives_each_call_fresh_arguments(self):
        parser = parsing.ArgumentParser()

        first = await parser.parse(_TwoIntArguments, _token_ctx("1", "2"))
        second = await parser.parse(_TwoIntArguments, _token_ctx("3", "4"))

        assert first is not second
        assert first.values() == {"first": 1, "second": 2}
        assert second.values() == {"first": 3, "second": 4}

    @pytest.mark.asyncio()
    async def test_parse_passes_client_state_to_converters(self):
        converter = mock.Mock(conversion.BaseConverter, is_coalescing=False)
        converter.copy.return_value = converter
        converter.parse = mock.AsyncMock(return_value=conversion.Consumed("value", 1))

        class StubArguments(commandeer.Arguments):
            value = commandeer.Argument(converter, "A value")

        ctx = _token_ctx("a")

        result = await parsing.ArgumentParser().parse(StubArguments, ctx)

        assert result.value == "value"
        converter.parse.assert_awaited_once_with(("a",), ctx, ctx.client.state)

    @pytest.mark.asyncio()
    async def test_parse_treats_zero_count_as_no_match(self):
        converter = mock.Mock(conversion.BaseConverter, is_coalescing=False)
        converter.copy.return_value = converter
        converter.parse = mock.AsyncMock(return_value=conversion.Consumed("value", 0))

        class StubArguments(commandeer.Arguments):
            value = commandeer.Argument(converter, "A value", default="default")

        result = await parsing.ArgumentParser().parse(StubArguments, _token_ctx("a"))

        assert result.value == "default"

    @pytest.mark.asyncio()
    async def test_parse_humanises_unexpected_converter_errors(self):
        error = KeyError("oops")
        converter = mock.Mock(conversion.BaseConverter, is_coalescing=False)
        converter.copy.return_value = converter
        converter.parse = mock.AsyncMock(side_effect=error)
        converter.handle_error = mock.AsyncMock(return_value="That didn't work")

        class StubArguments(commandeer.Arguments):
            value = commandeer.Argument(converter, "A value")

        ctx = _token_ctx("a")

        with pytest.raises(commandeer.ConversionError) as exc_info:
            await parsing.ArgumentParser().parse(StubArguments, ctx)

        assert exc_info.value.message == "That didn't work"
        assert exc_info.value.parameter == "value"
        assert exc_info.value.errors == (error,)
        converter.handle_error.assert_awaited_once_with(error, ("a",), ctx, ctx.client.state)

    @pytest.mark.asyncio()
    async def test_parse_lets_unhandled_converter_errors_through(self):
        class StubArguments(commandeer.Arguments):
            value = commandeer.Argument(commandeer.UserConverter(), "A user")

        ctx = _token_ctx("1234")
        ctx.client.state.cache = None
        ctx.client.state.rest.fetch_user = mock.AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(ConnectionError):
            await parsing.ArgumentParser().parse(StubArguments, ctx)


class TestArgumentParserOptions:
    @pytest.mark.asyncio()
    async def test_parse(self):
        result = await parsing.ArgumentParser().parse(_TwoIntArguments, _option_ctx(first=5, second="6"))

        assert result.values() == {"first": 5, "second": 6}

    @pytest.mark.asyncio()
    async def test_parse_uses_defaults_for_missing_options(self):
        result = await parsing.ArgumentParser().parse(_MuteArguments, _option_ctx(user="1234"))

        assert result.values() == {"user": 1234, "duration": None, "reason": "No reason given"}

    @pytest.mark.asyncio()
    async def test_parse_splits_string_values_for_coalescing_converters(self):
        result = await parsing.ArgumentParser().parse(_MuteArguments, _option_ctx(user="1234", duration="2 days"))

        assert result.duration == datetime.timedelta(days=2)

    @pytest.mark.asyncio()
    async def test_parse_keeps_coalescing_string_values_intact(self):
        result = await parsing.ArgumentParser().parse(
            _MuteArguments, _option_ctx(user="1234", reason="line one\nline  two")
        )

        assert result.reason == "line one\nline  two"

    @pytest.mark.asyncio()
    async def test_parse_ignores_token_stream(self):
        ctx = _option_ctx(first=1, second=2)
        ctx.tokens = ["9", "9"]

        result = await parsing.ArgumentParser().parse(_TwoIntArguments, ctx)

        assert result.values() == {"first": 1, "second": 2}

    @pytest.mark.asyncio()
    async def test_parse_when_required_option_missing(self):
        with pytest.raises(commandeer.NotEnoughArgumentsError) as exc_info:
            await parsing.ArgumentParser().parse(_TwoIntArguments, _option_ctx(first=1))

        assert exc_info.value.parameter == "second"

    @pytest.mark.asyncio()
    async def test_parse_when_option_invalid(self):
        with pytest.raises(commandeer.ConversionError) as exc_info:
            await parsing.ArgumentParser().parse(_TwoIntArguments, _option_ctx(first=1, second=True))

        assert exc_info.value.parameter == "second"
        assert exc_info.value.message == "Invalid value for argument `second`: Value must be a whole number"

    @pytest.mark.asyncio()
    async def test_parse_when_optional_option_invalid_uses_default(self):
        result = await parsing.ArgumentParser().parse(_OptionalIntArguments, _option_ctx(count="many", text="hi"))

        assert result.count == 1
        assert result.text == "hi"


class TestDeclarationOrder:
    class _NumbersFirst(commandeer.Arguments):
        numbers = commandeer.Argument(commandeer.MultiConverter(commandeer.IntConverter()), "Numbers", default=[])
        text = commandeer.Argument(commandeer.CoalescingStringConverter(), "Text", default="")

    class _TextFirst(commandeer.Arguments):
        text = commandeer.Argument(commandeer.CoalescingStringConverter(), "Text", default="")
        numbers = commandeer.Argument(commandeer.MultiConverter(commandeer.IntConverter()), "Numbers", default=[])

    @pytest.mark.asyncio()
    async def test_earlier_declaration_claims_tokens_first(self):
        tokens = ("1", "2", "three", "4")

        numbers_first = await parsing.ArgumentParser().parse(self._NumbersFirst, _token_ctx(*tokens))
        text_first = await parsing.ArgumentParser().parse(self._TextFirst, _token_ctx(*tokens))

        assert numbers_first.values() == {"numbers": [1, 2], "text": "three 4"}
        assert text_first.values() == {"text": "1 2 three 4", "numbers": []}
