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

import pytest

import commandeer


class _PingArguments(commandeer.Arguments):
    count = commandeer.Argument(commandeer.IntConverter(), "How many")
    message = commandeer.Argument(commandeer.StringConverter(), "What to say", default="pong", name="text")


class TestUndefined:
    def test_is_singleton(self):
        assert commandeer.arguments.UndefinedT() is commandeer.UNDEFINED

    def test_is_falsy(self):
        assert not commandeer.UNDEFINED

    def test_repr(self):
        assert repr(commandeer.UNDEFINED) == "UNDEFINED"


class TestArgument:
    def test_get_on_class_returns_declaration(self):
        argument = _PingArguments.count

        assert isinstance(argument, commandeer.Argument)
        assert argument.attribute == "count"
        assert argument.key == "count"
        assert argument.description == "How many"
        assert argument.is_required is True
        assert argument.default is commandeer.UNDEFINED

    def test_name_overrides_key(self):
        argument = _PingArguments.message

        assert argument.attribute == "message"
        assert argument.key == "text"
        assert argument.is_required is False
        assert argument.default == "pong"

    def test_key_when_unbound(self):
        argument = commandeer.Argument(commandeer.IntConverter(), "meow")

        with pytest.raises(RuntimeError, match="hasn't been bound"):
            argument.key

    def test_get_on_instance_returns_value(self):
        arguments = _PingArguments()
        arguments.populate({"count": 3, "text": "hello"})

        assert arguments.count == 3
        assert arguments.message == "hello"

    def test_get_on_instance_before_parsing(self):
        arguments = _PingArguments()

        with pytest.raises(RuntimeError, match="before parsing has finished"):
            arguments.count

    def test_set(self):
        arguments = _PingArguments()
        arguments.populate({"count": 3, "text": "hello"})

        with pytest.raises(AttributeError):
            arguments.count = 5  # type: ignore


class TestArguments:
    def test_declarations_keep_declaration_order(self):
        assert list(_PingArguments.declarations()) == ["count", "text"]

    def test_declarations_are_inherited(self):
        class ExtendedArguments(_PingArguments):
            loud = commandeer.Argument(commandeer.BooleanConverter(), "Shout it", default=False)

        assert list(ExtendedArguments.declarations()) == ["count", "text", "loud"]
        assert list(_PingArguments.declarations()) == ["count", "text"]

    def test_overriding_inherited_argument(self):
        class OverriddenArguments(_PingArguments):
            count = commandeer.Argument(commandeer.IntConverter(), "How many", default=1)

        declarations = OverriddenArguments.declarations()
        assert list(declarations) == ["count", "text"]
        assert declarations["count"].default == 1

    def test_overriding_inherited_argument_with_new_name(self):
        class RenamedArguments(_PingArguments):
            message = commandeer.Argument(commandeer.StringConverter(), "What to say")

        arguments = RenamedArguments()
        arguments.populate({"count": 2, "message": "hi"})

        assert list(RenamedArguments.declarations()) == ["count", "message"]
        assert RenamedArguments.declarations()["message"].is_required is True
        assert arguments.message == "hi"
        assert list(_PingArguments.declarations()) == ["count", "text"]

    def test_duplicate_names(self):
        with pytest.raises(ValueError, match="Argument name `count` is declared more than once in BadArguments"):

            class BadArguments(commandeer.Arguments):  # pyright: ignore[reportUnusedClass]
                count = commandeer.Argument(commandeer.IntConverter(), "a")
                amount = commandeer.Argument(commandeer.IntConverter(), "b", name="count")

    def test_converters_are_copied_per_set(self):
        first = _PingArguments()
        second = _PingArguments()

        assert first.converters["count"] is not second.converters["count"]
        assert first.converters["count"] is not _PingArguments.count.converter
        assert isinstance(first.converters["count"], commandeer.IntConverter)

    def test_values_before_parsing(self):
        with pytest.raises(RuntimeError, match="before parsing has finished"):
            _PingArguments().values()

    def test_populate(self):
        arguments = _PingArguments()

        arguments.populate({"text": "meow", "count": 2})

        assert arguments.is_parsed is True
        assert list(arguments.values().items()) == [("count", 2), ("text", "meow")]

    def test_populate_when_missing_values(self):
        arguments = _PingArguments()

        with pytest.raises(ValueError, match="Missing values for text"):
            arguments.populate({"count": 2})

        assert arguments.is_parsed is False

    def test_populate_twice(self):
        arguments = _PingArguments()
        arguments.populate({"count": 2, "text": "a"})

        with pytest.raises(RuntimeError, match="already been populated"):
            arguments.populate({"count": 3, "text": "b"})

        assert arguments.count == 2

    def test_repr(self):
        arguments = _PingArguments()
        assert repr(arguments) == "_PingArguments(<unparsed>)"

        arguments.populate({"count": 2, "text": "a"})
        assert repr(arguments) == "_PingArguments(count=2, text='a')"
