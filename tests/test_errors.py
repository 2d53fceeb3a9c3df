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

from unittest import mock

import pytest

import commandeer


class TestInvalidCommandError:
    def test(self):
        error = commandeer.InvalidCommandError("meow", "Commands must have a description")

        assert error.name == "meow"
        assert error.reason == "Commands must have a description"
        assert str(error) == "Invalid command `meow`: Commands must have a description"
        assert isinstance(error, ValueError)


class TestCommandRegistrationError:
    def test(self):
        error = commandeer.CommandRegistrationError("meow", "Too many")

        assert error.name == "meow"
        assert error.reason == "Too many"
        assert str(error) == "Failed to register `meow`: Too many"


class TestResolutionError:
    def test(self):
        error = commandeer.ResolutionError("Not found", ["a", "b"])

        assert error.path == ("a", "b")
        assert str(error) == "Not found"


class TestCommandError:
    def test_str(self):
        assert str(commandeer.CommandError("hi")) == "hi"

    @pytest.mark.asyncio()
    async def test_send(self):
        ctx = mock.AsyncMock()

        await commandeer.CommandError("hi").send(ctx, public=True)

        ctx.respond.assert_awaited_once_with("hi", public=True)


class TestParserError:
    def test(self):
        error = commandeer.ParserError("Bad input", "arg")

        assert error.message == "Bad input"
        assert error.parameter == "arg"
        assert str(error) == "Bad input"


class TestConversionError:
    def test(self):
        source = ValueError("inner")
        error = commandeer.ConversionError("Bad value", "arg", errors=[source])

        assert error.parameter == "arg"
        assert error.errors == (source,)
        assert isinstance(error, commandeer.ParserError)


class TestNotEnoughArgumentsError:
    def test(self):
        error = commandeer.NotEnoughArgumentsError("Missing", "arg")

        assert error.parameter == "arg"
        assert isinstance(error, commandeer.ParserError)
