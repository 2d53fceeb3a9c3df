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

import json
import pathlib
from unittest import mock

import hikari
import pytest

import commandeer
from commandeer import cli
from commandeer import config


class TestBuildConfig:
    def test_from_arguments(self):
        args = cli._parser.parse_args(["-p", "!", "-p", "?", "-m", "bot.fun", "bot.admin", "--declare-commands", "abc"])

        result = cli._build_config(args)

        assert result == {
            "token": "abc",
            "prefixes": ["!", "?"],
            "declare_commands": True,
            "modules": ["bot.fun", "bot.admin"],
            "log_level": "INFO",
            "report_errors": True,
        }

    def test_from_config_file(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "file-token", "prefixes": ["!"], "modules": ["bot.fun"]}))
        args = cli._parser.parse_args(["-c", str(path), "-p", "?", "-l", "debug"])

        result = cli._build_config(args)

        assert result["token"] == "file-token"
        assert result["prefixes"] == ["!", "?"]
        assert result["modules"] == ["bot.fun"]
        assert result["log_level"] == "DEBUG"

    def test_token_overrides_config_file(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "file-token"}))
        args = cli._parser.parse_args(["-c", str(path), "arg-token"])

        assert cli._build_config(args)["token"] == "arg-token"

    def test_without_token_or_config(self):
        args = cli._parser.parse_args([])

        with pytest.raises(SystemExit):
            cli._build_config(args)


class TestBuildBot:
    def test(self):
        settings = config.from_raw({"token": "abc", "prefixes": ["!"], "log_level": "debug"})

        with mock.patch.object(hikari, "GatewayBot") as gateway_bot:
            bot, client = cli.build_bot(settings, intents=hikari.Intents.GUILDS)

        gateway_bot.assert_called_once_with("abc", logs="DEBUG", intents=hikari.Intents.GUILDS)
        assert bot is gateway_bot.return_value
        assert client.rest is bot.rest
        assert client.prefixes == ["!"]
        assert isinstance(client.reporter, commandeer.LoggingErrorReporter)
        assert client.get_command("feedback") is not None

    def test_without_error_reporting(self):
        settings = config.from_raw({"token": "abc", "report_errors": False})

        with mock.patch.object(hikari, "GatewayBot"):
            _, client = cli.build_bot(settings)

        assert client.reporter is None
        assert client.extensions == {}
