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
import typing

import pytest

from commandeer import config


class TestFromRaw:
    def test_defaults(self):
        result = config.from_raw({"token": "abc"})

        assert result == {
            "token": "abc",
            "prefixes": [],
            "declare_commands": False,
            "modules": [],
            "log_level": "INFO",
            "report_errors": True,
        }

    def test_full(self):
        result = config.from_raw(
            {
                "token": "abc",
                "prefixes": ["!", "?"],
                "declare_commands": ["123", 456],
                "modules": ["bot.fun"],
                "log_level": "debug",
                "report_errors": False,
            }
        )

        assert result == {
            "token": "abc",
            "prefixes": ["!", "?"],
            "declare_commands": [123, 456],
            "modules": ["bot.fun"],
            "log_level": "DEBUG",
            "report_errors": False,
        }

    def test_does_not_mutate_input(self):
        data = {"token": "abc", "prefixes": ["!"]}

        config.from_raw(data)

        assert data == {"token": "abc", "prefixes": ["!"]}

    @pytest.mark.parametrize("data", [{}, {"token": ""}, {"token": None}])
    def test_without_token(self, data: dict[str, typing.Any]):
        with pytest.raises(ValueError, match="token is required"):
            config.from_raw(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"token": 123},
            {"token": "abc", "prefixes": "!"},
            {"token": "abc", "prefixes": [1]},
            {"token": "abc", "modules": "bot.fun"},
            {"token": "abc", "declare_commands": "yes"},
            {"token": "abc", "declare_commands": ["guild"]},
            {"token": "abc", "log_level": 10},
            {"token": "abc", "report_errors": "no"},
        ],
    )
    def test_with_wrong_types(self, data: dict[str, typing.Any]):
        with pytest.raises(TypeError):
            config.from_raw(data)

    def test_with_invalid_log_level(self):
        with pytest.raises(ValueError, match="for log_level but got LOUD"):
            config.from_raw({"token": "abc", "log_level": "loud"})

    def test_with_unexpected_keys(self):
        with pytest.raises(ValueError, match="Unexpected configuration keys: colour, size"):
            config.from_raw({"token": "abc", "size": 1, "colour": "red"})


class TestLoadConfig:
    def test(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "abc", "prefixes": ["!"]}))

        result = config.load_config(path)

        assert result["token"] == "abc"
        assert result["prefixes"] == ["!"]

    def test_with_str_path(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": "abc"}))

        assert config.load_config(str(path))["token"] == "abc"

    def test_when_not_an_object(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(["abc"]))

        with pytest.raises(TypeError, match="must be a JSON object"):
            config.load_config(path)

    def test_when_not_json(self, tmp_path: pathlib.Path):
        path = tmp_path / "config.json"
        path.write_text("{")

        with pytest.raises(ValueError):
            config.load_config(path)
