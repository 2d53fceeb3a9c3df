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
"""Configuration file format used to start a bot from the command line."""
from __future__ import annotations

__all__: list[str] = ["Config", "from_raw", "load_config"]

import json
import pathlib
import typing

_LOG_LEVELS = frozenset(("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))


class Config(typing.TypedDict):
    token: str
    prefixes: list[str]
    declare_commands: typing.Union[bool, list[int]]
    modules: list[str]
    log_level: str
    report_errors: bool


def _str_list(data: dict[str, typing.Any], key: str, /) -> list[str]:
    value = data.pop(key, None) or []
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list of strings, not {type(value)}")

    for entry in value:
        if not isinstance(entry, str):
            raise TypeError(f"Expected strings in {key}, got {type(entry)}")

    return value


def from_raw(data: dict[str, typing.Any], /) -> Config:
    """Validate raw configuration data.

    Parameters
    ----------
    data
        The raw data to validate.

    Returns
    -------
    Config
        The validated configuration.

    Raises
    ------
    TypeError
        If a field has the wrong type.
    ValueError
        If a field has an invalid value or `token` is missing.
    """
    data = data.copy()
    token = data.pop("token", None)
    if not token:
        raise ValueError("token is required")

    if not isinstance(token, str):
        raise TypeError(f"token must be a str, not {type(token)}")

    prefixes = _str_list(data, "prefixes")
    modules = _str_list(data, "modules")

    declare_commands = data.pop("declare_commands", False)
    if isinstance(declare_commands, list):
        try:
            declare_commands = [int(guild_id) for guild_id in declare_commands]

        except (TypeError, ValueError):
            raise TypeError("declare_commands must be a bool or a list of guild IDs") from None

    elif not isinstance(declare_commands, bool):
        raise TypeError(f"declare_commands must be a bool or a list of guild IDs, not {type(declare_commands)}")

    log_level = data.pop("log_level", "INFO")
    if not isinstance(log_level, str):
        raise TypeError(f"log_level must be a str, not {type(log_level)}")

    log_level = log_level.upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Expected one of {', '.join(sorted(_LOG_LEVELS))} for log_level but got {log_level}")

    report_errors = data.pop("report_errors", True)
    if not isinstance(report_errors, bool):
        raise TypeError(f"report_errors must be a bool, not {type(report_errors)}")

    if data:
        raise ValueError(f"Unexpected configuration keys: {', '.join(sorted(data))}")

    return Config(
        token=token,
        prefixes=prefixes,
        declare_commands=declare_commands,
        modules=modules,
        log_level=log_level,
        report_errors=report_errors,
    )


def load_config(path: typing.Union[str, pathlib.Path], /) -> Config:
    """Load and validate a JSON configuration file.

    Parameters
    ----------
    path
        Path of the file to load.

    Returns
    -------
    Config
        The validated configuration.

    Raises
    ------
    TypeError
        If the file doesn't contain a JSON object or a field has the wrong type.
    ValueError
        If the file isn't valid JSON or a field has an invalid value.
    """
    with pathlib.Path(path).open() as file:
        data = json.load(file)

    if not isinstance(data, dict):
        raise TypeError(f"Configuration must be a JSON object, not {type(data)}")

    return from_raw(data)
