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

import typing
from unittest import mock

import hikari
import pytest

import commandeer


async def _action(ctx: commandeer.Context[typing.Any]) -> None:
    ...


def _command(name: str, description: str = "A command", **kwargs: typing.Any) -> commandeer.SlashCommand[typing.Any]:
    return commandeer.SlashCommand(_action, name, description, **kwargs)


def _group_root(name: str = "root") -> commandeer.SlashCommand[typing.Any]:
    return commandeer.SlashCommand(None, name, "Root command")


class _BanArguments(commandeer.Arguments):
    reason = commandeer.Argument(commandeer.StringConverter(), "Why", default=None)
    user = commandeer.Argument(commandeer.UserConverter(), "Who")


class TestPartialCommand:
    @pytest.mark.parametrize("name", ["", "UPPER", "has space", "a" * 33, "bad!"])
    def test_init_with_invalid_name(self, name: str):
        with pytest.raises(ValueError, match="Invalid name provided"):
            _command(name)

    @pytest.mark.parametrize("name", ["a", "snake_case", "kebab-case", "a" * 32, "ñame"])
    def test_init_with_valid_name(self, name: str):
        assert _command(name).name == name

    def test_add_check(self):
        command = _command("meow")
        check = mock.Mock()

        result = command.add_check(check).add_check(check)

        assert result is command
        assert command.checks == [check]

    def test_remove_check(self):
        check = mock.Mock()
        command = _command("meow").add_check(check)

        command.remove_check(check)

        assert command.checks == []

    def test_remove_check_when_not_added(self):
        with pytest.raises(ValueError):
            _command("meow").remove_check(mock.Mock())

    def test_with_check(self):
        command = _command("meow")
        check = mock.Mock()

        assert command.with_check(check) is check
        assert command.checks == [check]

    def test_set_metadata(self):
        command = _command("meow")

        assert command.set_metadata("key", "value") is command
        assert command.metadata == {"key": "value"}

    def test_repr(self):
        assert repr(_command("meow")) == "SlashCommand <'meow'>"


class TestAsSlashCommand:
    def test(self):
        result = commandeer.as_slash_command(
            "ban", "Ban someone", arguments=_BanArguments, auto_ack=False, public_ack=True, guild=123
        )(_action)

        assert isinstance(result, commandeer.SlashCommand)
        assert result.callback is _action
        assert result.name == "ban"
        assert result.description == "Ban someone"
        assert result.arguments is _BanArguments
        assert result.auto_ack is False
        assert result.public_ack is True
        assert result.guild == 123

    def test_defaults(self):
        result = commandeer.as_slash_command("ping", "Ping")(_action)

        assert result.arguments is None
        assert result.auto_ack is True
        assert result.public_ack is False
        assert result.guild is None


class TestSlashCommand:
    def test_add_sub_command(self):
        root = _group_root()
        sub_command = _command("child")

        assert root.add_sub_command(sub_command) is root
        assert root.sub_commands == {"child": sub_command}
        assert sub_command.parent is root
        assert sub_command.root is root
        assert sub_command.is_sub_command is True
        assert root.has_children is True

    def test_as_sub_command(self):
        root = _group_root()

        result = root.as_sub_command("child", "A child", public_ack=True)(_action)

        assert root.sub_commands == {"child": result}
        assert result.callback is _action
        assert result.public_ack is True

    def test_add_sub_command_to_sub_command(self):
        root = _group_root()
        child = _command("child")
        root.add_sub_command(child)

        with pytest.raises(commandeer.CommandRegistrationError, match="Sub-commands can't have their own sub-commands"):
            child.add_sub_command(_command("grandchild"))

        assert child.sub_commands == {}

    def test_add_sub_command_when_has_groups(self):
        root = _group_root()
        root.make_group("group", "A group")

        with pytest.raises(commandeer.CommandRegistrationError, match="both groups and sub-commands"):
            root.add_sub_command(_command("child"))

        assert root.sub_commands == {}

    def test_add_sub_command_beyond_limit(self):
        root = _group_root()
        children = [_command(f"child-{index}") for index in range(10)]
        for child in children:
            root.add_sub_command(child)

        extra = _command("child-10")
        with pytest.raises(commandeer.CommandRegistrationError, match="more than 10 sub-commands"):
            root.add_sub_command(extra)

        assert list(root.sub_commands.values()) == children
        assert extra.parent is None

    def test_add_sub_command_with_duplicate_name(self):
        root = _group_root()
        first = _command("child")
        root.add_sub_command(first)

        with pytest.raises(commandeer.CommandRegistrationError, match="already exists"):
            root.add_sub_command(_command("child"))

        assert root.sub_commands == {"child": first}

    def test_add_sub_command_already_added_elsewhere(self):
        child = _command("child")
        _group_root("first").add_sub_command(child)
        other = _group_root("second")

        with pytest.raises(commandeer.CommandRegistrationError, match="already been added to another node"):
            other.add_sub_command(child)

        assert other.sub_commands == {}

    def test_add_sub_command_skips_invalid_child(self):
        root = _group_root()
        invalid = _command("child", "")

        root.add_sub_command(invalid)

        assert root.sub_commands == {}
        assert invalid.parent is None

    def test_add_sub_command_skips_child_with_guild(self):
        root = _group_root()
        child = _command("child", guild=123)

        root.add_sub_command(child)

        assert root.sub_commands == {}

    def test_add_group(self):
        root = _group_root()
        group = commandeer.SlashGroup("group", "A group")

        assert root.add_group(group) is root
        assert root.groups == {"group": group}
        assert group.parent is root

    def test_add_group_when_has_sub_commands(self):
        root = _group_root()
        root.add_sub_command(_command("child"))

        with pytest.raises(commandeer.CommandRegistrationError, match="both groups and sub-commands"):
            root.make_group("group", "A group")

        assert root.groups == {}

    def test_add_group_to_sub_command(self):
        root = _group_root()
        child = _command("child")
        root.add_sub_command(child)

        with pytest.raises(commandeer.CommandRegistrationError, match="Sub-commands can't have groups"):
            child.make_group("group", "A group")

    def test_add_group_beyond_limit(self):
        root = _group_root()
        for index in range(10):
            root.make_group(f"group-{index}", "A group")

        with pytest.raises(commandeer.CommandRegistrationError, match="more than 10 groups"):
            root.make_group("group-10", "A group")

        assert len(root.groups) == 10

    def test_add_group_with_duplicate_name(self):
        root = _group_root()
        root.make_group("group", "A group")

        with pytest.raises(commandeer.CommandRegistrationError, match="already exists"):
            root.make_group("group", "Another group")

    def test_add_group_already_added_elsewhere(self):
        group = _group_root("first").make_group("group", "A group")

        with pytest.raises(commandeer.CommandRegistrationError, match="already been added"):
            _group_root("second").add_group(group)

    def test_sub_command_in_group(self):
        root = _group_root()
        group = root.make_group("group", "A group")
        child = group.as_sub_command("child", "A child")(_action)

        assert group.sub_commands == {"child": child}
        assert child.group is group
        assert child.parent is root
        assert child.root is root
        assert list(child.iter_lineage()) == [root, group, child]

    def test_iter_lineage_for_root(self):
        root = _command("root")

        assert list(root.iter_lineage()) == [root]

    def test_extension_is_inherited_from_root(self):
        extension = commandeer.Extension("ext")
        root = _group_root()
        group = root.make_group("group", "A group")
        child = group.as_sub_command("child", "A child")(_action)

        root.bind_extension(extension)

        assert child.extension is extension
        assert group.extension is extension

    def test_set_callback(self):
        command = _command("meow")

        assert command.set_callback(None) is command
        assert command.callback is None

    def test_with_action(self):
        command = _group_root()

        assert command.with_action(_action) is _action
        assert command.callback is _action

    def test_validate(self):
        root = _group_root()
        root.as_sub_command("child", "A child")(_action)

        root.validate()

    def test_validate_without_description(self):
        with pytest.raises(commandeer.InvalidCommandError, match="must have a description"):
            _command("meow", "").validate()

    def test_validate_with_long_description(self):
        with pytest.raises(commandeer.InvalidCommandError, match="longer than 100 characters"):
            _command("meow", "a" * 101).validate()

    def test_validate_with_action_and_children(self):
        root = _group_root()
        root.add_sub_command(_command("child"))
        root.set_callback(_action)

        with pytest.raises(commandeer.InvalidCommandError, match="both an action and sub-commands or groups"):
            root.validate()

    def test_validate_without_action_or_children(self):
        with pytest.raises(commandeer.InvalidCommandError) as exc_info:
            _group_root().validate()

        assert exc_info.value.name == "root"
        assert exc_info.value.reason == "Commands must have either an action or sub-commands or groups"

    def test_validate_with_empty_group(self):
        root = _group_root()
        root.make_group("group", "A group")

        with pytest.raises(commandeer.InvalidCommandError, match="at least one sub-command") as exc_info:
            root.validate()

        assert exc_info.value.name == "group"

    def test_build_options_puts_required_first(self):
        command = _command("ban", arguments=_BanArguments)

        options = command.build_options()

        assert [option.name for option in options] == ["user", "reason"]
        assert [option.is_required for option in options] == [True, False]
        assert options[0].type is hikari.OptionType.USER

    def test_build_options_without_arguments(self):
        assert _command("ping").build_options() == []

    def test_build(self):
        command = _command("ban", "Ban someone", arguments=_BanArguments)

        builder = command.build()

        assert builder.name == "ban"
        assert builder.description == "Ban someone"
        assert [option.name for option in builder.options] == ["user", "reason"]

    def test_build_with_sub_commands(self):
        root = _group_root()
        root.as_sub_command("ban", "Ban someone", arguments=_BanArguments)(_action)
        root.as_sub_command("kick", "Kick someone")(_action)

        builder = root.build()

        assert [option.type for option in builder.options] == [hikari.OptionType.SUB_COMMAND] * 2
        assert [option.name for option in builder.options] == ["ban", "kick"]
        options = builder.options[0].options
        assert options is not None
        assert [option.name for option in options] == ["user", "reason"]

    def test_build_with_groups(self):
        root = _group_root()
        group = root.make_group("mod", "Moderation")
        group.as_sub_command("ban", "Ban someone", arguments=_BanArguments)(_action)

        builder = root.build()

        assert len(builder.options) == 1
        group_option = builder.options[0]
        assert group_option.type is hikari.OptionType.SUB_COMMAND_GROUP
        assert group_option.name == "mod"
        assert group_option.options is not None
        assert group_option.options[0].type is hikari.OptionType.SUB_COMMAND
        assert group_option.options[0].name == "ban"


class TestSlashGroup:
    def test_add_sub_command_beyond_limit(self):
        group = _group_root().make_group("group", "A group")
        for index in range(10):
            group.add_sub_command(_command(f"child-{index}"))

        with pytest.raises(commandeer.CommandRegistrationError, match="more than 10 sub-commands"):
            group.add_sub_command(_command("child-10"))

        assert len(group.sub_commands) == 10

    def test_add_sub_command_with_duplicate_name(self):
        group = _group_root().make_group("group", "A group")
        group.add_sub_command(_command("child"))

        with pytest.raises(commandeer.CommandRegistrationError, match="already exists in this group"):
            group.add_sub_command(_command("child"))

    def test_add_sub_command_skips_invalid_child(self):
        group = _group_root().make_group("group", "A group")

        group.add_sub_command(_group_root("child"))

        assert group.sub_commands == {}

    def test_validate_without_description(self):
        group = commandeer.SlashGroup("group", "")

        with pytest.raises(commandeer.InvalidCommandError, match="Groups must have a description"):
            group.validate()
