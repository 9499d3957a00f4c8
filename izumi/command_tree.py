"""A tree of named commands and the dispatch of command lines through it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

ArglistCallback = Callable[[Any, Sequence[str]], bool]
NoArgsCallback = Callable[[Any], bool]


@dataclass(frozen=True)
class ArglistCommand:
    """A command taking any number of arguments."""

    name: str
    callback: ArglistCallback


@dataclass(frozen=True)
class FixedArglistCommand:
    """A command taking exactly ``argc`` arguments."""

    name: str
    argc: int
    callback: ArglistCallback


@dataclass(frozen=True)
class NoArgsCommand:
    """A command taking no arguments."""

    name: str
    callback: NoArgsCallback


@dataclass(frozen=True)
class SubCommand:
    """A command whose first argument names one of its subcommands."""

    name: str
    subcommands: Sequence["Command"]


@dataclass(frozen=True)
class AliasCommand:
    """Another name for a command listed after it in the same table."""

    name: str
    real_cmd: str


Command = Union[ArglistCommand, FixedArglistCommand, NoArgsCommand, SubCommand, AliasCommand]


def command_arg_count(command: str) -> int:
    """Return the number of arguments after the command name; -1 when empty."""
    return len(command.split()) - 1


def split_command_arguments(command: str) -> list[str]:
    """Split a command line into its name followed by its arguments."""
    return command.split()


def traverse_command_tree(
    app_data: Any,
    commands: Sequence[Command],
    command_name: str,
    args: Sequence[str],
) -> bool:
    """Run the command called ``command_name``; False if none ran or it failed."""
    for position, command in enumerate(commands):
        if command.name != command_name:
            continue
        match command:
            case ArglistCommand(callback=callback):
                return callback(app_data, args)
            case FixedArglistCommand(argc=argc, callback=callback):
                return len(args) == argc and callback(app_data, args)
            case NoArgsCommand(callback=callback):
                return not args and callback(app_data)
            case SubCommand(subcommands=subcommands):
                if not args:
                    return False
                return traverse_command_tree(app_data, subcommands, args[0], args[1:])
            case AliasCommand(real_cmd=real_cmd):
                return traverse_command_tree(
                    app_data, commands[position + 1 :], real_cmd, args
                )
    return False


def run_command(app_data: Any, commands: Sequence[Command]) -> bool:
    """Run the command line held in ``app_data.command`` against ``commands``."""
    words = split_command_arguments(app_data.command)
    if not words:
        return False
    name, *args = words
    return traverse_command_tree(app_data, commands, name, args)