# ruff: noqa: TC003  # GitCommand needed at runtime for dataclass fields
"""Fake executor for testing.

This module provides a FakeExecutor class that implements CommandExecutor
for use in tests without running git.
"""

from dataclasses import dataclass, field

from codepax.scm._commands import GitCommand


@dataclass(slots=True)
class FakeExecutor:
    """Scripted git executor for testing.

    Responses are keyed by the git arguments (without the binary). A string
    response is returned on every call; a list is consumed one entry per
    call, the last entry repeating once the others are used up. Commands
    without a scripted response print `default`.

    Example:
        >>> from pathlib import Path
        >>> from codepax.scm import CommandBuilder
        >>> fake = FakeExecutor()
        >>> fake.respond("status", output="On branch master\\n")
        >>> fake.respond("remote", "update", output=["error: Could not fetch origin", ""])
        >>> fake.run(CommandBuilder(Path("/srv/app"), "git").status())
        'On branch master\\n'
        >>> fake.calls_for("status")
        [('status',)]
    """

    responses: dict[tuple[str, ...], str | list[str]] = field(default_factory=dict)
    errors: dict[tuple[str, ...], Exception] = field(default_factory=dict)
    default: str = ""
    commands: list[GitCommand] = field(default_factory=list)

    def respond(self, *args: str, output: str | list[str]) -> None:
        """Script the output of the git command with the given arguments."""
        self.responses[args] = list(output) if isinstance(output, list) else output

    def fail(self, *args: str, error: Exception) -> None:
        """Make the git command with the given arguments raise `error`."""
        self.errors[args] = error

    def run(self, command: GitCommand) -> str:
        self.commands.append(command)

        error = self.errors.get(command.args)
        if error is not None:
            raise error

        response = self.responses.get(command.args, self.default)
        if isinstance(response, list):
            if not response:
                return self.default
            return response.pop(0) if len(response) > 1 else response[0]
        return response

    @property
    def calls(self) -> list[tuple[str, ...]]:
        """Arguments of every command run so far, in order."""
        return [command.args for command in self.commands]

    def calls_for(self, subcommand: str) -> list[tuple[str, ...]]:
        """Arguments of every command run so far with the given subcommand."""
        return [
            command.args for command in self.commands if command.subcommand == subcommand
        ]
