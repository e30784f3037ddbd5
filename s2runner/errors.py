"""Error kinds raised while parsing and executing runner commands."""


class CommandError(ValueError):
    """Base class for a rejected command line.

    The ``kind`` is the name written in keep-going error lines
    (``! <kind>: <message>``) and in fatal CLI errors.
    """

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidInput(CommandError):
    """The line has no separator between verb and parameters."""


class UnknownCommand(CommandError):
    """The verb is not one of the supported commands."""


class InvalidArgumentCount(CommandError):
    """Wrong number of parameters for the verb."""


class InvalidNumber(CommandError):
    """A parameter is not a finite decimal number."""


class InvalidIdentifier(CommandError):
    """A composite identifier has a malformed prefix or amount slice."""


class RemoteCommandError(CommandError):
    """An error line returned by a runner process in keep-going mode."""

    def __init__(self, remote_kind: str, message: str):
        super().__init__(message)
        self.remote_kind = remote_kind

    @property
    def kind(self) -> str:
        return self.remote_kind


class RunnerProcessError(RuntimeError):
    """The runner subprocess is gone or its output cannot be read."""
