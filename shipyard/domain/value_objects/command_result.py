from dataclasses import dataclass
from enum import Enum


class PortStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class CommandResult:
    """
    Value Object holding the outcome of one shell command.
    `output` is the raw transcript, `response` the trimmed stdout.
    """
    output: str = ""
    response: str = ""

    @staticmethod
    def from_stdout(stdout: str, stderr: str = "") -> "CommandResult":
        output = stdout if not stderr else f"{stdout}{stderr}"
        return CommandResult(output=output, response=stdout.strip())
