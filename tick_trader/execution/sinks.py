"""Order command sink implementations."""

import fcntl
import json
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ..errors import CommandDeliveryError
from .base import CommandSink
from .models import OrderCommand

FORMATS = ("command", "transaction")


def _render(command: OrderCommand, fmt: str) -> dict[str, Any]:
    if fmt == "transaction":
        return command.to_transaction()
    return command.to_dict()


class StdoutCommandSink(CommandSink):
    """
    Prints each command as one JSON line on a stream (stdout by default).

    The stream carries only commands, so sends are not logged here; run
    configure_logging(stream=sys.stderr) to keep engine logs off it too.
    """

    log_sends = False

    def __init__(self, name: str = "stdout", fmt: str = "command", stream: Optional[TextIO] = None):
        super().__init__(name)
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported format: {fmt}")
        self.fmt = fmt
        self.stream = stream

    def _output(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _send(self, command: OrderCommand) -> None:
        print(json.dumps(_render(command, self.fmt)), file=self._output(), flush=True)

    def health_check(self) -> bool:
        try:
            return self._output().writable()
        except (OSError, ValueError):
            return False


class FileCommandSink(CommandSink):
    """Appends each command to a JSON-lines file."""

    def __init__(self, output_path: Union[str, Path], name: str = "file",
                 fmt: str = "command", create_dirs: bool = True):
        super().__init__(name)
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported format: {fmt}")
        self.fmt = fmt
        self.output_path = Path(output_path)

        if create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def _send(self, command: OrderCommand) -> None:
        with open(self.output_path, "a") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            json.dump(_render(command, self.fmt), f)
            f.write("\n")

    def health_check(self) -> bool:
        try:
            test_file = self.output_path.parent / ".health_check_test"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except OSError as e:
            self.logger.warning(
                "Health check failed",
                sink_name=self.name,
                error=str(e)
            )
            return False


class RecordingCommandSink(CommandSink):
    """Keeps sent commands in memory; used for dry runs and tests."""

    def __init__(self, name: str = "recording", fail: bool = False):
        super().__init__(name)
        self.commands: list[OrderCommand] = []
        self.fail = fail

    def _send(self, command: OrderCommand) -> None:
        if self.fail:
            raise CommandDeliveryError(
                "Recording sink configured to fail",
                sink_name=self.name,
                direction=command.direction.value
            )
        self.commands.append(command)
