"""Base class for outbound order command sinks."""

from abc import ABC, abstractmethod

import structlog

from ..errors import CommandDeliveryError
from .models import OrderCommand


class CommandSink(ABC):
    """Hands order commands to the execution transport."""

    log_sends = True

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"command.sink.{name}")
        self.sent_count = 0
        self.error_count = 0

    @abstractmethod
    def _send(self, command: OrderCommand) -> None:
        """Transport-specific delivery; raise on failure."""

    def send(self, command: OrderCommand) -> None:
        """
        Send an order command.

        Raises:
            CommandDeliveryError: The transport rejected or failed the send
        """
        try:
            self._send(command)
        except CommandDeliveryError:
            self.error_count += 1
            raise
        except (OSError, ValueError, TypeError) as e:
            self.error_count += 1
            raise CommandDeliveryError(
                f"Failed to send order command: {e}",
                sink_name=self.name,
                direction=command.direction.value
            ) from e

        self.sent_count += 1
        if not self.log_sends:
            return
        self.logger.info(
            "Order command sent",
            sink_name=self.name,
            **command.to_dict()
        )

    def health_check(self) -> bool:
        """Check if the sink can accept commands."""
        return True
