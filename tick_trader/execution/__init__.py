"""Outbound order commands and the sinks that deliver them."""

from .base import CommandSink
from .models import OrderCommand
from .sinks import FileCommandSink, RecordingCommandSink, StdoutCommandSink

__all__ = [
    "CommandSink",
    "OrderCommand",
    "FileCommandSink",
    "RecordingCommandSink",
    "StdoutCommandSink",
]
