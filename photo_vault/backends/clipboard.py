"""System clipboard through the platform's copy command."""

import asyncio
import logging
import shutil
from typing import Optional

from ..errors import ClipboardDenied
from .base import Clipboard

logger = logging.getLogger(__name__)

# first available wins
COPY_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def find_copy_command() -> Optional[list[str]]:
    for cmd in COPY_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None


class CommandClipboard(Clipboard):
    def __init__(self, command: list[str], timeout: float = 5.0):
        self.command = command
        self.timeout = timeout

    async def write_text(self, text: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ClipboardDenied(f"cannot run {self.command[0]}: {e}") from e

        try:
            _, stderr = await asyncio.wait_for(
                proc.communicate(text.encode("utf-8")), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise ClipboardDenied(f"{self.command[0]} timed out") from None

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardDenied(f"{self.command[0]} exited {proc.returncode}: {detail}")
