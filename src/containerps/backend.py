"""
External command execution and engine access.

This module is the only place that talks to processes outside containerps:
  - CommandRunner: runs the engine CLI and captures its standard output
  - CommandRunner.fire_and_forget: launches an interactive terminal command
  - DockerBackend: docker SDK wrapper used to check the engine at startup
  - copy_to_clipboard: clipboard sink backed by pbcopy/xclip/wl-copy
  - build_shell_command: platform specific "open a terminal and exec a shell"

Error Handling:
  - Spawn failures and non-zero exits raise ExecutionError with the
    diagnostic text (stderr, falling back to stdout)
  - No retries: a failed invocation surfaces immediately to the caller
  - The engine check and the clipboard never raise; failures are logged
"""

import logging
import platform
import shutil
import subprocess
from typing import List, Optional, Sequence

import docker

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """External command failed to start or exited non-zero."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.command = list(command) if command else []
        self.returncode = returncode

    def __str__(self) -> str:
        return self.message


class CommandRunner:
    def run(self, program: str, args: Sequence[str]) -> str:
        """Run program with args and return its standard output as text."""
        cmd = [program, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, check=False, capture_output=True, text=True,
                                    encoding='utf-8', errors='replace')
        except OSError as e:
            logger.error(f"Failed to spawn {program}: {e}")
            raise ExecutionError(str(e), command=cmd) from e

        if result.returncode != 0:
            message = (result.stderr or result.stdout or f"{program} exited with {result.returncode}").strip()
            logger.error(f"Command failed (exit {result.returncode}): {' '.join(cmd)}: {message}")
            raise ExecutionError(message, command=cmd, returncode=result.returncode)
        return result.stdout

    def fire_and_forget(self, command: Sequence[str]) -> None:
        """Launch command detached; its outcome is neither awaited nor reported."""
        logger.debug(f"Launching: {' '.join(command)}")
        try:
            subprocess.Popen(
                list(command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"Failed to launch {command[0]}: {e}")


class DockerBackend:
    def __init__(self):
        try:
            self.client = docker.from_env()
        except Exception as e:
            logger.warning(f"Docker SDK client unavailable: {e}")
            self.client = None

    def engine_version(self) -> Optional[str]:
        """Return the engine server version, or None if the daemon is unreachable."""
        if not self.client:
            return None
        try:
            version = self.client.version().get("Version")
        except Exception as e:
            logger.warning(f"Container engine did not answer: {e}")
            return None
        logger.info(f"Container engine version {version}")
        return version


def build_shell_command(engine: str, container_id: str, shell: str,
                        launcher: Sequence[str], system: Optional[str] = None) -> List[str]:
    """Command that opens a terminal window running a shell inside the container."""
    system = system or platform.system()
    exec_cmd = [engine, "exec", "-ti", container_id, shell]
    if system == "Darwin":
        script = " ".join(exec_cmd)
        return [
            "osascript",
            "-e", 'tell application "Terminal" to activate',
            "-e", f'tell application "Terminal" to do script "{script}"',
        ]
    return [*launcher, *exec_cmd]


# Tried in order; the first one on PATH receives the text on stdin
CLIPBOARD_COMMANDS = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
)


def copy_to_clipboard(text: str) -> bool:
    if not text.strip():
        return False
    command = next((c for c in CLIPBOARD_COMMANDS if shutil.which(c[0])), None)
    if command is None:
        tools = ", ".join(c[0] for c in CLIPBOARD_COMMANDS)
        logger.warning(f"No clipboard tool found ({tools})")
        return False
    try:
        result = subprocess.run(command, input=text, text=True, check=False)
    except OSError as e:
        logger.error(f"Clipboard copy with {command[0]} failed: {e}")
        return False
    return result.returncode == 0
