import logging
import os
import shlex
import subprocess  # nosec B404 # - runs the user's configured ssh client
import sys
from typing import List, Optional, Protocol

from pydantic import ValidationError

from sshpick.common.errors import ProcessError
from sshpick.common.models import DEFAULT_PORT, TargetRecord

logger = logging.getLogger(__name__)

DEFAULT_SSH_COMMAND = "ssh"


class ProcessLauncher(Protocol):
    def connect(self, user: str, host: str, port: int) -> None: ...


def build_command(command: str, user: str, host: str, port: int = DEFAULT_PORT) -> List[str]:
    """
    Build the argv for connecting to ``user@host``, adding ``-p`` only for non-default ports.

    Raises:
        ProcessError: if ``command`` cannot be split or the target is invalid.
    """
    try:
        argv = shlex.split(command) or [DEFAULT_SSH_COMMAND]
    except ValueError as e:
        raise ProcessError(f"invalid connection command {command!r}: {e}") from e
    try:
        target = TargetRecord(user=user, host=host, port=port)
    except ValidationError as e:
        raise ProcessError(f"invalid target {user}@{host}:{port}: {e}") from e
    argv.extend(target.ssh_args())
    return argv


class SshLauncher:
    """Runs the ssh client in the foreground and waits for it to exit."""

    def __init__(self, command: str = DEFAULT_SSH_COMMAND, env: Optional[dict] = None):
        self.command = command
        self.env = env
        self.last_returncode: Optional[int] = None

    def connect(self, user: str, host: str, port: int = DEFAULT_PORT) -> None:
        """
        Hand the terminal to the connection command until it exits.

        Raises:
            ProcessError: if the command cannot be started or exits non-zero.
        """
        argv = build_command(self.command, user, host, port)
        logger.info(f"Launching: {shlex.join(argv)}")
        try:
            completed = subprocess.run(argv, env=self.env, check=False)  # nosec B603
        except OSError as e:
            raise ProcessError(f"could not start {argv[0]}: {e}") from e
        finally:
            self._restore_terminal()

        self.last_returncode = completed.returncode
        if completed.returncode != 0:
            raise ProcessError(
                f"{argv[0]} exited with status {completed.returncode}",
                returncode=completed.returncode,
            )
        logger.info(f"{argv[0]} exited normally")

    def _restore_terminal(self) -> None:
        # The child shares stdin with us and may leave it non-blocking.
        try:
            os.set_blocking(sys.stdin.fileno(), True)
        except (OSError, ValueError, AttributeError) as e:
            logger.debug(f"Could not restore blocking stdin: {e}")
