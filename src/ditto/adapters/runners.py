"""Subprocess adapter running the external converter with a bounded wait."""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import signal
import subprocess
import time
from pathlib import Path

from ditto.application.ports import ProcessOutcome
from ditto.application.requests import CancellationToken
from ditto.errors import BinaryNotFoundError
from ditto.types import CommandArgs

logger = logging.getLogger(__name__)

DEFAULT_KILL_GRACE_SECONDS = 5.0
DEFAULT_POLL_INTERVAL_SECONDS = 0.1

_POSIX = os.name == "posix"


class SubprocessExternalConverter:
    """Run the converter via :class:`subprocess.Popen`.

    The child is started in its own session on POSIX so the whole process
    group (``soffice`` forks ``soffice.bin``) can be terminated on timeout
    or cancellation.
    """

    def __init__(
        self,
        *,
        kill_grace: float = DEFAULT_KILL_GRACE_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._kill_grace = kill_grace
        self._poll_interval = poll_interval

    def run(
        self,
        args: CommandArgs,
        timeout: float,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessOutcome:
        """Run ``args`` until exit, ``timeout`` seconds, or cancellation.

        Raises
        ------
        BinaryNotFoundError
            If the executable cannot be started.
        """
        argv = tuple(args)
        logger.debug("spawning converter: %s", shlex.join(argv))
        started = time.monotonic()
        deadline = started + timeout
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=_POSIX,
            )
        except OSError as exc:
            raise BinaryNotFoundError((argv[0],), override=Path(argv[0])) from exc

        timed_out = False
        cancelled = False
        while True:
            wait = min(self._poll_interval, max(deadline - time.monotonic(), 0.0))
            try:
                stdout, stderr = proc.communicate(timeout=wait)
                break
            except subprocess.TimeoutExpired:
                if cancel_token is not None and cancel_token.cancelled:
                    cancelled = True
                elif time.monotonic() >= deadline:
                    timed_out = True
                else:
                    continue
                stdout, stderr = self._terminate(proc)
                break

        duration = time.monotonic() - started
        logger.debug(
            "converter finished: returncode=%s duration=%.2fs timed_out=%s cancelled=%s",
            proc.returncode,
            duration,
            timed_out,
            cancelled,
        )
        return ProcessOutcome(
            args=argv,
            returncode=proc.returncode,
            stdout=stdout or "",
            stderr=stderr or "",
            duration=duration,
            timed_out=timed_out,
            cancelled=cancelled,
        )

    def _terminate(self, proc: subprocess.Popen[str]) -> tuple[str, str]:
        """Terminate the child, escalating to kill after the grace period."""
        self._signal(proc, signal.SIGTERM)
        try:
            return proc.communicate(timeout=self._kill_grace)
        except subprocess.TimeoutExpired:
            logger.warning("converter pid=%s ignored SIGTERM; killing", proc.pid)
            self._signal(proc, signal.SIGKILL if _POSIX else signal.SIGTERM)
            return proc.communicate()

    @staticmethod
    def _signal(proc: subprocess.Popen[str], sig: int) -> None:
        with contextlib.suppress(ProcessLookupError):
            if _POSIX:
                os.killpg(proc.pid, sig)
            elif sig == signal.SIGTERM:
                proc.terminate()
            else:
                proc.kill()
