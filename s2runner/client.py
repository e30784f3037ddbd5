"""Subprocess client for a long-running ``s2runner serve`` process.

Sends one command line at a time over the child's stdin and collects the
output lines up to the ``.`` sentinel.
"""

from __future__ import annotations

import subprocess
import sys
from typing import List, Optional, Sequence, Tuple

from .errors import RemoteCommandError, RunnerProcessError
from .geo import LatLng
from .loop import ERROR_PREFIX, SENTINEL


def default_command(config_path: Optional[str] = None) -> List[str]:
    """Argv for a keep-going runner using the current interpreter."""
    cmd = [sys.executable, "-m", "s2runner", "serve", "--keep-going"]
    if config_path is not None:
        cmd += ["--config", str(config_path)]
    return cmd


class RunnerClient:
    """Drives a runner subprocess over pipes.

    Usage:
        with RunnerClient() as runner:
            cells = runner.get_cells(LatLng(40.0, -74.0), LatLng(40.01, -73.99))
    """

    def __init__(self, command: Optional[Sequence[str]] = None, config_path: Optional[str] = None):
        self.command = list(command) if command is not None else default_command(config_path)
        try:
            self.proc: Optional[subprocess.Popen] = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=None,  # inherit, diagnostics go to our stderr
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise RunnerProcessError(f"Cannot create runner process: {e}") from e

    @property
    def is_running(self) -> bool:
        return self.proc is not None and self.proc.poll() is None

    def run_command(self, command: str) -> List[str]:
        """Send one command and return the lines printed before the sentinel.

        Raises:
            RunnerProcessError: If the process has exited or output ends early.
            RemoteCommandError: If the runner answered with an error line.
        """
        if not self.is_running:
            raise RunnerProcessError("The runner process has been terminated")
        try:
            self.proc.stdin.write(command.strip() + "\n")
            self.proc.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            raise RunnerProcessError(f"Cannot write to the runner input: {e}") from e

        buffer = []
        while True:
            line = self.proc.stdout.readline()
            if not line:
                raise RunnerProcessError("Error reading from the runner output")
            line = line.strip()
            if not line:
                continue
            if line == SENTINEL:
                break
            buffer.append(line)

        if buffer and buffer[0].startswith(ERROR_PREFIX):
            kind, _, message = buffer[0][len(ERROR_PREFIX):].partition(": ")
            raise RemoteCommandError(kind, message)
        return buffer

    def get_cells(self, sw: LatLng, ne: LatLng) -> List[str]:
        """Hex ids of the cells covering the rectangle ``sw``..``ne``."""
        return self.run_command("cells %f %f %f %f" % (sw.lat, sw.lng, ne.lat, ne.lng))

    def parse_glob(self, glob: str) -> Tuple[LatLng, int]:
        """Decode a composite identifier into its position and amount."""
        lat, lng, amount = self.run_command(f"glob {glob}")
        return LatLng(float(lat), float(lng)), int(amount)

    def close(self) -> None:
        """Ask the runner to exit, then reap it."""
        if self.proc is None:
            return
        proc, self.proc = self.proc, None
        try:
            if proc.poll() is None:
                proc.stdin.write("exit\n")
            proc.stdin.close()
        except OSError:
            pass  # child already gone, nothing left to tell it
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.terminate()
            proc.wait()
        proc.stdout.close()

    def __enter__(self) -> "RunnerClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
