"""Subprocess runner for external tools (ffprobe, ffmpeg, montage, convert)."""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from pathlib import Path
from typing import Callable

from spriteatlas.core.errors import ExternalToolError

logger = logging.getLogger(__name__)

_TAIL = 500


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int = 3600,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command once, with logging and error handling.

    A missing executable, a timeout or (with ``check``) a non-zero exit
    status raises ``ExternalToolError``. Nothing is retried.
    """
    cmd_str = " ".join(str(c) for c in cmd)
    logger.info(f"Running: {cmd_str}")

    try:
        result = subprocess.run(
            [str(c) for c in cmd],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise ExternalToolError(f"Executable not found: {cmd[0]}", cmd=cmd_str) from e
    except subprocess.TimeoutExpired as e:
        raise ExternalToolError(f"Timed out after {timeout}s: {cmd_str}", cmd=cmd_str) from e

    if result.stdout:
        logger.debug(f"stdout: {result.stdout[-_TAIL:]}")
    if result.stderr:
        logger.debug(f"stderr: {result.stderr[-_TAIL:]}")

    if check and result.returncode != 0:
        raise ExternalToolError(
            f"{cmd[0]} exited with code {result.returncode}",
            cmd=cmd_str,
            returncode=result.returncode,
            stderr=result.stderr[-_TAIL:] if result.stderr else "",
        )
    return result


def stream_command(
    cmd: list[str],
    on_stderr: Callable[[str], None],
    cwd: Path | None = None,
    timeout: int = 3600,
) -> int:
    """Run a command and feed its stderr to ``on_stderr`` chunk by chunk.

    ffmpeg writes ``-stats`` progress lines terminated by carriage returns,
    so output is read in chunks rather than lines. Non-zero exit raises
    ``ExternalToolError``; returns the exit code (always 0) otherwise.
    """
    cmd_str = " ".join(str(c) for c in cmd)
    logger.info(f"Running: {cmd_str}")

    try:
        proc = subprocess.Popen(
            [str(c) for c in cmd],
            cwd=cwd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as e:
        raise ExternalToolError(f"Executable not found: {cmd[0]}", cmd=cmd_str) from e

    # Reader thread feeds stderr chunks; None marks EOF.
    chunks: queue.Queue[str | None] = queue.Queue()

    def _pump(stream) -> None:
        with stream:
            for chunk in iter(lambda: stream.read(256), ""):
                chunks.put(chunk)
        chunks.put(None)

    threading.Thread(target=_pump, args=(proc.stderr,), daemon=True).start()

    deadline = time.monotonic() + timeout
    tail = ""
    try:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise subprocess.TimeoutExpired(cmd_str, timeout)
            try:
                chunk = chunks.get(timeout=remaining)
            except queue.Empty:
                continue
            if chunk is None:
                break
            tail = (tail + chunk)[-_TAIL:]
            on_stderr(chunk)
        returncode = proc.wait(timeout=max(deadline - time.monotonic(), 0))
    except subprocess.TimeoutExpired as e:
        raise ExternalToolError(f"Timed out after {timeout}s: {cmd_str}", cmd=cmd_str) from e
    finally:
        if proc.poll() is None:
            proc.kill()
        proc.wait()

    logger.debug(f"stderr: {tail}")
    if returncode != 0:
        raise ExternalToolError(
            f"{cmd[0]} exited with code {returncode}",
            cmd=cmd_str,
            returncode=returncode,
            stderr=tail,
        )
    return returncode
