"""Running a loader installer jar as a subprocess.

The installer is run headless with ``--installClient``. Both output streams
are drained concurrently into a dedicated logger while the process is awaited;
callers see a single blocking call that returns the exit code. There is no
timeout: a hung installer blocks the caller.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import List

_STREAM_LIMIT = 1024 * 1024


def installer_command(java_executable: str, installer_path: str, output_dir: str) -> List[str]:
    return [java_executable, "-jar", installer_path, "--installClient", output_dir]


async def _drain(stream: asyncio.StreamReader, log: logging.Logger, level: int) -> None:
    while True:
        line = await stream.readline()
        if not line:
            break
        text = line.decode("utf-8", errors="replace").strip()
        if text:
            log.log(level, text)


async def _run(cmd: List[str], cwd: str, log: logging.Logger) -> int:
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        limit=_STREAM_LIMIT,
    )
    try:
        await asyncio.gather(
            _drain(proc.stdout, log, logging.INFO),
            _drain(proc.stderr, log, logging.ERROR),
        )
    except BaseException:
        # Never leave the installer running or unreaped behind a failed drain.
        if proc.returncode is None:
            proc.kill()
        await proc.wait()
        raise
    return await proc.wait()


def run_installer(java_executable: str, installer_path: str, output_dir: str, logger_name: str) -> int:
    """Run the installer and return its exit code.

    A non-zero exit code is logged, not raised; success is judged by the
    files the installer leaves behind.
    """
    log = logging.getLogger(logger_name)
    cmd = installer_command(java_executable, installer_path, output_dir)
    code = asyncio.run(_run(cmd, os.path.dirname(installer_path), log))
    if code == 0:
        log.info("Installer exited with code %s", code)
    else:
        log.warning("Installer exited with code %s", code)
    return code
