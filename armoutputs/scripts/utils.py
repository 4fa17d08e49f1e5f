from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class CmdError(Exception):
    pass


def run(cmd: List[str], cwd: Optional[str]) -> str:
    """Execute a command, stream both pipes, and return ONLY stdout text.

    Important: Some callers JSON-parse the return; never mix stderr into it.
    """
    logger.info("Running: %s", " ".join(cmd))
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            bufsize=1,
        )
    except FileNotFoundError as ex:
        raise CmdError(f"Executable not found: {cmd[0]}") from ex

    stdout_buf: List[str] = []

    def pump(pipe, tag: str) -> None:
        try:
            for line in iter(pipe.readline, ""):
                line = line.rstrip()
                if not line:
                    continue
                # Echo to console
                if tag == "stdout":
                    stdout_buf.append(line)
                    logger.info(line)
                else:
                    logger.warning(line)
        finally:
            pipe.close()

    t_out = threading.Thread(target=pump, args=(proc.stdout, "stdout"), daemon=True)
    t_err = threading.Thread(target=pump, args=(proc.stderr, "stderr"), daemon=True)
    t_out.start()
    t_err.start()
    rc = proc.wait()
    t_out.join()
    t_err.join()

    out_text = "\n".join(stdout_buf).strip()
    if rc != 0:
        raise CmdError(f"Command failed ({rc}): {' '.join(cmd)}\nSTDOUT:\n{out_text}")
    return out_text


def cdktf(project_dir: Path, args: List[str]) -> str:
    return run(["cdktf", *args], cwd=str(project_dir))
