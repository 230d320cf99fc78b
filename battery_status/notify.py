from __future__ import annotations

import logging
import subprocess

log = logging.getLogger(__name__)

NOTIFY_COMMAND = "notify-send"


def send_notification(summary: str, body: str, timeout: int = 5) -> bool:
    """Show a desktop notification; failures are logged, not raised."""
    cmd = [NOTIFY_COMMAND, "--app-name=Battery", summary, body]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as exc:
        log.warning("Could not run %s: %s", NOTIFY_COMMAND, exc)
        return False
    if proc.returncode != 0:
        log.warning(
            "%s exited with %d: %s",
            NOTIFY_COMMAND,
            proc.returncode,
            proc.stderr.strip(),
        )
        return False
    return True
