import subprocess

from printbridge.printing.exceptions import SubmissionError


def run_print_command(cmd: list[str], timeout_seconds: float) -> str:
    """Run a print tool and return its stdout.

    Raises:
        SubmissionError: if the tool is missing, times out or exits nonzero.
    """
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout_seconds)
    except subprocess.TimeoutExpired as exc:
        raise SubmissionError(f"{cmd[0]} timed out after {timeout_seconds}s") from exc
    except OSError as exc:
        raise SubmissionError(f"{cmd[0]} could not be started: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()
        raise SubmissionError(f"{cmd[0]} exited with code {proc.returncode}: {detail}")
    return proc.stdout or ""
