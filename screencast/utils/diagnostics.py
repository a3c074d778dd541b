"""
FFmpeg Diagnostic Classification

Decides whether a line FFmpeg wrote to stderr reports a failure.

FFmpeg writes everything (banner, stream info, progress, errors) to stderr
and has no structured error channel, so this is a keyword heuristic. It is
the only place that inspects stderr text; swap it for a parser of
`-progress`/`-report` output if false positives become a problem.
"""

import re

# Lowercase fragments FFmpeg uses in fatal or input-opening errors
FAILURE_MARKERS = (
    "error",
    "failed",
    "invalid argument",
    "could not",
    "cannot open",
    "no such file or directory",
    "permission denied",
    "device or resource busy",
    "unknown input format",
    "conversion failed",
)

# Lines that contain a marker word but are not failures
_BENIGN = re.compile(r"error[-_ ]?(resilience|concealment|detection)|err_detect", re.IGNORECASE)


def is_failure_line(line: str) -> bool:
    """
    Check if a stderr line reports a failure.

    Example:
        is_failure_line("[x11grab @ 0x55] Cannot open display :9, error 1.")  # True
        is_failure_line("frame=  120 fps= 30 q=-1.0 size=512kB")               # False
    """
    text = line.strip().lower()
    if not text or _BENIGN.search(text):
        return False
    return any(marker in text for marker in FAILURE_MARKERS)
