# scene_logger.py
#
# Parser-wide logger. Every module logs through write_log(level, msg).
#
# Lines are appended to the configured log file as
#   2026-01-01 12:00:00 [Warning] message
# and echoed to stderr in verbose mode. capture_log() collects the records
# emitted on the current thread so a parse call can hand them back to its
# caller.

import datetime
import os
import sys
import threading
from contextlib import contextmanager

_lock = threading.Lock()
_local = threading.local()

_settings = {
    "log_file": None,
    "verbose": False,
}


def _timestamp():
    return datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _ensure_log_dir(log_file):
    log_dir = os.path.dirname(os.path.abspath(log_file))
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)


def init(log_file=None, verbose=False):
    """Configure the log file and stderr echo. Passing None disables file output."""
    if log_file:
        _ensure_log_dir(log_file)
    with _lock:
        _settings["log_file"] = log_file
        _settings["verbose"] = bool(verbose)
    if log_file:
        write_log("Init", f"Logging started: {log_file}")


def write_log(level, msg):
    # Debug records exist only in verbose mode
    if level == "Debug" and not _settings["verbose"]:
        return
    line = f"{_timestamp()} [{level}] {msg}"

    for records in getattr(_local, "captures", ()):
        records.append((level, msg))

    with _lock:
        log_file = _settings["log_file"]
        verbose = _settings["verbose"]
        if log_file:
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")
    if verbose:
        print(line, file=sys.stderr)


@contextmanager
def capture_log():
    """
    Collect (level, msg) tuples written on this thread while the block runs.

    Nested captures each receive every record.
    """
    records = []
    captures = getattr(_local, "captures", None)
    if captures is None:
        captures = _local.captures = []
    captures.append(records)
    try:
        yield records
    finally:
        captures.pop()


@contextmanager
def log_settings(log_file=None, verbose=False):
    """
    Add a log file and / or verbose echo for the duration of the block,
    on top of what init() configured. The previous settings come back
    afterwards.
    """
    if log_file:
        _ensure_log_dir(log_file)
    with _lock:
        saved = dict(_settings)
        if log_file:
            _settings["log_file"] = log_file
        _settings["verbose"] = saved["verbose"] or bool(verbose)
    try:
        yield
    finally:
        with _lock:
            _settings.update(saved)
