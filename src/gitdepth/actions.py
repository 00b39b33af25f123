"""GitHub Actions workflow commands and step outputs."""

import os
import sys
from contextlib import contextmanager
from typing import Iterator, Union

from loguru import logger


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything logged inside the block under ``title``."""
    print(f"::group::{title}", flush=True)
    try:
        yield
    finally:
        print("::endgroup::", flush=True)


def warning(message: str) -> None:
    logger.warning(message)
    print(f"::warning::{message}", flush=True)


def set_failed(message: str) -> None:
    """Mark the step as failed. The caller is responsible for the exit code."""
    logger.error(message)
    print(f"::error::{message}", flush=True)


def set_output(name: str, value: Union[str, int]) -> None:
    """Expose ``value`` as step output ``name``.

    Appends to the file named by GITHUB_OUTPUT, or writes to stdout when the
    variable is unset (local runs).
    """
    line = f"{name}={value}\n"
    output_path = os.environ.get("GITHUB_OUTPUT")
    if output_path:
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(line)
    else:
        sys.stdout.write(line)
    logger.debug(f"Set output {name}={value}")
