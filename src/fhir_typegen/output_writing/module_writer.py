"""Concurrent persistence of generated modules."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path

from fhir_typegen.module_rendering.module_models import Module

logger = logging.getLogger(__name__)

FileWriter = Callable[[Path, str], None]


@dataclass(frozen=True)
class WriteFailure:
    """Destination that could not be written, with the underlying error text."""

    destination: Path
    error_message: str


class ModuleWriteError(Exception):
    """Raised after all writes finished when at least one of them failed.

    Modules that were written successfully are left in place.
    """

    def __init__(self, failures: Sequence[WriteFailure]) -> None:
        details = "; ".join(
            f"{failure.destination}: {failure.error_message}" for failure in failures
        )
        super().__init__(f"Failed to write {len(failures)} module(s): {details}")
        self.failures = tuple(failures)


def write_modules(
    modules: Sequence[Module],
    output_dir: Path | str,
    *,
    parallelism: int = 4,
    write_file: FileWriter | None = None,
) -> list[Path]:
    """Write every module to `<output_dir>/<name>.py` concurrently.

    Returns the written paths in module order. No ordering holds between the
    writes themselves.
    """
    destination_dir = Path(output_dir)
    destination_dir.mkdir(parents=True, exist_ok=True)
    writer = write_file or _write_text
    destinations = [destination_dir / module.filename for module in modules]

    futures = {}
    with ThreadPoolExecutor(max_workers=max(1, parallelism)) as executor:
        for module, destination in zip(modules, destinations):
            future = executor.submit(writer, destination, module.text)
            futures[future] = destination
        wait(futures.keys())

    failures = []
    for future, destination in futures.items():
        error = future.exception()
        if error is not None:
            failures.append(WriteFailure(destination=destination, error_message=str(error)))
        else:
            logger.debug("Wrote %s", destination)
    if failures:
        failures.sort(key=lambda failure: str(failure.destination))
        raise ModuleWriteError(failures)
    return destinations


def _write_text(destination: Path, text: str) -> None:
    destination.write_text(text, encoding="utf-8")
