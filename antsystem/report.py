from __future__ import annotations
import logging
from typing import Optional, Sequence

from .aco_base import ACOResult


def format_tour(tour: Sequence[int], per_line: int = 20) -> str:
    """Cities right-aligned in width 3, ``per_line`` to a line."""
    lines = []
    for k in range(0, len(tour), per_line):
        lines.append("".join(f"{c:3d}" for c in tour[k:k + per_line]))
    return "\n".join(lines)


def report_result(result: ACOResult, logger: Optional[logging.Logger] = None) -> None:
    logger = logger or logging.getLogger("antsystem")
    logger.info("Best length: %d", result.best_length)
    logger.info("Best tour:\n%s", format_tour(result.best_tour))
    logger.info("Elapsed: %.0f ms", result.elapsed_sec * 1000.0)
