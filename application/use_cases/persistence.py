"""
Best-effort persistence shared by the use cases.

State is mutated in memory first; writes happen afterwards and a failure
only means "not yet persisted". Nothing is rolled back and nothing is
retried here.
"""
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


def persist_best_effort(label: str, write: Callable[..., Any], *args: Any) -> bool:
    """
    Call a repository write, logging instead of raising on failure.

    Args:
        label: What is being written, for log messages
        write: Repository method returning a truthy value on success
        *args: Arguments for ``write``

    Returns:
        True if the write reported success
    """
    try:
        ok = write(*args)
    except Exception as e:
        logger.error(f"Persisting {label} failed: {e}")
        return False
    if not ok:
        logger.warning(f"Persisting {label} failed; in-memory state kept")
    return bool(ok)
