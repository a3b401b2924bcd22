"""Bounded per-file fan-out over a thread pool.

Each task opens its own repository handle through the injected factory and
returns its result through its future. Nothing is merged until every task
has finished.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, Optional, Sequence, TypeVar

from ..core.progress import ProgressCallback, ProgressCounter
from ..exceptions import BlameError, InvalidConfigError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..vcs.repository import GitRepository

logger = get_logger(__name__)

DEFAULT_CONCURRENCY = 10

T = TypeVar("T")

RepoFactory = Callable[[], "GitRepository"]


@dataclass
class FanOutResult(Generic[T]):
    results: dict[str, T] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)


def run_per_file(
    files: Sequence[str],
    repo_factory: RepoFactory,
    work: Callable[["GitRepository", str], T],
    concurrency: int = DEFAULT_CONCURRENCY,
    on_progress: Optional[ProgressCallback] = None,
) -> FanOutResult[T]:
    """Run ``work(repo, path)`` once per file on at most ``concurrency`` threads.

    A ``BlameError`` drops that file and is logged; any other exception
    propagates once the pool has drained. Progress advances exactly once per
    file whatever the outcome.

    Raises:
        InvalidConfigError: ``concurrency`` is below 1
    """
    if concurrency < 1:
        raise InvalidConfigError("concurrency", concurrency, "must be at least 1")

    outcome: FanOutResult[T] = FanOutResult()
    if not files:
        return outcome

    counter = ProgressCounter(len(files), on_progress)

    def _task(path: str) -> Optional[T]:
        start = time.perf_counter()
        try:
            repo = repo_factory()
            result = work(repo, path)
            logger.debug("Processed %s in %.3fs", path, time.perf_counter() - start)
            return result
        except BlameError as e:
            logger.warning("Skipping %s: %s", path, e)
            return None
        finally:
            counter.advance(path)

    with ThreadPoolExecutor(max_workers=min(concurrency, len(files))) as executor:
        futures = {executor.submit(_task, path): path for path in files}
        completed = [(futures[f], f) for f in as_completed(futures)]

    # Join barrier passed: every task has finished
    for path, future in completed:
        result = future.result()
        if result is None:
            outcome.failed.append(path)
        else:
            outcome.results[path] = result

    outcome.failed.sort()
    logger.info(
        "Processed %d files (%d failed) with %d workers",
        len(files),
        len(outcome.failed),
        concurrency,
    )
    return outcome
