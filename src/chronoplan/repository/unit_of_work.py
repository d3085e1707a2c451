# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from typing import Any, Iterator, Protocol


class Snapshottable(Protocol):
    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...

    def release(self) -> None: ...


@contextmanager
def atomic(*repositories: Snapshottable) -> Iterator[None]:
    """Apply every change made inside the block to ``repositories``, or none of them.

    Each repository marks its in-memory state on entry and records only what
    the block changes; if the block raises, those changes are undone and the
    exception is re-raised unchanged. Blocks over the same repository do not
    nest.
    """
    snapshots = [repository.snapshot() for repository in repositories]
    try:
        yield
    except BaseException:
        for repository, snapshot in zip(repositories, snapshots):
            repository.restore(snapshot)
        raise
    else:
        for repository in repositories:
            repository.release()
