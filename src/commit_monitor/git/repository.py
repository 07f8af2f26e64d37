"""Local git working tree: commit resolution, diffs, and checkouts."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from commit_monitor.constants import GIT_EMPTY_TREE
from commit_monitor.errors import RepositoryError
from commit_monitor.git.diff import parse_unified_diff
from commit_monitor.git.schemas import CommitRange, DiffDetails

logger = logging.getLogger(__name__)

# One lock per working tree, shared by every thread and event loop in
# the process. Checkouts of the same tree must not interleave; reviews
# of different trees run freely.
_checkout_locks: dict[Path, threading.Lock] = {}
_registry_lock = threading.Lock()


def _get_checkout_lock(path: Path) -> threading.Lock:
    """Get or create the checkout lock for a working tree."""
    with _registry_lock:
        if path not in _checkout_locks:
            _checkout_locks[path] = threading.Lock()
        return _checkout_locks[path]


@asynccontextmanager
async def _hold_checkout_lock(path: Path) -> AsyncIterator[None]:
    """Hold ``path``'s checkout lock without blocking the event loop."""
    lock = _get_checkout_lock(path)
    acquiring = asyncio.ensure_future(asyncio.to_thread(lock.acquire))
    try:
        await asyncio.shield(acquiring)
    except asyncio.CancelledError:
        # The worker thread still takes the lock; hand it straight back.
        def _release_late(fut: asyncio.Future[bool]) -> None:
            if not fut.cancelled() and fut.result():
                lock.release()

        acquiring.add_done_callback(_release_late)
        raise
    try:
        yield
    finally:
        lock.release()


class GitRepository:
    """Runs git against a working tree on local disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).resolve()

    async def _git(self, *args: str) -> str:
        """Run a git command and return stdout; raise on failure."""
        proc = await asyncio.create_subprocess_exec(
            "git",
            "-C",
            str(self.path),
            "-c",
            "core.quotePath=false",
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            msg = (
                f"git {' '.join(args)} failed in {self.path}: "
                f"{stderr.decode(errors='replace').strip()}"
            )
            raise RepositoryError(msg)
        return stdout.decode(errors="replace")

    async def resolve_commit(self, ref: str) -> str:
        """Return the full SHA for ``ref``; RepositoryError if unknown."""
        try:
            out = await self._git(
                "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"
            )
        except RepositoryError as exc:
            raise RepositoryError(
                f"Unresolvable commit {ref!r} in {self.path}"
            ) from exc
        return out.strip()

    async def _parent_or_empty_tree(self, sha: str) -> str:
        try:
            return await self.resolve_commit(f"{sha}~1")
        except RepositoryError:
            return GIT_EMPTY_TREE

    async def diff_details(self, commit_range: CommitRange) -> DiffDetails:
        """Changed line numbers per file across ``commit_range``.

        The diff base is the parent of the first commit, so the
        first commit's own changes are part of the range.
        """
        first = await self.resolve_commit(commit_range.first)
        last = await self.resolve_commit(commit_range.last)
        base = await self._parent_or_empty_tree(first)

        out = await self._git(
            "diff",
            "--patience",
            "-U0",
            "--no-color",
            "--no-ext-diff",
            "--no-renames",
            "--src-prefix=a/",
            "--dst-prefix=b/",
            base,
            last,
        )
        details = parse_unified_diff(out)
        logger.debug(
            "event=diff_computed base=%s last=%s files=%d",
            base[:12],
            last[:12],
            len(details),
        )
        return details

    async def current_ref(self) -> str:
        """Branch name, or the SHA when HEAD is detached."""
        out = await self._git("rev-parse", "--abbrev-ref", "HEAD")
        ref = out.strip()
        if ref == "HEAD":
            return (await self._git("rev-parse", "HEAD")).strip()
        return ref

    @asynccontextmanager
    async def temporarily_checkout(self, commit: str) -> AsyncIterator[Path]:
        """Check out ``commit`` for the duration of the block.

        Holds this tree's checkout lock throughout and restores the
        previous branch (or detached SHA) on every exit path.
        """
        async with _hold_checkout_lock(self.path):
            sha = await self.resolve_commit(commit)
            previous = await self.current_ref()
            await self._git("checkout", "--quiet", "--detach", sha)
            logger.debug(
                "event=checkout path=%s commit=%s previous=%s",
                self.path,
                sha[:12],
                previous,
            )
            failed = False
            try:
                yield self.path
            except BaseException:
                failed = True
                raise
            finally:
                try:
                    await asyncio.shield(
                        self._git("checkout", "--quiet", previous, "--")
                    )
                except RepositoryError as exc:
                    logger.error(
                        "event=checkout_restore_failed path=%s ref=%s error=%s",
                        self.path,
                        previous,
                        exc,
                    )
                    # Never mask the failure that ended the block.
                    if not failed:
                        raise
                else:
                    logger.debug(
                        "event=checkout_restored path=%s ref=%s",
                        self.path,
                        previous,
                    )
