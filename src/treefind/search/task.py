"""Background search tasks and the engine that spawns them."""

from __future__ import annotations

import concurrent.futures
import itertools
import threading
from dataclasses import dataclass

from treefind.errors import CompileError
from treefind.runtime_logging import get_runtime_logger
from treefind.search.channel import DeliveryChannel, SearchCompleted, SearchFailed
from treefind.search.pattern import CompiledPattern, compile_pattern
from treefind.search.scanner import scan


@dataclass(frozen=True, slots=True)
class SearchRequest:
    request_id: int
    root_path: str
    pattern: str


class SearchTask:
    """One scan, run on a worker, delivering exactly one outcome."""

    def __init__(
        self,
        request: SearchRequest,
        matcher: CompiledPattern,
        channel: DeliveryChannel,
        *,
        follow_symlinks: bool = False,
    ) -> None:
        self.request = request
        self.matcher = matcher
        self.channel = channel
        self.follow_symlinks = follow_symlinks
        self.logger = get_runtime_logger().bind(request_id=request.request_id)

    def run(self) -> None:
        self.logger.debug(
            "search.task.started",
            root=self.request.root_path,
        )
        try:
            result = scan(self.request.root_path, self.matcher, follow_symlinks=self.follow_symlinks)
        except Exception as exc:
            self.logger.error(
                "search.task.failed",
                root=self.request.root_path,
                error=repr(exc),
            )
            self.channel.put(SearchFailed(request=self.request, error=str(exc) or type(exc).__name__))
            return

        self.logger.info(
            "search.task.completed",
            match_count=len(result),
            root_readable=result.root_readable,
        )
        self.channel.put(SearchCompleted(request=self.request, result=result))


class SearchEngine:
    def __init__(
        self,
        channel: DeliveryChannel,
        *,
        max_workers: int = 4,
        follow_symlinks: bool = False,
    ) -> None:
        self.channel = channel
        self.follow_symlinks = follow_symlinks
        self._pool = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="treefind-search",
        )
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()
        self.logger = get_runtime_logger()

    def new_request(self, root_path: str, pattern: str) -> SearchRequest:
        with self._ids_lock:
            request_id = next(self._ids)
        return SearchRequest(request_id=request_id, root_path=root_path, pattern=pattern)

    def spawn(self, request: SearchRequest) -> concurrent.futures.Future[None]:
        """Compile the request's pattern and run its scan in the background.

        Raises ``CompileError`` before anything is scheduled if the pattern is
        invalid. The outcome is delivered through ``channel``.
        """
        try:
            matcher = compile_pattern(request.pattern)
        except CompileError:
            self.logger.info(
                "search.rejected",
                request_id=request.request_id,
                pattern=request.pattern,
            )
            raise

        task = SearchTask(request, matcher, self.channel, follow_symlinks=self.follow_symlinks)
        future = self._pool.submit(task.run)
        self.logger.info(
            "search.spawned",
            request_id=request.request_id,
            root=request.root_path,
            pattern=request.pattern,
        )
        return future

    def search(self, root_path: str, pattern: str) -> SearchRequest:
        request = self.new_request(root_path, pattern)
        self.spawn(request)
        return request

    def close(self, *, wait: bool = False) -> None:
        self._pool.shutdown(wait=wait)
        self.logger.debug("search.engine.closed", wait=wait)
