from __future__ import annotations

import tempfile
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

from treefind.errors import CompileError
from treefind.runtime_logging import configure_runtime_logging
from treefind.search.channel import DeliveryChannel, SearchCompleted, SearchFailed
from treefind.search.pattern import compile_pattern
from treefind.search.scanner import SearchResult
from treefind.search.task import SearchEngine, SearchRequest, SearchTask


class DeliveryChannelTests(unittest.TestCase):
    def test_drain_returns_outcomes_in_arrival_order(self) -> None:
        channel = DeliveryChannel()
        first = SearchCompleted(
            request=SearchRequest(request_id=2, root_path="/b", pattern=""),
            result=SearchResult(root="/b", pattern=""),
        )
        second = SearchFailed(
            request=SearchRequest(request_id=1, root_path="/a", pattern=""),
            error="boom",
        )
        channel.put(first)
        channel.put(second)

        self.assertTrue(channel.pending())
        self.assertEqual(channel.drain(), [first, second])
        self.assertEqual(channel.drain(), [])
        self.assertFalse(channel.pending())
        self.assertEqual(first.kind, "result")
        self.assertEqual(second.kind, "error")

    def test_on_delivery_runs_after_put(self) -> None:
        seen: list[bool] = []
        channel = DeliveryChannel()
        channel.on_delivery = lambda: seen.append(channel.pending())

        channel.put(
            SearchFailed(request=SearchRequest(request_id=1, root_path="/", pattern=""), error="x")
        )

        self.assertEqual(seen, [True])


class SearchTaskTests(unittest.TestCase):
    def setUp(self) -> None:
        configure_runtime_logging(level="off")

    def test_run_delivers_exactly_one_result(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "match.txt").write_text("x", encoding="utf-8")
            channel = DeliveryChannel()
            request = SearchRequest(request_id=7, root_path=str(root), pattern="MATCH")

            SearchTask(request, compile_pattern(request.pattern), channel).run()

        outcomes = channel.drain()
        self.assertEqual(len(outcomes), 1)
        outcome = outcomes[0]
        assert isinstance(outcome, SearchCompleted)
        self.assertIs(outcome.request, request)
        self.assertEqual(outcome.result.entries, (str(root / "match.txt"),))

    def test_unexpected_error_becomes_failed_outcome(self) -> None:
        channel = DeliveryChannel()
        request = SearchRequest(request_id=1, root_path="/", pattern="")
        with patch("treefind.search.task.scan", side_effect=RuntimeError("disk on fire")):
            SearchTask(request, compile_pattern(""), channel).run()

        (outcome,) = channel.drain()
        assert isinstance(outcome, SearchFailed)
        self.assertEqual(outcome.error, "disk on fire")
        self.assertIs(outcome.request, request)


class SearchEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        configure_runtime_logging(level="off")
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name).resolve()
        self.channel = DeliveryChannel()
        self.engine = SearchEngine(self.channel, max_workers=4)

    def tearDown(self) -> None:
        self.engine.close(wait=True)
        self.tmp.cleanup()

    def test_request_ids_increase(self) -> None:
        first = self.engine.new_request("/a", "x")
        second = self.engine.new_request("/b", "y")
        self.assertLess(first.request_id, second.request_id)

    def test_invalid_pattern_is_rejected_before_scheduling(self) -> None:
        request = self.engine.new_request(str(self.root), "foo(")
        with patch("treefind.search.task.scan") as scan_mock:
            with self.assertRaises(CompileError):
                self.engine.spawn(request)
        scan_mock.assert_not_called()
        self.assertFalse(self.channel.pending())

    def test_search_runs_off_the_calling_thread(self) -> None:
        (self.root / "alpha.txt").write_text("x", encoding="utf-8")
        caller = threading.get_ident()
        worker_threads: list[int] = []
        delivered = threading.Event()

        def on_delivery() -> None:
            worker_threads.append(threading.get_ident())
            delivered.set()

        self.channel.on_delivery = on_delivery
        request = self.engine.search(str(self.root), "alpha")

        self.assertTrue(delivered.wait(timeout=5))
        outcome = self.channel.get(timeout=1)
        assert isinstance(outcome, SearchCompleted)
        self.assertEqual(outcome.request, request)
        self.assertEqual(list(outcome.result), [str(self.root / "alpha.txt")])
        self.assertNotEqual(worker_threads, [caller])

    def test_concurrent_requests_get_independent_results(self) -> None:
        left = self.root / "left"
        right = self.root / "right"
        for base, names in ((left, ["l1.txt", "l2.txt", "sub/l3.txt"]), (right, ["r1.txt"])):
            for name in names:
                path = base / name
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text("x", encoding="utf-8")

        first = self.engine.search(str(left), "")
        second = self.engine.search(str(right), "")

        outcomes = [self.channel.get(timeout=5), self.channel.get(timeout=5)]
        by_id = {outcome.request.request_id: outcome for outcome in outcomes}
        self.assertEqual(set(by_id), {first.request_id, second.request_id})

        left_result = by_id[first.request_id].result
        right_result = by_id[second.request_id].result
        self.assertEqual(
            set(left_result),
            {str(left / "l1.txt"), str(left / "l2.txt"), str(left / "sub"), str(left / "sub" / "l3.txt")},
        )
        self.assertEqual(set(right_result), {str(right / "r1.txt")})
        self.assertFalse(self.channel.pending())

    def test_missing_root_delivers_empty_result(self) -> None:
        self.engine.search(str(self.root / "nope"), "")

        outcome = self.channel.get(timeout=5)
        assert isinstance(outcome, SearchCompleted)
        self.assertEqual(len(outcome.result), 0)
        self.assertFalse(outcome.result.root_readable)


if __name__ == "__main__":
    unittest.main()
