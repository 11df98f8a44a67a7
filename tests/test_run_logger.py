"""Tests for RunLogger and serialization helpers."""

import json
from pathlib import Path

from evidence_sources.content.attempts import Attempt
from evidence_sources.data import APICallUsage, Argument, Article, SearchQuery, Usage
from evidence_sources.run_logger import RunLogger, _serialize

# -- _serialize tests --


def test_serialize_none() -> None:
    assert _serialize(None) is None


def test_serialize_primitive() -> None:
    assert _serialize(42) == 42
    assert _serialize("hello") == "hello"
    assert _serialize(True) is True


def test_serialize_nested_dataclass() -> None:
    article = Article(
        url="https://example.com/a",
        title="A",
        query=SearchQuery(text="q", intent="broad"),
    )
    result = _serialize(article)
    assert result["url"] == "https://example.com/a"
    assert result["query"] == {"text": "q", "intent": "broad"}


def test_serialize_usage_includes_totals() -> None:
    usage = Usage(
        api_calls=[APICallUsage(model="m", input_tokens=10, output_tokens=3)],
        newsapi_requests=2,
    )
    result = _serialize(usage)
    assert result["input_tokens"] == 10
    assert result["output_tokens"] == 3
    assert result["newsapi_requests"] == 2
    assert result["api_calls"][0]["model"] == "m"


def test_serialize_tuple_and_path() -> None:
    assert _serialize((1, Path("/tmp/x"))) == [1, "/tmp/x"]


# -- RunLogger tests --


def test_disabled_logger_is_noop(tmp_path: Path) -> None:
    run_logger = RunLogger(log_dir=tmp_path, enabled=False)
    run = run_logger.start_run("evidence", Argument(text="x"))
    run.log_stage("s", "c", None, None, None, 0.1)
    run.log_event("hit_discarded", "c", url="u")
    assert run.record is None
    assert run.finish_run([], Usage()) is None
    assert list(tmp_path.iterdir()) == []


def test_events_without_run_are_ignored(tmp_path: Path) -> None:
    run_logger = RunLogger(log_dir=tmp_path)
    run_logger.log_event("hit_discarded", "c", url="u")
    assert run_logger.record is None
    assert run_logger.finish_run([], Usage()) is None


def test_full_run_written_to_json(tmp_path: Path) -> None:
    run_logger = RunLogger(log_dir=tmp_path / "logs")
    run = run_logger.start_run("evidence", Argument(text="Tax cuts help growth"))
    assert run_logger.record is None
    run.log_stage(
        stage="query_generation",
        component="StrategyQueryGenerator",
        input_data=Argument(text="Tax cuts help growth"),
        output_data=[SearchQuery(text="Tax cuts help growth", intent="broad")],
        usage=None,
        duration_seconds=0.123456,
    )
    run.log_event(
        "content_fetch",
        "NewsApiSearcher",
        url="https://example.com/a",
        attempts=[Attempt.failure("firecrawl", "not configured"), Attempt.success("direct", "t")],
    )
    path = run.finish_run(
        [Article(url="https://example.com/a")], Usage(newsapi_requests=3), recommended_index=0
    )

    assert path is not None
    assert path == run.last_log_path == run_logger.last_log_path
    assert path.name.startswith("run_")
    assert path.suffix == ".json"

    data = json.loads(path.read_text())
    assert data["pipeline_type"] == "evidence"
    assert data["argument"] == {"text": "Tax cuts help growth"}
    assert data["final_result_count"] == 1
    assert data["recommended_index"] == 0
    assert data["total_usage"]["newsapi_requests"] == 3
    assert data["stages"][0]["duration_seconds"] == 0.1235
    event = data["events"][0]
    assert event["kind"] == "content_fetch"
    assert [a["strategy"] for a in event["detail"]["attempts"]] == ["firecrawl", "direct"]
    assert run.record is None


def test_each_run_gets_its_own_record(tmp_path: Path) -> None:
    run_logger = RunLogger(log_dir=tmp_path)
    first = run_logger.start_run("evidence", Argument(text="first"))
    second = run_logger.start_run("evidence", Argument(text="second"))
    first.log_event("hit_discarded", "c", url="u1")

    second_path = second.finish_run([], Usage())
    first_path = first.finish_run([], Usage())

    assert first_path is not None and second_path is not None
    assert first_path != second_path
    first_data = json.loads(first_path.read_text())
    second_data = json.loads(second_path.read_text())
    assert first_data["argument"] == {"text": "first"}
    assert len(first_data["events"]) == 1
    assert second_data["argument"] == {"text": "second"}
    assert second_data["events"] == []


def test_write_failure_returns_none(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    run = RunLogger(log_dir=blocker / "logs").start_run("evidence", Argument(text="x"))

    assert run.finish_run([], Usage()) is None
    assert run.last_log_path is None
    assert run.record is None
    assert "Could not write run log" in caplog.text
