from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from tradegate.events.journal import EmergencyPause, EventJournal, SignalProcessed


def _signal_event(executed: bool) -> SignalProcessed:
    return SignalProcessed(
        pool="pool",
        token="mint",
        risk_score=8,
        trade_amount=10,
        executed=executed,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_journal_appends_jsonl(tmp_path: Path) -> None:
    path = tmp_path / "events" / "gate.jsonl"
    journal = EventJournal(path)

    journal.emit(_signal_event(True))
    journal.emit(EmergencyPause(authority="ops", timestamp=datetime.now(timezone.utc)))

    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [line["event"] for line in lines] == ["signal_processed", "emergency_pause"]
    assert lines[0]["payload"]["executed"] is True
    assert lines[0]["ts"] == "2024-01-01T00:00:00+00:00"


def test_memory_limit_and_filters() -> None:
    journal = EventJournal(memory_limit=3)
    for index in range(5):
        journal.emit(_signal_event(index % 2 == 0))

    assert len(journal.records()) == 3
    assert len(journal.records(limit=2)) == 2
    assert journal.records(limit=0) == []
    assert journal.records(event="emergency_pause") == []
    journal.clear()
    assert journal.records() == []


def test_unwritable_path_keeps_record_in_memory(tmp_path: Path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    journal = EventJournal(blocker / "gate.jsonl")

    with caplog.at_level(logging.ERROR, logger="tradegate.events.journal"):
        record = journal.emit(_signal_event(True))

    assert journal.records() == [record]
    assert not (blocker / "gate.jsonl").exists()
    assert [rec.levelno for rec in caplog.records if rec.name == "tradegate.events.journal"] == [
        logging.ERROR
    ]
