"""Tests for result batch parsing and ingestion."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from sbx_fantasy.core import DuplicateResult, NotFound, StorageFailure, ValidationFailure
from sbx_fantasy.models import FantasyScore, Result
from sbx_fantasy.services.results import (
    ResultEntry,
    ingest_results,
    parse_result_batch,
    results_for_race,
)
from sbx_fantasy.services.scoring import PointsTable


class TestParseResultBatch:
    def test_valid_batch(self):
        race_id, entries = parse_result_batch(
            {
                "raceId": 3,
                "results": [
                    {"athleteId": 1, "place": 1, "time": 61.25},
                    {"athleteId": "2", "place": 2},
                ],
            }
        )
        assert race_id == 3
        assert entries == [
            ResultEntry(athlete_id=1, place=1, time=61.25),
            ResultEntry(athlete_id=2, place=2, time=None),
        ]

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            {},
            {"results": [{"athleteId": 1, "place": 1}]},
            {"raceId": 1},
            {"raceId": 1, "results": {"athleteId": 1}},
            {"raceId": 1, "results": "1,1"},
            {"raceId": "first", "results": []},
        ],
    )
    def test_malformed_shape_rejected(self, body):
        with pytest.raises(ValidationFailure, match="raceId"):
            parse_result_batch(body)

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationFailure, match="At least one"):
            parse_result_batch({"raceId": 1, "results": []})

    @pytest.mark.parametrize(
        "entry, message",
        [
            (5, r"results\[0\] must be an object"),
            ({"place": 1}, r"results\[0\]\.athleteId"),
            ({"athleteId": None, "place": 1}, r"results\[0\]\.athleteId"),
            ({"athleteId": 1, "time": "fast"}, r"results\[0\]\.time"),
            ({"athleteId": 1, "time": True}, r"results\[0\]\.time"),
        ],
    )
    def test_malformed_entry_rejects_batch(self, entry, message):
        with pytest.raises(ValidationFailure, match=message):
            parse_result_batch({"raceId": 1, "results": [entry]})

    def test_malformed_place_is_kept_as_null(self):
        _, entries = parse_result_batch(
            {"raceId": 1, "results": [{"athleteId": 1, "place": "DNF"}]}
        )
        assert entries[0].place is None


class TestIngestResults:
    def test_scores_and_ledger_written_together(self, db_session, seeded):
        race_id, (a1, a2, a3) = seeded
        stored = ingest_results(
            db_session,
            race_id,
            [
                ResultEntry(a1, place=1, time=60.0),
                ResultEntry(a2, place=2),
                ResultEntry(a3, place=12),
            ],
        )
        assert [r.points for r in stored] == [100, 80, 0]
        assert all(r.id is not None for r in stored)

        ledger = {
            (s.athlete_id, s.race_id): s.points
            for s in db_session.exec(select(FantasyScore)).all()
        }
        results = {
            (r.athlete_id, r.race_id): r.points
            for r in db_session.exec(select(Result)).all()
        }
        assert ledger == results == {
            (a1, race_id): 100,
            (a2, race_id): 80,
            (a3, race_id): 0,
        }

    def test_custom_points_table(self, db_session, seeded):
        race_id, (a1, _, _) = seeded
        table = PointsTable.from_mapping({1: 7})
        stored = ingest_results(db_session, race_id, [ResultEntry(a1, place=1)], table)
        assert stored[0].points == 7

    def test_unknown_race(self, db_session, seeded):
        _, (a1, _, _) = seeded
        with pytest.raises(NotFound, match="Race"):
            ingest_results(db_session, 999, [ResultEntry(a1, place=1)])

    def test_unknown_athlete_rejects_whole_batch(self, db_session, seeded):
        race_id, (a1, _, _) = seeded
        with pytest.raises(NotFound, match="999"):
            ingest_results(
                db_session, race_id, [ResultEntry(a1, place=1), ResultEntry(999, place=2)]
            )
        assert db_session.exec(select(Result)).all() == []
        assert db_session.exec(select(FantasyScore)).all() == []

    def test_duplicate_athlete_in_batch(self, db_session, seeded):
        race_id, (a1, _, _) = seeded
        with pytest.raises(DuplicateResult, match="Duplicate"):
            ingest_results(
                db_session, race_id, [ResultEntry(a1, place=1), ResultEntry(a1, place=2)]
            )
        assert db_session.exec(select(Result)).all() == []

    def test_resubmission_rejected(self, db_session, seeded):
        race_id, (a1, a2, _) = seeded
        ingest_results(db_session, race_id, [ResultEntry(a1, place=1)])

        with pytest.raises(DuplicateResult):
            ingest_results(
                db_session, race_id, [ResultEntry(a2, place=2), ResultEntry(a1, place=1)]
            )

        scores = db_session.exec(select(FantasyScore)).all()
        assert [(s.athlete_id, s.points) for s in scores] == [(a1, 100)]

    def test_constraint_violation_rolls_back_batch(self, db_session, seeded):
        race_id, (a1, a2, _) = seeded
        # Ledger row without a matching result: only the unique constraint catches it.
        db_session.add(FantasyScore(athlete_id=a2, race_id=race_id, points=1))
        db_session.commit()

        with pytest.raises(DuplicateResult):
            ingest_results(
                db_session, race_id, [ResultEntry(a1, place=1), ResultEntry(a2, place=2)]
            )

        assert db_session.exec(select(Result)).all() == []
        assert len(db_session.exec(select(FantasyScore)).all()) == 1

    def test_storage_error_surfaces_as_single_failure(self, db_session, seeded, monkeypatch):
        race_id, (a1, _, _) = seeded

        def broken_commit():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", broken_commit)
        with pytest.raises(StorageFailure):
            ingest_results(db_session, race_id, [ResultEntry(a1, place=1)])


def test_results_for_race_ordered_by_place(db_session, seeded):
    race_id, (a1, a2, a3) = seeded
    ingest_results(
        db_session,
        race_id,
        [ResultEntry(a3, place=None), ResultEntry(a2, place=1), ResultEntry(a1, place=2)],
    )
    rows = results_for_race(db_session, race_id)
    assert [(row["athleteId"], row["place"], row["points"]) for row in rows] == [
        (a2, 1, 100),
        (a1, 2, 80),
        (a3, None, 0),
    ]
    assert rows[0]["athleteName"] == "Eva Adams"


def test_results_for_unknown_race(db_session):
    with pytest.raises(NotFound):
        results_for_race(db_session, 42)


class TestOversizedIntegers:
    def test_oversized_place_read_as_null(self):
        _, entries = parse_result_batch(
            {"raceId": 1, "results": [{"athleteId": 1, "place": 2**70}]}
        )
        assert entries[0].place is None

    def test_oversized_athlete_id_rejected(self):
        with pytest.raises(ValidationFailure, match=r"results\[0\]\.athleteId"):
            parse_result_batch({"raceId": 1, "results": [{"athleteId": 2**70, "place": 1}]})

    def test_oversized_race_id_rejected(self):
        with pytest.raises(ValidationFailure, match="raceId"):
            parse_result_batch({"raceId": 2**64, "results": [{"athleteId": 1}]})

    def test_oversized_place_stored_with_zero_points(self, db_session, seeded):
        race_id, (a1, _, _) = seeded
        _, entries = parse_result_batch(
            {"raceId": race_id, "results": [{"athleteId": a1, "place": 2**70}]}
        )
        stored = ingest_results(db_session, race_id, entries)
        assert (stored[0].place, stored[0].points) == (None, 0)

    def test_oversized_race_id_lookup_is_not_found(self, db_session):
        with pytest.raises(NotFound):
            results_for_race(db_session, 2**70)


def test_repeated_athlete_reported_once(db_session, seeded):
    race_id, (a1, a2, _) = seeded
    entries = [ResultEntry(a1, place=1), ResultEntry(a2, place=2)] + [
        ResultEntry(a1, place=p) for p in range(3, 6)
    ]
    with pytest.raises(DuplicateResult, match=rf"Duplicate athleteId in batch: \[{a1}\]$"):
        ingest_results(db_session, race_id, entries)
