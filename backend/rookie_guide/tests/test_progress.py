from datetime import datetime, timedelta, timezone

import pytest

from rookie_guide import schemas
from rookie_guide.errors import InternalError, NotFoundError
from rookie_guide.services import progress


def _steps(*flags):
    return [
        schemas.StepProgress(
            step_index=index,
            completed=flag,
            completed_at=datetime.now(timezone.utc) if flag else None,
        )
        for index, flag in enumerate(flags)
    ]


def test_empty_progress_reports_zero_percent():
    result = progress.compute_progress([])
    assert result.total_steps == 0
    assert result.completed_steps == 0
    assert result.progress_percentage == 0.0
    assert result.steps == []


@pytest.mark.parametrize(
    "flags, expected",
    [
        ((False, False, False), 0.0),
        ((False, True, False), 100 / 3),
        ((True, True, False, False), 50.0),
        ((True,), 100.0),
    ],
)
def test_percentage_matches_completed_ratio(flags, expected):
    result = progress.compute_progress(_steps(*flags))
    assert result.total_steps == len(flags)
    assert result.completed_steps == sum(flags)
    assert result.progress_percentage == pytest.approx(expected)


def test_compute_progress_keeps_order_and_is_idempotent():
    steps = list(reversed(_steps(True, False, True)))
    first = progress.compute_progress(steps)
    second = progress.compute_progress(steps)
    assert [s.step_index for s in first.steps] == [2, 1, 0]
    assert first == second


def test_initial_progress_is_dense_and_incomplete():
    steps = progress.initial_progress(4)
    assert [s.step_index for s in steps] == [0, 1, 2, 3]
    assert all(not s.completed and s.completed_at is None for s in steps)


def test_apply_step_update_stamps_and_clears():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    original = progress.initial_progress(3)

    done = progress.apply_step_update(original, 1, True, now)
    assert done[1].completed is True
    assert done[1].completed_at == now
    # the input list is left untouched
    assert original[1].completed is False

    cleared = progress.apply_step_update(done, 1, False, now + timedelta(minutes=1))
    assert cleared[1].completed is False
    assert cleared[1].completed_at is None


def test_recompleting_refreshes_timestamp():
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    later = first + timedelta(hours=2)
    steps = progress.apply_step_update(progress.initial_progress(2), 0, True, first)
    steps = progress.apply_step_update(steps, 0, True, later)
    assert steps[0].completed_at == later


def test_apply_step_update_unknown_index():
    with pytest.raises(NotFoundError):
        progress.apply_step_update(progress.initial_progress(3), 3, True, datetime.now(timezone.utc))


def test_round_trip_through_storage_format():
    stamped = progress.apply_step_update(
        progress.initial_progress(2), 1, True, datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)
    )
    raw = progress.dump_progress(stamped)
    assert raw[0] == {"step_index": 0, "completed": False, "completed_at": None}
    assert progress.load_progress(raw) == stamped


def test_load_progress_rejects_corrupt_documents():
    with pytest.raises(InternalError):
        progress.load_progress([{"step_index": "first", "completed": "maybe"}])


def test_load_steps_sorts_by_order():
    steps = progress.load_steps(
        [
            {"title": "b", "order": 1},
            {"title": "a", "order": 0},
        ]
    )
    assert [s.title for s in steps] == ["a", "b"]
