"""Unit tests for the dismissal repository"""

from medfin_dashboard.infrastructure.database.repositories import DismissalRepository


def test_dismiss_records_row(db):
    repo = DismissalRepository(db)

    dismissal = repo.dismiss("user_1", "loan-due-loan_1")
    db.commit()

    assert dismissal.id is not None
    assert dismissal.dismissed_at is not None
    assert repo.get_dismissed_ids("user_1") == {"loan-due-loan_1"}


def test_dismiss_is_idempotent(db):
    repo = DismissalRepository(db)

    first = repo.dismiss("user_1", "low-balance")
    second = repo.dismiss("user_1", "low-balance")
    db.commit()

    assert first.id == second.id
    assert repo.get_dismissed_ids("user_1") == {"low-balance"}


def test_dismissals_are_scoped_per_member(db):
    repo = DismissalRepository(db)
    repo.dismiss("user_1", "low-balance")
    repo.dismiss("user_2", "no-recent-activity")
    db.commit()

    assert repo.get_dismissed_ids("user_1") == {"low-balance"}
    assert repo.get_dismissed_ids("user_3") == set()


def test_clear_removes_only_that_members_rows(db):
    repo = DismissalRepository(db)
    repo.dismiss("user_1", "low-balance")
    repo.dismiss("user_1", "goal-deadline-goal_1")
    repo.dismiss("user_2", "low-balance")
    db.commit()

    removed = repo.clear("user_1")
    db.commit()

    assert removed == 2
    assert repo.get_dismissed_ids("user_1") == set()
    assert repo.get_dismissed_ids("user_2") == {"low-balance"}


def test_overlapping_dismissals_return_the_committed_row(db, second_db, monkeypatch):
    """Both requests pass the existence check before either inserts"""
    first = DismissalRepository(db)
    racing = DismissalRepository(second_db)

    lookup = racing.get_dismissal
    lookups = []

    def stale_first_lookup(user_id, notification_id):
        lookups.append(notification_id)
        if len(lookups) == 1:
            return None
        return lookup(user_id, notification_id)

    monkeypatch.setattr(racing, "get_dismissal", stale_first_lookup)

    committed = first.dismiss("member-1", "low-balance")
    db.commit()

    dismissal = racing.dismiss("member-1", "low-balance")
    second_db.commit()

    assert dismissal.id == committed.id
    assert len(lookups) == 2
    assert racing.get_dismissed_ids("member-1") == {"low-balance"}
