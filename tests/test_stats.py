"""Tests for app.services.stats: grouped counts, overdue, recent activity, user stats, monthly series."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from app.schemas.auth import ADMIN_ROLE, DEFAULT_ROLE
from app.schemas.resource import ResourceUpdate
from app.services.errors import AuthorizationError
from app.services.resources import update_resource
from app.services.stats import dashboard, monthly_resource_counts, resource_stats, user_stats
from tests.support import BASE_TIME, add_admin, add_resource, add_user, caller, make_session_factory


def _settings(excluded: list[str] | None = None, recent: int = 5) -> MagicMock:
    settings = MagicMock()
    settings.OVERDUE_EXCLUDED_STATUSES = ["completed"] if excluded is None else excluded
    settings.RECENT_ACTIVITY_LIMIT = recent
    return settings


NOW = BASE_TIME + timedelta(days=10)


class StatsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.admin = add_admin(self.db)
        self.alice = add_user(self.db, "Alice")
        self.bob = add_user(self.db, "Bob", verified=False)
        past = NOW - timedelta(days=3)
        future = NOW + timedelta(days=3)

        add_resource(self.db, self.alice, "A1", minutes=1, status="pending", priority="high",
                     type="project", due_date=past)
        add_resource(self.db, self.alice, "A2", minutes=2, status="completed", priority="high",
                     due_date=past)
        add_resource(self.db, self.alice, "A3", minutes=3, status="cancelled", priority="low",
                     due_date=past, assigned_to=self.bob.id)
        add_resource(self.db, self.bob, "B1", minutes=4, status="in_progress", priority="urgent",
                     type="document", due_date=future)
        add_resource(self.db, self.bob, "B2", minutes=5, status="pending", priority="medium")
        add_resource(self.db, self.admin, "Z1", minutes=6, status="pending", priority="low",
                     type="inventory")

    def tearDown(self) -> None:
        self.db.close()


class TestResourceStats(StatsTestCase):
    def test_admin_totals_are_global(self) -> None:
        stats = resource_stats(self.db, caller(self.admin), _settings(), now=NOW)
        self.assertEqual(stats.total_resources, 6)
        self.assertEqual(stats.by_status, {"pending": 3, "completed": 1, "cancelled": 1, "in_progress": 1})
        self.assertEqual(stats.by_priority, {"high": 2, "low": 2, "urgent": 1, "medium": 1})
        self.assertEqual(stats.by_type, {"project": 1, "task": 3, "document": 1, "inventory": 1})

    def test_groups_sum_to_total(self) -> None:
        for user in (self.admin, self.alice, self.bob):
            stats = resource_stats(self.db, caller(user), _settings(), now=NOW)
            self.assertEqual(sum(stats.by_status.values()), stats.total_resources)
            self.assertEqual(sum(stats.by_priority.values()), stats.total_resources)
            self.assertEqual(sum(stats.by_type.values()), stats.total_resources)
            self.assertLessEqual(stats.overdue, stats.total_resources)

    def test_absent_values_are_omitted(self) -> None:
        stats = resource_stats(self.db, caller(self.alice), _settings(), now=NOW)
        self.assertNotIn("in_progress", stats.by_status)
        self.assertNotIn("urgent", stats.by_priority)

    def test_regular_user_scope_is_owned_or_assigned(self) -> None:
        stats = resource_stats(self.db, caller(self.bob), _settings(), now=NOW)
        # B1, B2 owned; A3 assigned.
        self.assertEqual(stats.total_resources, 3)

    def test_overdue_counts_cancelled_but_not_completed(self) -> None:
        stats = resource_stats(self.db, caller(self.admin), _settings(), now=NOW)
        # A1 pending and A3 cancelled are past due; A2 is completed.
        self.assertEqual(stats.overdue, 2)

    def test_overdue_exclusions_are_configurable(self) -> None:
        stats = resource_stats(
            self.db, caller(self.admin), _settings(excluded=["completed", "cancelled"]), now=NOW
        )
        self.assertEqual(stats.overdue, 1)
        stats = resource_stats(self.db, caller(self.admin), _settings(excluded=[]), now=NOW)
        self.assertEqual(stats.overdue, 3)

    def test_due_exactly_now_is_not_overdue(self) -> None:
        add_resource(self.db, self.admin, "Edge", minutes=7, due_date=NOW)
        stats = resource_stats(self.db, caller(self.admin), _settings(), now=NOW)
        self.assertEqual(stats.overdue, 2)

    def test_completing_removes_from_overdue(self) -> None:
        created = add_resource(self.db, self.alice, "Late", minutes=8, status="pending",
                               due_date=NOW - timedelta(hours=1))
        before = resource_stats(self.db, caller(self.alice), _settings(), now=NOW).overdue
        update_resource(self.db, caller(self.alice), created.uuid, ResourceUpdate(status="completed"))
        after = resource_stats(self.db, caller(self.alice), _settings(), now=NOW).overdue
        self.assertEqual(after, before - 1)

    def test_soft_deleted_rows_are_not_counted(self) -> None:
        gone = add_resource(self.db, self.admin, "Gone", minutes=9, deleted_at=NOW)
        stats = resource_stats(self.db, caller(self.admin), _settings(), now=NOW)
        self.assertEqual(stats.total_resources, 6)
        self.assertNotIn(gone.id, [r.id for r in stats.recent_activity])

    def test_recent_activity_newest_first_with_people(self) -> None:
        stats = resource_stats(self.db, caller(self.admin), _settings(recent=3), now=NOW)
        self.assertEqual([r.name for r in stats.recent_activity], ["Z1", "B2", "B1"])
        a3 = resource_stats(self.db, caller(self.bob), _settings(), now=NOW).recent_activity[-1]
        self.assertEqual(a3.name, "A3")
        self.assertEqual(a3.owner.email, self.alice.email)
        self.assertEqual(a3.assignee.name, "Bob")

    def test_recent_activity_defaults_to_five(self) -> None:
        stats = resource_stats(self.db, caller(self.admin), _settings(), now=NOW)
        self.assertEqual(len(stats.recent_activity), 5)


class TestUserStats(StatsTestCase):
    def test_counts(self) -> None:
        stats = user_stats(self.db, caller(self.admin))
        self.assertEqual(stats.total_users, 3)
        self.assertEqual(stats.by_role, {ADMIN_ROLE: 1, DEFAULT_ROLE: 2})
        self.assertEqual(stats.by_status.active, 2)
        self.assertEqual(stats.by_status.invited, 1)

    def test_multi_role_user_counted_once_per_role(self) -> None:
        add_user(self.db, "Both", roles=(ADMIN_ROLE, DEFAULT_ROLE))
        stats = user_stats(self.db, caller(self.admin))
        self.assertEqual(stats.total_users, 4)
        self.assertEqual(stats.by_role, {ADMIN_ROLE: 2, DEFAULT_ROLE: 3})

    def test_recent_registrations(self) -> None:
        add_user(self.db, "Newest", created_at=NOW)
        stats = user_stats(self.db, caller(self.admin))
        self.assertEqual(stats.recent_registrations[0].name, "Newest")
        self.assertEqual(stats.recent_registrations[0].roles, [DEFAULT_ROLE])
        self.assertLessEqual(len(stats.recent_registrations), 5)

    def test_regular_user_rejected(self) -> None:
        with self.assertRaises(AuthorizationError):
            user_stats(self.db, caller(self.alice))


class TestMonthlySeries(StatsTestCase):
    def test_twelve_zero_filled_buckets(self) -> None:
        series = monthly_resource_counts(self.db, caller(self.admin), BASE_TIME.year)
        self.assertEqual(sorted(series), list(range(1, 13)))
        self.assertEqual(series[BASE_TIME.month], 6)
        self.assertEqual(sum(series.values()), 6)

    def test_other_years_are_excluded(self) -> None:
        add_resource(self.db, self.admin, "Old", created_at=BASE_TIME.replace(year=BASE_TIME.year - 1))
        series = monthly_resource_counts(self.db, caller(self.admin), BASE_TIME.year)
        self.assertEqual(sum(series.values()), 6)

    def test_scoped_to_caller(self) -> None:
        series = monthly_resource_counts(self.db, caller(self.alice), BASE_TIME.year)
        self.assertEqual(sum(series.values()), 3)


class TestDashboard(StatsTestCase):
    def test_admin_dashboard_includes_user_stats(self) -> None:
        result = dashboard(self.db, caller(self.admin), _settings(), now=NOW)
        self.assertTrue(result.is_admin)
        self.assertIsNotNone(result.user_stats)
        self.assertEqual(result.resource_stats.total_resources, 6)

    def test_regular_dashboard_has_no_user_stats(self) -> None:
        result = dashboard(self.db, caller(self.alice), _settings(), now=NOW)
        self.assertFalse(result.is_admin)
        self.assertIsNone(result.user_stats)
        self.assertEqual(sum(result.monthly_data.values()), 3)


if __name__ == "__main__":
    unittest.main()
