"""Tests for recurring task planning and generation."""

from datetime import date

import pytest

from cadence.adapters.memory_store import MemoryStore
from cadence.core.models import RecurringConfig
from cadence.core.recurring import plan_occurrences
from cadence.errors import InvalidRange
from cadence.workflows import Stores, generate_recurring_tasks


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def stores(store):
    return Stores.single(store)


def _dates(tasks):
    return [t.date.isoformat() for t in tasks]


class TestPlanOccurrences:
    def test_weekly(self):
        config = RecurringConfig(id="c1", description="Standup", cron_expression="0 9 * * 3")
        occurrences = plan_occurrences([config], date(2028, 2, 1), date(2028, 2, 14))
        assert [o.day for o in occurrences] == [date(2028, 2, 2), date(2028, 2, 9)]

    def test_monthly(self):
        config = RecurringConfig(id="c1", description="Invoice", cron_expression="0 9 15 * *")
        occurrences = plan_occurrences([config], date(2028, 6, 1), date(2028, 8, 30))
        assert [o.day for o in occurrences] == [date(2028, 6, 15), date(2028, 7, 15), date(2028, 8, 15)]

    def test_disabled_configs_ignored(self):
        config = RecurringConfig(id="c1", description="Off", cron_expression="0 9 * * *", enabled=False)
        assert plan_occurrences([config], date(2028, 1, 1), date(2028, 1, 7)) == []

    def test_ordered_by_day_then_config(self):
        a = RecurringConfig(id="a", description="A", cron_expression="0 9 * * *")
        b = RecurringConfig(id="b", description="B", cron_expression="0 9 * * *")
        occurrences = plan_occurrences([a, b], date(2028, 1, 1), date(2028, 1, 2))
        assert [o.key for o in occurrences] == [
            ("a", "2028-01-01"),
            ("b", "2028-01-01"),
            ("a", "2028-01-02"),
            ("b", "2028-01-02"),
        ]

    def test_invalid_expression_never_fires(self):
        config = RecurringConfig(id="c1", description="Broken", cron_expression="0 9 * *")
        assert plan_occurrences([config], date(2028, 1, 1), date(2028, 1, 31)) == []

    def test_task_data(self):
        config = RecurringConfig(id="c1", description="Dump", cron_expression="0 10 * * 3", assignee_id="user-g")
        (occurrence,) = plan_occurrences([config], date(2028, 2, 2), date(2028, 2, 2))
        assert occurrence.to_task_data() == {
            "description": "Dump",
            "date": "2028-02-02",
            "status": "todo",
            "source": "recurring",
            "recurringConfigId": "c1",
            "assigneeId": "user-g",
        }


class TestGenerateRecurringTasks:
    def test_weekly_scenario(self, store, stores):
        store.create_recurring_config({"description": "Standup", "cronExpression": "0 9 * * 3"})

        result = generate_recurring_tasks(stores, "2028-02-01", "2028-02-14")

        assert _dates(result.generated) == ["2028-02-02", "2028-02-09"]
        assert result.skipped == 0

    def test_monthly_scenario(self, store, stores):
        store.create_recurring_config({"description": "Invoice", "cronExpression": "0 9 15 * *"})

        result = generate_recurring_tasks(stores, "2028-06-01", "2028-08-30")

        assert _dates(result.generated) == ["2028-06-15", "2028-07-15", "2028-08-15"]

    def test_generated_task_fields(self, store, stores):
        config = store.create_recurring_config(
            {"description": "Mailchimp dump", "cronExpression": "0 10 * * 3", "assigneeId": "user-grace"}
        )

        result = generate_recurring_tasks(stores, "2028-02-02", "2028-02-02")

        (task,) = result.generated
        assert task.id
        assert task.description == "Mailchimp dump"
        assert task.status == "todo"
        assert task.source == "recurring"
        assert task.recurring_config_id == config.id
        assert task.assignee_id == "user-grace"

    def test_second_run_skips_everything(self, store, stores):
        store.create_recurring_config({"description": "Daily", "cronExpression": "0 9 * * *"})
        store.create_recurring_config({"description": "Weekly", "cronExpression": "0 9 * * 1"})

        first = generate_recurring_tasks(stores, "2028-03-01", "2028-03-14")
        second = generate_recurring_tasks(stores, "2028-03-01", "2028-03-14")

        assert len(first.generated) == 14 + 2
        assert second.generated == []
        assert second.skipped == len(first.generated)
        assert len(store.list_tasks()) == len(first.generated)

    def test_overlapping_range(self, store, stores):
        store.create_recurring_config({"description": "Daily", "cronExpression": "0 9 * * *"})

        generate_recurring_tasks(stores, "2028-03-01", "2028-03-10")
        result = generate_recurring_tasks(stores, "2028-03-05", "2028-03-15")

        assert _dates(result.generated) == [f"2028-03-{d:02d}" for d in range(11, 16)]
        assert result.skipped == 6

    def test_never_outside_range(self, store, stores):
        store.create_recurring_config({"description": "Every other", "cronExpression": "0 9 */2 * *"})

        result = generate_recurring_tasks(stores, "2028-04-03", "2028-04-17")

        assert result.generated
        assert all(date(2028, 4, 3) <= t.date <= date(2028, 4, 17) for t in result.generated)

    def test_disabled_config_generates_nothing(self, store, stores):
        store.create_recurring_config({"description": "Off", "cronExpression": "0 9 * * *", "enabled": False})

        result = generate_recurring_tasks(stores, "2028-03-01", "2028-03-07")

        assert result.generated == []
        assert result.skipped == 0

    def test_reversed_range_creates_nothing(self, store, stores):
        store.create_recurring_config({"description": "Daily", "cronExpression": "0 9 * * *"})

        with pytest.raises(InvalidRange):
            generate_recurring_tasks(stores, "2028-03-10", "2028-03-01")

        assert store.list_tasks() == []

    def test_oversized_range(self, stores):
        with pytest.raises(InvalidRange, match="90 days"):
            generate_recurring_tasks(stores, "2028-01-01", "2028-06-01")

    def test_malformed_dates(self, stores):
        with pytest.raises(InvalidRange, match="YYYY-MM-DD"):
            generate_recurring_tasks(stores, "03/01/2028", "2028-03-07")

    def test_store_refusal_counts_as_skip(self):
        class BlindStore(MemoryStore):
            """Lookup never finds anything, as in a lost check-then-create race."""

            def find_recurring_task(self, recurring_config_id, day):
                return None

        store = BlindStore()
        stores = Stores.single(store)
        store.create_recurring_config({"description": "Daily", "cronExpression": "0 9 * * *"})

        first = generate_recurring_tasks(stores, "2028-03-01", "2028-03-03")
        second = generate_recurring_tasks(stores, "2028-03-01", "2028-03-03")

        assert len(first.generated) == 3
        assert second.generated == []
        assert second.skipped == 3
        assert len(store.list_tasks()) == 3
