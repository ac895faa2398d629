"""Tests for the quiet-update dispatcher."""

import pytest

from contactdb.core import ContactDatabase
from contactdb.hidden_update import ChangeSuppressionPolicy, QuietUpdateDispatcher
from contactdb.hooks import DispatchContext, HookList


@pytest.fixture
def db():
    database = ContactDatabase()
    database.dispatcher.add_interceptor(ChangeSuppressionPolicy(database))
    return database


@pytest.fixture
def record(db):
    return db.create_record("John Doe")


@pytest.fixture
def dispatcher(db):
    return QuietUpdateDispatcher(db)


class TestQuietUpdateDispatcher:
    def test_own_hook_list(self, db, dispatcher):
        assert dispatcher.hook.name == "hidden_update_functions"
        assert dispatcher.hook is not db.notice_hook

    def test_accepts_existing_hook_list(self, db):
        hooks = HookList("mine")
        assert QuietUpdateDispatcher(db, hooks).hook is hooks

    def test_runs_callbacks_in_order_once(self, dispatcher, record):
        calls = []
        dispatcher.hook.add(lambda ctx: calls.append(("f1", ctx.record)))
        dispatcher.hook.add(lambda ctx: calls.append(("f2", ctx.record)))

        assert dispatcher.run_quiet_updates(record) == 2
        assert calls == [("f1", record), ("f2", record)]

    def test_no_callbacks(self, db, dispatcher, record):
        assert dispatcher.run_quiet_updates(record) == 0
        assert db.changed_records == ()

    def test_tracked_setter_does_not_leave_record_changed(self, db, dispatcher, record):
        dispatcher.hook.add(lambda ctx: ctx.set_field("last_seen", "now"))

        dispatcher.run_quiet_updates(record)

        assert record.last_seen == "now"
        assert db.changed_records == ()

    def test_direct_changed_set_edit_is_discarded(self, db, dispatcher, record):
        def mark_dirty(ctx):
            db.changed_records = db.changed_records + (ctx.record,)

        dispatcher.hook.add(mark_dirty)
        dispatcher.run_quiet_updates(record)
        assert db.changed_records == ()

    def test_existing_changed_set_restored_exactly(self, db, dispatcher, record):
        other = db.create_record("Jane Doe")
        db.set_field(other, "email", "jane@example.com")
        before = db.changed_records

        def clobber(ctx):
            db.save()
            ctx.set_field("email", "jd@example.com")

        dispatcher.hook.add(clobber)
        dispatcher.run_quiet_updates(record)

        assert db.changed_records is before
        assert db.changed_records == (other,)

    def test_restores_changed_set_when_callback_raises(self, db, dispatcher, record):
        order = []

        def dirty_then_fail(ctx):
            order.append("f1")
            ctx.set_field("email", "jd@example.com")
            raise RuntimeError("boom")

        dispatcher.hook.add(dirty_then_fail)
        dispatcher.hook.add(lambda ctx: order.append("f2"))

        with pytest.raises(RuntimeError, match="boom"):
            dispatcher.run_quiet_updates(record)

        assert order == ["f1"]
        assert db.changed_records == ()

    def test_change_hooks_fire_without_suppression(self, db, dispatcher, record):
        fired = []
        db.change_hook.add(fired.append)
        dispatcher.hook.add(lambda ctx: ctx.set_field("email", "jd@example.com"))

        dispatcher.run_quiet_updates(record)

        assert len(fired) == 1
        assert db.changed_records == ()

    def test_suppress_flag(self, db, dispatcher, record):
        fired = []
        db.change_hook.add(fired.append)
        dispatcher.hook.add(lambda ctx: ctx.set_field("email", "jd@example.com"))

        dispatcher.run_quiet_updates(record, suppress=True)

        assert fired == []
        assert record.timestamp is None
        assert db.changed_records == ()

    def test_suppress_default_from_dispatcher(self, db, record):
        dispatcher = QuietUpdateDispatcher(db, suppress=True)
        seen = []
        dispatcher.hook.add(lambda ctx: seen.append(ctx.dispatch.suppress_change_events))

        dispatcher.run_quiet_updates(record)
        dispatcher.run_quiet_updates(record, suppress=False)
        assert seen == [True, False]

    def test_caller_context_passed_through(self, dispatcher, record):
        seen = []
        dispatcher.hook.add(lambda ctx: seen.append(ctx.dispatch))
        context = DispatchContext(suppress_change_events=True, source="mail")

        dispatcher.run_quiet_updates(record, context)
        assert seen == [context]
