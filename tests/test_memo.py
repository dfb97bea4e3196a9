"""Tests for Memo and create_memo."""

import pytest

from tendril import (
    Memo,
    UNSET,
    Signal,
    create_effect,
    create_memo,
    create_signal,
    get_tracking_depth,
)


class TestCreateMemo:
    def test_recomputes_on_change(self):
        count, set_count = create_signal(1)
        doubled = create_memo(lambda: count() * 2)
        assert doubled() == 2
        set_count(5)
        assert doubled() == 10

    def test_eager(self):
        """A memo recomputes on write, not on read."""
        calls = []
        count, set_count = create_signal(1)

        def fn():
            calls.append(1)
            return count()

        create_memo(fn)
        assert len(calls) == 1
        set_count(2)
        assert len(calls) == 2

    def test_reads_are_cached(self):
        calls = []
        count, _ = create_signal(3)

        def fn():
            calls.append(1)
            return count()

        m = create_memo(fn)
        m()
        m()
        assert len(calls) == 1

    def test_tracks_like_a_signal(self):
        count, set_count = create_signal(1)
        doubled = create_memo(lambda: count() * 2)
        log = []
        create_effect(lambda: log.append(doubled()))
        assert log == [2]
        set_count(3)
        assert log == [2, 6]

    def test_chained(self):
        count, set_count = create_signal(3)
        doubled = create_memo(lambda: count() * 2)
        quadrupled = create_memo(lambda: doubled() * 2)
        assert quadrupled() == 12
        set_count(5)
        assert quadrupled() == 20

    def test_dynamic_dependencies(self):
        flag, set_flag = create_signal(True)
        a, set_a = create_signal(1)
        b, set_b = create_signal(2)
        calls = []

        def pick():
            calls.append(1)
            return a() if flag() else b()

        m = create_memo(pick)
        set_flag(False)
        assert m() == 2
        n = len(calls)
        set_a(100)
        assert len(calls) == n  # a no longer read

    def test_equals_suppresses_downstream(self):
        count, set_count = create_signal(1)
        parity = create_memo(lambda: count() % 2, equals=True)
        log = []
        create_effect(lambda: log.append(parity()))
        set_count(3)
        assert log == [1]
        set_count(4)
        assert log == [1, 0]

    def test_compute_failure_propagates_to_setter(self):
        c, set_c = create_signal(1)

        def checked():
            if c() == 2:
                raise ValueError("no twos")
            return c()

        m = create_memo(checked)
        with pytest.raises(ValueError, match="no twos"):
            set_c(2)
        assert m() == 1  # last good value
        assert get_tracking_depth() == 0

        set_c(3)  # c was read before the raise, still subscribed
        assert m() == 3


class TestMemo:
    def test_get_and_peek(self):
        s = Signal(4)
        m = Memo(lambda: s.get() + 1)
        assert m.get() == 5
        assert m.peek() == 5

    def test_peek_does_not_subscribe(self):
        s = Signal(1)
        m = Memo(lambda: s.get())
        log = []
        create_effect(lambda: log.append(m.peek()))
        s.set(2)
        assert log == [1]

    def test_dispose_keeps_last_value(self):
        s = Signal(1)
        m = Memo(lambda: s.get() * 10)
        m.dispose()
        s.set(2)
        assert m.get() == 10
        assert m.disposed
        assert s.subscriber_count == 0

    def test_unset_while_first_computing(self):
        seen = []
        holder = []

        def fn():
            if holder:
                seen.append(holder[0].peek())
            return 1

        m = Memo.__new__(Memo)
        holder.append(m)
        Memo.__init__(m, fn)
        assert seen == [UNSET]
        assert m.get() == 1

    def test_repr(self):
        def total():
            return 3

        assert repr(Memo(total)) == "Memo(total, 3)"
