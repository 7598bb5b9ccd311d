from pocket_quest.scheduler import EventQueue


def test_event_fires_once_when_due():
    events = EventQueue()
    fired = []
    events.schedule(700, lambda: fired.append(events.now_ms))

    for _ in range(43):
        events.advance(16)
    assert fired == []

    events.advance(16)
    assert fired == [700]
    for _ in range(100):
        events.advance(16)
    assert fired == [700]
    assert len(events) == 0


def test_event_fires_once_with_uneven_ticks():
    events = EventQueue()
    fired = []
    events.schedule(700, lambda: fired.append("exit"))
    for elapsed in (5, 350, 1, 0, 2000, 33, 16):
        events.advance(elapsed)
    assert fired == ["exit"]


def test_events_run_in_due_order():
    events = EventQueue()
    fired = []
    events.schedule(50, lambda: fired.append("b"))
    events.schedule(10, lambda: fired.append("a"))
    events.schedule(50, lambda: fired.append("c"))
    assert events.advance(100) == 3
    assert fired == ["a", "b", "c"]


def test_event_scheduled_from_a_callback_uses_its_due_time():
    events = EventQueue()
    fired = []

    def first():
        events.schedule(20, lambda: fired.append(events.now_ms))

    events.schedule(10, first)
    events.advance(100)
    assert fired == [30]
