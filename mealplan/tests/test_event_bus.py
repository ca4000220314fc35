from datetime import date
import threading
import unittest
from mealplan.events.Event_Bus import EventBus, MEAL_ADDED, MEAL_REMOVED
from mealplan.events.event_helpers import publish_week_cleared


class TestEventBus(unittest.TestCase):

    def test_subscribe_publish_unsubscribe(self):
        bus = EventBus()
        received = []
        listener = lambda name, payload: received.append((name, payload))
        self.assertIs(bus.subscribe(MEAL_ADDED, listener), listener)
        bus.subscribe(MEAL_ADDED, listener)  # not registered twice
        self.assertEqual(bus.subscriber_count(MEAL_ADDED), 1)
        self.assertEqual(bus.publish(MEAL_ADDED, {'meal': 'x'}), 1)
        self.assertTrue(bus.unsubscribe(MEAL_ADDED, listener))
        self.assertFalse(bus.unsubscribe(MEAL_ADDED, listener))
        self.assertEqual(bus.publish(MEAL_ADDED, {'meal': 'y'}), 0)
        self.assertEqual(received, [(MEAL_ADDED, {'meal': 'x'})])

    def test_events_are_routed_by_name(self):
        bus = EventBus()
        added, removed = [], []
        bus.subscribe(MEAL_ADDED, lambda n, p: added.append(p))
        bus.subscribe(MEAL_REMOVED, lambda n, p: removed.append(p))
        bus.publish(MEAL_REMOVED, 'm-1')
        self.assertEqual((added, removed), ([], ['m-1']))
        self.assertEqual(bus.subscriber_count('meal_plan.unknown'), 0)

    def test_failing_subscriber_does_not_stop_delivery(self):
        bus = EventBus()
        received = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe(MEAL_ADDED, broken)
        bus.subscribe(MEAL_ADDED, lambda n, p: received.append(p))
        with self.assertLogs('mealplan.events.Event_Bus', level='ERROR'):
            delivered = bus.publish(MEAL_ADDED, 1)
        self.assertEqual(received, [1])
        self.assertEqual(delivered, 1)

    def test_subscriber_may_unsubscribe_while_handling(self):
        bus = EventBus()
        calls = []

        def once(name, payload):
            calls.append(payload)
            bus.unsubscribe(name, once)

        bus.subscribe(MEAL_ADDED, once)
        bus.publish(MEAL_ADDED, 1)
        bus.publish(MEAL_ADDED, 2)
        self.assertEqual(calls, [1])

    def test_concurrent_publishers(self):
        bus = EventBus()
        received = []
        bus.subscribe(MEAL_ADDED, lambda n, p: received.append(p))

        def worker(start):
            for i in range(start, start + 200):
                bus.publish(MEAL_ADDED, i)

        threads = [threading.Thread(target=worker, args=(k * 200,)) for k in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(sorted(received), list(range(800)))

    def test_helpers_report_deliveries(self):
        bus = EventBus()
        self.assertEqual(publish_week_cleared(date(2025, 3, 3), 0, bus=bus), 0)
