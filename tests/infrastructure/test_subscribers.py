"""Tests for the listener registry."""

from ordertrack.domain.events import OrderListener
from ordertrack.domain.model.order import Item, Order
from ordertrack.infrastructure.ingestion.subscribers import SubscriberRegistry
from tests.fakes import ExplodingListener, RecordingListener


def _orders() -> list[Order]:
    return [Order(source="A", order_date=1, items=[Item("Tea", 1, 1)])]


class TestSubscriberRegistry:

    def test_every_listener_notified(self):
        registry = SubscriberRegistry()
        a, b = RecordingListener(), RecordingListener()
        registry.subscribe(a)
        registry.subscribe(b)
        registry.notify_discovered(_orders())
        assert len(a.discovered) == 1
        assert len(b.discovered) == 1

    def test_empty_batch_not_delivered(self):
        registry = SubscriberRegistry()
        listener = RecordingListener()
        registry.subscribe(listener)
        registry.notify_discovered([])
        assert listener.discovered == []

    def test_unsubscribe(self):
        registry = SubscriberRegistry()
        listener = RecordingListener()
        registry.subscribe(listener)
        registry.unsubscribe(listener)
        registry.unsubscribe(listener)
        registry.notify_discovered(_orders())
        assert listener.discovered == []
        assert len(registry) == 0

    def test_failing_listener_does_not_stop_others(self):
        registry = SubscriberRegistry()
        healthy = RecordingListener()
        registry.subscribe(ExplodingListener())
        registry.subscribe(healthy)
        registry.notify_discovered(_orders())
        registry.notify_reloaded(_orders())
        assert len(healthy.discovered) == 1
        assert len(healthy.reloaded) == 1

    def test_subscribe_during_notification_takes_effect_next_time(self):
        registry = SubscriberRegistry()
        late = RecordingListener()

        class Subscriber(RecordingListener):
            def on_orders_discovered(self, orders):
                super().on_orders_discovered(orders)
                registry.subscribe(late)

        registry.subscribe(Subscriber())
        registry.notify_discovered(_orders())
        assert late.discovered == []
        registry.notify_discovered(_orders())
        assert len(late.discovered) == 1

    def test_listeners_get_their_own_list(self):
        registry = SubscriberRegistry()

        class Mutator(OrderListener):
            def on_orders_discovered(self, orders):
                orders.clear()

            def on_orders_reloaded(self, orders):
                pass

        after = RecordingListener()
        registry.subscribe(Mutator())
        registry.subscribe(after)
        registry.notify_discovered(_orders())
        assert len(after.discovered[0]) == 1
