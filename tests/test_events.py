import unittest
from unittest.mock import MagicMock, patch

from speech_session.events import (
    EventChannel,
    RecognitionResultEvent,
    ServiceErrorEvent,
    SessionEvent,
)


class TestSessionEvent(unittest.TestCase):
    def test_abstract_base_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            SessionEvent()

    def test_attributes_and_accessors(self):
        event = RecognitionResultEvent(text="hello", is_final=True)

        self.assertEqual(event.name, "RecognitionResultEvent")
        self.assertEqual(event.text, "hello")
        self.assertEqual(event["is_final"], True)
        self.assertIsNone(event.get("confidence"))
        self.assertEqual(event.get("confidence", 0.5), 0.5)

    def test_reserved_attribute_raises(self):
        with self.assertRaises(AttributeError):
            ServiceErrorEvent(name="clash")

    @patch('speech_session.events.uuid4', return_value='0')
    def test_equality(self, mock_uuid4):
        self.assertEqual(ServiceErrorEvent(error="x"), ServiceErrorEvent(error="x"))
        self.assertNotEqual(ServiceErrorEvent(error="x"), ServiceErrorEvent(error="y"))
        self.assertNotEqual(ServiceErrorEvent(error="x"), RecognitionResultEvent(error="x"))

    def test_each_event_has_its_own_id(self):
        self.assertNotEqual(ServiceErrorEvent().id, ServiceErrorEvent().id)


class TestEventChannel(unittest.TestCase):
    def setUp(self):
        self.channel = EventChannel("service_error")
        self.event = ServiceErrorEvent(error="boom")

    def test_fan_out_in_registration_order(self):
        order = []
        self.channel.subscribe(lambda event: order.append(("a", event)))
        self.channel.subscribe(lambda event: order.append(("b", event)))

        self.channel.emit(self.event)

        self.assertEqual(order, [("a", self.event), ("b", self.event)])

    def test_emit_without_subscribers(self):
        self.channel.emit(self.event)
        self.assertEqual(self.channel.subscriber_count(), 0)

    def test_unsubscribe_handle(self):
        callback = MagicMock()
        unsubscribe = self.channel.subscribe(callback)

        unsubscribe()
        self.channel.emit(self.event)

        callback.assert_not_called()
        # Unsubscribing twice is harmless
        unsubscribe()

    @patch('speech_session.events.logger')
    def test_failing_observer_does_not_stop_fan_out(self, mock_logger):
        failing = MagicMock(side_effect=ValueError("observer bug"))
        healthy = MagicMock()
        self.channel.subscribe(failing)
        self.channel.subscribe(healthy)

        self.channel.emit(self.event)

        healthy.assert_called_once_with(self.event)
        mock_logger.error.assert_called_once()

    def test_observer_may_unsubscribe_while_notified(self):
        calls = []

        def once(event):
            calls.append(event)
            self.channel.unsubscribe(once)

        self.channel.subscribe(once)
        self.channel.emit(self.event)
        self.channel.emit(self.event)

        self.assertEqual(calls, [self.event])
        self.assertEqual(self.channel.name, "service_error")


if __name__ == '__main__':
    unittest.main()
