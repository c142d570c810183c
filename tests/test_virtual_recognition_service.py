import unittest
from unittest.mock import MagicMock

from speech_session.recognition import RecognitionType, VirtualRecognitionService


class TestVirtualRecognitionService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.service = VirtualRecognitionService(supported_languages=["en_US", "de_DE"], default_language="de_DE")

    def test_properties(self):
        self.assertEqual(VirtualRecognitionService.name(), "virtual")
        self.assertEqual(self.service.supported_languages, ["en_US", "de_DE"])
        self.assertEqual(self.service.default_language, "de_DE")
        self.assertFalse(self.service.ready)
        self.assertFalse(self.service.recognition_active)

    def test_default_languages(self):
        self.assertIn("en_US", VirtualRecognitionService().supported_languages)

    async def test_check_permissions(self):
        self.assertTrue(await self.service.check_permissions())

        self.service.permission_granted = False
        self.assertFalse(await self.service.check_permissions())

    async def test_initialize(self):
        await self.service.initialize()
        self.assertTrue(self.service.ready)

    async def test_initialize_error(self):
        self.service.initialization_error = ConnectionError("offline")

        with self.assertRaises(ConnectionError):
            await self.service.initialize()

        self.assertFalse(self.service.ready)

    def test_start_and_stop_change_active_state_once(self):
        on_active_state_changed = MagicMock()
        self.service.active_state_changed.subscribe(on_active_state_changed)

        self.service.start("en_US", RecognitionType.FREE, prompt="hi")
        self.service.start("en_US", RecognitionType.FREE)
        self.service.stop()
        self.service.stop()

        self.assertEqual(
            [c[0][0]["active"] for c in on_active_state_changed.call_args_list],
            [True, False],
        )
        self.assertEqual(self.service.start_calls[0].prompt, "hi")
        self.assertEqual(self.service.stop_count, 2)

    def test_pause_deactivates(self):
        self.service.start("en_US", RecognitionType.PARTIAL)
        self.service.pause()

        self.assertFalse(self.service.recognition_active)
        self.assertEqual(self.service.pause_count, 1)
        self.assertEqual(self.service.stop_count, 0)

    def test_without_auto_activate(self):
        service = VirtualRecognitionService(auto_activate=False)

        service.start("en_US", RecognitionType.FREE)
        self.assertFalse(service.recognition_active)

        service.set_active(True)
        self.assertTrue(service.recognition_active)

    def test_unsupported_language_raises_service_error(self):
        on_service_error = MagicMock()
        self.service.service_error.subscribe(on_service_error)

        self.service.start("xx_XX", RecognitionType.FREE)

        on_service_error.assert_called_once()
        self.assertIn("xx_XX", on_service_error.call_args[0][0]["error"])
        self.assertFalse(self.service.recognition_active)

    def test_injected_events(self):
        on_result = MagicMock()
        on_recognition_error = MagicMock()
        self.service.recognition_result.subscribe(on_result)
        self.service.recognition_error.subscribe(on_recognition_error)

        self.service.push_result("partial", is_final=False)
        self.service.raise_recognition_error("no speech")

        event = on_result.call_args[0][0]
        self.assertEqual(event.text, "partial")
        self.assertFalse(event.is_final)
        self.assertEqual(on_recognition_error.call_args[0][0]["error"], "no speech")


if __name__ == '__main__':
    unittest.main()
