import gzip
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from railfeed.jobs.consume.sources.darwin.source import DarwinPushPortSource
from railfeed.jobs.consume.sources.darwin.transport import FrameQueueListener


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def frame(message_id: str, body: bytes) -> Mock:
    return Mock(headers={"message-id": message_id, "subscription": "1"}, body=body)


@patch.dict("os.environ", {"RAIL_QUEUE_NAME": "D3test", "RAIL_POLL_TIMEOUT_SECONDS": "0.01"}, clear=True)
class DarwinPushPortSourceTests(unittest.TestCase):
    def make_source(self, *frames):
        listener = FrameQueueListener()
        for f in frames:
            listener.on_message(f)
        conn = Mock()
        return DarwinPushPortSource(listener=listener, connection=conn), conn

    def test_consume_renders_and_acks_each_message(self):
        body = gzip.compress((FIXTURES_DIR / "ts_arrival_late.xml").read_bytes())
        source, conn = self.make_source(frame("m1", body), frame("m2", body))

        result = source.consume(run_seconds=5, max_messages=2)

        conn.connect.assert_called_once_with("d3user", "d3password", wait=True)
        conn.subscribe.assert_called_once_with(destination="D3test", id="1", ack="client-individual")
        self.assertEqual([c.args for c in conn.ack.call_args_list], [("m1", "1"), ("m2", "1")])
        conn.unsubscribe.assert_called_once_with(id="1")
        conn.disconnect.assert_called_once()

        self.assertEqual(result["received"], 2)
        self.assertEqual(result["rendered"], 2)
        self.assertEqual(result["failed"], 0)
        self.assertEqual(result["queue"], "D3test")

    def test_bad_message_is_dropped_and_next_is_processed(self):
        good = gzip.compress((FIXTURES_DIR / "ts_arrival_late.xml").read_bytes())
        bad_time = b'<Pport ts="t" version="16.0"><uR updateOrigin="TD"><TS><Location tpl="X" pta="10:00"><arr at="9:5"/></Location></TS></uR></Pport>'
        source, conn = self.make_source(
            frame("m1", gzip.compress(b"<Pport><uR>")),
            frame("m2", bad_time),
            frame("m3", b'<?xml version="1.0" encoding="bogus"?><Pport ts="t" version="16.0"/>'),
            frame("m4", good),
        )

        with self.assertLogs("railfeed.jobs.consume.sources.darwin.source", level="ERROR"):
            result = source.consume(run_seconds=5, max_messages=4)

        self.assertEqual((result["received"], result["rendered"], result["failed"]), (4, 1, 3))
        self.assertEqual(conn.ack.call_count, 4)

    def test_handle_frame_returns_rendered_text(self):
        source, _ = self.make_source()
        text = source.handle_frame(frame("m1", (FIXTURES_DIR / "ts_arrival_late.xml").read_bytes()))
        self.assertIn("DELAY: 7.000000", text)

    def test_idle_feed_stops_after_run_window(self):
        source, conn = self.make_source()
        result = source.consume(run_seconds=0.05)
        self.assertEqual(result["received"], 0)
        conn.disconnect.assert_called_once()

    def test_stomp_error_ends_run_and_disconnects(self):
        source, conn = self.make_source()
        source.listener.on_error(Mock(headers={"message": "bad login"}, body=b""))

        with self.assertRaises(RuntimeError):
            source.consume(run_seconds=5)
        conn.disconnect.assert_called_once()
        conn.unsubscribe.assert_not_called()

    def test_broker_disconnect_mid_run_ends_run(self):
        body = (FIXTURES_DIR / "ts_arrival_late.xml").read_bytes()
        source, conn = self.make_source(frame("m1", body))
        conn.ack.side_effect = lambda *args: source.listener.on_disconnected()
        conn.is_connected.return_value = False

        with self.assertRaises(RuntimeError):
            source.consume(run_seconds=5)

        conn.unsubscribe.assert_not_called()
        conn.disconnect.assert_not_called()
        self.assertFalse(source.listener.active)


class FrameQueueListenerTests(unittest.TestCase):
    def test_disconnect_outside_run_is_not_queued(self):
        listener = FrameQueueListener()
        listener.on_disconnected()
        self.assertIsNone(listener.next_frame(timeout=0.01))

    def test_disconnect_during_run_raises_from_next_frame(self):
        listener = FrameQueueListener()
        listener.active = True
        listener.on_disconnected()
        with self.assertRaises(RuntimeError):
            listener.next_frame(timeout=0.01)


if __name__ == "__main__":
    unittest.main()
