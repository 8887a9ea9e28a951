import logging
import os
import queue

import stomp

from .config import FeedConfig

logger = logging.getLogger(__name__)

SUBSCRIPTION_ID = "1"


def configure_logging_if_needed() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


class FrameQueueListener(stomp.ConnectionListener):
    """
    Hands received frames to the consume loop one at a time.

    ERROR frames, and a disconnect while a run is active, are queued as
    RuntimeError so the loop fails on its own thread.
    """

    def __init__(self):
        self.frames: queue.Queue = queue.Queue()
        self.active = False

    def on_connected(self, frame):
        logger.info(
            "Connected version=%s server=%s",
            frame.headers.get("version", "?"),
            frame.headers.get("server", "?"),
        )

    def on_disconnected(self):
        if not self.active:
            logger.info("Disconnected")
            return
        logger.error("Disconnected from broker during run")
        self.frames.put(RuntimeError("Disconnected from broker during run"))

    def on_error(self, frame):
        logger.error("STOMP error headers=%s body=%r", frame.headers, frame.body)
        self.frames.put(RuntimeError(f"STOMP error: {frame.headers.get('message', frame.body)!r}"))

    def on_message(self, frame):
        self.frames.put(frame)

    def next_frame(self, timeout: float):
        """Next frame, or None if nothing arrived within timeout."""
        try:
            item = self.frames.get(timeout=timeout)
        except queue.Empty:
            return None
        if isinstance(item, Exception):
            raise item
        return item


def make_connection(cfg: FeedConfig, listener: FrameQueueListener) -> stomp.Connection:
    # auto_decode=False keeps gzip bodies as bytes
    conn = stomp.Connection(
        [(cfg.host, cfg.port)],
        heartbeats=(cfg.heartbeat_ms, cfg.heartbeat_ms),
        auto_decode=False,
    )
    conn.set_listener("railfeed", listener)
    return conn


def ack_frame(conn: stomp.Connection, frame) -> None:
    conn.ack(frame.headers["message-id"], frame.headers.get("subscription", SUBSCRIPTION_ID))
