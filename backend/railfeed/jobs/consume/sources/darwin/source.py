import logging
import time
from typing import Optional

from railfeed.core.errors import RailFeedError
from railfeed.jobs.consume.pipeline import process_payload
from railfeed.jobs.consume.sources.base import BaseSource

from .config import load_config
from .payload import decompress_body
from .transport import SUBSCRIPTION_ID, FrameQueueListener, ack_frame, configure_logging_if_needed, make_connection

logger = logging.getLogger(__name__)


class DarwinPushPortSource(BaseSource):
    """
    Darwin Push Port consumption:
      - STOMP subscribe with client-individual ack
      - per message: gunzip -> decode -> render -> log -> ack
    """

    def __init__(self, listener: Optional[FrameQueueListener] = None, connection=None):
        configure_logging_if_needed()
        self.cfg = load_config()
        self.listener = listener or FrameQueueListener()
        self.conn = connection or make_connection(self.cfg, self.listener)

        logger.info(
            "Darwin configured host=%s port=%d queue=%s run_seconds=%.1f poll_timeout=%.1f "
            "heartbeat_ms=%d max_messages=%s",
            self.cfg.host,
            self.cfg.port,
            self.cfg.queue_name,
            self.cfg.run_seconds,
            self.cfg.poll_timeout,
            self.cfg.heartbeat_ms,
            "unlimited" if self.cfg.max_messages == 0 else str(self.cfg.max_messages),
        )

    def handle_frame(self, frame) -> Optional[str]:
        """Render one frame; None if the message was dropped."""
        try:
            logger.info("Decompressing body...")
            payload = decompress_body(frame.body)

            logger.info("Decoding XML...")
            logger.debug("%s", payload.decode("utf-8", errors="replace"))
            text = process_payload(payload)

        except RailFeedError as e:
            logger.exception("Dropping message %s: %r", frame.headers.get("message-id"), e)
            return None

        logger.info("---------------")
        logger.info("%s\n", text)
        return text

    def consume(
        self,
        queue_name: Optional[str] = None,
        run_seconds: Optional[float] = None,
        max_messages: Optional[int] = None,
    ) -> dict:
        queue_name = queue_name or self.cfg.queue_name
        run_seconds = self.cfg.run_seconds if run_seconds is None else run_seconds
        max_messages = self.cfg.max_messages if max_messages is None else max_messages

        received = 0
        rendered = 0
        failed = 0

        logger.info("Connecting to feed %s:%d ...", self.cfg.host, self.cfg.port)
        self.conn.connect(self.cfg.username, self.cfg.password, wait=True)

        start = time.monotonic()
        try:
            logger.info("Subscribing to queue %s ...", queue_name)
            self.conn.subscribe(destination=queue_name, id=SUBSCRIPTION_ID, ack="client-individual")
            self.listener.active = True

            while time.monotonic() - start < run_seconds:
                if max_messages and received >= max_messages:
                    logger.info("Stopping early due to RAIL_MAX_MESSAGES=%d", max_messages)
                    break

                logger.debug("Waiting for message...")
                frame = self.listener.next_frame(timeout=self.cfg.poll_timeout)
                if frame is None:
                    continue

                received += 1
                logger.info("Got new message %d.", received)

                if self.handle_frame(frame) is None:
                    failed += 1
                else:
                    rendered += 1

                ack_frame(self.conn, frame)

            self.listener.active = False
            self.conn.unsubscribe(id=SUBSCRIPTION_ID)

        finally:
            self.listener.active = False
            if self.conn.is_connected():
                self.conn.disconnect()

        result = {
            "source": "darwin",
            "queue": queue_name,
            "received": received,
            "rendered": rendered,
            "failed": failed,
            "elapsed_seconds": round(time.monotonic() - start, 2),
        }
        logger.info("Darwin consume done result=%s", result)
        return result
