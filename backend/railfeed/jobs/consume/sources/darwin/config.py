import os
from dataclasses import dataclass


@dataclass(frozen=True)
class FeedConfig:
    host: str
    port: int
    username: str
    password: str
    queue_name: str

    run_seconds: float
    poll_timeout: float
    heartbeat_ms: int
    max_messages: int


def load_config() -> FeedConfig:
    queue_name = (os.getenv("RAIL_QUEUE_NAME") or "").strip()
    if not queue_name:
        raise RuntimeError("RAIL_QUEUE_NAME not set in environment/.env")

    return FeedConfig(
        host=os.getenv("RAIL_HOST", "datafeeds.nationalrail.co.uk"),
        port=int(os.getenv("RAIL_PORT", "61613")),
        username=os.getenv("RAIL_USERNAME", "d3user"),
        password=os.getenv("RAIL_PASSWORD", "d3password"),
        queue_name=queue_name,
        run_seconds=float(os.getenv("RAIL_RUN_SECONDS", "10")),
        poll_timeout=float(os.getenv("RAIL_POLL_TIMEOUT_SECONDS", "1")),
        heartbeat_ms=int(os.getenv("RAIL_HEARTBEAT_MS", "15000")),
        max_messages=int(os.getenv("RAIL_MAX_MESSAGES", "0")),
    )
