import argparse

from dotenv import load_dotenv

from railfeed.jobs.consume.registry import SOURCES


def main():
    load_dotenv()

    p = argparse.ArgumentParser(description="Consume and render real-time schedule updates")
    p.add_argument("--source", default="darwin", choices=SOURCES.keys())

    p.add_argument("--queue", help="Queue/topic name (overrides RAIL_QUEUE_NAME)")
    p.add_argument("--seconds", type=float, help="Run window in seconds (overrides RAIL_RUN_SECONDS)")
    p.add_argument("--max-messages", type=int, help="Stop after N messages, 0 = unlimited")

    args = p.parse_args()

    source = SOURCES[args.source]()  # instantiate adapter
    result = source.consume(
        queue_name=args.queue,
        run_seconds=args.seconds,
        max_messages=args.max_messages,
    )

    print(result)


if __name__ == "__main__":
    main()
