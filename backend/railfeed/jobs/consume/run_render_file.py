import argparse
import sys
from pathlib import Path

from railfeed.core.errors import RailFeedError
from railfeed.jobs.consume.pipeline import process_payload
from railfeed.jobs.consume.sources.darwin.payload import decompress_body


def render_file(path: Path) -> str:
    return process_payload(decompress_body(path.read_bytes()))


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Render a saved Push Port message (gzip or XML)")
    p.add_argument("path", type=Path, help="Message body file, e.g. msg.xml or msg.xml.gz")

    args = p.parse_args(argv)

    try:
        text = render_file(args.path)
    except RailFeedError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
