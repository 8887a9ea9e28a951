import gzip
import zlib

from railfeed.core.errors import PayloadDecompressionError

GZIP_MAGIC = b"\x1f\x8b"
UTF8_BOM = b"\xef\xbb\xbf"


def decompress_body(body) -> bytes:
    """
    Gunzip a message body. Bodies that are already XML pass through unchanged.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    if not body.startswith(GZIP_MAGIC):
        if body.removeprefix(UTF8_BOM).lstrip().startswith(b"<"):
            return body
        raise PayloadDecompressionError(f"Body is neither gzip nor XML (first bytes {body[:8]!r})")

    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as e:
        raise PayloadDecompressionError(f"Could not gunzip body: {e}") from e
