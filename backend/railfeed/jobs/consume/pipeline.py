from railfeed.jobs.consume.decode import decode_message
from railfeed.jobs.consume.render import render


def process_payload(payload: bytes) -> str:
    """
    Decode one decompressed message body and render it.

    Raises MalformedPayloadError / TimeFormatError; the caller drops the message.
    """
    return render(decode_message(payload))
