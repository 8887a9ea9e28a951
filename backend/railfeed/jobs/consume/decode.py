import io
import logging
import xml.etree.ElementTree as ET
from typing import Optional

from railfeed.core.errors import MalformedPayloadError
from railfeed.jobs.consume.types import Event, Location, Message, Timestamp, UniqueResponse

logger = logging.getLogger(__name__)

EVENT_TAGS = {"arr": "arrival", "dep": "departure", "pass": "passing"}


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in elem if local_name(c.tag) == name]


def first_child(elem: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if elem is None:
        return None
    return next(iter(children(elem, name)), None)


def attr(elem: Optional[ET.Element], name: str) -> str:
    if elem is None:
        return ""
    return (elem.get(name) or "").strip()


def parse_xml(payload: bytes) -> tuple[ET.Element, dict[str, str]]:
    """
    Parse payload bytes into a root element plus the namespace declarations
    seen in the document (prefix -> uri, first declaration wins).
    """
    namespaces: dict[str, str] = {}
    root: Optional[ET.Element] = None

    try:
        for event, item in ET.iterparse(io.BytesIO(payload), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                namespaces.setdefault(prefix, uri)
            elif root is None:
                root = item
    except (ET.ParseError, LookupError, ValueError) as e:
        # LookupError: unknown encoding named in the XML declaration
        raise MalformedPayloadError(f"Payload is not well-formed XML: {e}") from e

    if root is None:
        raise MalformedPayloadError("Payload contains no root element")

    return root, namespaces


def decode_event(elem: Optional[ET.Element]) -> Optional[Event]:
    if elem is None:
        return None
    return Event(
        actual=attr(elem, "at"),
        estimated=attr(elem, "et"),
        source=attr(elem, "src"),
    )


def decode_location(elem: ET.Element) -> Location:
    events = {field: decode_event(first_child(elem, tag)) for tag, field in EVENT_TAGS.items()}
    return Location(
        tpl=attr(elem, "tpl"),
        pta=attr(elem, "pta"),
        ptd=attr(elem, "ptd"),
        wta=attr(elem, "wta"),
        wtd=attr(elem, "wtd"),
        wtp=attr(elem, "wtp"),
        **events,
    )


def decode_timestamp(elem: Optional[ET.Element]) -> Timestamp:
    if elem is None:
        return Timestamp()
    return Timestamp(
        rid=attr(elem, "rid"),
        ssd=attr(elem, "ssd"),
        uid=attr(elem, "uid"),
        locations=tuple(decode_location(x) for x in children(elem, "Location")),
    )


def decode_message(payload: bytes) -> Message:
    """
    Decode one decompressed Push Port body into a Message tree.

    Missing elements and attributes decode as empty strings; unknown ones are
    ignored. Only non-XML input fails (MalformedPayloadError).
    """
    root, namespaces = parse_xml(payload)

    ur_elem = first_child(root, "uR")
    ur = UniqueResponse(
        update_origin=attr(ur_elem, "updateOrigin"),
        ts=decode_timestamp(first_child(ur_elem, "TS")),
    )

    msg = Message(
        xmlns=namespaces.get("", ""),
        xmlns_ns2=namespaces.get("ns2", ""),
        xmlns_ns3=namespaces.get("ns3", ""),
        timestamp=attr(root, "ts"),
        version=attr(root, "version"),
        ur=ur,
    )

    logger.debug(
        "Decoded message ts=%s version=%s origin=%s rid=%s locations=%d",
        msg.timestamp,
        msg.version,
        ur.update_origin,
        ur.ts.rid,
        len(ur.ts.locations),
    )
    return msg
