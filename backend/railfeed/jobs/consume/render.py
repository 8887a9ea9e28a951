"""
Human-readable rendering of decoded Push Port messages.

Each model type registers its own renderer with `render`; parents embed the
rendering of their children. Rendering is a pure function of the tree.
"""
from functools import singledispatch

from railfeed.jobs.consume.types import Event, Location, Message, Timestamp, UniqueResponse
from railfeed.scoring.v1.punctuality import arrival_delay_minutes

SCHEDULE_LABELS = (
    ("pta", "Public Time Arrive"),
    ("ptd", "Public Time Depart"),
    ("wta", "Working Time Arrive"),
    ("wtd", "Working Time Depart"),
    ("wtp", "Working Time Pass"),
)

EVENT_LABELS = (
    ("arrival", "Arrival"),
    ("departure", "Departure"),
    ("passing", "Pass"),
)

ID_LABELS = (
    ("rid", "RID"),
    ("ssd", "SSD"),
    ("uid", "UID"),
)


@singledispatch
def render(entity) -> str:
    raise TypeError(f"Cannot render {type(entity).__name__}")


@render.register
def _(event: Event) -> str:
    s = ""
    if event.actual:
        s += f" ACTUAL {event.actual}"
    if event.estimated:
        s += f" ESTIMATED {event.estimated}"
    if event.source:
        s += f" (Source: {event.source})"
    return s


@render.register
def _(location: Location) -> str:
    s = f"\n\t-- {location.tpl}"

    for attr, label in SCHEDULE_LABELS:
        value = getattr(location, attr)
        if value:
            s += f" | {label}: {value}"

    for attr, label in EVENT_LABELS:
        event = getattr(location, attr)
        if event is not None:
            s += f" | {label}:{render(event)}"

    # only late running is surfaced
    delay = arrival_delay_minutes(location)
    if delay is not None and delay > 0:
        s += f"\n\t   DELAY: {delay:f}"

    return s + "\n"


@render.register
def _(ts: Timestamp) -> str:
    s = ""
    for attr, label in ID_LABELS:
        value = getattr(ts, attr)
        if value:
            s += f"{label}: {value} "

    for loc in ts.locations:
        s += f"\n{render(loc)}"
    return s


@render.register
def _(ur: UniqueResponse) -> str:
    return f"\nUpdate Origin: {ur.update_origin}\n\n{render(ur.ts)}"


@render.register
def _(msg: Message) -> str:
    s = f"[{msg.timestamp} v{msg.version}]:"
    if msg.ur.update_origin:
        s += f"\n\t{render(msg.ur)}"
    return s
