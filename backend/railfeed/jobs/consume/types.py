from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Event:
    actual: str = ""                 # "at"
    estimated: str = ""              # "et"
    source: str = ""                 # "src", e.g. "TD", "Darwin"


@dataclass(frozen=True)
class Location:
    tpl: str = ""                    # timing point location code

    pta: str = ""                    # public time arrive
    ptd: str = ""                    # public time depart
    wta: str = ""                    # working time arrive
    wtd: str = ""                    # working time depart
    wtp: str = ""                    # working time pass

    arrival: Optional[Event] = None     # None = no <arr> element
    departure: Optional[Event] = None   # None = no <dep> element
    passing: Optional[Event] = None     # None = no <pass> element


@dataclass(frozen=True)
class Timestamp:
    rid: str = ""                    # RTTI train id
    ssd: str = ""                    # scheduled start date "YYYY-MM-DD"
    uid: str = ""                    # schedule UID

    locations: tuple[Location, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UniqueResponse:
    update_origin: str = ""          # "TD", "CIS", "Darwin", ...
    ts: Timestamp = field(default_factory=Timestamp)


@dataclass(frozen=True)
class Message:
    xmlns: str
    xmlns_ns2: str
    xmlns_ns3: str
    timestamp: str
    version: str

    ur: UniqueResponse = field(default_factory=UniqueResponse)
