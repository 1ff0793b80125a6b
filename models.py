from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

from config import MAX_SEATS

# locate() sentinels
WAITING = 0
NOT_FOUND = -1


@dataclass(frozen=True)
class Car:
    id: int
    seats_total: int
    seats_available: int


@dataclass(frozen=True)
class Group:
    id: int
    people: int
    arrival: int
    car_id: int = 0  # 0 while waiting


@dataclass(frozen=True)
class Location:
    car_id: int
    car: Optional[Car] = None


class RideOutcome(Enum):
    SEATED = "seated"
    ENQUEUED = "enqueued"
    ALREADY_KNOWN = "already_known"


class DropOutcome(Enum):
    DROPPED_TRAVELING = "dropped_traveling"
    DROPPED_WAITING = "dropped_waiting"
    NOT_FOUND = "not_found"


# Wire payloads, validated before anything reaches the dispatcher.
# JSON payloads are strict ("1", true and 2.0 are not ints); form values always arrive as strings.

class CarIn(SQLModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(ge=1)
    seats: int = Field(ge=1, le=MAX_SEATS)


class JourneyIn(SQLModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(ge=1)
    people: int = Field(ge=1, le=MAX_SEATS)


class GroupForm(SQLModel):
    id: int = Field(ge=1)
