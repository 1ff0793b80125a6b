import logging
import threading
from typing import Iterable, Optional, Tuple
from models import Car, Location, RideOutcome, DropOutcome
from fleet import CarRegistry
from matching import GroupLedger

logger = logging.getLogger(__name__)


class Dispatcher:
    """Owns the car registry and the group ledger behind one lock.

    Every operation, read or write, runs to completion under the lock, so the two
    structures are always seen and mutated together.
    """

    def __init__(self):
        self.fleet = CarRegistry()
        self.ledger = GroupLedger()
        self.lock = threading.Lock()

    def load(self, cars: Iterable[Tuple[int, int]]):
        """Replace the whole fleet and forget every group."""
        cars = list(cars)
        with self.lock:
            self.ledger.reset()
            self.fleet.load(cars)
        logger.debug("fleet loaded with %d cars", len(cars))

    def request_ride(self, group_id: int, people: int) -> RideOutcome:
        with self.lock:
            outcome = self.ledger.request_ride(group_id, people, self.fleet)
        logger.debug("group %d (%d people): %s", group_id, people, outcome.value)
        return outcome

    def drop_off(self, group_id: int) -> DropOutcome:
        with self.lock:
            outcome = self.ledger.drop_off(group_id, self.fleet)
        logger.debug("group %d: %s", group_id, outcome.value)
        return outcome

    def locate(self, group_id: int) -> Location:
        with self.lock:
            car_id = self.ledger.locate(group_id)
            car = self.fleet.lookup(car_id) if car_id > 0 else None
        return Location(car_id=car_id, car=car)

    def lookup_car(self, car_id: int) -> Optional[Car]:
        with self.lock:
            return self.fleet.lookup(car_id)
