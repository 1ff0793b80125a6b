from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple
from models import Car
from config import MAX_SEATS


class CarRegistry:
    """Cars by id plus a pool index: pools[k] holds the cars with exactly k+1 free seats.

    Full cars are not stored in any pool. Not thread-safe on its own; the
    Dispatcher holds its lock around every call.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.cars: Dict[int, Car] = {}
        self.pools: List[Dict[int, Car]] = [{} for _ in range(MAX_SEATS)]

    def load(self, cars: Iterable[Tuple[int, int]]):
        self.reset()
        for car_id, seats in cars:
            previous = self.cars.get(car_id)
            if previous is not None:
                # repeated id in one payload: last one wins
                self._unpool(previous)
            car = Car(id=car_id, seats_total=seats, seats_available=seats)
            self.cars[car_id] = car
            self._pool(car)

    def lookup(self, car_id: int) -> Optional[Car]:
        return self.cars.get(car_id)

    def find_any_with_capacity(self, min_seats: int) -> Optional[Car]:
        # any car with enough free seats will do, no ordering among them
        for pool in self.pools[min_seats - 1:]:
            for car in pool.values():
                return car
        return None

    def apply_seat_delta(self, car_id: int, delta: int) -> Car:
        car = self.cars[car_id]
        self._unpool(car)
        car = replace(car, seats_available=car.seats_available + delta)
        self.cars[car_id] = car
        self._pool(car)
        return car

    def _pool(self, car: Car):
        if car.seats_available > 0:
            self.pools[car.seats_available - 1][car.id] = car

    def _unpool(self, car: Car):
        if car.seats_available > 0:
            self.pools[car.seats_available - 1].pop(car.id, None)
