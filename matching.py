from collections import deque
from dataclasses import replace
from typing import Deque, Dict, List, Optional
from models import Car, Group, RideOutcome, DropOutcome, NOT_FOUND
from fleet import CarRegistry
from config import MAX_SEATS


class GroupLedger:
    """Known groups plus one FIFO wait queue per group size.

    Queues hold Group snapshots taken at enqueue time. A snapshot that no longer
    equals the live ledger entry (group dropped, seated, or re-requested) is stale
    and gets discarded when it reaches the head of its queue.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.arrived = 0
        self.groups: Dict[int, Group] = {}
        self.queues: List[Deque[Group]] = [deque() for _ in range(MAX_SEATS)]

    def request_ride(self, group_id: int, people: int, fleet: CarRegistry) -> RideOutcome:
        if group_id in self.groups:
            return RideOutcome.ALREADY_KNOWN
        self.arrived += 1
        group = Group(id=group_id, people=people, arrival=self.arrived)
        self.groups[group_id] = group
        car = fleet.find_any_with_capacity(people)
        if car is not None:
            self.seat(car, group, fleet)
            return RideOutcome.SEATED
        self.queues[people - 1].append(group)
        return RideOutcome.ENQUEUED

    def drop_off(self, group_id: int, fleet: CarRegistry) -> DropOutcome:
        group = self.groups.pop(group_id, None)
        if group is None:
            return DropOutcome.NOT_FOUND
        if group.car_id > 0:
            car = fleet.apply_seat_delta(group.car_id, group.people)
            self.rematch(car, fleet)
            return DropOutcome.DROPPED_TRAVELING
        # its queue entry is now stale and is pruned by the next scan
        return DropOutcome.DROPPED_WAITING

    def locate(self, group_id: int) -> int:
        group = self.groups.get(group_id)
        if group is None:
            return NOT_FOUND
        return group.car_id

    def seat(self, car: Car, group: Group, fleet: CarRegistry) -> Car:
        """Put group in car. Caller guarantees group.people <= car.seats_available."""
        self.groups[group.id] = replace(group, car_id=car.id)
        return fleet.apply_seat_delta(car.id, -group.people)

    def rematch(self, car: Car, fleet: CarRegistry):
        """Greedy backfill: keep seating the earliest-arrived waiting group that fits.

        Candidates are the heads of every queue whose size fits the free seats, so a
        small group that arrived earlier beats a larger exact fit.
        """
        while car.seats_available > 0:
            self.prune()
            candidate = self._earliest_fitting(car.seats_available)
            if candidate is None:
                return
            self.queues[candidate.people - 1].popleft()
            car = self.seat(car, candidate, fleet)

    def prune(self):
        for queue in self.queues:
            while queue and self.groups.get(queue[0].id) != queue[0]:
                queue.popleft()

    def _earliest_fitting(self, seats: int) -> Optional[Group]:
        best = None
        for queue in self.queues[:seats]:
            if queue and (best is None or queue[0].arrival < best.arrival):
                best = queue[0]
        return best
