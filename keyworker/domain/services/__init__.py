"""Domain services: pure allocation logic with no I/O."""

from keyworker.domain.services.capacity_queue import CapacityQueue, StaffCapacity

__all__ = ["CapacityQueue", "StaffCapacity"]
