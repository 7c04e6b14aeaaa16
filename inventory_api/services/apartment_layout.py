"""
Apartment Layout

Pure functions behind apartment generation and the building inventory view:
- expand a floor plan into (floor, flat_id, flat_number) positions
- group generated apartments by floor
- fold flat apartment rows into floor plan -> floor -> apartment groups
"""
from typing import Any, Dict, Iterable, List, NamedTuple


class ApartmentPosition(NamedTuple):
    floor: int
    flat_id: int
    flat_number: int


def expand_floor_plan(
    floor_range_start: int,
    floor_range_end: int,
    starting_apartment_number: int,
    apartments_per_floor: int,
) -> List[ApartmentPosition]:
    """
    Expand a floor plan into apartment positions.

    flat_id restarts at 1 on every floor; flat_number keeps counting from
    starting_apartment_number across the whole range.

    Example:
        >>> expand_floor_plan(2, 3, 101, 2)
        [ApartmentPosition(floor=2, flat_id=1, flat_number=101),
         ApartmentPosition(floor=2, flat_id=2, flat_number=102),
         ApartmentPosition(floor=3, flat_id=1, flat_number=103),
         ApartmentPosition(floor=3, flat_id=2, flat_number=104)]
    """
    if floor_range_end < floor_range_start:
        raise ValueError("floor_range_end must be >= floor_range_start")
    if starting_apartment_number < 1:
        raise ValueError("starting_apartment_number must be >= 1")
    if apartments_per_floor < 1:
        raise ValueError("apartments_per_floor must be >= 1")

    positions = []
    flat_number = starting_apartment_number

    for floor in range(floor_range_start, floor_range_end + 1):
        for flat_id in range(1, apartments_per_floor + 1):
            positions.append(ApartmentPosition(floor, flat_id, flat_number))
            flat_number += 1

    return positions


def apartment_summary(apartment: Any) -> Dict[str, Any]:
    """Fields exposed for one apartment inside a floor group."""
    return {
        "flat_id": apartment.flat_id,
        "flat_number": apartment.flat_number,
        "status": apartment.status,
        "image": apartment.image,
        "square_meters": apartment.square_meters,
    }


def group_by_floor(apartments: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Group apartments by floor, ascending floor then flat_number.

    Accepts any objects with floor, flat_id, flat_number, status, image and
    square_meters attributes.
    """
    ordered = sorted(apartments, key=lambda a: (a.floor, a.flat_number))

    floors: List[Dict[str, Any]] = []
    for apartment in ordered:
        if not floors or floors[-1]["floor"] != apartment.floor:
            floors.append({"floor": apartment.floor, "apartments": []})
        floors[-1]["apartments"].append(apartment_summary(apartment))

    return floors


def build_inventory_view(apartments: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Fold apartment rows into floor plan -> floor -> apartment groups.

    Rows must already be ordered by (floor_plan_id, floor, flat_number);
    groups appear in first-seen order.
    """
    plans: List[Dict[str, Any]] = []
    plan_index: Dict[int, Dict[str, Any]] = {}
    floor_index: Dict[tuple, Dict[str, Any]] = {}

    for apartment in apartments:
        plan = plan_index.get(apartment.floor_plan_id)
        if plan is None:
            plan = {
                "floor_plan_id": apartment.floor_plan_id,
                "name": apartment.name,
                "floors": [],
            }
            plan_index[apartment.floor_plan_id] = plan
            plans.append(plan)

        floor_key = (apartment.floor_plan_id, apartment.floor)
        floor = floor_index.get(floor_key)
        if floor is None:
            floor = {"floor": apartment.floor, "apartments": []}
            floor_index[floor_key] = floor
            plan["floors"].append(floor)

        floor["apartments"].append(apartment_summary(apartment))

    return plans
