"""Tests for ApartmentService against an in-memory database."""
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from inventory_api.lib.errors import (
    AmbiguousApartmentError,
    BuildingNotFoundError,
    DuplicateApartmentsError,
    FloorPlanNotFoundError,
    NoApartmentsFoundError,
    NotFoundError,
    ValidationError,
)
from inventory_api.models import Apartment, Building
from inventory_api.schemas.apartment import ApartmentStatus
from inventory_api.services.apartment_service import ApartmentService


async def count_apartments(db, **filters):
    query = select(func.count(Apartment.id))
    for field, value in filters.items():
        query = query.where(getattr(Apartment, field) == value)
    result = await db.execute(query)
    return result.scalar_one()


async def all_apartments(db, floor_plan_id):
    result = await db.execute(
        select(Apartment)
        .where(Apartment.floor_plan_id == floor_plan_id)
        .order_by(Apartment.flat_number)
    )
    return list(result.scalars().all())


# ============================================
# GENERATION
# ============================================

class TestGenerateApartments:
    async def test_generates_worked_example(self, db, floor_plan):
        service = ApartmentService(db)

        apartments = await service.generate_apartments(floor_plan_id=floor_plan.id)

        rows = await all_apartments(db, floor_plan.id)
        assert len(apartments) == 6
        assert [(a.floor, a.flat_id, a.flat_number) for a in rows] == [
            (2, 1, 101), (2, 2, 102),
            (3, 1, 103), (3, 2, 104),
            (4, 1, 105), (4, 2, 106),
        ]
        for apartment in rows:
            assert apartment.status == "free"
            assert apartment.image is None
            assert apartment.square_meters == Decimal("0")
            assert apartment.name == floor_plan.name
            assert apartment.building_id == floor_plan.building_id

    async def test_explicit_building_and_name(self, db, building, floor_plan):
        other = Building(
            company_id=building.company_id, name="Tower B", address="14 Rustaveli Ave",
            desktop_paths={}, mobile_paths={},
        )
        db.add(other)
        await db.commit()

        service = ApartmentService(db)
        await service.generate_apartments(
            floor_plan_id=floor_plan.id, building_id=other.id, name="Block B",
        )

        assert await count_apartments(db, building_id=other.id, name="Block B") == 6
        assert await count_apartments(db, building_id=floor_plan.building_id) == 0

    async def test_missing_building(self, db, floor_plan):
        service = ApartmentService(db)

        with pytest.raises(BuildingNotFoundError):
            await service.generate_apartments(floor_plan_id=floor_plan.id, building_id=999)

        assert await count_apartments(db) == 0

    async def test_missing_floor_plan(self, db, building):
        service = ApartmentService(db)

        with pytest.raises(FloorPlanNotFoundError):
            await service.generate_apartments(floor_plan_id=999)

    async def test_second_generation_is_rejected(self, db, floor_plan):
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)

        with pytest.raises(DuplicateApartmentsError):
            await service.generate_apartments(floor_plan_id=floor_plan.id)

        assert await count_apartments(db) == 6

    async def test_same_plan_under_another_name_is_allowed(self, db, floor_plan):
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        await service.generate_apartments(floor_plan_id=floor_plan.id, name="Type A mirrored")

        assert await count_apartments(db) == 12

    async def test_constraint_violation_rolls_back_everything(self, db, floor_plan, monkeypatch):
        # rollback expires loaded objects, so keep plain values
        floor_plan_id = floor_plan.id

        # A row already holds one of the positions, but the guard misses it
        db.add(Apartment(
            flat_id=1, flat_number=103, floor=3,
            building_id=floor_plan.building_id, floor_plan_id=floor_plan.id,
            name=floor_plan.name, status="sold",
        ))
        await db.commit()

        service = ApartmentService(db)

        async def guard_misses(*args, **kwargs):
            return False

        monkeypatch.setattr(service, "apartments_exist", guard_misses)

        with pytest.raises(DuplicateApartmentsError):
            await service.generate_apartments(floor_plan_id=floor_plan_id)

        rows = await all_apartments(db, floor_plan_id)
        assert [(a.flat_number, a.status) for a in rows] == [(103, "sold")]

    async def test_other_integrity_errors_are_not_duplicates(self, db, floor_plan, monkeypatch):
        floor_plan_id = floor_plan.id
        service = ApartmentService(db)

        async def commit_fails():
            raise IntegrityError(
                "INSERT INTO apartments", None,
                Exception("FOREIGN KEY constraint failed"),
            )

        monkeypatch.setattr(db, "commit", commit_fails)

        with pytest.raises(IntegrityError):
            await service.generate_apartments(floor_plan_id=floor_plan_id)

        monkeypatch.undo()
        assert await count_apartments(db, floor_plan_id=floor_plan_id) == 0


# ============================================
# INVENTORY VIEW
# ============================================

class TestBuildingInventory:
    async def test_no_apartments(self, db, building):
        service = ApartmentService(db)

        with pytest.raises(NoApartmentsFoundError):
            await service.get_building_inventory(building.id)

    async def test_view_matches_persisted_rows(self, db, make_floor_plan):
        plan_a = await make_floor_plan(name="Type A")
        plan_b = await make_floor_plan(
            name="Type B", floor_range_start=1, floor_range_end=2,
            starting_apartment_number=1, apartments_per_floor=3,
        )
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=plan_b.id)
        await service.generate_apartments(floor_plan_id=plan_a.id)

        view = await service.get_building_inventory(plan_a.building_id)

        assert [(p["floor_plan_id"], p["name"]) for p in view] == [
            (plan_a.id, "Type A"), (plan_b.id, "Type B"),
        ]
        assert [f["floor"] for f in view[0]["floors"]] == [2, 3, 4]
        assert [f["floor"] for f in view[1]["floors"]] == [1, 2]

        flattened = sorted(
            (plan["floor_plan_id"], floor["floor"], apt["flat_id"], apt["flat_number"])
            for plan in view
            for floor in plan["floors"]
            for apt in floor["apartments"]
        )
        rows = await all_apartments(db, plan_a.id) + await all_apartments(db, plan_b.id)
        assert flattened == sorted(
            (a.floor_plan_id, a.floor, a.flat_id, a.flat_number) for a in rows
        )


# ============================================
# STATUS
# ============================================

class TestUpdateStatus:
    async def test_changes_only_target(self, db, floor_plan, storage):
        service = ApartmentService(db, storage=storage)
        await service.generate_apartments(floor_plan_id=floor_plan.id)

        await service.update_shared_properties(
            floor_plan_id=floor_plan.id, flat_id=1, square_meters=Decimal("48.5"),
        )
        before = {
            a.flat_number: (a.floor, a.flat_id, a.square_meters, a.image, a.status)
            for a in await all_apartments(db, floor_plan.id)
        }

        updated = await service.update_status(floor_plan.id, 104, ApartmentStatus.RESERVED)

        assert updated.flat_number == 104
        assert updated.status == "reserved"
        after = {
            a.flat_number: (a.floor, a.flat_id, a.square_meters, a.image, a.status)
            for a in await all_apartments(db, floor_plan.id)
        }
        assert after.pop(104)[:4] == before.pop(104)[:4]
        assert after == before

    async def test_any_transition_allowed(self, db, floor_plan):
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)

        for status in ("sold", "free", "free", "reserved", "sold"):
            updated = await service.update_status(floor_plan.id, 101, ApartmentStatus(status))
            assert updated.status == status

    async def test_unknown_flat_number(self, db, floor_plan):
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)

        with pytest.raises(NotFoundError):
            await service.update_status(floor_plan.id, 999, ApartmentStatus.SOLD)

    async def test_ambiguous_flat_number(self, db, floor_plan):
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        await service.generate_apartments(floor_plan_id=floor_plan.id, name="Copy")

        with pytest.raises(AmbiguousApartmentError):
            await service.update_status(floor_plan.id, 101, ApartmentStatus.SOLD)


# ============================================
# SHARED PROPERTIES
# ============================================

class TestUpdateSharedProperties:
    async def test_fans_out_across_floors(self, db, floor_plan, storage):
        service = ApartmentService(db, storage=storage)
        await service.generate_apartments(floor_plan_id=floor_plan.id)

        updated = await service.update_shared_properties(
            floor_plan_id=floor_plan.id, flat_id=2, square_meters=Decimal("64.25"),
        )

        assert [a.flat_number for a in updated] == [102, 104, 106]
        for apartment in await all_apartments(db, floor_plan.id):
            if apartment.flat_id == 2:
                assert apartment.square_meters == Decimal("64.25")
            else:
                assert apartment.square_meters == Decimal("0")
            assert apartment.image is None

    async def test_sets_image_url(self, db, floor_plan, storage):
        service = ApartmentService(db, storage=storage)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        stored = await storage.save_apartment_image("corner.png", b"png-bytes", "image/png")

        updated = await service.update_shared_properties(
            floor_plan_id=floor_plan.id, flat_id=1, square_meters=Decimal("80"),
            image_path=stored["storage_path"],
        )

        assert {a.image for a in updated} == {stored["url"]}
        assert await storage.file_exists(stored["storage_path"])

    @pytest.mark.parametrize(
        "kwargs,error",
        [
            ({"floor_plan_id": None, "flat_id": 1, "square_meters": Decimal("1")}, ValidationError),
            ({"flat_id": None, "square_meters": Decimal("1")}, ValidationError),
            ({"flat_id": 1, "square_meters": None}, ValidationError),
            ({"floor_plan_id": 999, "flat_id": 1, "square_meters": Decimal("1")}, NotFoundError),
            ({"flat_id": 9, "square_meters": Decimal("1")}, NotFoundError),
        ],
    )
    async def test_failure_removes_uploaded_image(self, db, floor_plan, storage, kwargs, error):
        service = ApartmentService(db, storage=storage)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        stored = await storage.save_apartment_image("plan.webp", b"webp-bytes", "image/webp")

        kwargs.setdefault("floor_plan_id", floor_plan.id)
        with pytest.raises(error):
            await service.update_shared_properties(image_path=stored["storage_path"], **kwargs)

        assert not await storage.file_exists(stored["storage_path"])
        for apartment in await all_apartments(db, floor_plan.id):
            assert apartment.square_meters == Decimal("0")
            assert apartment.image is None

    async def test_uses_application_storage_by_default(self, db, floor_plan, storage, monkeypatch):
        monkeypatch.setattr(
            "inventory_api.services.apartment_service.get_storage", lambda: storage
        )
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        stored = await storage.save_apartment_image("corner.png", b"png-bytes", "image/png")

        updated = await service.update_shared_properties(
            floor_plan_id=floor_plan.id, flat_id=1, square_meters=Decimal("80"),
            image_path=stored["storage_path"],
        )

        assert {a.image for a in updated} == {stored["url"]}

    async def test_default_storage_cleans_up_on_failure(self, db, floor_plan, storage, monkeypatch):
        monkeypatch.setattr(
            "inventory_api.services.apartment_service.get_storage", lambda: storage
        )
        service = ApartmentService(db)
        await service.generate_apartments(floor_plan_id=floor_plan.id)
        stored = await storage.save_apartment_image("corner.png", b"png-bytes", "image/png")

        with pytest.raises(NotFoundError):
            await service.update_shared_properties(
                floor_plan_id=floor_plan.id, flat_id=9, square_meters=Decimal("80"),
                image_path=stored["storage_path"],
            )

        assert not await storage.file_exists(stored["storage_path"])
