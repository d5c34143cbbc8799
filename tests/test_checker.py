from __future__ import annotations

from core.domain.models import Driver, Finding, Reservation, Vehicle
from core.services.checker import ReferenceCheck, find_broken_references
from core.services.indexer import build_index


def _checks(drivers: list[Driver], vehicles: list[Vehicle]) -> list[ReferenceCheck]:
    return [
        ReferenceCheck("driver_id", build_index(drivers), "drivers"),
        ReferenceCheck("vehicle_id", build_index(vehicles), "vehicles"),
    ]


def test_missing_driver_yields_single_finding() -> None:
    reservations = [Reservation(id="R2", driver_id="D99")]

    findings = find_broken_references(reservations, _checks([], []))

    assert findings == [
        Finding(record_id="R2", foreign_key_field="driver_id", value="D99", target_name="drivers"),
    ]


def test_unassigned_keys_are_not_broken_references() -> None:
    reservations = [
        Reservation(id="R3", driver_id=None),
        Reservation(id="R4", driver_id=""),
        Reservation(id="R5"),
    ]

    assert find_broken_references(reservations, _checks([], [])) == []


def test_findings_follow_record_then_check_order() -> None:
    reservations = [
        Reservation(id="R1", driver_id="D9", vehicle_id="V9"),
        Reservation(id="R2", driver_id="D1", vehicle_id="V8"),
        Reservation(id="R3", driver_id="D7", vehicle_id="V1"),
    ]
    checks = _checks([Driver(id="D1")], [Vehicle(id="V1")])

    findings = find_broken_references(reservations, checks)

    assert [(f.record_id, f.foreign_key_field, f.value) for f in findings] == [
        ("R1", "driver_id", "D9"),
        ("R1", "vehicle_id", "V9"),
        ("R2", "vehicle_id", "V8"),
        ("R3", "driver_id", "D7"),
    ]
    assert find_broken_references(reservations, checks) == findings


def test_check_list_order_is_respected() -> None:
    reservations = [Reservation(id="R1", driver_id="D9", vehicle_id="V9")]
    checks = list(reversed(_checks([], [])))

    findings = find_broken_references(reservations, checks)

    assert [f.target_name for f in findings] == ["vehicles", "drivers"]


def test_records_are_not_mutated() -> None:
    reservation = Reservation(id="R1", driver_id="D9")
    before = reservation.model_dump()

    find_broken_references([reservation], _checks([], []))

    assert reservation.model_dump() == before


def test_whitespace_key_is_a_broken_reference() -> None:
    reservations = [Reservation(id="R1", driver_id=" ")]

    findings = find_broken_references(reservations, _checks([], []))

    assert [(f.record_id, f.foreign_key_field, f.value) for f in findings] == [("R1", "driver_id", " ")]


def test_whitespace_key_present_in_index_is_not_reported() -> None:
    reservations = [Reservation(id="R1", driver_id=" ")]

    assert find_broken_references(reservations, _checks([Driver(id=" ")], [])) == []
