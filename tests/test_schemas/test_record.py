"""Tests for packing record schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from packtrack.models.catalog import PackageKey
from packtrack.schemas.record import SUGGESTED_MODES, PackingRecord, RecordDraft


class TestPackingRecord:
    """Tests for PackingRecord."""

    def test_defaults(self):
        record = PackingRecord(id="row-0")

        assert record.date == ""
        assert record.customer == ""
        assert record.qty == 0
        assert record.si_qty == 0
        assert record.timestamp is None
        assert record.package_counts == {}

    def test_negative_quantities_coerced_to_zero(self):
        record = PackingRecord(id="row-0", qty=-10, si_qty="-2")

        assert record.qty == 0
        assert record.si_qty == 0

    def test_malformed_quantity_coerced_to_zero(self):
        record = PackingRecord(id="row-0", qty="lots")
        assert record.qty == 0

    def test_package_counts_accept_key_values(self):
        record = PackingRecord(id="row-0", package_counts={"RETURNABLE": 4, "WARP": "-1"})

        assert record.count(PackageKey.RETURNABLE) == 4
        assert record.count(PackageKey.WARP) == 0

    def test_missing_package_count_is_zero(self):
        record = PackingRecord(id="row-0", package_counts={PackageKey.UNIT: 3})
        assert record.count(PackageKey.RETURNABLE) == 0

    def test_unknown_package_key_rejected(self):
        with pytest.raises(ValidationError):
            PackingRecord(id="row-0", package_counts={"CRATE": 1})

    def test_blank_timestamp_is_none(self):
        record = PackingRecord(id="row-0", timestamp="  ")
        assert record.timestamp is None

    def test_immutability(self):
        record = PackingRecord(id="row-0")
        with pytest.raises(ValidationError):
            record.qty = 5  # type: ignore[misc]

    def test_id_required(self):
        with pytest.raises(ValidationError):
            PackingRecord(id="")


class TestRecordDraft:
    """Tests for RecordDraft."""

    def test_defaults(self):
        draft = RecordDraft(customer="Honda")

        assert draft.mode == "Sea"
        assert draft.si_qty == 1
        assert draft.qty == 0
        assert draft.date == date.today()

    def test_customer_required(self):
        with pytest.raises(ValidationError):
            RecordDraft(customer="")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            RecordDraft(customer="Honda", qty=-1)

    def test_negative_package_count_rejected(self):
        with pytest.raises(ValidationError):
            RecordDraft(customer="Honda", package_counts={"WARP": -3})

    def test_to_record(self):
        draft = RecordDraft(
            date=date(2024, 12, 25),
            customer=" Honda ",
            mode="Air",
            product="Screens",
            si_qty=2,
            qty=300,
            remark="fragile",
            package_counts={"RETURNABLE": 4},
        )

        record = draft.to_record("record-1")

        assert record.id == "record-1"
        assert record.date == "2024-12-25"
        assert record.customer == "Honda"
        assert record.qty == 300
        assert record.count(PackageKey.RETURNABLE) == 4
        assert record.timestamp is None

    def test_date_parsed_from_iso_string(self):
        draft = RecordDraft.model_validate({"customer": "Sony", "date": "2024-03-01"})
        assert draft.date == date(2024, 3, 1)

    def test_mode_suggestions_in_schema(self):
        mode = RecordDraft.model_json_schema()["properties"]["mode"]

        assert mode["default"] == "Sea"
        assert mode["examples"] == list(SUGGESTED_MODES)
