"""Tests for CSV import and export."""

import csv
import io
import random
from datetime import date

import pytest

from packtrack.core.csv_codec import (
    dump_csv,
    export_filename,
    export_headers,
    export_to_csv,
    import_headers,
    parse_csv,
    split_line,
)
from packtrack.core.filters import RecordFilter
from packtrack.core.sample_data import generate_sample_data
from packtrack.models.catalog import PackageKey


class TestSplitLine:
    """Tests for split_line."""

    def test_plain_values_are_trimmed(self):
        assert split_line("a, b ,c") == ["a", "b", "c"]

    def test_quoted_comma(self):
        assert split_line('1,"Toyota, Ltd",Sea') == ["1", "Toyota, Ltd", "Sea"]

    def test_doubled_quote_is_literal(self):
        assert split_line('"say ""hi""",x') == ['say "hi"', "x"]

    def test_empty_values(self):
        assert split_line("a,,c") == ["a", "", "c"]


class TestParseCsv:
    """Tests for parse_csv."""

    def test_decodes_sheet_row(self):
        text = (
            "Date,Shipment,Mode,Product,SI QTY,QTY,RETURNABLE QTY,WARP QTY,Remark\n"
            "25/12/2024,Toyota,Sea,Electronics,2,150,4,1,urgent\n"
        )

        records = parse_csv(text)

        assert len(records) == 1
        record = records[0]
        assert record.id == "row-0"
        assert record.date == "2024-12-25"
        assert record.customer == "Toyota"
        assert record.mode == "Sea"
        assert record.product == "Electronics"
        assert record.si_qty == 2
        assert record.qty == 150
        assert record.count(PackageKey.RETURNABLE) == 4
        assert record.count(PackageKey.WARP) == 1
        assert record.remark == "urgent"

    def test_quoted_headers_and_values(self):
        text = '"Date","Shipment","QTY"\n"01/02/2024","Acme, Inc",10\n'

        record = parse_csv(text)[0]

        assert record.date == "2024-02-01"
        assert record.customer == "Acme, Inc"
        assert record.qty == 10

    def test_malformed_numbers_become_zero(self):
        text = "Date,Shipment,QTY,WARP QTY\n25/12/2024,Toyota,NaN,abc\n"

        record = parse_csv(text)[0]

        assert record.qty == 0
        assert record.count(PackageKey.WARP) == 0

    def test_short_row_keeps_defaults(self):
        text = "Date,Shipment,Mode,QTY\n25/12/2024,Toyota\n"

        record = parse_csv(text)[0]

        assert record.customer == "Toyota"
        assert record.mode == ""
        assert record.qty == 0

    def test_unknown_columns_ignored(self):
        text = "Date,Shipment,Colour\n25/12/2024,Toyota,red\n"

        record = parse_csv(text)[0]

        assert record.customer == "Toyota"
        assert "Colour" not in record.model_dump()

    def test_unrecognized_date_kept(self):
        text = "Date,Shipment\n2024-12-25,Toyota\n"
        assert parse_csv(text)[0].date == "2024-12-25"

    def test_timestamp_column(self):
        text = "Timestamp,Date,Shipment\n2024-12-25 10:00:00,25/12/2024,Toyota\n"
        assert parse_csv(text)[0].timestamp == "2024-12-25 10:00:00"

    def test_blank_lines_skipped_and_ids_sequential(self):
        text = "Date,Shipment\n\n01/01/2024,A\n  \n02/01/2024,B\n\n"

        records = parse_csv(text)

        assert [r.id for r in records] == ["row-0", "row-1"]
        assert [r.customer for r in records] == ["A", "B"]

    @pytest.mark.parametrize("text", ["", "\n\n", "   "])
    def test_empty_input(self, text):
        assert parse_csv(text) == []

    def test_header_only(self):
        assert parse_csv("Date,Shipment,QTY\n") == []

    def test_windows_line_endings(self):
        text = "Date,Shipment,QTY\r\n25/12/2024,Toyota,5\r\n"
        assert parse_csv(text)[0].qty == 5

    def test_oversized_field_does_not_raise(self):
        text = "Date,Shipment,QTY\n25/12/2024," + "x" * 200_000 + ",5\n"

        record = parse_csv(text)[0]

        assert len(record.customer) == 200_000
        assert record.qty == 5


class TestDumpCsv:
    """Tests for the sheet-layout writer."""

    def test_headers(self):
        headers = import_headers()

        assert headers[:6] == ["Date", "Shipment", "Mode", "Product", "SI QTY", "QTY"]
        assert headers[6] == "110x110x115 QTY"
        assert headers[-1] == "Remark"
        assert len(headers) == 24

    def test_writes_display_dates(self, make_record):
        text = dump_csv([make_record(date="2024-12-25")])
        assert text.splitlines()[1].startswith("25/12/2024,")

    def test_generated_records_survive_dump_and_parse(self):
        generated = generate_sample_data(25, today=date(2024, 12, 31), rng=random.Random(7))

        parsed = parse_csv(dump_csv(generated))

        assert len(parsed) == 25
        for source, decoded in zip(generated, parsed):
            assert decoded.model_dump(exclude={"id"}) == source.model_dump(exclude={"id"})


class TestExportCsv:
    """Tests for the export report."""

    def test_headers(self):
        assert export_headers() == [
            "Date",
            "Shipment",
            "Mode",
            "Product",
            "SI QTY",
            "QTY",
            "Total Packages",
            "Standard Total",
            "Boxes Total",
            "Warp Total",
            "Returnable Total",
            "Ratio Standard",
            "Ratio Boxes",
            "Ratio Warp",
            "Ratio Returnable",
        ]

    def test_row_values(self, make_record):
        record = make_record(package_counts={"RETURNABLE": 4, "27X27X22": 30})

        lines = export_to_csv([record]).splitlines()

        assert lines[1] == (
            '"2024-12-25","Toyota","Sea","Electronics","1","100","34",'
            '"0","30","0","4","0.00","1.00","0.00","2.00"'
        )

    def test_every_value_quoted_with_escaped_quotes(self, make_record):
        record = make_record(customer='The "Big" One, Ltd')

        text = export_to_csv([record])

        assert '"The ""Big"" One, Ltd"' in text
        assert text.splitlines()[0].startswith('"Date","Shipment"')

    def test_parses_back_as_csv(self, make_record):
        records = [make_record(customer="A, B"), make_record(customer="C")]

        rows = list(csv.reader(io.StringIO(export_to_csv(records))))

        assert len(rows) == 3
        assert rows[1][1] == "A, B"
        assert all(len(row) == 15 for row in rows)

    def test_filter_applied(self, make_record):
        records = [
            make_record(customer="Honda", date="2024-01-10"),
            make_record(customer="Sony", date="2024-01-11"),
        ]

        text = export_to_csv(records, RecordFilter(customer="Sony"))

        lines = text.splitlines()
        assert len(lines) == 2
        assert '"Sony"' in lines[1]

    def test_empty_selection_has_header_only(self):
        assert len(export_to_csv([]).splitlines()) == 1

    def test_filename(self):
        assert export_filename(date(2024, 12, 25)) == "packing_export_2024-12-25.csv"
