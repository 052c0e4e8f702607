"""
Tests for CSV / Excel normalisation: export rows, header aliases, defaults
and the export -> import round trip.
"""
import csv
from datetime import datetime
from decimal import Decimal
from io import BytesIO, StringIO

import pytest
from openpyxl import Workbook
from pydantic import ValidationError as PayloadError

from app.core.errors import ValidationError
from app.core.tabular import (
    EXPORT_COLUMNS,
    build_csv,
    build_template_csv,
    build_workbook,
    export_row,
    is_importable,
    normalize_row,
    read_import_file,
    read_xlsx_rows,
    split_list,
)
from app.schemas.customer import CustomerCreate
from factories import customer_data, customer_payload, visit


def test_export_row_flattens_record():
    record = visit("2024-01-05", 200, ["Hair Cut", "Facial"], discount=15, payment="UPI", staff=["Priya", "Sneha"])
    record.email = None
    record.notes = "Prefers mornings"

    row = export_row(record)

    assert list(row) == EXPORT_COLUMNS
    assert row["Services"] == "Hair Cut; Facial"
    assert row["PerformedBy"] == "Priya; Sneha"
    assert row["FinalAmount"] == Decimal("170.00")
    assert row["PaymentType"] == "UPI"
    assert row["VisitDate"] == "1/5/2024"
    assert row["Email"] == ""


def test_build_csv_quotes_every_field():
    record = visit("2024-01-05", 100, ["Hair Cut"])
    record.name = "Rao, Asha"

    lines = build_csv([record]).splitlines()

    assert lines[0].startswith('"Name","Contact"')
    assert lines[1].startswith('"Rao, Asha","9876543210"')


def test_normalize_row_matches_headers_case_insensitively():
    row = normalize_row({
        "NAME": "Asha",
        "Contact": "9876543210",
        "Payment Type": "upi",
        "SERVICES": "Hair Cut; Facial ;",
        "ServiceTakenBy": "Priya;Sneha",
        "Amount": "250",
        "discount": "5",
        "FinalAmount": "237.5",
        "Unknown": "ignored",
    })

    assert row["name"] == "Asha"
    assert row["payment_method"] == "UPI"
    assert row["services"] == ["Hair Cut", "Facial"]
    assert row["performed_by"] == ["Priya", "Sneha"]
    assert row["amount"] == "250"
    assert row["discount_percent"] == "5"
    assert "FinalAmount" not in row


def test_normalize_row_defaults():
    row = normalize_row({"name": "Asha", "contact": "9876543210", "services": "Hair Cut"})

    assert row["payment_method"] == "CASH"
    assert row["discount_percent"] == "0"
    assert row["amount"] == "0"
    assert row["email"] is None
    assert row["visit_date"] is None
    assert row["services"] == ["Hair Cut"]


def test_normalize_row_reads_excel_cell_types():
    row = normalize_row({
        "Name": "Asha",
        "Contact": 9876543210.0,
        "Amount": 120.5,
        "VisitDate": datetime(2024, 2, 3, 10, 0),
    })

    assert row["contact"] == "9876543210"
    assert row["amount"] == 120.5
    assert row["visit_date"] == datetime(2024, 2, 3, 10, 0)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1/15/2024", datetime(2024, 1, 15)),
        ("2024-01-15", datetime(2024, 1, 15)),
        ("yesterday", "yesterday"),
    ],
)
def test_visit_date_parsing(value, expected):
    row = normalize_row({"name": "Asha", "contact": "9876543210", "VisitDate": value})

    assert row["visit_date"] == expected


@pytest.mark.parametrize(
    "raw,importable",
    [
        ({"name": "Asha", "contact": "9876543210"}, True),
        ({"name": "", "contact": "9876543210"}, False),
        ({"name": "Asha"}, False),
        ({}, False),
    ],
)
def test_rows_without_name_or_contact_are_not_importable(raw, importable):
    assert is_importable(normalize_row(raw)) is importable


def test_split_list():
    assert split_list(None) == []
    assert split_list("Hair Cut") == ["Hair Cut"]
    assert split_list(" A ; ;B ") == ["A", "B"]


def test_csv_round_trip_keeps_identity_fields():
    records = [
        visit("2024-01-01", 100, ["Hair Cut"], payment="CASH"),
        visit("2024-01-02", 200, ["Hair Cut", "Facial"], payment="CARD", staff=["Priya"]),
    ]
    records[1].name = "Meera"
    records[1].contact = "9123456780"

    rows = [normalize_row(raw) for raw in read_import_file("export.csv", build_csv(records).encode())]

    assert [(r["name"], r["contact"], r["services"], r["payment_method"]) for r in rows] == [
        ("Guest", "9876543210", ["Hair Cut"], "CASH"),
        ("Meera", "9123456780", ["Hair Cut", "Facial"], "CARD"),
    ]
    assert rows[1]["performed_by"] == ["Priya"]
    assert rows[1]["visit_date"] == datetime(2024, 1, 2)


@pytest.mark.parametrize(
    "overrides",
    [
        {"services": ["Hair; Cut"]},
        {"performed_by": ["Priya; Sneha"]},
    ],
)
def test_list_separator_is_rejected_in_names(overrides):
    with pytest.raises(PayloadError):
        CustomerCreate(**customer_payload(**overrides))


def test_accepted_names_survive_csv_round_trip():
    data = customer_data(services=["Hair Cut, Wash", "Facial"], performed_by=["Priya S.", "Sneha"])
    record = visit("2024-01-02", 200, data["services"], staff=data["performed_by"])

    row = normalize_row(read_import_file("export.csv", build_csv([record]).encode())[0])

    assert row["services"] == ["Hair Cut, Wash", "Facial"]
    assert row["performed_by"] == ["Priya S.", "Sneha"]
    assert CustomerCreate(**row).services == data["services"]


def test_workbook_round_trip():
    records = [visit("2024-01-02", 200, ["Hair Cut", "Facial"], payment="UPI")]

    output = build_workbook(records)
    rows = [normalize_row(raw) for raw in read_import_file("export.xlsx", output.getvalue())]

    assert rows[0]["name"] == "Guest"
    assert rows[0]["contact"] == "9876543210"
    assert rows[0]["services"] == ["Hair Cut", "Facial"]
    assert rows[0]["payment_method"] == "UPI"
    assert Decimal(str(rows[0]["amount"])) == Decimal("200")


def test_xlsx_reader_skips_blank_rows():
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Name", "Contact", None])
    sheet.append(["Asha", "9876543210", "x"])
    sheet.append([None, None, None])

    output = BytesIO()
    workbook.save(output)

    assert read_xlsx_rows(output.getvalue()) == [{"Name": "Asha", "Contact": "9876543210"}]


def test_csv_reader_handles_bom_and_blank_lines():
    content = "\ufeffName,Contact\nAsha,9876543210\n,\n".encode("utf-8")

    assert read_import_file("customers.CSV", content) == [{"Name": "Asha", "Contact": "9876543210"}]


@pytest.mark.parametrize("filename", ["customers.xls", "customers.txt", ""])
def test_unsupported_file_types(filename):
    with pytest.raises(ValidationError):
        read_import_file(filename, b"whatever")


def test_corrupt_workbook():
    with pytest.raises(ValidationError):
        read_import_file("customers.xlsx", b"not a zip file")


def test_template_has_no_final_amount_column():
    reader = csv.DictReader(StringIO(build_template_csv()))

    assert "FinalAmount" not in reader.fieldnames
    assert next(reader)["Services"] == "Hair Cut; Facial"
