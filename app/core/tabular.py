# =========================================================
# CSV / EXCEL NORMALISATION
#
# Export: customer record -> flat row (CSV text or .xlsx sheet)
# Import: CSV / .xlsx rows -> customer payloads ready to create
#
# Header matching is case-insensitive through COLUMN_ALIASES.
# List cells (services, staff) are ';' separated.
# =========================================================

import csv
import zipfile
from datetime import date, datetime
from io import BytesIO, StringIO

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.core.amounts import final_amount
from app.core.errors import ValidationError

LIST_SEPARATOR = ";"

EXPORT_COLUMNS = [
    "Name",
    "Contact",
    "Email",
    "Services",
    "PerformedBy",
    "Amount",
    "Discount",
    "FinalAmount",
    "PaymentType",
    "VisitDate",
    "Notes",
]

# Normalised header -> payload field. None marks known columns that are ignored.
COLUMN_ALIASES = {
    "name": "name",
    "customer": "name",
    "customername": "name",
    "contact": "contact",
    "phone": "contact",
    "mobile": "contact",
    "email": "email",
    "services": "services",
    "service": "services",
    "performedby": "performed_by",
    "servicetakenby": "performed_by",
    "staff": "performed_by",
    "amount": "amount",
    "discount": "discount_percent",
    "discountpercent": "discount_percent",
    "paymenttype": "payment_method",
    "paymentmethod": "payment_method",
    "payment": "payment_method",
    "visitdate": "visit_date",
    "date": "visit_date",
    "notes": "notes",
    "finalamount": None,
}

VISIT_DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")

TEMPLATE_ROWS = [
    {
        "Name": "Asha Rao",
        "Contact": "9876543210",
        "Email": "asha@swasthik.com",
        "Services": "Hair Cut; Facial",
        "PerformedBy": "Priya Sharma",
        "Amount": "1200",
        "Discount": "10",
        "PaymentType": "UPI",
        "VisitDate": "1/15/2024",
        "Notes": "",
    }
]


# =========================================================
# EXPORT
# =========================================================
def format_visit_date(visit_date) -> str:
    if visit_date is None:
        return ""
    return f"{visit_date.month}/{visit_date.day}/{visit_date.year}"


def export_row(customer) -> dict:
    payment_method = getattr(customer.payment_method, "value", customer.payment_method)

    return {
        "Name": customer.name,
        "Contact": customer.contact,
        "Email": customer.email or "",
        "Services": f"{LIST_SEPARATOR} ".join(customer.services or []),
        "PerformedBy": f"{LIST_SEPARATOR} ".join(customer.performed_by or []),
        "Amount": customer.amount,
        "Discount": customer.discount_percent,
        "FinalAmount": final_amount(customer.amount, customer.discount_percent),
        "PaymentType": payment_method,
        "VisitDate": format_visit_date(customer.visit_date),
        "Notes": customer.notes or "",
    }


def build_csv(customers) -> str:
    output = StringIO()

    writer = csv.DictWriter(
        output,
        fieldnames=EXPORT_COLUMNS,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    writer.writeheader()

    for customer in customers:
        writer.writerow(export_row(customer))

    return output.getvalue()


def build_template_csv() -> str:
    output = StringIO()

    columns = [column for column in EXPORT_COLUMNS if column != "FinalAmount"]
    writer = csv.DictWriter(output, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    writer.writerows(TEMPLATE_ROWS)

    return output.getvalue()


def build_workbook(customers) -> BytesIO:
    workbook = Workbook()

    sheet = workbook.active
    sheet.title = "Customers"
    sheet.append(EXPORT_COLUMNS)

    for customer in customers:
        row = export_row(customer)
        values = []
        for column in EXPORT_COLUMNS:
            value = row[column]
            if column in ("Amount", "Discount", "FinalAmount"):
                value = float(value or 0)
            values.append(value)
        sheet.append(values)

    output = BytesIO()
    workbook.save(output)
    output.seek(0)

    return output


# =========================================================
# IMPORT: FILE READING
# =========================================================
def _is_blank(raw: dict) -> bool:
    return all(value is None or str(value).strip() == "" for value in raw.values())


def read_csv_rows(content: bytes) -> list[dict]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV file must be UTF-8 encoded")

    try:
        reader = csv.DictReader(StringIO(text))
        rows = [row for row in reader if not _is_blank(row)]
    except csv.Error as exc:
        raise ValidationError(f"Unreadable CSV file: {exc}")

    return rows


def read_xlsx_rows(content: bytes) -> list[dict]:
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError):
        raise ValidationError("Unreadable Excel file")

    try:
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)

        header = next(values, None)
        if header is None:
            return []

        rows = []
        for line in values:
            raw = {
                str(column): cell
                for column, cell in zip(header, line)
                if column is not None
            }
            if not _is_blank(raw):
                rows.append(raw)

        return rows
    finally:
        workbook.close()


def read_import_file(filename: str, content: bytes) -> list[dict]:
    name = (filename or "").lower()

    if name.endswith(".csv"):
        return read_csv_rows(content)

    if name.endswith(".xlsx"):
        return read_xlsx_rows(content)

    raise ValidationError("Only .csv and .xlsx files can be imported")


# =========================================================
# IMPORT: ROW NORMALISATION
# =========================================================
def _header_key(header) -> str:
    key = str(header).strip().lower()
    for char in (" ", "_", "-"):
        key = key.replace(char, "")
    return key


def _text(value) -> str:
    if value is None:
        return ""
    # Excel hands back phone numbers as floats
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def split_list(value) -> list[str]:
    text = _text(value)
    if not text:
        return []
    return [part.strip() for part in text.split(LIST_SEPARATOR) if part.strip()]


def parse_visit_date(value):
    if value is None or isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())

    text = _text(value)
    if not text:
        return None

    for fmt in VISIT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    # Left as text so the create step rejects the row
    return text


def normalize_row(raw: dict) -> dict:
    fields = {}
    for header, value in raw.items():
        if header is None:
            continue
        field = COLUMN_ALIASES.get(_header_key(header))
        if field and field not in fields:
            fields[field] = value

    amount = fields.get("amount")
    discount = fields.get("discount_percent")

    return {
        "name": _text(fields.get("name")),
        "contact": _text(fields.get("contact")),
        "email": _text(fields.get("email")) or None,
        "services": split_list(fields.get("services")),
        "performed_by": split_list(fields.get("performed_by")),
        "amount": amount if _text(amount) else "0",
        "discount_percent": discount if _text(discount) else "0",
        "payment_method": (_text(fields.get("payment_method")) or "CASH").upper(),
        "visit_date": parse_visit_date(fields.get("visit_date")),
        "notes": _text(fields.get("notes")) or None,
    }


def is_importable(row: dict) -> bool:
    return bool(row["name"] and row["contact"])
