"""
CSV / Excel export and import endpoints, plus photo uploads.
"""
import csv
from decimal import Decimal
from io import BytesIO, StringIO
from pathlib import Path

from openpyxl import Workbook, load_workbook

from app.core.config import settings
from factories import customer_data

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _csv_rows(text):
    return list(csv.DictReader(StringIO(text)))


def _import(client, headers, filename, content, content_type="text/csv"):
    return client.post(
        "/imports/customers",
        files={"file": (filename, content, content_type)},
        headers=headers,
    )


# =========================================================
# EXPORTS
# =========================================================
class TestExports:
    def test_csv_export(self, client, store, admin_headers):
        store.create_customer(customer_data(services=["Hair Cut", "Facial"], amount="1000", discount_percent="10"))

        response = client.get("/exports/customers.csv", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="salon-customers.csv"' in response.headers["content-disposition"]

        rows = _csv_rows(response.text)
        assert len(rows) == 1
        assert rows[0]["Services"] == "Hair Cut; Facial"
        assert rows[0]["VisitDate"] == "1/1/2024"
        assert Decimal(rows[0]["FinalAmount"]) == Decimal("900")

    def test_csv_export_with_range(self, client, store, admin_headers):
        store.create_customer(customer_data(name="January", visit_date="2024-01-10T10:00:00"))
        store.create_customer(customer_data(name="February", visit_date="2024-02-10T10:00:00"))

        response = client.get(
            "/exports/customers.csv",
            params={"start_date": "2024-02-01", "end_date": "2024-02-29"},
            headers=admin_headers,
        )

        assert 'salon-customers_2024-02-01_to_2024-02-29.csv' in response.headers["content-disposition"]
        assert [row["Name"] for row in _csv_rows(response.text)] == ["February"]

    def test_bad_export_range(self, client, admin_headers):
        response = client.get(
            "/exports/customers.csv",
            params={"start_date": "yesterday", "end_date": "2024-02-29"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_excel_export(self, client, store, admin_headers):
        store.create_customer(customer_data(amount="1000", discount_percent="10"))

        response = client.get("/exports/customers.xlsx", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX_TYPE

        sheet = load_workbook(BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert sheet.title == "Customers"
        assert rows[0][0] == "Name"
        assert rows[1][0] == "Asha Rao"
        assert rows[1][7] == 900.0

    def test_template(self, client, reception_headers):
        response = client.get("/exports/template.csv", headers=reception_headers)

        rows = _csv_rows(response.text)
        assert "FinalAmount" not in rows[0]
        assert rows[0]["Services"] == "Hair Cut; Facial"

    def test_exports_require_login(self, client):
        assert client.get("/exports/customers.csv").status_code == 401


# =========================================================
# IMPORTS
# =========================================================
class TestImports:
    def test_csv_import_summary(self, client, store, admin_headers):
        content = (
            "Name,Contact,Services,Amount,Discount,PaymentType,VisitDate\n"
            "Asha,9876543210,Hair Cut; Facial,1200,10,upi,1/15/2024\n"
            ",9876543211,Hair Cut,500,0,CASH,1/15/2024\n"
            "Meera,12345,Hair Cut,500,0,CASH,1/15/2024\n"
            "Kavya,9123456780,Facial,,,,\n"
        ).encode("utf-8")

        response = _import(client, admin_headers, "customers.csv", content)

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["success"] == 2
        assert body["failed"] == 1
        assert body["skipped"] == 1
        assert body["errors"][0]["row"] == 3
        assert "contact" in body["errors"][0]["detail"]

        customers = {c.name: c for c in store.list_customers()}
        assert customers["Asha"].services == ["Hair Cut", "Facial"]
        assert customers["Asha"].payment_method.value == "UPI"
        assert customers["Asha"].visit_date.date().isoformat() == "2024-01-15"
        assert customers["Kavya"].amount == Decimal("0")
        assert customers["Kavya"].payment_method.value == "CASH"

    def test_unparsable_date_fails_the_row(self, client, store, admin_headers):
        content = b"Name,Contact,Services,VisitDate\nAsha,9876543210,Hair Cut,someday\n"

        body = _import(client, admin_headers, "customers.csv", content).json()

        assert body["failed"] == 1
        assert "visit_date" in body["errors"][0]["detail"]
        assert store.list_customers() == []

    def test_excel_import(self, client, store, admin_headers):
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(["Name", "Contact", "Services", "Amount", "PaymentType"])
        sheet.append(["Asha", 9876543210, "Hair Cut", 700, "CARD"])
        sheet.append([None, None, None, None, None])
        output = BytesIO()
        workbook.save(output)

        response = _import(client, admin_headers, "customers.xlsx", output.getvalue(), XLSX_TYPE)

        body = response.json()
        assert body["success"] == 1
        assert body["skipped"] == 0
        customer = store.list_customers()[0]
        assert customer.contact == "9876543210"
        assert customer.amount == Decimal("700")

    def test_export_then_import(self, client, store, admin_headers):
        store.create_customer(customer_data(services=["Hair Cut", "Facial"], performed_by=["Priya", "Sneha"]))
        exported = client.get("/exports/customers.csv", headers=admin_headers).content

        body = _import(client, admin_headers, "customers.csv", exported).json()

        assert body["success"] == 1
        copies = store.list_customers()
        assert len(copies) == 2
        assert copies[0].services == copies[1].services == ["Hair Cut", "Facial"]
        assert copies[0].performed_by == copies[1].performed_by == ["Priya", "Sneha"]

    def test_xls_is_rejected(self, client, admin_headers):
        response = _import(client, admin_headers, "customers.xls", b"\xd0\xcf\x11\xe0", "application/vnd.ms-excel")

        assert response.status_code == 400
        assert response.json()["detail"] == "Only .csv and .xlsx files can be imported"

    def test_corrupt_workbook_is_rejected(self, client, admin_headers):
        response = _import(client, admin_headers, "customers.xlsx", b"not a zip", XLSX_TYPE)

        assert response.status_code == 400


# =========================================================
# PHOTO UPLOADS
# =========================================================
class TestPhotoUpload:
    def test_upload(self, client, admin_headers, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))

        response = client.post(
            "/uploads/photo",
            files={"file": ("my photo.png", b"\x89PNG fake", "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["filename"].endswith("-my_photo.png")
        assert body["url"] == f"/uploads/{body['filename']}"
        assert (Path(tmp_path) / body["filename"]).read_bytes() == b"\x89PNG fake"

    def test_non_image_is_rejected(self, client, admin_headers):
        response = client.post(
            "/uploads/photo",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_too_large(self, client, admin_headers, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)

        response = client.post(
            "/uploads/photo",
            files={"file": ("big.png", b"0123456789", "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 413
        assert list(tmp_path.iterdir()) == []
