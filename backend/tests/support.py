"""
Shared test setup: in-memory SQLite, a throwaway upload directory and a
TestClient bound to the application.

Import this module before anything from `distributor`, the settings are read
once at import time.
"""
import json
import os
import shutil
import tempfile
import unittest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from distributor.config import settings  # noqa: E402
from distributor.database import engine, SessionLocal  # noqa: E402
from distributor.main import app  # noqa: E402
from distributor.models import Base  # noqa: E402

API = settings.API_PREFIX


def item(code="P001", name="Widget", quantity="2", price="10.00", tax_price="1.80", total="21.80", **extra):
    """One line of items_json, using the camelCase keys the web client sends"""
    line = {
        "productCode": code,
        "productName": name,
        "quantity": quantity,
        "uom": "PCS",
        "price": price,
        "taxCode": "GST18",
        "taxPrice": tax_price,
        "total": total,
    }
    line.update(extra)
    return line


def items_json(*lines):
    return json.dumps(list(lines))


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema and upload directory for every test"""

    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.upload_dir = tempfile.mkdtemp(prefix="distributor-uploads-")
        self._previous_upload_dir = settings.UPLOAD_DIR
        settings.UPLOAD_DIR = self.upload_dir

    def tearDown(self) -> None:
        Base.metadata.drop_all(bind=engine)
        settings.UPLOAD_DIR = self._previous_upload_dir
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    def session(self):
        db = SessionLocal()
        self.addCleanup(db.close)
        return db

    def stored_files(self, folder: str):
        path = os.path.join(self.upload_dir, folder)
        if not os.path.isdir(path):
            return []
        return sorted(os.listdir(path))


class ApiTestCase(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        super().tearDown()

    # ---- reference data ----

    def create_customer_group(self, name="Retail"):
        response = self.client.post(f"{API}/CustomerGroups/", json={"name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_customer(self, code="C001", name="Acme Traders", group=None, **fields):
        payload = {"code": code, "name": name, "group": group}
        payload.update(fields)
        response = self.client.post(f"{API}/Customer/", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_product_group(self, name="Beverages"):
        response = self.client.post(f"{API}/ProductGroups/", json={"name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    # ---- orders ----

    def create_sales_order(self, lines=None, files=None, **fields):
        data = {"items_json": items_json(*(lines or [item()]))}
        data.update(fields)
        response = self.client.post(f"{API}/SalesOrders/", data=data, files=files)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_purchase_order(self, lines=None, files=None, **fields):
        data = {"items_json": items_json(*(lines or [item()]))}
        data.update(fields)
        response = self.client.post(f"{API}/PurchaseOrders/", data=data, files=files)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()
