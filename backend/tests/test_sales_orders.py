from __future__ import annotations

import json
import os
import uuid
from decimal import Decimal

from sqlalchemy import event, update

from support import API, ApiTestCase, item, items_json

from distributor.database import SessionLocal
from distributor.models import SalesOrder


class SalesOrderCreateTests(ApiTestCase):
    def test_numbers_are_sequential_and_prefixed(self) -> None:
        first = self.create_sales_order()
        second = self.create_sales_order()

        self.assertEqual(first["sales_order_no"], "SO-1000001")
        self.assertEqual(second["sales_order_no"], "SO-1000002")

    def test_numbers_do_not_restart_after_delete(self) -> None:
        first = self.create_sales_order()
        self.client.delete(f"{API}/SalesOrders/{first['id']}")

        second = self.create_sales_order()
        self.assertEqual(second["sales_order_no"], "SO-1000002")

    def test_create_returns_full_view(self) -> None:
        order = self.create_sales_order(
            lines=[item(), item(code="P002", name="Gadget", quantity="1", price="5.00", tax_price="0", total="5.00")],
            customer_code="WALKIN",
            customer_name="Walk-in",
            so_date="2024-03-01T09:30:00Z",
            sales_remarks="Deliver before noon",
        )

        self.assertEqual(order["customer_name"], "Walk-in")
        self.assertIsNone(order["customer_id"])
        self.assertEqual(order["so_date"], "2024-03-01T09:30:00")
        self.assertEqual(order["row_version"], 1)
        self.assertEqual(len(order["items"]), 2)
        self.assertEqual(order["items"][0]["product_code"], "P001")
        self.assertEqual(Decimal(order["order_total"]), Decimal("26.80"))

    def test_customer_is_linked_by_code(self) -> None:
        customer = self.create_customer(code="C001", name="Acme Traders")

        order = self.create_sales_order(customer_code="C001")
        self.assertEqual(order["customer_id"], customer["id"])
        self.assertEqual(order["customer_name"], "Acme Traders")

    def test_missing_items_json_is_rejected(self) -> None:
        response = self.client.post(f"{API}/SalesOrders/", data={"customer_code": "C001"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("items_json", response.json()["errors"])

    def test_empty_items_list_is_rejected(self) -> None:
        response = self.client.post(f"{API}/SalesOrders/", data={"items_json": "[]"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["title"], "Line items list cannot be empty.")

    def test_malformed_items_json_is_rejected(self) -> None:
        response = self.client.post(f"{API}/SalesOrders/", data={"items_json": "[{not json"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["title"], "Invalid format for line items JSON.")

    def test_invalid_item_is_rejected_with_details(self) -> None:
        response = self.client.post(
            f"{API}/SalesOrders/", data={"items_json": items_json(item(quantity="lots"))}
        )
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["errors"]["items_json"])

    def test_pascal_case_item_keys_are_stored(self) -> None:
        lines = [{"ProductCode": "P9", "ProductName": "Crate", "Quantity": "3", "UOM": "BOX",
                  "Price": "4.00", "TaxCode": "GST5", "TaxPrice": "0.60", "Total": "12.60"}]
        response = self.client.post(f"{API}/SalesOrders/", data={"items_json": json.dumps(lines)})
        self.assertEqual(response.status_code, 201, response.text)

        line = response.json()["items"][0]
        self.assertEqual(line["product_code"], "P9")
        self.assertEqual(line["product_name"], "Crate")
        self.assertEqual(line["uom"], "BOX")
        self.assertEqual(line["tax_code"], "GST5")
        self.assertEqual(Decimal(line["quantity"]), Decimal(3))
        self.assertEqual(Decimal(line["total"]), Decimal("12.60"))

    def test_credit_line_with_negative_quantity_is_accepted(self) -> None:
        order = self.create_sales_order(lines=[item(quantity="-1", total="-11.80")])
        self.assertEqual(Decimal(order["order_total"]), Decimal("-11.80"))

    def test_rejected_order_does_not_consume_a_number(self) -> None:
        self.client.post(f"{API}/SalesOrders/", data={"items_json": "[]"})

        order = self.create_sales_order()
        self.assertEqual(order["sales_order_no"], "SO-1000001")


class SalesOrderAttachmentTests(ApiTestCase):
    def test_upload_and_download(self) -> None:
        order = self.create_sales_order(
            files=[("uploaded_files", ("invoice.pdf", b"%PDF-1.4 sample", "application/pdf"))]
        )

        self.assertEqual(len(order["attachments"]), 1)
        attachment = order["attachments"][0]
        self.assertEqual(attachment["file_name"], "invoice.pdf")
        self.assertEqual(attachment["file_size"], len(b"%PDF-1.4 sample"))
        self.assertEqual(attachment["download_url"], f"{API}/SalesOrders/attachment/{attachment['id']}")

        stored = self.stored_files("sales_orders")
        self.assertEqual(len(stored), 1)
        self.assertTrue(stored[0].endswith(".pdf"))
        self.assertNotEqual(stored[0], "invoice.pdf")

        response = self.client.get(attachment["download_url"])
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"%PDF-1.4 sample")
        self.assertEqual(response.headers["content-type"], "application/pdf")
        self.assertIn("invoice.pdf", response.headers["content-disposition"])

    def test_empty_parts_are_skipped(self) -> None:
        order = self.create_sales_order(
            files=[
                ("uploaded_files", ("empty.txt", b"", "text/plain")),
                ("uploaded_files", ("notes.txt", b"remember", "text/plain")),
            ]
        )
        self.assertEqual([a["file_name"] for a in order["attachments"]], ["notes.txt"])
        self.assertEqual(len(self.stored_files("sales_orders")), 1)

    def test_download_of_externally_removed_file_returns_404(self) -> None:
        order = self.create_sales_order(
            files=[("uploaded_files", ("invoice.pdf", b"data", "application/pdf"))]
        )
        for name in self.stored_files("sales_orders"):
            os.remove(os.path.join(self.upload_dir, "sales_orders", name))

        response = self.client.get(order["attachments"][0]["download_url"])
        self.assertEqual(response.status_code, 404)

    def test_download_of_unknown_attachment_returns_404(self) -> None:
        response = self.client.get(f"{API}/SalesOrders/attachment/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)


class SalesOrderUpdateTests(ApiTestCase):
    def test_items_are_replaced(self) -> None:
        order = self.create_sales_order(lines=[item(code="P001"), item(code="P002"), item(code="P003")])
        old_ids = {i["id"] for i in order["items"]}

        response = self.client.put(
            f"{API}/SalesOrders/{order['id']}",
            data={"items_json": items_json(item(code="P009", total="50.00"))}
        )
        self.assertEqual(response.status_code, 200, response.text)
        updated = response.json()
        self.assertEqual(len(updated["items"]), 1)
        self.assertEqual(updated["items"][0]["product_code"], "P009")
        self.assertNotIn(updated["items"][0]["id"], old_ids)
        self.assertEqual(Decimal(updated["order_total"]), Decimal("50.00"))

    def test_empty_items_list_clears_items(self) -> None:
        order = self.create_sales_order(lines=[item(), item(code="P002")])

        response = self.client.put(f"{API}/SalesOrders/{order['id']}", data={"items_json": "[]"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["items"], [])

    def test_omitted_fields_keep_their_values(self) -> None:
        order = self.create_sales_order(
            lines=[item(), item(code="P002")], customer_name="Walk-in", sales_remarks="Fragile"
        )

        response = self.client.put(f"{API}/SalesOrders/{order['id']}", data={"sales_remarks": "Handle with care"})
        self.assertEqual(response.status_code, 200)
        updated = response.json()
        self.assertEqual(updated["sales_remarks"], "Handle with care")
        self.assertEqual(updated["customer_name"], "Walk-in")
        self.assertEqual(len(updated["items"]), 2)
        self.assertEqual(updated["sales_order_no"], order["sales_order_no"])

    def test_changing_customer_code_relinks_customer(self) -> None:
        self.create_customer(code="C001", name="Acme Traders")
        beta = self.create_customer(code="C002", name="Beta Stores")
        order = self.create_sales_order(customer_code="C001")

        response = self.client.put(f"{API}/SalesOrders/{order['id']}", data={"customer_code": "C002"})
        updated = response.json()
        self.assertEqual(updated["customer_id"], beta["id"])
        self.assertEqual(updated["customer_name"], "Beta Stores")

    def test_row_version_increments_and_stale_token_is_rejected(self) -> None:
        order = self.create_sales_order()
        url = f"{API}/SalesOrders/{order['id']}"

        first = self.client.put(url, data={"sales_remarks": "first", "row_version": str(order["row_version"])})
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["row_version"], order["row_version"] + 1)

        stale = self.client.put(url, data={"sales_remarks": "second", "row_version": str(order["row_version"])})
        self.assertEqual(stale.status_code, 409)

        current = self.client.get(url).json()
        self.assertEqual(current["sales_remarks"], "first")

    def test_files_to_delete_and_new_uploads(self) -> None:
        order = self.create_sales_order(
            files=[
                ("uploaded_files", ("a.pdf", b"aaa", "application/pdf")),
                ("uploaded_files", ("b.pdf", b"bbb", "application/pdf")),
            ]
        )
        remove = [a["id"] for a in order["attachments"] if a["file_name"] == "a.pdf"]

        response = self.client.put(
            f"{API}/SalesOrders/{order['id']}",
            data={"files_to_delete": remove},
            files=[("uploaded_files", ("c.pdf", b"ccc", "application/pdf"))],
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(sorted(a["file_name"] for a in response.json()["attachments"]), ["b.pdf", "c.pdf"])
        self.assertEqual(len(self.stored_files("sales_orders")), 2)

    def test_update_missing_order_returns_404(self) -> None:
        response = self.client.put(
            f"{API}/SalesOrders/00000000-0000-0000-0000-000000000000", data={"sales_remarks": "x"}
        )
        self.assertEqual(response.status_code, 404)

    def test_stale_token_writes_no_files(self) -> None:
        order = self.create_sales_order()

        response = self.client.put(
            f"{API}/SalesOrders/{order['id']}",
            data={"row_version": "99"},
            files=[("uploaded_files", ("late.pdf", b"late", "application/pdf"))],
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(self.stored_files("sales_orders"), [])

    def test_change_committed_while_saving_is_rejected(self) -> None:
        order = self.create_sales_order(sales_remarks="original")
        order_id = uuid.UUID(order["id"])
        fired = []

        def bump_version_elsewhere(session, flush_context, instances):
            if fired:
                return
            fired.append(True)
            table = SalesOrder.__table__
            session.connection().execute(
                update(table)
                .where(table.c.id == order_id)
                .values(row_version=table.c.row_version + 1, sales_remarks="changed elsewhere")
            )

        event.listen(SessionLocal, "before_flush", bump_version_elsewhere)
        self.addCleanup(event.remove, SessionLocal, "before_flush", bump_version_elsewhere)

        response = self.client.put(
            f"{API}/SalesOrders/{order['id']}",
            data={"sales_remarks": "mine", "row_version": str(order["row_version"])},
            files=[("uploaded_files", ("late.pdf", b"late", "application/pdf"))],
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(len(fired), 1)
        self.assertEqual(self.stored_files("sales_orders"), [])

        current = self.client.get(f"{API}/SalesOrders/{order['id']}").json()
        self.assertEqual(current["sales_remarks"], "original")
        self.assertEqual(current["row_version"], order["row_version"])
        self.assertEqual(current["attachments"], [])


class SalesOrderListAndDeleteTests(ApiTestCase):
    def test_list_newest_first_with_filters(self) -> None:
        self.create_sales_order(customer_name="Acme Traders")
        self.create_sales_order(customer_name="Beta Stores")

        orders = self.client.get(f"{API}/SalesOrders/").json()
        self.assertEqual([o["sales_order_no"] for o in orders], ["SO-1000002", "SO-1000001"])
        self.assertIn("order_total", orders[0])

        orders = self.client.get(f"{API}/SalesOrders/", params={"customer_name": "acme"}).json()
        self.assertEqual([o["sales_order_no"] for o in orders], ["SO-1000001"])

        orders = self.client.get(f"{API}/SalesOrders/", params={"sales_order_no": "0002"}).json()
        self.assertEqual([o["customer_name"] for o in orders], ["Beta Stores"])

    def test_delete_removes_rows_and_files(self) -> None:
        order = self.create_sales_order(
            files=[("uploaded_files", ("a.pdf", b"aaa", "application/pdf"))]
        )
        attachment_url = order["attachments"][0]["download_url"]

        response = self.client.delete(f"{API}/SalesOrders/{order['id']}")
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"{API}/SalesOrders/{order['id']}").status_code, 404)
        self.assertEqual(self.client.get(attachment_url).status_code, 404)
        self.assertEqual(self.stored_files("sales_orders"), [])

    def test_delete_tolerates_missing_files(self) -> None:
        order = self.create_sales_order(
            files=[("uploaded_files", ("a.pdf", b"aaa", "application/pdf"))]
        )
        for name in self.stored_files("sales_orders"):
            os.remove(os.path.join(self.upload_dir, "sales_orders", name))

        response = self.client.delete(f"{API}/SalesOrders/{order['id']}")
        self.assertEqual(response.status_code, 204)

    def test_delete_missing_order_returns_404(self) -> None:
        response = self.client.delete(f"{API}/SalesOrders/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)
