from __future__ import annotations

from decimal import Decimal

from support import API, ApiTestCase


def declaration(code="GST18", **fields):
    payload = {
        "tax_code": code,
        "tax_description": "GST 18%",
        "valid_from": "2024-04-01T00:00:00",
        "valid_to": "2025-03-31T23:59:59",
        "cgst": "9.00",
        "sgst": "9.00",
        "total_percentage": "18.00",
    }
    payload.update(fields)
    return payload


class TaxDeclarationApiTests(ApiTestCase):
    def test_create_and_get(self) -> None:
        response = self.client.post(f"{API}/TaxDeclarations/", json=declaration(code="  GST18 "))
        self.assertEqual(response.status_code, 201, response.text)
        created = response.json()
        self.assertEqual(created["tax_code"], "GST18")
        self.assertTrue(created["is_active"])
        self.assertIsNone(created["igst"])

        fetched = self.client.get(f"{API}/TaxDeclarations/{created['id']}").json()
        self.assertEqual(Decimal(fetched["total_percentage"]), Decimal("18.00"))

    def test_duplicate_code_is_rejected_ignoring_case(self) -> None:
        self.client.post(f"{API}/TaxDeclarations/", json=declaration(code="GST18"))

        response = self.client.post(f"{API}/TaxDeclarations/", json=declaration(code="gst18"))
        self.assertEqual(response.status_code, 409)
        self.assertIn("tax_code", response.json()["errors"])

    def test_valid_to_before_valid_from_is_rejected(self) -> None:
        response = self.client.post(
            f"{API}/TaxDeclarations/",
            json=declaration(valid_from="2025-01-01T00:00:00", valid_to="2024-12-31T00:00:00")
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("valid_to", response.json()["errors"])

    def test_percentages_must_be_within_0_and_100(self) -> None:
        response = self.client.post(f"{API}/TaxDeclarations/", json=declaration(total_percentage="120"))
        self.assertEqual(response.status_code, 400)
        self.assertIn("total_percentage", response.json()["errors"])

        response = self.client.post(f"{API}/TaxDeclarations/", json=declaration(cgst="-1"))
        self.assertEqual(response.status_code, 400)
        self.assertIn("cgst", response.json()["errors"])

    def test_list_filters(self) -> None:
        self.client.post(f"{API}/TaxDeclarations/", json=declaration(code="GST18"))
        self.client.post(
            f"{API}/TaxDeclarations/",
            json=declaration(code="IGST5", tax_description="Interstate 5%", cgst=None, sgst=None,
                             igst="5", total_percentage="5", is_active=False)
        )

        codes = [d["tax_code"] for d in self.client.get(f"{API}/TaxDeclarations/").json()]
        self.assertEqual(codes, ["GST18", "IGST5"])

        active = self.client.get(f"{API}/TaxDeclarations/", params={"is_active": "true"}).json()
        self.assertEqual([d["tax_code"] for d in active], ["GST18"])

        found = self.client.get(f"{API}/TaxDeclarations/", params={"search_term": "interstate"}).json()
        self.assertEqual([d["tax_code"] for d in found], ["IGST5"])

    def test_update_and_delete(self) -> None:
        created = self.client.post(f"{API}/TaxDeclarations/", json=declaration()).json()
        url = f"{API}/TaxDeclarations/{created['id']}"

        mismatch = self.client.put(url, json={**declaration(), "id": created["id"] + 1})
        self.assertEqual(mismatch.status_code, 400)

        response = self.client.put(url, json={**declaration(code="gst18", is_active=False), "id": created["id"]})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertFalse(response.json()["is_active"])

        self.assertEqual(self.client.delete(url).status_code, 204)
        self.assertEqual(self.client.get(url).status_code, 404)
