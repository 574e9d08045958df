import tempfile
import unittest
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from billquery.api.app import create_app
from billquery.domain.models.bill import Bill, Installment
from billquery.infrastructure.persistence.sqla import (
    connection_scope,
    create_memory_engine,
    insert_bill,
    insert_installment,
)

try:
    from fastapi.testclient import TestClient
except Exception:  # pragma: no cover
    TestClient = None


def _add_bill(engine, name: str, when: datetime, amount: str, *, category=None, cards=()) -> int:
    with connection_scope(engine) as conn:
        bill = insert_bill(
            conn,
            Bill(
                name=name,
                execution_date=when,
                total_amount=Decimal(amount),
                number_of_installments=max(len(cards), 1),
                category=category,
            ),
        )
        assert bill.id is not None
        for number, card in enumerate(cards, start=1):
            insert_installment(
                conn,
                Installment(
                    bill_id=bill.id,
                    installment_number=number,
                    amount=Decimal(amount),
                    due_date=date(when.year, when.month, 28),
                    credit_card_id=card,
                ),
            )
    return bill.id


class ApiV2ContractTests(unittest.TestCase):
    def setUp(self) -> None:
        if TestClient is None:
            self.skipTest("fastapi TestClient unavailable (httpx missing)")
        self._tmp = tempfile.TemporaryDirectory()
        self.engine = create_memory_engine()
        self.app = create_app(Path(self._tmp.name), engine=self.engine)
        self.rent_id = _add_bill(self.engine, "Rent", datetime(2026, 2, 1), "1500.00")
        self.gym_id = _add_bill(self.engine, "Gym", datetime(2026, 3, 15), "99.90", category="", cards=(5, 5))
        _add_bill(self.engine, "Groceries", datetime(2026, 1, 10), "250.00", category="Food", cards=(None,))
        _add_bill(self.engine, "food truck", datetime(2026, 3, 20), "35.00", category="FOOD", cards=(7,))

    def tearDown(self) -> None:
        self.engine.dispose()
        self._tmp.cleanup()

    def _names(self, client, **params) -> list[str]:
        response = client.get("/api/v2/bills", params=params)
        self.assertEqual(response.status_code, 200, response.text)
        return [bill["name"] for bill in response.json()["data"]["content"]]

    def test_health_and_error_envelope(self) -> None:
        with TestClient(self.app) as client:
            health = client.get("/api/v2/health", headers={"X-Request-Id": "abc123"})
            self.assertEqual(health.status_code, 200)
            payload = health.json()
            self.assertTrue(payload["data"]["ok"])
            self.assertEqual(payload["meta"]["request_id"], "abc123")
            self.assertEqual(health.headers["X-Request-Id"], "abc123")

            not_found = client.get("/api/v2/not-found")
            self.assertEqual(not_found.status_code, 404)
            error_payload = not_found.json()
            self.assertIn("request_id", error_payload)
            self.assertEqual(error_payload["error"]["code"], "not_found")

    def test_list_without_filters_returns_every_bill_newest_first(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/api/v2/bills")
            self.assertEqual(response.status_code, 200)
            data = response.json()["data"]
            self.assertEqual(
                [b["name"] for b in data["content"]],
                ["food truck", "Gym", "Rent", "Groceries"],
            )
            self.assertEqual(data["page"], 0)
            self.assertEqual(data["size"], 10)
            self.assertEqual(data["total_elements"], 4)
            self.assertEqual(data["total_pages"], 1)
            rent = data["content"][2]
            self.assertEqual(rent["total_amount"], "1500.00")
            self.assertEqual(rent["execution_date"], "2026-02-01T00:00:00")

    def test_filters_map_to_query_parameters(self) -> None:
        with TestClient(self.app) as client:
            self.assertEqual(sorted(self._names(client, name="FOO")), ["food truck"])
            self.assertEqual(sorted(self._names(client, category="food")), ["Groceries", "food truck"])
            self.assertEqual(sorted(self._names(client, uncategorized="true")), ["Gym", "Rent"])
            self.assertEqual(sorted(self._names(client, category="__NO_CATEGORY__")), ["Gym", "Rent"])
            self.assertEqual(self._names(client, credit_card_id=5), ["Gym"])
            self.assertEqual(sorted(self._names(client, has_credit_card="false")), ["Groceries", "Rent"])
            self.assertEqual(
                self._names(client, min_amount="50", max_amount="300", sort="totalAmount,asc"),
                ["Gym", "Groceries"],
            )
            self.assertEqual(
                self._names(client, start_date="2026-02-01T00:00:00", end_date="2026-02-01T00:00:00"),
                ["Rent"],
            )
            self.assertEqual(sorted(self._names(client, number_of_installments=2)), ["Gym"])

    def test_zero_installments_is_a_constraint_not_an_error(self) -> None:
        with TestClient(self.app) as client:
            response = client.get("/api/v2/bills", params={"number_of_installments": 0})
            self.assertEqual(response.status_code, 200)
            data = response.json()["data"]
            self.assertEqual(data["content"], [])
            self.assertEqual(data["total_elements"], 0)

    def test_malformed_date_is_ignored(self) -> None:
        with TestClient(self.app) as client:
            self.assertEqual(len(self._names(client, start_date="yesterday")), 4)

    def test_paging_and_sort_validation(self) -> None:
        with TestClient(self.app) as client:
            page = client.get("/api/v2/bills", params={"page": 1, "size": 3})
            self.assertEqual(page.status_code, 200)
            self.assertEqual([b["name"] for b in page.json()["data"]["content"]], ["Groceries"])

            bad_sort = client.get("/api/v2/bills", params={"sort": "secret,asc"})
            self.assertEqual(bad_sort.status_code, 400)
            self.assertEqual(bad_sort.json()["error"]["code"], "validation_error")

            too_big = client.get("/api/v2/bills", params={"size": 1000})
            self.assertEqual(too_big.status_code, 400)

            zero = client.get("/api/v2/bills", params={"size": 0})
            self.assertEqual(zero.status_code, 422)
            self.assertEqual(zero.json()["error"]["code"], "validation_error")

            unknown = client.get("/api/v2/bills", params={"amount": "10"})
            self.assertEqual(unknown.status_code, 422)

    def test_bill_detail(self) -> None:
        with TestClient(self.app) as client:
            detail = client.get(f"/api/v2/bills/{self.gym_id}")
            self.assertEqual(detail.status_code, 200)
            data = detail.json()["data"]
            self.assertEqual(data["name"], "Gym")
            self.assertEqual(len(data["installments"]), 2)
            self.assertEqual(data["credit_card_id"], 5)

            rent = client.get(f"/api/v2/bills/{self.rent_id}").json()["data"]
            self.assertEqual(rent["installments"], [])
            self.assertIsNone(rent["credit_card_id"])

            mixed_id = _add_bill(self.engine, "Trip", datetime(2026, 4, 1), "900.00", cards=(None, 7, 5))
            mixed = client.get(f"/api/v2/bills/{mixed_id}").json()["data"]
            self.assertEqual(mixed["credit_card_id"], 7)

            missing = client.get("/api/v2/bills/9999")
            self.assertEqual(missing.status_code, 404)
            self.assertEqual(missing.json()["error"]["code"], "not_found")


if __name__ == "__main__":
    unittest.main()
