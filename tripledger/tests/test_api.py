"""
Tests for the HTTP endpoints.
"""
import pytest
from decimal import Decimal


@pytest.fixture
def trip_id(client):
    """Trip with members alice, bob and carol created through the API."""
    response = client.post("/api/trips", json={"name": "Goa", "baseCurrency": "inr"})
    assert response.status_code == 201
    trip_id = response.json()["id"]
    for member_id, name in (("alice", "Alice"), ("bob", "Bob"), ("carol", "Carol")):
        response = client.post(f"/api/trips/{trip_id}/members", json={"id": member_id, "displayName": name})
        assert response.status_code == 201
    return trip_id


def add_dinner(client, trip_id):
    return client.post(f"/api/expenses/{trip_id}", json={
        "amount": "90",
        "paidBy": "alice",
        "category": "Food",
        "participants": ["alice", "bob", "carol"],
        "splitType": "equally",
        "description": "Dinner",
    })


def plan_pairs(client, trip_id):
    response = client.get(f"/api/settlement/{trip_id}/plan")
    assert response.status_code == 200
    return [
        (t["fromUserId"], t["toUserId"], Decimal(str(t["amount"])))
        for t in response.json()["transactions"]
    ]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_trip_detail(client, trip_id):
    response = client.get(f"/api/trips/{trip_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["baseCurrency"] == "INR"
    assert [m["displayName"] for m in body["members"]] == ["Alice", "Bob", "Carol"]


def test_duplicate_member_id(client, trip_id):
    response = client.post(f"/api/trips/{trip_id}/members", json={"id": "alice", "displayName": "Again"})
    assert response.status_code == 409


def test_unknown_trip(client):
    assert client.get("/api/trips/nope").status_code == 404
    assert client.get("/api/settlement/nope/plan").status_code == 404
    assert add_dinner(client, "nope").status_code == 404


def test_create_and_list_expenses(client, trip_id):
    response = add_dinner(client, trip_id)

    assert response.status_code == 201
    body = response.json()
    assert body["paidBy"] == "alice"
    assert body["splitDescription"] == "Equally split between Alice, Bob, Carol. Each owes INR 30.00 to Alice."

    listed = client.get(f"/api/expenses/{trip_id}", params={"category": "Food"}).json()
    assert [e["id"] for e in listed] == [body["id"]]
    assert client.get(f"/api/expenses/{trip_id}", params={"sort": "sideways"}).status_code == 400


def test_invalid_split_is_rejected(client, trip_id):
    response = client.post(f"/api/expenses/{trip_id}", json={
        "amount": "100",
        "paidBy": "alice",
        "participants": ["alice", "bob"],
        "splitType": "unequally",
        "splitDetails": {"alice": "60", "bob": "30"},
        "description": "Hotel",
    })

    assert response.status_code == 422
    assert client.get(f"/api/expenses/{trip_id}").json() == []


def test_non_member_payer_is_rejected(client, trip_id):
    response = client.post(f"/api/expenses/{trip_id}", json={
        "amount": "10",
        "paidBy": "mallory",
        "participants": ["alice"],
        "description": "Coffee",
    })
    assert response.status_code == 400


def test_settlement_flow_with_recorded_payment(client, trip_id):
    add_dinner(client, trip_id)

    assert plan_pairs(client, trip_id) == [
        ("bob", "alice", Decimal("30")),
        ("carol", "alice", Decimal("30")),
    ]

    response = client.post(f"/api/payments/{trip_id}", json={
        "fromUserId": "bob",
        "toUserId": "alice",
        "amount": "30",
        "recordedBy": "bob",
        "notes": "  paid via UPI ",
    })
    assert response.status_code == 201
    assert response.json()["currency"] == "INR"
    assert response.json()["notes"] == "paid via UPI"

    assert plan_pairs(client, trip_id) == [("carol", "alice", Decimal("30"))]

    financials = client.get(f"/api/settlement/{trip_id}/financials").json()
    assert [f["memberId"] for f in financials] == ["alice", "bob", "carol"]
    assert Decimal(str(financials[0]["initialNetBalance"])) == Decimal("60")
    assert Decimal(str(financials[0]["netBalance"])) == Decimal("30")

    history = client.get(f"/api/payments/{trip_id}", params={"recorded_by": "bob"}).json()
    assert [(p["fromUserId"], p["toUserId"]) for p in history] == [("bob", "alice")]


def test_payment_validation(client, trip_id):
    same = client.post(f"/api/payments/{trip_id}", json={
        "fromUserId": "bob", "toUserId": "bob", "amount": "5", "recordedBy": "bob",
    })
    stranger = client.post(f"/api/payments/{trip_id}", json={
        "fromUserId": "bob", "toUserId": "mallory", "amount": "5", "recordedBy": "bob",
    })

    assert same.status_code == 422
    assert stranger.status_code == 400


def test_summary_and_categories(client, trip_id):
    add_dinner(client, trip_id)

    summary = client.get(f"/api/settlement/{trip_id}/summary").json()
    assert summary["participantCount"] == 3
    assert Decimal(str(summary["totalExpenses"])) == Decimal("90")
    assert "Carol -> Alice: INR 30.00" in summary["summaryText"]

    categories = client.get(f"/api/expenses/{trip_id}/category-summary").json()
    assert categories["categories"][0]["category"] == "Food"
    assert categories["categories"][0]["expenseCount"] == 1


def test_empty_trip_has_empty_plan(client, trip_id):
    assert plan_pairs(client, trip_id) == []


def test_payment_recorders(client, trip_id):
    for payer in ("bob", "carol", "bob"):
        client.post(f"/api/payments/{trip_id}", json={
            "fromUserId": payer, "toUserId": "alice", "amount": "10", "recordedBy": payer,
        })

    recorders = client.get(f"/api/payments/{trip_id}/recorders").json()

    assert [(r["id"], r["displayName"]) for r in recorders] == [("bob", "Bob"), ("carol", "Carol")]
