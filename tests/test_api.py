"""
API Integration Tests

Exercises the HTTP surface end to end over the seeded reference catalog.
"""

from decimal import Decimal

from src.auth import CallerRole, create_access_token

API = "/api/v1"


class TestHealthEndpoints:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "version" in response.json()

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    def test_missing_token(self, client):
        response = client.get(f"{API}/catalog/ticket-types")
        assert response.status_code == 401
        assert response.headers["X-Error"] == "InvalidCredentials"

    def test_garbage_token(self, client):
        response = client.get(f"{API}/catalog/ticket-types", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_missing_capability(self, client, operator_headers):
        response = client.put(f"{API}/catalog/zones/1/fare", json={"base_fare": "3.00"}, headers=operator_headers)
        assert response.status_code == 403
        assert response.headers["X-Error"] == "PermissionDenied"


class TestCatalogEndpoints:
    def test_ticket_types(self, client, customer_headers):
        response = client.get(f"{API}/catalog/ticket-types", headers=customer_headers)
        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_route_stops(self, client, customer_headers):
        response = client.get(f"{API}/catalog/routes/1/stops", headers=customer_headers)
        assert response.status_code == 200
        stops = response.json()["stops"]
        assert [stop["sequence_number"] for stop in stops] == [1, 2, 3]
        assert stops[0]["route_name"] == "Downtown Express"

    def test_unknown_route(self, client, customer_headers):
        response = client.get(f"{API}/catalog/routes/999/stops", headers=customer_headers)
        assert response.status_code == 404
        assert response.headers["X-Error"] == "RouteNotFound"

    def test_active_vehicles(self, client, operator_headers):
        response = client.get(f"{API}/catalog/vehicles/active", headers=operator_headers)
        assert response.status_code == 200
        assert "MINI01" not in [vehicle["registration_number"] for vehicle in response.json()]

    def test_update_zone_fare(self, client, admin_headers):
        response = client.put(f"{API}/catalog/zones/4/fare", json={"base_fare": "1.25"}, headers=admin_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["base_fare"]) == Decimal("1.25")


class TestFareEndpoints:
    def test_quote_in_rush_hour(self, client, customer_headers):
        response = client.get(
            f"{API}/fares/quote",
            params={"ticket_type_id": 2, "at": "2024-01-15T07:30:00"},
            headers=customer_headers
        )
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["price"]) == Decimal("7.50")
        assert body["applied_rule_id"] == 1

    def test_quote_unknown_type(self, client, customer_headers):
        response = client.get(f"{API}/fares/quote", params={"ticket_type_id": 999}, headers=customer_headers)
        assert response.status_code == 404
        assert response.headers["X-Error"] == "InvalidTicketType"


class TestTicketingFlow:
    """Purchase, board, alight and analyze over HTTP"""

    def issue(self, client, headers, passenger_id=1, ticket_type_id=1):
        return client.post(
            f"{API}/tickets/",
            json={"passenger_id": passenger_id, "ticket_type_id": ticket_type_id, "payment_method": "Credit Card"},
            headers=headers
        )

    def test_customer_buys_own_ticket(self, client, customer_headers):
        response = self.issue(client, customer_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["type_name"] == "Single Ride"
        assert body["payment_status"] == "Completed"

        fetched = client.get(f"{API}/tickets/{body['ticket_id']}", headers=customer_headers)
        assert fetched.status_code == 200

    def test_customer_cannot_buy_for_others(self, client, customer_headers):
        response = self.issue(client, customer_headers, passenger_id=2)
        assert response.status_code == 403

    def test_customer_cannot_read_others_ticket(self, client, admin_headers):
        ticket_id = self.issue(client, admin_headers, passenger_id=2).json()["ticket_id"]
        other = {"Authorization": f"Bearer {create_access_token('1', CallerRole.CUSTOMER)}"}

        response = client.get(f"{API}/tickets/{ticket_id}", headers=other)
        assert response.status_code == 403

    def test_unknown_ticket_type(self, client, customer_headers):
        response = self.issue(client, customer_headers, ticket_type_id=999)
        assert response.status_code == 404
        assert response.headers["X-Error"] == "UnknownTicketType"

    def test_payment_status_transition(self, client, admin_headers):
        ticket_id = self.issue(client, admin_headers).json()["ticket_id"]

        response = client.patch(
            f"{API}/tickets/{ticket_id}/payment-status", json={"payment_status": "Refunded"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["payment_status"] == "Refunded"

        again = client.patch(
            f"{API}/tickets/{ticket_id}/payment-status", json={"payment_status": "Completed"}, headers=admin_headers
        )
        assert again.status_code == 409
        assert again.headers["X-Error"] == "InvalidPaymentTransition"

    def test_boarding_and_alighting(self, client, customer_headers, operator_headers):
        ticket = self.issue(client, customer_headers).json()

        boarded = client.post(
            f"{API}/trips/boarding",
            json={"ticket_id": ticket["ticket_id"], "vehicle_id": 1, "boarding_stop_id": 1},
            headers=operator_headers
        )
        assert boarded.status_code == 201
        trip = boarded.json()
        assert Decimal(trip["fare_charged"]) == Decimal(ticket["price"])

        alighted = client.post(
            f"{API}/trips/{trip['id']}/alighting", json={"alighting_stop_id": 2}, headers=operator_headers
        )
        assert alighted.status_code == 200
        assert alighted.json()["alighting_stop_id"] == 2

        twice = client.post(
            f"{API}/trips/{trip['id']}/alighting", json={"alighting_stop_id": 4}, headers=operator_headers
        )
        assert twice.status_code == 409
        assert twice.headers["X-Error"] == "TripAlreadyCompleted"

        legs = client.get(f"{API}/trips/ticket/{ticket['ticket_id']}", headers=customer_headers)
        assert legs.status_code == 200
        assert len(legs.json()["trips"]) == 1

    def test_trip_reads_follow_ticket_ownership(self, client, customer_headers, operator_headers, analyst_headers):
        ticket = self.issue(client, customer_headers).json()
        trip = client.post(
            f"{API}/trips/boarding",
            json={"ticket_id": ticket["ticket_id"], "vehicle_id": 1, "boarding_stop_id": 1},
            headers=operator_headers
        ).json()
        other = {"Authorization": f"Bearer {create_access_token('2', CallerRole.CUSTOMER)}"}

        own = client.get(f"{API}/trips/{trip['id']}", headers=customer_headers)
        assert own.status_code == 200
        assert own.json()["ticket_id"] == ticket["ticket_id"]

        assert client.get(f"{API}/trips/{trip['id']}", headers=other).status_code == 403
        assert client.get(f"{API}/trips/ticket/{ticket['ticket_id']}", headers=other).status_code == 403

        # recording trips does not grant reading them
        assert client.get(f"{API}/trips/{trip['id']}", headers=operator_headers).status_code == 403
        assert client.get(f"{API}/trips/ticket/{ticket['ticket_id']}", headers=operator_headers).status_code == 403

        legs = client.get(f"{API}/trips/ticket/{ticket['ticket_id']}", headers=analyst_headers)
        assert legs.status_code == 200
        assert len(legs.json()["trips"]) == 1

    def test_trips_of_unknown_ticket(self, client, admin_headers):
        response = client.get(f"{API}/trips/ticket/999", headers=admin_headers)
        assert response.status_code == 404
        assert response.headers["X-Error"] == "TicketNotFound"

    def test_boarding_outside_validity(self, client, customer_headers, operator_headers):
        ticket = self.issue(client, customer_headers).json()

        response = client.post(
            f"{API}/trips/boarding",
            json={
                "ticket_id": ticket["ticket_id"],
                "vehicle_id": 1,
                "boarding_stop_id": 1,
                "boarding_time": "2020-01-01T08:00:00"
            },
            headers=operator_headers
        )
        assert response.status_code == 409
        assert response.headers["X-Error"] == "TicketExpired"

    def test_route_analytics(self, client, analyst_headers):
        computed = client.post(f"{API}/analytics/routes/5/2024-01-15", headers=analyst_headers)
        assert computed.status_code == 200
        assert computed.json()["total_passengers"] == 0
        assert computed.json()["peak_hour_window"] is None

        fetched = client.get(f"{API}/analytics/routes/5/2024-01-15", headers=analyst_headers)
        assert fetched.status_code == 200

        missing = client.get(f"{API}/analytics/vehicles/1/2024-01-15", headers=analyst_headers)
        assert missing.status_code == 404
        assert missing.headers["X-Error"] == "AnalyticsNotComputed"


class TestTrackingEndpoints:
    def test_position_reporting(self, client, operator_headers):
        created = client.post(
            f"{API}/tracking/vehicles/1/positions",
            json={"latitude": "34.052235", "longitude": "-118.243683", "speed": "25.5"},
            headers=operator_headers
        )
        assert created.status_code == 201

        latest = client.get(f"{API}/tracking/vehicles/1/positions/latest", headers=operator_headers)
        assert latest.status_code == 200
        assert Decimal(latest.json()["latitude"]) == Decimal("34.052235")

    def test_out_of_range_position(self, client, operator_headers):
        response = client.post(
            f"{API}/tracking/vehicles/1/positions",
            json={"latitude": "95", "longitude": "0"},
            headers=operator_headers
        )
        assert response.status_code == 422

    def test_vehicle_status(self, client, operator_headers):
        response = client.put(
            f"{API}/tracking/vehicles/4/status", json={"status": "Active"}, headers=operator_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Active"
        assert response.json()["last_maintenance_date"] is not None

        history = client.get(f"{API}/tracking/vehicles/4/status-log", headers=operator_headers)
        assert [entry["status"] for entry in history.json()] == ["Active"]
