"""HTTP tests for the /api/v1 routers."""

from .conftest import OPERATOR, OTHER_OPERATOR

API = "/api/v1"


def _create_pen(client, **overrides):
    payload = {
        "name": "Pen A-1",
        "capacity": 25,
        "current": 20,
        "cattle_type": "Steers",
        "starting_weight": 600,
        "market_weight": 1300,
        "operator_email": OPERATOR,
    }
    payload.update(overrides)
    return client.post(f"{API}/pens/", json=payload)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "ok"}


class TestOperations:
    def test_create_and_fetch(self, client, db):
        from feedlot.models.operation import InviteCode

        db.add(InviteCode(code="RANCH2025", operator_email=OPERATOR))
        db.commit()

        response = client.post(
            f"{API}/operations/",
            json={
                "name": "Rolling Hills Feedlot",
                "operator_email": OPERATOR,
                "location": "Garden City, KS",
                "invite_code": "RANCH2025",
            },
        )
        assert response.status_code == 201
        assert response.json()["operation_id"] == "OP-001"

        response = client.get(f"{API}/operations/", params={"operator_email": OPERATOR})
        assert response.status_code == 200
        assert response.json()["name"] == "Rolling Hills Feedlot"

    def test_bad_invite_code(self, client):
        response = client.post(
            f"{API}/operations/",
            json={
                "name": "Rolling Hills Feedlot",
                "operator_email": OPERATOR,
                "location": "Garden City, KS",
                "invite_code": "NOPE",
            },
        )
        assert response.status_code == 400

    def test_missing_operation(self, client):
        response = client.get(f"{API}/operations/", params={"operator_email": OTHER_OPERATOR})
        assert response.status_code == 404


class TestPens:
    def test_create_and_list(self, client):
        response = _create_pen(client)
        assert response.status_code == 201
        body = response.json()
        assert body["pen_id"] == "pen-001"
        assert body["status"] == "Active"
        assert len(body["weight_history"]) == 1

        response = client.get(f"{API}/pens/", params={"operator_email": OPERATOR})
        assert [p["pen_id"] for p in response.json()] == ["pen-001"]

    def test_capacity_violation_is_400(self, client):
        assert _create_pen(client, current=30).status_code == 400

    def test_schema_violation_is_422(self, client):
        assert _create_pen(client, capacity=0).status_code == 422

    def test_foreign_pen_is_404(self, client):
        _create_pen(client)
        response = client.get(f"{API}/pens/pen-001", params={"operator_email": OTHER_OPERATOR})
        assert response.status_code == 404

    def test_weight_update(self, client):
        _create_pen(client)

        response = client.patch(
            f"{API}/pens/pen-001/weight",
            json={"new_weight": 900, "operator_email": OPERATOR},
        )

        assert response.status_code == 200
        assert response.json()["current_weight"] == 900

    def test_weight_below_starting_is_409(self, client):
        _create_pen(client)
        response = client.patch(
            f"{API}/pens/pen-001/weight",
            json={"new_weight": 500, "operator_email": OPERATOR},
        )
        assert response.status_code == 409

    def test_zero_or_negative_weight_is_409(self, client):
        _create_pen(client)
        for weight in (0, -10):
            response = client.patch(
                f"{API}/pens/pen-001/weight",
                json={"new_weight": weight, "operator_email": OPERATOR},
            )
            assert response.status_code == 409

    def test_status_update(self, client):
        _create_pen(client)

        response = client.patch(
            f"{API}/pens/pen-001/status",
            json={"status": "Maintenance", "operator_email": OPERATOR},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Maintenance"

        response = client.patch(
            f"{API}/pens/pen-001/status",
            json={"status": "Inactive", "operator_email": OPERATOR},
        )
        assert response.status_code == 409

    def test_performance_and_projection(self, client, make_plan):
        _create_pen(client)
        make_plan("pen-001")

        response = client.get(f"{API}/pens/pen-001/performance", params={"operator_email": OPERATOR})
        assert response.status_code == 200
        assert response.json()["weight_to_market"] == 700

        response = client.get(
            f"{API}/pens/pen-001/projection",
            params={"operator_email": OPERATOR, "avg_daily_gain": 3},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["final_projected_weight"] == 690
        assert body["windows"][0]["schedule_name"] == "Schedule 1"

    def test_negative_projection_gain(self, client):
        _create_pen(client)
        response = client.get(
            f"{API}/pens/pen-001/projection",
            params={"operator_email": OPERATOR, "avg_daily_gain": -1},
        )
        assert response.status_code == 400


class TestLedgerEndpoints:
    def test_feeding_and_variance(self, client, operation, make_plan):
        _create_pen(client)
        schedule_id = make_plan("pen-001").schedules[0].schedule_id

        response = client.post(
            f"{API}/feeding-records/",
            json={
                "pen_id": "pen-001",
                "schedule_id": schedule_id,
                "actual_ingredients": [{"name": "Corn Grain", "actual_amount": 25}],
                "operator_email": OPERATOR,
            },
        )
        assert response.status_code == 201
        record_id = response.json()["feeding_record_id"]

        response = client.get(
            f"{API}/feeding-records/{record_id}/variance",
            params={"operator_email": OPERATOR},
        )
        assert response.status_code == 200
        assert response.json()["ingredients"][0]["label"] == "Over by 25%"

    def test_unknown_schedule_is_404(self, client, operation):
        _create_pen(client)
        response = client.post(
            f"{API}/feeding-records/",
            json={
                "pen_id": "pen-001",
                "schedule_id": "SCH-404",
                "actual_ingredients": [{"name": "Corn Grain", "actual_amount": 25}],
                "operator_email": OPERATOR,
            },
        )
        assert response.status_code == 404

    def test_death_loss_out_of_range_is_400(self, client, operation):
        _create_pen(client)
        response = client.post(
            f"{API}/death-losses/",
            json={
                "pen_id": "pen-001",
                "loss_date": "2025-02-03",
                "reason": "Disease",
                "cattle_count": 21,
                "estimated_weight": 850,
                "operator_email": OPERATOR,
            },
        )
        assert response.status_code == 400

    def test_treatment(self, client, operation):
        _create_pen(client)
        response = client.post(
            f"{API}/treatments/",
            json={
                "pen_id": "pen-001",
                "treatment_date": "2025-02-03",
                "treatment_type": "Vaccination",
                "product": "Bovi-Shield Gold",
                "dosage": "2 mL",
                "cattle_count": 20,
                "treated_by": "Dr. Sarah Johnson",
                "operator_email": OPERATOR,
            },
        )
        assert response.status_code == 201
        assert response.json()["treatment_id"] == "TRT-001"

    def test_sales_and_activity(self, client, operation):
        _create_pen(client)

        response = client.post(
            f"{API}/partial-sales/",
            json={
                "pen_id": "pen-001",
                "sale_date": "2025-07-20",
                "cattle_count": 4,
                "final_weight": 950,
                "price_per_cwt": 175,
                "operator_email": OPERATOR,
            },
        )
        assert response.status_code == 201
        assert response.json()["total_revenue"] == 6650

        sale = {
            "pen_id": "pen-001",
            "final_weight": 1300,
            "price_per_cwt": 180,
            "sale_date": "2025-07-20",
            "operator_email": OPERATOR,
        }
        response = client.post(f"{API}/cattle-sales/", json=sale)
        assert response.status_code == 201
        assert response.json()["total_revenue"] == 37440
        assert response.json()["days_on_feed"] == 180

        assert client.post(f"{API}/cattle-sales/", json=sale).status_code == 409

        response = client.get(f"{API}/pens/pen-001/activity", params={"operator_email": OPERATOR})
        assert response.status_code == 200
        assert sorted(item["kind"] for item in response.json()) == ["cattle_sale", "partial_sale"]

        response = client.get(f"{API}/dashboard/", params={"operator_email": OPERATOR})
        assert response.json() == {"total_pens": 1, "total_cattle": 0, "active_schedules": 0}


class TestNutritionistsApi:
    def test_invite_and_accept(self, client):
        response = client.post(
            f"{API}/nutritionists/",
            json={"personal_name": "Dr. Sarah Johnson", "operator_email": OPERATOR},
        )
        assert response.status_code == 201
        assert response.json()["status"] == "Invited"

        response = client.post(
            f"{API}/nutritionists/accept",
            json={"nutritionist_id": "NUT-001", "operator_email": OPERATOR},
        )
        assert response.status_code == 200
        assert response.json()["status"] == "Active"

    def test_accept_unknown(self, client):
        response = client.post(
            f"{API}/nutritionists/accept",
            json={"nutritionist_id": "NUT-404", "operator_email": OPERATOR},
        )
        assert response.status_code == 404
