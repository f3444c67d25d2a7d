def _create(client, property_ids):
    resp = client.post("/api/unit-turns", json=property_ids, headers={"X-Operator-Id": "op-1"})
    assert resp.status_code == 201
    return resp.get_json()["data"]


def _kitchen_items():
    return [
        {"id": "kitchen-1", "cost_code": 6, "area": "Cabinets Repairs", "description": "Cabinets Repairs",
         "quantity": 2, "cost_per_unit": 50},
        {"id": "kitchen-2", "cost_code": 6, "area": "Counter Tops Repairs", "description": "Counter Tops Repairs",
         "quantity": 0, "cost_per_unit": 100, "damages": 25},
    ]


def test_default_template(client):
    body = client.get("/api/templates/default").get_json()
    assert body["ok"] is True
    assert body["error_type"] is None
    assert len(body["data"]["sections"]) == 22
    assert body["data"]["sections"][0]["items"][0]["id"] == "ext-build-1"


def test_calculate(client):
    resp = client.post("/api/templates/calculate", json={"items": _kitchen_items()})
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["total_project_cost"] == 100.0
    assert data["total_damage_charges"] == 25.0
    assert data["grand_total"] == 100.0
    assert data["total_line_items"] == 2
    kitchen = next(s for s in data["section_summaries"] if s["section_name"] == "Kitchen & Nook")
    assert kitchen["item_count"] == 2


def test_calculate_rejects_negative_amounts(client):
    items = _kitchen_items()
    items[0]["quantity"] = -1
    resp = client.post("/api/templates/calculate", json={"items": items})
    body = resp.get_json()
    assert resp.status_code == 400
    assert body["ok"] is False
    assert body["error_type"] == "VALIDATION_ERROR"


def test_calculate_rejects_infinite_amounts(client):
    # bare Infinity is valid for the JSON parser, so send the raw body
    body = (
        '{"items": [{"id": "kitchen-1", "cost_code": 6, "area": "Cabinets Repairs", '
        '"description": "Cabinets Repairs", "quantity": Infinity, "cost_per_unit": 0}]}'
    )
    resp = client.post("/api/templates/calculate", data=body, content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json()["error_type"] == "VALIDATION_ERROR"


def test_update_field(client):
    resp = client.post("/api/templates/update-field", json={
        "items": _kitchen_items(), "item_id": "kitchen-2", "field": "quantity", "value": 1,
    })
    data = resp.get_json()["data"]
    assert data["matched"] is True
    assert data["items"][1]["total"] == 100.0
    assert data["totals"]["total_project_cost"] == 200.0
    assert data["totals"]["total_damage_charges"] == 25.0


def test_update_field_unknown_item_is_a_no_op(client):
    resp = client.post("/api/templates/update-field", json={
        "items": _kitchen_items(), "item_id": "nope", "field": "quantity", "value": 4,
    })
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["matched"] is False
    assert data["totals"]["total_project_cost"] == 100.0


def test_update_field_errors(client):
    resp = client.post("/api/templates/update-field", json={
        "items": _kitchen_items(), "item_id": "kitchen-1", "field": "total", "value": 4,
    })
    assert resp.status_code == 400
    assert resp.get_json()["error_type"] == "INPUT_ERROR"

    resp = client.post("/api/templates/update-field", json={
        "items": _kitchen_items(), "item_id": "kitchen-1", "field": "damages", "value": -4,
    })
    assert resp.status_code == 400
    assert resp.get_json()["error_type"] == "VALIDATION_ERROR"


def test_cost_codes(client):
    body = client.get("/api/cost-codes").get_json()
    assert len(body["data"]) == 37
    assert body["data"][0] == {
        "code": 1,
        "gl_account_number": "58005",
        "description": "Irrigation Repair and Maintenance",
        "gl_classification": "UT",
        "is_active": True,
    }


def test_instance_crud(client, property_ids):
    created = _create(client, property_ids)
    assert created["status"] == "draft"
    assert created["created_by"] == "op-1"

    fetched = client.get(f"/api/unit-turns/{created['id']}").get_json()["data"]
    assert fetched["id"] == created["id"]

    resp = client.put(f"/api/unit-turns/{created['id']}", json={"status": "in_progress", "notes": "vacant"})
    assert resp.get_json()["data"]["status"] == "in_progress"
    assert resp.get_json()["data"]["version"] == 2

    listed = client.get(f"/api/unit-turns?property_id={property_ids['property_id']}&status=in_progress").get_json()
    assert [i["id"] for i in listed["data"]] == [created["id"]]

    assert client.delete(f"/api/unit-turns/{created['id']}").status_code == 200
    resp = client.get(f"/api/unit-turns/{created['id']}")
    assert resp.status_code == 404
    assert resp.get_json()["error_type"] == "NOT_FOUND"


def test_create_instance_with_bad_ids(client):
    resp = client.post("/api/unit-turns", json={"property_id": "p", "community_id": "c"})
    assert resp.status_code == 400
    assert resp.get_json()["error_type"] == "INPUT_ERROR"


def test_update_instance_bad_status(client, property_ids):
    created = _create(client, property_ids)
    resp = client.put(f"/api/unit-turns/{created['id']}", json={"status": "archived"})
    assert resp.status_code == 400


def test_save_summary_and_export(client, property_ids):
    created = _create(client, property_ids)
    items = _kitchen_items()
    items.append({"id": "garage-1", "cost_code": 3, "area": "Garage Door Opener",
                  "description": "Garage Door Opener", "photos": ["file://gdo.jpg"]})

    resp = client.post(f"/api/unit-turns/{created['id']}/save", json={
        "items": items,
        "photos": {"kitchen-2": [{"url": "file://counter.jpg", "caption": "burn mark"}]},
    })
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["instance"]["status"] == "completed"
    assert data["instance"]["total_project_cost"] == 100.0
    assert data["instance"]["total_damage_charges"] == 25.0
    assert [li["template_item_id"] for li in data["line_items"]] == ["kitchen-1", "kitchen-2"]
    assert data["photos_saved"] == 1

    line_items = client.get(f"/api/unit-turns/{created['id']}/line-items?sort_by=line_total&sort_order=desc").get_json()
    assert line_items["data"][0]["line_total"] == 100.0
    assert line_items["data"][0]["cost_code_label"] == "6 - Cabinets and Countertops (58035)"

    summary = client.get(f"/api/unit-turns/{created['id']}/summary").get_json()["data"]
    assert summary["total_project_cost"] == 100.0
    assert summary["total_line_items"] == 2

    resp = client.get(f"/api/unit-turns/{created['id']}/export/csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert b"Total Project Cost" in resp.data

    instance = client.get(f"/api/unit-turns/{created['id']}").get_json()["data"]
    assert instance["status"] == "exported"

    resp = client.post(f"/api/unit-turns/{created['id']}/save", json={"items": items})
    assert resp.status_code == 409
    assert resp.get_json()["error_type"] == "STATE_CONFLICT"


def test_export_before_save_conflicts(client, property_ids):
    created = _create(client, property_ids)
    resp = client.get(f"/api/unit-turns/{created['id']}/export/excel")
    assert resp.status_code == 409


def test_unknown_route_is_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False


def test_cost_codes_filtered_by_classification(client):
    body = client.get("/api/cost-codes", query_string={"classification": "R&M"}).get_json()
    assert [c["code"] for c in body["data"]] == [36, 37, 39, 40]

    resp = client.get("/api/cost-codes", query_string={"classification": "OpEx"})
    assert resp.status_code == 400


def test_app_sets_no_secret_key(client):
    # no login or cookie session in this service
    assert client.application.config.get("SECRET_KEY") is None
