def test_create_class_with_all_fields(client, teacher):
    resp = client.post("/api/v1/classes", headers=teacher["headers"], json={
        "name": "  Algebra I  ",
        "subject": "Math",
        "room": "B-201",
        "schedule_days": ["Monday", "Wednesday"],
        "schedule_time": "09:00"
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Algebra I"
    assert data["teacher_id"] == teacher["user_id"]
    assert data["schedule_days"] == ["Monday", "Wednesday"]
    assert data["room"] == "B-201"


def test_blank_optional_fields_are_stored_as_null(client, teacher):
    resp = client.post("/api/v1/classes", headers=teacher["headers"], json={
        "name": "Homeroom",
        "subject": "",
        "room": "   ",
        "schedule_days": [],
        "schedule_time": ""
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["subject"] is None
    assert data["room"] is None
    assert data["schedule_days"] is None
    assert data["schedule_time"] is None


def test_class_name_is_required(client, teacher):
    resp = client.post("/api/v1/classes", headers=teacher["headers"], json={"subject": "Math"})
    assert resp.status_code == 422

    resp = client.post("/api/v1/classes", headers=teacher["headers"], json={"name": "   "})
    assert resp.status_code == 422


def test_invalid_weekday(client, teacher):
    resp = client.post("/api/v1/classes", headers=teacher["headers"], json={
        "name": "Chemistry",
        "schedule_days": ["Funday"]
    })
    assert resp.status_code == 422


def test_list_classes_newest_first(client, teacher, create_class):
    first = create_class(teacher["headers"], name="First")
    second = create_class(teacher["headers"], name="Second")

    resp = client.get("/api/v1/classes", headers=teacher["headers"])
    assert resp.status_code == 200
    ids = [c["id"] for c in resp.json()["classes"]]
    assert ids == [second["id"], first["id"]]


def test_classes_are_scoped_to_teacher(client, sign_up_teacher, create_class):
    owner = sign_up_teacher()
    other = sign_up_teacher()
    classroom = create_class(owner["headers"], name="Private")

    resp = client.get("/api/v1/classes", headers=other["headers"])
    assert resp.json()["classes"] == []

    resp = client.get(f"/api/v1/classes/{classroom['id']}", headers=other["headers"])
    assert resp.status_code == 404

    resp = client.get(f"/api/v1/classes/{classroom['id']}", headers=owner["headers"])
    assert resp.status_code == 200
    assert resp.json()["name"] == "Private"
