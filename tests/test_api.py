from __future__ import annotations

import io

import pytest


def register(client, username="alice", password="pw1"):
    return client.post("/api/register", json={"username": username, "password": password})


def login(client, username="alice", password="pw1"):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def auth_headers(client):
    register(client)
    token = login(client).get_json()["token"]
    return {"Authorization": f"Bearer {token}"}


def employee_form(**overrides):
    data = {
        "name": "Jane Roe",
        "email": "a@x.com",
        "mobile": "9876543210",
        "designation": "Manager",
        "gender": "F",
        "course": ["MCA", "BCA"],
    }
    data.update(overrides)
    return data


def test_root_reports_server_up(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Server is up and running" in resp.data


def test_end_to_end_scenario(client):
    assert register(client, "alice", "pw1").status_code == 201

    dup = register(client, "alice", "pw2")
    assert dup.status_code == 400
    assert dup.get_json()["message"] == "Username already taken"

    assert login(client, "alice", "pw2").status_code == 401

    ok = login(client, "alice", "pw1")
    assert ok.status_code == 200
    body = ok.get_json()
    assert body["user"]["username"] == "alice"
    headers = {"Authorization": f"Bearer {body['token']}"}

    created = client.post("/api/employees", data=employee_form(), headers=headers)
    assert created.status_code == 201
    employee_id = created.get_json()["employee"]["id"]

    again = client.post("/api/employees", data=employee_form(name="Someone Else"), headers=headers)
    assert again.status_code == 400
    assert again.get_json()["message"] == "Email already exists"

    deleted = client.delete(f"/api/employees/{employee_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.get_json()["message"] == "Employee deleted successfully"

    missing = client.get(f"/api/employees/{employee_id}", headers=headers)
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Employee not found"


def test_unknown_user_and_wrong_password_look_identical(client):
    register(client)
    wrong = login(client, "alice", "bad")
    unknown = login(client, "nobody", "pw1")

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()
    assert "token" not in wrong.get_json()


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-token"}, {"Authorization": "Bearer "}],
)
def test_employee_routes_require_valid_token(client, headers):
    resp = client.get("/api/employees", headers=headers)
    assert resp.status_code == 401
    assert "message" in resp.get_json()


@pytest.mark.parametrize("value", ["", "Bearer ", "Bearer"])
def test_empty_bearer_header_says_no_token(client, value):
    resp = client.get("/api/employees", headers={"Authorization": value})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Access denied. No token provided."


def test_expired_token_is_rejected(client, auth_headers, clock):
    clock.advance(minutes=61)

    resp = client.get("/api/employees", headers=auth_headers)

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token expired."


def test_validation_failure_lists_every_error(client, auth_headers):
    resp = client.post(
        "/api/employees",
        data={"name": "", "email": "nope", "mobile": "12a"},
        headers=auth_headers,
    )

    body = resp.get_json()
    assert resp.status_code == 400
    assert body["message"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"name", "email", "mobile", "designation", "gender", "course"}


def test_create_with_image_returns_public_url_that_is_served(client, auth_headers, image_bytes):
    data = employee_form()
    data["image"] = (io.BytesIO(image_bytes("PNG")), "me.png", "image/png")

    resp = client.post("/api/employees", data=data, headers=auth_headers, content_type="multipart/form-data")

    assert resp.status_code == 201
    employee = resp.get_json()["employee"]
    assert employee["course"] == ["MCA", "BCA"]
    assert employee["image"].startswith("http://localhost/uploads/image-")

    served = client.get(employee["image"].replace("http://localhost", ""))
    assert served.status_code == 200
    assert served.data == image_bytes("PNG")


def test_create_rejects_bad_upload_with_reasons(client, auth_headers, image_bytes):
    data = employee_form()
    data["image"] = (io.BytesIO(image_bytes("GIF")), "anim.gif", "image/gif")

    resp = client.post("/api/employees", data=data, headers=auth_headers, content_type="multipart/form-data")

    body = resp.get_json()
    assert resp.status_code == 400
    assert body["message"].startswith("Invalid file")
    assert len(body["errors"]) == 2


def test_course_brackets_form_key_is_accepted(client, auth_headers):
    data = employee_form()
    data.pop("course")
    data["course[]"] = ["MCA", "BSC"]

    resp = client.post("/api/employees", data=data, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.get_json()["employee"]["course"] == ["MCA", "BSC"]


def test_list_pagination_and_search(client, auth_headers):
    for i in range(25):
        client.post(
            "/api/employees",
            data=employee_form(name=f"Person {i}", email=f"p{i}@x.com"),
            headers=auth_headers,
        )

    page3 = client.get("/api/employees?page=3&limit=10", headers=auth_headers).get_json()
    assert len(page3["employees"]) == 5
    assert page3["totalPages"] == 3
    assert page3["currentPage"] == 3

    found = client.get("/api/employees", query_string={"search": "person 1"}, headers=auth_headers).get_json()
    assert found["totalCount"] == 11  # "Person 1" and "Person 10".."Person 19"

    bad = client.get("/api/employees?page=0", headers=auth_headers)
    assert bad.status_code == 400


def test_update_keeps_image_unless_replaced(client, auth_headers, image_bytes):
    data = employee_form()
    data["image"] = (io.BytesIO(image_bytes("PNG")), "me.png", "image/png")
    created = client.post(
        "/api/employees", data=data, headers=auth_headers, content_type="multipart/form-data"
    ).get_json()["employee"]

    kept = client.put(f"/api/employees/{created['id']}", data={"designation": "Lead"}, headers=auth_headers)
    assert kept.status_code == 200
    assert kept.get_json()["employee"]["image"] == created["image"]
    assert kept.get_json()["employee"]["designation"] == "Lead"

    replaced = client.put(
        f"/api/employees/{created['id']}",
        data={"image": (io.BytesIO(image_bytes("JPEG")), "new.jpg", "image/jpeg")},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert replaced.status_code == 200
    assert replaced.get_json()["employee"]["image"] != created["image"]


def test_update_and_delete_unknown_id_return_404(client, auth_headers):
    assert client.put("/api/employees/999", data={"name": "X"}, headers=auth_headers).status_code == 404
    assert client.delete("/api/employees/999", headers=auth_headers).status_code == 404


def test_legacy_login_uses_hashed_credentials(client):
    register(client)

    ok = client.post("/login", json={"username": "alice", "password": "pw1"})
    assert ok.status_code == 200
    assert ok.get_json() == {"user": {"id": 1, "username": "alice"}}

    assert client.post("/login", json={"username": "alice", "password": "x"}).status_code == 401


def test_legacy_employee_route_requires_image(client, image_bytes):
    missing = client.post("/employee", data=employee_form())
    assert missing.status_code == 400
    assert missing.get_json()["errors"][-1]["message"] == "No files were uploaded."

    data = employee_form()
    data["image"] = (io.BytesIO(image_bytes("JPEG")), "me.jpg", "image/jpeg")
    created = client.post("/employee", data=data, content_type="multipart/form-data")
    assert created.status_code == 201


def test_unexpected_errors_become_json_500(client, auth_headers, employees_repo):
    def boom(**kwargs):
        raise RuntimeError("disk on fire")

    employees_repo.count = boom

    resp = client.get("/api/employees", headers=auth_headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Server error"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.get_json()


@pytest.mark.parametrize(
    "body",
    [
        {"username": 123, "password": "pw1"},
        {"username": "alice", "password": 123},
        {"username": ["a"], "password": {"x": 1}},
    ],
)
def test_register_rejects_non_string_credentials(client, body):
    resp = client.post("/api/register", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Validation failed"


@pytest.mark.parametrize(
    "body",
    [
        {"username": ["alice"], "password": "pw1"},
        {"username": "alice", "password": 123},
        {"username": {"$ne": ""}, "password": {"$ne": ""}},
    ],
)
def test_login_with_non_string_credentials_is_unauthorized(client, body):
    register(client)

    resp = client.post("/api/login", json=body)

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid username or password"


def test_malformed_json_body_is_a_validation_error(client, auth_headers):
    resp = client.post("/api/register", data="{not json", content_type="application/json")
    assert resp.status_code == 400

    created = client.post("/api/employees", data="[1, 2", content_type="application/json", headers=auth_headers)
    assert created.status_code == 400
    assert created.get_json()["message"] == "Validation failed"


def test_json_employee_with_wrong_value_types(client, auth_headers):
    body = employee_form(course=5, name={"first": "Jane"}, mobile=9876543210)

    resp = client.post("/api/employees", json=body, headers=auth_headers)

    errors = {e["field"]: e["message"] for e in resp.get_json()["errors"]}
    assert resp.status_code == 400
    assert errors == {"name": "Name is required", "course": "Course must be a list of strings"}


def test_update_validates_before_looking_up_the_record(client, auth_headers):
    resp = client.put("/api/employees/999", json={"email": "bad"}, headers=auth_headers)

    assert resp.status_code == 400
    assert [e["field"] for e in resp.get_json()["errors"]] == ["email"]
