from factories import ADMIN_EMAIL, ADMIN_PASSWORD, certificate_fields


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_unknown_route_uses_envelope(client):
    res = client.get("/nowhere")
    assert res.status_code == 404
    assert res.json()["success"] is False


def test_login_and_verify_with_bearer(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    body = res.json()
    assert body["success"] is True
    assert body["user"] == {"email": ADMIN_EMAIL, "name": "Admin User", "role": "admin"}
    client.cookies.clear()

    res = client.get("/auth/verify", headers={"Authorization": f"Bearer {body['token']}"})
    assert res.json() == {"success": True, "user": body["user"]}


def test_login_sets_httponly_cookie_used_for_verify(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith("portal_session=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=3600" in set_cookie

    assert client.get("/auth/verify").json()["user"]["email"] == ADMIN_EMAIL
    assert client.get("/students").status_code == 200

    client.post("/auth/logout")
    assert client.get("/auth/verify").status_code == 401


def test_bad_login_is_401(client, admin):
    res = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid email or password"}


def test_verify_without_token_is_401(client):
    assert client.get("/auth/verify").status_code == 401


def test_certificate_upload_is_public(client):
    res = client.post("/certificates", json=certificate_fields())
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["status"] == "Pending"
    assert data["fileUrl"].startswith("/uploads/certificates/")
    assert data["fileUrl"].endswith("_transcript.pdf")


def test_certificate_upload_rejects_bad_mime(client):
    res = client.post("/certificates", json=certificate_fields(fileType="text/html"))
    assert res.status_code == 422
    assert res.json()["message"] == "Unsupported file type: text/html"


def test_certificate_listing_and_review(client, staff_headers):
    first = client.post("/certificates", json=certificate_fields(studentId="S1")).json()["data"]
    client.post("/certificates", json=certificate_fields(studentId="S2"))

    assert client.get("/certificates").status_code == 401

    body = client.get("/certificates", params={"studentId": "S1"}, headers=staff_headers).json()
    assert [c["_id"] for c in body["data"]] == [first["_id"]]

    res = client.patch(f"/certificates/{first['_id']}", json={"status": "Verified"},
                       headers=staff_headers)
    assert res.json()["data"]["status"] == "Verified"

    body = client.get("/certificates", params={"status": "Verified"}, headers=staff_headers).json()
    assert body["count"] == 1
    got = client.get(f"/certificates/{first['_id']}", headers=staff_headers).json()
    assert got["data"]["status"] == "Verified"


def test_courses_catalog(client, staff_headers):
    category = {
        "name": "Information Technology",
        "subcategories": [
            {
                "name": "Networking",
                "courses": [
                    {"name": "Cybersecurity", "qualification": "Bachelor's Degree",
                     "duration": "12 months"}
                ],
            }
        ],
    }
    assert client.post("/courses", json=category).status_code == 401
    res = client.post("/courses", json=category, headers=staff_headers)
    assert res.status_code == 201

    body = client.get("/courses").json()
    assert body["success"] is True
    cats = body["data"]["categories"]
    assert [c["name"] for c in cats] == ["Information Technology"]
    assert cats[0]["subcategories"][0]["courses"][0]["name"] == "Cybersecurity"


def test_course_category_validation(client, staff_headers):
    res = client.post("/courses", json={"name": "Art", "courses": [{"name": "Drawing"}]},
                      headers=staff_headers)
    assert res.status_code == 422
