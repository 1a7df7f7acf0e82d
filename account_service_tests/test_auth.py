from account_service_tests.helpers import make_registration, years_ago


def test_register_returns_token_and_public_fields(client):
    payload = make_registration(email="  Maria.Silva@Example.COM ", fullName="  Maria Silva  ")
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["token"]
    assert isinstance(data["id"], int)
    assert data["email"] == "maria.silva@example.com"
    assert data["fullName"] == "Maria Silva"
    assert data["gender"] == "female"
    assert data["createdAt"] is not None
    assert "passwordHash" not in data
    assert "password" not in data


def test_register_duplicate_email_conflicts(client):
    payload = make_registration()
    first = client.post("/api/auth/register", json=payload)
    assert first.status_code == 201

    again = make_registration(email=payload["email"].upper())
    second = client.post("/api/auth/register", json=again)
    assert second.status_code == 400
    assert second.json()["success"] is False
    assert "already registered" in second.json()["message"]


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": "a@b.com", "password": "secret123"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid input"
    assert body["error"]


def test_register_rejects_bad_phone_and_email(client):
    bad_phone = client.post("/api/auth/register", json=make_registration(phone="555-1234"))
    assert bad_phone.status_code == 400

    bad_email = client.post("/api/auth/register", json=make_registration(email="not-an-email"))
    assert bad_email.status_code == 400

    short_password = client.post("/api/auth/register", json=make_registration(password="12345"))
    assert short_password.status_code == 400


def test_register_age_boundaries(client):
    seventeen = make_registration(birthDate=years_ago(18, days=1).isoformat())
    assert client.post("/api/auth/register", json=seventeen).status_code == 400

    exactly_eighteen = make_registration(birthDate=years_ago(18).isoformat())
    assert client.post("/api/auth/register", json=exactly_eighteen).status_code == 201

    too_old = make_registration(birthDate=years_ago(151).isoformat())
    assert client.post("/api/auth/register", json=too_old).status_code == 400


def test_login_success(client, registered):
    payload, data = registered
    login = client.post("/api/auth/login", json={"email": payload["email"], "password": payload["password"]})
    assert login.status_code == 200
    body = login.json()
    assert body["success"] is True
    assert body["data"]["id"] == data["id"]
    assert body["data"]["token"]
    assert "passwordHash" not in login.text


def test_login_email_is_case_insensitive(client, registered):
    payload, _ = registered
    login = client.post("/api/auth/login", json={"email": payload["email"].upper(), "password": payload["password"]})
    assert login.status_code == 200


def test_login_wrong_password_and_unknown_email_look_identical(client, registered):
    payload, _ = registered
    wrong_password = client.post("/api/auth/login", json={"email": payload["email"], "password": "wrongpassword"})
    unknown_email = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "wrongpassword"})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid credentials"


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"email": "someone@example.com"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Please provide email and password"}

    empty = client.post("/api/auth/login", json={})
    assert empty.status_code == 400


def test_root_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["login"] == "POST /api/auth/login"


def test_unknown_route_returns_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}
