from conftest import ADMIN_LOGIN
from utils import messages

GUEST = {"email": "guest@school.in", "username": "guest", "password": "guestpassword1"}


def register_guest(admin_client):
    response = admin_client.post("/users/register", json=GUEST)
    assert response.status_code == 200, response.get_json()
    return response.get_json()["data"]


def test_login_returns_user_without_hash(client):
    response = client.post("/users/login", json=ADMIN_LOGIN)
    body = response.get_json()
    assert response.status_code == 200
    assert body["status"] == "success"
    assert body["message"] == messages.MESSAGE_USER_LOGIN_SUCCESS
    assert body["data"]["username"] == ADMIN_LOGIN["username"]
    assert "hash" not in body["data"]
    assert body["data"]["role"]["roleName"] == "ADMIN"


def test_login_accepts_email(client, app):
    response = client.post("/users/login", json={
        "username": app.config["ADMIN_MAIL_ID"].upper(), "password": ADMIN_LOGIN["password"],
    })
    assert response.status_code == 200


def test_login_wrong_password(client):
    response = client.post("/users/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401
    assert response.get_json() == {
        "status": "error",
        "statusCode": 401,
        "message": messages.MESSAGE_UNAUTHENTICATED,
        "data": None,
        "total": None,
    }


def test_login_missing_fields_is_validation_error(client):
    response = client.post("/users/login", json={"username": "admin"})
    assert response.status_code == 400
    assert "password" in response.get_json()["message"]


def test_routes_require_session(client):
    response = client.get("/roles/GetRoles")
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_NOT_LOGGED_IN_YET


def test_unknown_route_is_404(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.get_json()["message"] == messages.MESSAGE_PAGE_NOT_FOUND


def test_security_headers(client):
    response = client.get("/nowhere")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_logout_clears_session(admin_client):
    response = admin_client.get("/users/logout")
    assert response.status_code == 200
    assert response.get_json()["message"] == messages.MESSAGE_USER_LOGOUT_SUCCESS
    assert admin_client.get("/roles/GetRoles").status_code == 400


def test_login_and_logout_are_audited(admin_client, db):
    admin_client.get("/users/logout")
    actions = [entry["action"] for entry in db.auditlogs.find()]
    assert actions == ["LOGIN", "LOGOUT"]


def test_guest_lacks_admin_permissions(admin_client, login_as):
    register_guest(admin_client)
    guest = login_as(GUEST["username"], GUEST["password"])

    response = guest.get("/roles/GetRoles")
    assert response.status_code == 401
    assert response.get_json()["message"] == messages.MESSAGE_ACCESS_DENIED_NO_PERMISSION

    own_role = guest.get("/roles/GetOwnRole")
    assert own_role.status_code == 200
    assert own_role.get_json()["data"]["roleName"] == "GUEST USER"


def test_user_without_role_is_denied(admin_client, login_as, db):
    register_guest(admin_client)
    db.users.update_one({"username": GUEST["username"]}, {"$set": {"role": None}})
    guest = login_as(GUEST["username"], GUEST["password"])

    response = guest.get("/users/GetOwnUser")
    assert response.status_code == 401
    assert response.get_json()["message"] == messages.MESSAGE_ACCESS_DENIED_NO_ROLES


def test_deleted_user_session_is_rejected(admin_client, login_as, db):
    register_guest(admin_client)
    guest = login_as(GUEST["username"], GUEST["password"])
    db.users.delete_one({"username": GUEST["username"]})

    response = guest.get("/users/GetOwnUser")
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_NOT_LOGGED_IN_YET
