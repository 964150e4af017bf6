from utils import messages
from utils.permissions import VIEW_AUDIT, VIEW_ROLES


def permission_codes(admin_client, *names):
    response = admin_client.get("/permissions/GetPermissions?all=true")
    by_name = {p["permissionName"]: p["permissionCode"] for p in response.get_json()["data"]}
    return [by_name[name] for name in names]


def create_role(admin_client, name="auditor", permissions=(VIEW_AUDIT,)):
    return admin_client.post("/roles/CreateRole", json={
        "roleName": name,
        "roleDescription": "Reads the audit log",
        "rolePermissions": permission_codes(admin_client, *permissions),
    })


def test_list_permissions(admin_client):
    response = admin_client.get("/permissions/GetPermissions?limit=5")
    body = response.get_json()
    assert response.status_code == 200
    assert len(body["data"]) == 5
    assert body["total"] > 5
    assert all(code.startswith("PRIV-") for code in (p["permissionCode"] for p in body["data"]))


def test_list_with_operator_sort_field(admin_client):
    response = admin_client.get("/permissions/GetPermissions", query_string={"sortField": "$where", "limit": 3})
    assert response.status_code == 200
    assert len(response.get_json()["data"]) == 3


def test_permissions_by_role_code(admin_client, db):
    role = db.roles.find_one({"roleName": "GUEST USER"})
    response = admin_client.post("/permissions/GetPermissionsByRoleCode", json={"roleCode": role["roleCode"]})
    assert response.status_code == 200
    assert response.get_json()["total"] == len(role["rolePermissions"])


def test_create_role_uppercases_name(admin_client):
    response = create_role(admin_client)
    body = response.get_json()
    assert response.status_code == 200
    assert body["message"] == messages.ROLE.created
    assert body["data"]["roleName"] == "AUDITOR"
    assert body["data"]["roleCode"].startswith("ROLE-")
    assert [p["permissionName"] for p in body["data"]["rolePermissions"]] == [VIEW_AUDIT]


def test_create_role_duplicate_name(admin_client):
    create_role(admin_client)
    response = create_role(admin_client, name=" Auditor ")
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.ROLE.exist


def test_create_role_unknown_permission(admin_client):
    response = admin_client.post("/roles/CreateRole", json={
        "roleName": "broken", "rolePermissions": ["PRIV-missing"],
    })
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_ROLE_PERMISSION_NOT_FOUND


def test_get_roles_keyword(admin_client):
    create_role(admin_client)
    response = admin_client.get("/roles/GetRoles?keyword=auditor")
    body = response.get_json()
    assert body["total"] == 1
    assert body["data"][0]["roleName"] == "AUDITOR"


def test_update_role(admin_client):
    role = create_role(admin_client).get_json()["data"]
    response = admin_client.post("/roles/UpdateRole", json={
        "roleCode": role["roleCode"],
        "roleName": "reviewer",
        "rolePermissions": permission_codes(admin_client, VIEW_AUDIT, VIEW_ROLES),
    })
    body = response.get_json()
    assert response.status_code == 200
    assert body["data"]["roleName"] == "REVIEWER"
    assert len(body["data"]["rolePermissions"]) == 2


def test_update_role_name_taken(admin_client):
    role = create_role(admin_client).get_json()["data"]
    response = admin_client.post("/roles/UpdateRole", json={
        "roleCode": role["roleCode"], "roleName": "admin", "rolePermissions": [],
    })
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.ROLE.taken


def test_delete_role(admin_client, db):
    role = create_role(admin_client).get_json()["data"]
    response = admin_client.post("/roles/DeleteRole", json={"roleCode": role["roleCode"]})
    assert response.status_code == 200
    assert db.roles.find_one({"roleCode": role["roleCode"]}) is None
    assert db.auditlogs.find_one({"action": "DELETE", "document": role["roleCode"]})["before"]["roleName"] == "AUDITOR"


def test_seeded_role_cannot_be_deleted(admin_client, db):
    role = db.roles.find_one({"roleName": "ADMIN"})
    response = admin_client.post("/roles/DeleteRole", json={"roleCode": role["roleCode"]})
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.ROLE.not_allowed_delete


def test_role_in_use_cannot_be_deleted(admin_client):
    role = create_role(admin_client).get_json()["data"]
    admin_client.post("/users/register", json={
        "email": "auditor@school.in", "username": "auditor",
        "password": "auditorpass123", "roleCode": role["roleCode"],
    })
    response = admin_client.post("/roles/DeleteRole", json={"roleCode": role["roleCode"]})
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.ROLE.in_use


def test_get_role_by_code_not_found(admin_client):
    response = admin_client.post("/roles/GetRoleByCode", json={"roleCode": "ROLE-missing"})
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.ROLE.not_found
