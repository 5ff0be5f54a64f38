"""
End-to-end tests for admin, user and template management
"""

import pytest

from app.models import Admin, RecordStatus, ResumeTemplate
from app.services import auth_service, resume_service

PASSWORD = "Str0ng!Pass"


def _auth(account):
    return {"Authorization": f"Bearer {account['token']}"}


def _template(name, **extra):
    body = {"template_name": name, "template_html": "<section>{{name}}</section>", "category": "Modern"}
    body.update(extra)
    return body


def test_duplicate_template_name_conflicts(client, db, admin_account):
    first = client.post("/api/admin-management/templates", json=_template("Classic"), headers=_auth(admin_account))
    second = client.post("/api/admin-management/templates", json=_template("Classic"), headers=_auth(admin_account))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "TEMPLATE_EXISTS"
    assert db.query(ResumeTemplate).count() == 1


def test_template_name_conflict_ignores_case(client, admin_account):
    client.post("/api/admin-management/templates", json=_template("Classic"), headers=_auth(admin_account))
    response = client.post("/api/admin-management/templates", json=_template("CLASSIC"), headers=_auth(admin_account))
    assert response.status_code == 409


def test_template_in_use_cannot_be_deleted(client, db, admin_account, user_account):
    created = client.post("/api/admin-management/templates", json=_template("Modern One"), headers=_auth(admin_account))
    template_id = created.json()["data"]["template_id"]
    resume_service.add_user_resume(db, user_account["user_id"], "Uses template", template_id)

    response = client.delete(f"/api/admin-management/templates/{template_id}", headers=_auth(admin_account))
    assert response.status_code == 409
    assert response.json()["error"] == "TEMPLATE_IN_USE"

    template = client.get(f"/api/admin-management/templates/{template_id}", headers=_auth(admin_account)).json()["data"]
    assert template["status"] == "Active"
    assert template["template_html"] == "<section>{{name}}</section>"


def test_unused_template_is_soft_deleted(client, admin_account):
    created = client.post("/api/admin-management/templates", json=_template("Unused"), headers=_auth(admin_account))
    template_id = created.json()["data"]["template_id"]

    response = client.delete(f"/api/admin-management/templates/{template_id}", headers=_auth(admin_account))
    assert response.status_code == 200

    active = client.get(
        "/api/admin-management/templates", params={"status": "Active"}, headers=_auth(admin_account)
    ).json()["data"]
    assert template_id not in [t["template_id"] for t in active["templates"]]

    direct = client.get(f"/api/admin-management/templates/{template_id}", headers=_auth(admin_account))
    assert direct.status_code == 200
    assert direct.json()["data"]["status"] == "Inactive"


def test_template_partial_update(client, admin_account):
    created = client.post(
        "/api/admin-management/templates",
        json=_template("Partial", template_description="before"),
        headers=_auth(admin_account),
    )
    template_id = created.json()["data"]["template_id"]

    response = client.put(
        f"/api/admin-management/templates/{template_id}",
        json={"template_description": "after"},
        headers=_auth(admin_account),
    )
    data = response.json()["data"]
    assert data["template_description"] == "after"
    assert data["template_name"] == "Partial"
    assert data["category"] == "Modern"


def test_template_filters_and_search(client, admin_account):
    headers = _auth(admin_account)
    client.post("/api/admin-management/templates", json=_template("Blue Modern"), headers=headers)
    client.post("/api/admin-management/templates", json=_template("Plain", category="Classic"), headers=headers)

    by_category = client.get("/api/admin-management/templates", params={"category": "Classic"}, headers=headers)
    assert [t["template_name"] for t in by_category.json()["data"]["templates"]] == ["Plain"]

    by_search = client.get("/api/admin-management/templates", params={"search": "blue"}, headers=headers)
    assert [t["template_name"] for t in by_search.json()["data"]["templates"]] == ["Blue Modern"]
    assert "template_html" not in by_search.json()["data"]["templates"][0]


@pytest.mark.parametrize("limit", [1, 2, 3, 7])
def test_user_pages_cover_every_match_exactly_once(client, db, admin_account, limit):
    for i in range(7):
        auth_service.register_user(db, f"Tester {i}", f"tester{i}@example.com", PASSWORD, f"555000000{i}")
    auth_service.register_user(db, "Someone Else", "else@example.com", PASSWORD, "5550009999")

    seen = []
    page = 1
    while True:
        response = client.get(
            "/api/admin-management/users",
            params={"search": "tester", "page": page, "limit": limit},
            headers=_auth(admin_account),
        )
        data = response.json()["data"]
        if not data["users"]:
            break
        seen.extend(u["user_id"] for u in data["users"])
        page += 1

    assert data["pagination"]["total_records"] == 7
    assert data["pagination"]["records_per_page"] == limit
    assert data["pagination"]["total_pages"] == -(-7 // limit)
    assert len(seen) == 7
    assert len(set(seen)) == 7


def test_search_wildcards_are_literal(client, db, admin_account):
    auth_service.register_user(db, "Percent Person", "percent@example.com", PASSWORD, "5551112222")
    response = client.get("/api/admin-management/users", params={"search": "%"}, headers=_auth(admin_account))
    assert response.json()["data"]["pagination"]["total_records"] == 0


def test_user_crud_and_status(client, admin_account):
    headers = _auth(admin_account)
    created = client.post(
        "/api/admin-management/users",
        json={"name": "Made By Admin", "email": "made@example.com", "password": PASSWORD, "phone": "1231231234"},
        headers=headers,
    )
    assert created.status_code == 201
    user_id = created.json()["data"]["user_id"]

    updated = client.put(f"/api/admin-management/users/{user_id}", json={"phone": "9999999999"}, headers=headers)
    assert updated.json()["data"]["phone"] == "9999999999"
    assert updated.json()["data"]["name"] == "Made By Admin"

    status = client.patch(f"/api/admin-management/users/{user_id}/status", json={"status": "Inactive"}, headers=headers)
    assert status.status_code == 200
    assert status.json()["data"]["status"] == "Inactive"

    active = client.get("/api/admin-management/users", params={"status": "Active"}, headers=headers).json()["data"]
    assert user_id not in [u["user_id"] for u in active["users"]]

    details = client.get(f"/api/admin-management/users/{user_id}", headers=headers).json()["data"]
    assert details["user"]["status"] == "Inactive"
    assert details["resumes"] == []

    assert client.delete("/api/admin-management/users/424242", headers=headers).status_code == 404


def test_invalid_status_value_is_validation_error(client, user_account, admin_account):
    response = client.patch(
        f"/api/admin-management/users/{user_account['user_id']}/status",
        json={"status": "Deleted"},
        headers=_auth(admin_account),
    )
    assert response.status_code == 400


def test_admin_management_by_super_admin(client, super_admin_account):
    headers = _auth(super_admin_account)
    created = client.post(
        "/api/admin-management/admins",
        json={"name": "New Admin", "email": "new@example.com", "password": PASSWORD, "phone": "1112223333"},
        headers=headers,
    )
    assert created.status_code == 201
    admin_id = created.json()["data"]["admin_id"]
    assert created.json()["data"]["role"] == "admin"

    clash = client.put(
        f"/api/admin-management/admins/{admin_id}", json={"email": "root@example.com"}, headers=headers
    )
    assert clash.status_code == 409

    assert client.delete(f"/api/admin-management/admins/{admin_id}", headers=headers).status_code == 200
    listing = client.get("/api/admin-management/admins", headers=headers).json()["data"]
    assert admin_id not in [a["admin_id"] for a in listing["admins"]]
    assert client.get(f"/api/admin-management/admins/{admin_id}", headers=headers).json()["data"]["status"] == "Inactive"


def test_admin_cannot_delete_itself(client, super_admin_account):
    response = client.delete(
        f"/api/admin-management/admins/{super_admin_account['admin_id']}", headers=_auth(super_admin_account)
    )
    assert response.status_code == 403
    assert response.json()["error"] == "SELF_DELETE_NOT_ALLOWED"


def test_admin_cannot_deactivate_itself_through_update(client, db, super_admin_account):
    admin_id = super_admin_account["admin_id"]
    response = client.put(
        f"/api/admin-management/admins/{admin_id}", json={"status": "Inactive"}, headers=_auth(super_admin_account)
    )
    assert response.status_code == 403
    assert response.json()["error"] == "SELF_DELETE_NOT_ALLOWED"
    assert db.query(Admin).filter(Admin.id == admin_id).one().status == RecordStatus.ACTIVE

    renamed = client.put(
        f"/api/admin-management/admins/{admin_id}", json={"name": "Root Renamed"}, headers=_auth(super_admin_account)
    )
    assert renamed.status_code == 200
    assert renamed.json()["data"]["name"] == "Root Renamed"


def test_admin_status_patch(client, super_admin_account, admin_account):
    headers = _auth(super_admin_account)
    url = f"/api/admin-management/admins/{admin_account['admin_id']}/status"

    response = client.patch(url, json={"status": "Inactive"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"admin_id": admin_account["admin_id"], "status": "Inactive"}
    login = client.post("/api/admin/login", json={"email": "plain@example.com", "password": PASSWORD})
    assert login.status_code == 403
    assert login.json()["error"] == "ADMIN_AUTH_002"

    assert client.patch(url, json={"status": "Active"}, headers=headers).status_code == 200
    detail = client.get(f"/api/admin-management/admins/{admin_account['admin_id']}", headers=headers)
    assert detail.json()["data"]["status"] == "Active"


def test_admin_status_patch_rules(client, super_admin_account, admin_account):
    own = client.patch(
        f"/api/admin-management/admins/{super_admin_account['admin_id']}/status",
        json={"status": "Inactive"},
        headers=_auth(super_admin_account),
    )
    assert own.status_code == 403
    assert own.json()["error"] == "SELF_DELETE_NOT_ALLOWED"

    missing = client.patch(
        "/api/admin-management/admins/9999/status", json={"status": "Inactive"}, headers=_auth(super_admin_account)
    )
    assert missing.status_code == 404

    by_plain_admin = client.patch(
        f"/api/admin-management/admins/{super_admin_account['admin_id']}/status",
        json={"status": "Inactive"},
        headers=_auth(admin_account),
    )
    assert by_plain_admin.status_code == 403


def test_dashboard_stats(client, db, admin_account, user_account):
    resume_service.add_user_resume(db, user_account["user_id"], "First")
    response = client.get("/api/admin-management/dashboard/stats", headers=_auth(admin_account))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["admin_statistics"]["total_admins"] == 2
    assert data["admin_statistics"]["super_admins"] == 1
    assert data["user_statistics"]["active_users"] == 1
    assert data["resume_statistics"]["total_resumes"] == 1
    assert data["template_statistics"]["total_templates"] == 0
