"""
End-to-end tests for the user routes: details submission and named resumes
"""

import pytest

from app.models import ResumeTemplate, TemplateCategory

PASSWORD = "Str0ng!Pass"


def _auth(account):
    return {"Authorization": f"Bearer {account['token']}"}


@pytest.fixture
def template_id(db):
    template = ResumeTemplate(name="Classic Blue", html="<div></div>", css="", category=TemplateCategory.CLASSIC)
    db.add(template)
    db.commit()
    return template.id


@pytest.mark.parametrize("path", ["/api/submit-user-details", "/api/users/submit-user-details"])
def test_submit_user_details_scenario(client, user_account, path):
    body = {
        "profile": {"dateOfBirth": "1995-10-02", "gender": "Male", "countryId": 1, "stateId": 1, "cityId": 1},
        "education": [{"degreeName": "BTech", "instituteName": "DPGITM", "startDate": "2013-08-01"}],
        "skills": [3, 6],
    }
    response = client.post(path, json=body, headers=_auth(user_account))
    assert response.status_code == 200
    assert response.json()["data"]["skillsCount"] == 2

    info = client.post("/api/users/get-user-info", json={}, headers=_auth(user_account)).json()["data"]
    assert len(info["skills"]) == 2
    assert len(info["education"]) == 1

    response = client.post(path, json={"skills": [1]}, headers=_auth(user_account))
    assert response.status_code == 200
    info = client.post("/api/users/get-user-info", json={}, headers=_auth(user_account)).json()["data"]
    assert [s["skillId"] for s in info["skills"]] == [1]
    assert len(info["education"]) == 1


def test_submit_validates_shape_before_touching_store(client, user_account):
    response = client.post(
        "/api/submit-user-details",
        json={"education": [{"instituteName": "No Degree"}], "skills": ["not-a-number"]},
        headers=_auth(user_account),
    )
    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert "education.0.degreeName" in fields
    assert "skills.0" in fields


def test_duplicate_skill_is_conflict(client, user_account):
    response = client.post("/api/submit-user-details", json={"skills": [2, 2]}, headers=_auth(user_account))
    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_ENTRY"


def test_user_cannot_write_another_users_details(client, db, user_account):
    from app.services import auth_service

    other = auth_service.register_user(db, "John Roe", "john@example.com", PASSWORD, "1234567899")
    response = client.post(
        "/api/submit-user-details",
        json={"requested_user_id": other["user_id"], "skills": [1]},
        headers=_auth(user_account),
    )
    assert response.status_code == 403


def test_admin_can_act_for_a_user(client, user_account, admin_account):
    response = client.post(
        "/api/users/update-user-skills",
        json={"user_id": user_account["user_id"], "skills": [4, 5]},
        headers=_auth(admin_account),
    )
    assert response.status_code == 200
    assert response.json()["data"]["skillsCount"] == 2


def test_section_update_routes(client, user_account):
    headers = _auth(user_account)
    assert client.post(
        "/api/users/update-user-profile", json={"profile": {"zipcode": "12345"}}, headers=headers
    ).status_code == 200
    assert client.post(
        "/api/users/update-user-education",
        json={"education": [{"degreeName": "MSc", "instituteName": "MIT"}]},
        headers=headers,
    ).status_code == 200
    assert client.post(
        "/api/users/update-user-experience",
        json={"experience": [{"companyName": "Acme", "jobTitle": "Dev", "isCurrentJob": True}]},
        headers=headers,
    ).status_code == 200

    data = client.post("/api/get-resume-info", json={}, headers=headers).json()["data"]
    assert data["completeness"]["totalPercentage"] == 75
    assert data["resume"]["experience"][0]["endDate"] is None


def test_named_resume_lifecycle(client, user_account, template_id):
    headers = _auth(user_account)
    response = client.post(
        "/api/users/add-user-resume", json={"resume_name": "My Resume", "template_id": template_id}, headers=headers
    )
    assert response.status_code == 201
    resume_id = response.json()["data"]["resume_id"]

    duplicate = client.post("/api/users/add-user-resume", json={"resume_name": "my resume"}, headers=headers)
    assert duplicate.status_code == 409

    response = client.post(
        "/api/users/update-user-resume", json={"resume_id": resume_id, "resume_name": "Renamed"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["resume_name"] == "Renamed"

    listing = client.post("/api/users/get-user-resumes", json={}, headers=headers).json()["data"]
    assert listing["total_count"] == 1
    assert listing["user"]["email"] == "jane@example.com"

    response = client.post("/api/users/delete-user-resume", json={"resume_id": resume_id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["resume_id"] == resume_id

    listing = client.post("/api/users/get-user-resumes", json={}, headers=headers).json()["data"]
    assert listing["total_count"] == 0

    # soft-deleted resumes stay readable by id
    response = client.post("/api/users/get-user-resume", json={"resume_id": resume_id}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Inactive"

    # the name is free again once the old resume is inactive
    response = client.post("/api/users/add-user-resume", json={"resume_name": "Renamed"}, headers=headers)
    assert response.status_code == 201


def test_resume_with_unknown_template_is_not_found(client, user_account):
    response = client.post(
        "/api/users/add-user-resume", json={"resume_name": "Broken", "template_id": 999}, headers=_auth(user_account)
    )
    assert response.status_code == 404
    assert response.json()["error"] == "TEMPLATE_NOT_FOUND"


def test_other_users_resume_is_forbidden(client, db, user_account):
    from app.services import auth_service, resume_service

    other = auth_service.register_user(db, "John Roe", "john@example.com", PASSWORD, "1234567899")
    resume = resume_service.add_user_resume(db, other["user_id"], "Private")

    response = client.post(
        "/api/users/delete-user-resume", json={"resume_id": resume["resume_id"]}, headers=_auth(user_account)
    )
    assert response.status_code == 403
