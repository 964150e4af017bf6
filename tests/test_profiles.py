import io
import json

import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError
from pymongo.errors import PyMongoError

from utils import messages

PICTURE_URL = "https://res.cloudinary.com/demo/image/upload/v1/school-admin/asha.png"


@pytest.fixture
def cloud(monkeypatch):
    """Record Cloudinary calls instead of sending them."""
    calls = {"uploaded": [], "destroyed": []}

    def upload(stream, **options):
        calls["uploaded"].append(options)
        return {"secure_url": PICTURE_URL, "public_id": f"school-admin/asha-{len(calls['uploaded'])}"}

    def destroy(public_id, **options):
        calls["destroyed"].append(public_id)
        return {"result": "ok"}

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", destroy)
    return calls


@pytest.fixture
def refs(admin_client):
    def post(url, **payload):
        response = admin_client.post(url, json=payload)
        assert response.status_code == 200, response.get_json()
        return response.get_json()["data"]

    country = post("/countries/CreateCountry", name="India", iso2="IN", iso3="IND")
    state = post("/states/CreateState", name="Gujarat", iso="GJ", countryCode=country["countryCode"])
    city = post("/cities/CreateCity", name="Surat", stateCode=state["stateCode"], countryCode=country["countryCode"])
    gender = post("/genders/CreateGender", genderName="Female")
    user = post("/users/register", email="asha@school.in", username="asha", password="ashapassword12")
    return {"country": country, "state": state, "city": city, "gender": gender, "user": user}


def profile_payload(refs, **overrides):
    payload = {
        "userCode": refs["user"]["userCode"],
        "firstName": "Asha",
        "lastName": "Patel",
        "dob": "1990-05-17",
        "genderCode": refs["gender"]["genderCode"],
        "phoneNumber": "+919876543210",
        "address": {
            "addressLineOne": "12 MG Road",
            "cityCode": refs["city"]["cityCode"],
            "stateCode": refs["state"]["stateCode"],
            "countryCode": refs["country"]["countryCode"],
            "postalCode": "395001",
        },
        "notification": {"email": True, "sms": False, "push": False},
    }
    payload.update(overrides)
    return payload


def send_profile(client, url, payload, filename="asha.png", content=b"\x89PNG fake image"):
    data = {"data": json.dumps(payload)}
    if filename:
        data["profilePicture"] = (io.BytesIO(content), filename)
    return client.post(url, data=data, content_type="multipart/form-data")


def test_create_profile(admin_client, cloud, refs):
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs))
    body = response.get_json()
    assert response.status_code == 200, body
    assert body["data"]["profileCode"].startswith("PROFILE-")
    assert body["data"]["user"]["userCode"] == refs["user"]["userCode"]
    assert body["data"]["profilePicture"] == {
        "url": PICTURE_URL,
        "filename": "school-admin/asha-1",
        "thumbnail": "https://res.cloudinary.com/demo/image/upload/w_200/v1/school-admin/asha.png",
    }
    assert body["data"]["social"]["linkedin"] is None


def test_create_profile_requires_picture(admin_client, cloud, refs):
    response = admin_client.post("/profiles/CreateProfile", json=profile_payload(refs))
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_FILE_REQUIRED
    assert cloud["uploaded"] == []


def test_create_profile_rejects_file_type(admin_client, cloud, refs):
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs), filename="cv.pdf")
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_FILE_TYPE_NOT_ALLOWED


def test_create_profile_rejects_future_dob(admin_client, cloud, refs):
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs, dob="2999-01-01"))
    assert response.status_code == 400
    message = response.get_json()["message"]
    assert message.startswith("dob")
    assert messages.MESSAGE_INVALID_DOB in message
    assert cloud["uploaded"] == []


def test_create_profile_rejects_impossible_dob(admin_client, cloud, refs):
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs, dob="2001-02-30"))
    assert response.status_code == 400
    assert messages.MESSAGE_INVALID_DOB in response.get_json()["message"]


def test_create_profile_rejects_large_file(admin_client, cloud, refs, app):
    too_large = b"\x89PNG" + b"0" * (app.config["UPLOAD_MAX_BYTES"] - 3)
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs), content=too_large)
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_FILE_TOO_LARGE
    assert cloud["uploaded"] == []


def test_create_profile_reports_upload_failure(admin_client, refs, db, monkeypatch):
    def upload(stream, **options):
        raise CloudinaryError("Invalid image file")

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs))
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_UPLOAD_FAILED
    assert db.profiles.count_documents({}) == 0


def test_create_profile_removes_picture_when_save_fails(admin_client, cloud, refs, monkeypatch):
    def broken_save(self):
        raise PyMongoError("write concern error")

    monkeypatch.setattr("models.profile.Profile.save", broken_save)
    response = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs))
    assert response.status_code == 500
    assert response.get_json()["message"] == messages.MESSAGE_SOMETHING_WENT_WRONG
    assert cloud["destroyed"] == ["school-admin/asha-1"]


def test_one_profile_per_user(admin_client, cloud, refs):
    send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs))
    response = send_profile(admin_client, "/profiles/CreateProfile",
                            profile_payload(refs, phoneNumber="+919800000000"))
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.MESSAGE_PROFILE_EXIST


def test_profile_lookups(admin_client, cloud, refs):
    created = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs)).get_json()["data"]

    by_user = admin_client.post("/profiles/GetProfileByUserCode", json={"userCode": refs["user"]["userCode"]})
    assert by_user.get_json()["data"]["profileCode"] == created["profileCode"]

    listed = admin_client.get("/profiles/GetProfiles?keyword=patel").get_json()
    assert listed["total"] == 1

    own = admin_client.get("/profiles/GetOwnProfile")
    assert own.status_code == 400
    assert own.get_json()["message"] == messages.MESSAGE_OWN_PROFILE_NOT_FOUND


def test_update_profile_replaces_picture(admin_client, cloud, refs):
    created = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs)).get_json()["data"]
    payload = profile_payload(refs, firstName="Asha R", profileCode=created["profileCode"])

    response = send_profile(admin_client, "/profiles/UpdateProfile", payload)
    body = response.get_json()
    assert response.status_code == 200, body
    assert body["data"]["firstName"] == "Asha R"
    assert body["data"]["profilePicture"]["filename"] == "school-admin/asha-2"
    assert cloud["destroyed"] == ["school-admin/asha-1"]


def test_update_profile_without_picture_keeps_it(admin_client, cloud, refs):
    created = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs)).get_json()["data"]
    payload = profile_payload(refs, lastName="Shah", profileCode=created["profileCode"])

    response = admin_client.post("/profiles/UpdateProfile", json=payload)
    assert response.status_code == 200
    assert response.get_json()["data"]["profilePicture"]["filename"] == "school-admin/asha-1"
    assert cloud["destroyed"] == []


def test_delete_profile_removes_picture(admin_client, cloud, refs, db):
    created = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs)).get_json()["data"]

    blocked = admin_client.post("/users/DeleteUser", json={"userCode": refs["user"]["userCode"]})
    assert blocked.status_code == 409

    response = admin_client.post("/profiles/DeleteProfile", json={"profileCode": created["profileCode"]})
    assert response.status_code == 200
    assert cloud["destroyed"] == ["school-admin/asha-1"]
    assert db.profiles.count_documents({}) == 0


def test_update_profile_removes_new_picture_when_write_fails(admin_client, cloud, refs, db, monkeypatch):
    created = send_profile(admin_client, "/profiles/CreateProfile", profile_payload(refs)).get_json()["data"]

    def broken_update(*args, **kwargs):
        raise PyMongoError("write concern error")

    monkeypatch.setattr("models.profile.Profile.update_by_code", broken_update)
    payload = profile_payload(refs, firstName="Asha R", profileCode=created["profileCode"])
    response = send_profile(admin_client, "/profiles/UpdateProfile", payload)
    assert response.status_code == 500
    assert cloud["destroyed"] == ["school-admin/asha-2"]
    assert db.profiles.find_one({"profileCode": created["profileCode"]})["profilePicture"]["filename"] == "school-admin/asha-1"
