import io

from openpyxl import load_workbook
from pymongo.errors import PyMongoError

from utils import messages
from utils.audit import AuditAction, AuditCollection, log_audit
from utils.exports import EXPORT_COLUMNS


def create_subject(client, name="Physics"):
    response = client.post("/subjects/CreateSubject", json={"name": name})
    assert response.status_code == 200
    return response.get_json()["data"]


def test_mutations_are_audited(admin_client):
    subject = create_subject(admin_client)
    admin_client.post("/subjects/UpdateSubject", json={"subjectCode": subject["subjectCode"], "name": "Physics II"})

    body = admin_client.get("/audits/GetAudits?keyword=subject").get_json()
    changes = [entry["changes"] for entry in body["data"]]
    assert changes == ["A Subject Updated", "A Subject Created"]

    update = body["data"][0]
    assert update["collection"] == "SUBJECTS"
    assert update["document"] == subject["subjectCode"]
    assert update["before"]["name"] == "Physics"
    assert update["after"]["name"] == "Physics II"
    assert update["user"]["username"] == "admin"
    assert "hash" not in update["user"]


def test_get_audit_by_code(admin_client):
    entries = admin_client.get("/audits/GetAudits").get_json()["data"]
    response = admin_client.post("/audits/GetAuditByCode", json={"auditCode": entries[0]["auditCode"]})
    assert response.status_code == 200
    assert response.get_json()["data"]["action"] == "LOGIN"


def test_audit_write_failure_does_not_raise(app, monkeypatch):
    def broken_save(self):
        raise PyMongoError("disk full")

    monkeypatch.setattr("models.audit_log.AuditLog.save", broken_save)
    with app.app_context():
        assert log_audit(AuditAction.CREATE, AuditCollection.ROLES, "ROLE-x", "A Role Created") is None


def test_export_csv(admin_client):
    create_subject(admin_client)
    response = admin_client.get("/audits/ExportAudits?format=csv")
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert "attachment" in response.headers["Content-Disposition"]

    lines = response.get_data(as_text=True).strip().splitlines()
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert len(lines) == 3


def test_export_xlsx(admin_client):
    response = admin_client.get("/audits/ExportAudits?format=xlsx")
    assert response.status_code == 200
    sheet = load_workbook(io.BytesIO(response.data)).active
    assert [cell.value for cell in sheet[1]] == EXPORT_COLUMNS
    assert sheet.max_row == 2


def test_export_pdf(admin_client):
    response = admin_client.get("/audits/ExportAudits?format=pdf")
    assert response.status_code == 200
    assert response.mimetype == "application/pdf"
    assert response.data.startswith(b"%PDF")


def test_export_unknown_format(admin_client):
    response = admin_client.get("/audits/ExportAudits?format=docx")
    assert response.status_code == 400
    assert response.get_json()["message"] == messages.MESSAGE_EXPORT_FORMAT_NOT_SUPPORTED
