import pytest

from utils import messages


def post(client, url, **payload):
    response = client.post(url, json=payload)
    assert response.status_code == 200, response.get_json()
    return response.get_json()["data"]


@pytest.fixture
def school(admin_client):
    """One class with a section, a student, a subject and an exam."""
    school_class = post(admin_client, "/classes/CreateClass", name="Grade 5")
    section = post(admin_client, "/sections/CreateSection", name="A", classCode=school_class["classCode"])
    student = post(admin_client, "/students/CreateStudent",
                   name="Asha Patel", rollNumber="g5a-01", sectionCode=section["sectionCode"])
    subject = post(admin_client, "/subjects/CreateSubject", name="Mathematics")
    exam = post(admin_client, "/exams/CreateExam", title="Mid Term")
    return {"class": school_class, "section": section, "student": student, "subject": subject, "exam": exam}


def mark_payload(school, earned="42", total="50"):
    return {
        "markEarned": earned,
        "markTotal": total,
        "examCode": school["exam"]["examCode"],
        "studentCode": school["student"]["studentCode"],
        "subjectCode": school["subject"]["subjectCode"],
    }


def test_student_is_created_in_section(school):
    student = school["student"]
    assert student["rollNumber"] == "G5A-01"
    assert student["section"]["sectionCode"] == school["section"]["sectionCode"]


def test_section_name_unique_within_class(admin_client, school):
    again = admin_client.post("/sections/CreateSection", json={"name": "A", "classCode": school["class"]["classCode"]})
    assert again.status_code == 409
    assert again.get_json()["message"] == messages.SECTION.exist

    other_class = post(admin_client, "/classes/CreateClass", name="Grade 6")
    post(admin_client, "/sections/CreateSection", name="A", classCode=other_class["classCode"])


def test_sections_by_class_code(admin_client, school):
    response = admin_client.post("/sections/GetSectionsByClassCode", json={"classCode": school["class"]["classCode"]})
    assert response.get_json()["total"] == 1


def test_roll_number_is_unique(admin_client, school):
    response = admin_client.post("/students/CreateStudent", json={
        "name": "Someone Else", "rollNumber": "G5A-01", "sectionCode": school["section"]["sectionCode"],
    })
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.STUDENT.exist


def test_students_by_section_code(admin_client, school):
    response = admin_client.post("/students/GetStudentsBySectionCode",
                                 json={"sectionCode": school["section"]["sectionCode"]})
    body = response.get_json()
    assert body["total"] == 1
    assert body["data"][0]["name"] == "Asha Patel"


def test_mark_flow(admin_client, school):
    mark = post(admin_client, "/marks/CreateMark", **mark_payload(school))
    assert mark["markEarned"] == "42"
    assert mark["exam"]["title"] == "Mid Term"
    assert mark["student"]["rollNumber"] == "G5A-01"

    duplicate = admin_client.post("/marks/CreateMark", json=mark_payload(school, earned="40"))
    assert duplicate.status_code == 409
    assert duplicate.get_json()["message"] == messages.MARK.exist

    for url, key, code in (
        ("/marks/GetMarksByExamCode", "examCode", school["exam"]["examCode"]),
        ("/marks/GetMarksByStudentCode", "studentCode", school["student"]["studentCode"]),
        ("/marks/GetMarksBySubjectCode", "subjectCode", school["subject"]["subjectCode"]),
    ):
        assert admin_client.post(url, json={key: code}).get_json()["total"] == 1

    payload = mark_payload(school, earned="45")
    payload["markCode"] = mark["markCode"]
    updated = post(admin_client, "/marks/UpdateMark", **payload)
    assert updated["markEarned"] == "45"


def test_student_with_marks_cannot_be_deleted(admin_client, school):
    post(admin_client, "/marks/CreateMark", **mark_payload(school))
    response = admin_client.post("/students/DeleteStudent", json={"studentCode": school["student"]["studentCode"]})
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.STUDENT.in_use


def test_class_with_sections_cannot_be_deleted(admin_client, school):
    response = admin_client.post("/classes/DeleteClass", json={"classCode": school["class"]["classCode"]})
    assert response.status_code == 409
    assert response.get_json()["message"] == messages.CLASS.in_use


def test_delete_exam_without_marks(admin_client, school):
    response = admin_client.post("/exams/DeleteExam", json={"examCode": school["exam"]["examCode"]})
    assert response.status_code == 200
    assert response.get_json()["message"] == messages.EXAM.deleted


def test_question_level_total_unique(admin_client):
    question = post(admin_client, "/questions/CreateQuestion", level=1, total=10)
    assert (question["level"], question["total"]) == (1, 10)

    again = admin_client.post("/questions/CreateQuestion", json={"level": 1, "total": 10})
    assert again.status_code == 409
    assert again.get_json()["message"] == messages.QUESTION.exist


def test_question_rejects_negative_values(admin_client):
    response = admin_client.post("/questions/CreateQuestion", json={"level": -1, "total": 10})
    assert response.status_code == 400
    assert "level" in response.get_json()["message"]


def test_subject_list_paging(admin_client):
    for name in ("Art", "Biology", "Chemistry"):
        post(admin_client, "/subjects/CreateSubject", name=name)
    body = admin_client.get("/subjects/GetSubjects?sortField=name&sortValue=asc&limit=2&page=2").get_json()
    assert body["total"] == 3
    assert [s["name"] for s in body["data"]] == ["Chemistry"]
