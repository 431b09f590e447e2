from uuid import uuid4


async def _setup_school(client):
    school = (await client.post("/schools", json={"school_name": "Hillside High"})).json()
    school_class = (await client.post("/classes", json={"school_id": school["id"], "class_name": "7A"})).json()
    return school["id"], school_class["id"]


async def _create_subjects(client, school_id, class_id, *codes):
    response = await client.post("/subjects", json={
        "school_id": school_id,
        "class_id": class_id,
        "subjects": [{"sub_name": f"Subject {code}", "sub_code": code, "sessions": 12} for code in codes],
    })
    assert response.status_code == 201
    return [subject["id"] for subject in response.json()]


async def test_health(client):
    response = await client.get("/health/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_duplicate_subject_code_conflicts(client):
    school_id, class_id = await _setup_school(client)
    await _create_subjects(client, school_id, class_id, "MTH101")

    response = await client.post("/subjects", json={
        "school_id": school_id,
        "class_id": class_id,
        "subjects": [{"sub_name": "Other", "sub_code": "PHY101"}, {"sub_name": "Maths again", "sub_code": "MTH101"}],
    })

    assert response.status_code == 409
    assert "MTH101" in response.json()["detail"]["message"]


async def test_empty_listings_return_message(client):
    response = await client.get(f"/subjects/school/{uuid4()}")

    assert response.status_code == 200
    assert response.json() == {"message": "No subjects found"}

    response = await client.get(f"/teachers/school/{uuid4()}")
    assert response.json() == {"message": "No teachers found"}


async def test_register_never_returns_credentials(client):
    school_id, class_id = await _setup_school(client)
    maths, physics = await _create_subjects(client, school_id, class_id, "MTH101", "PHY101")

    response = await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw",
        "school_id": school_id, "teach_class_id": class_id, "teach_subjects": maths,
    })
    assert response.status_code == 200
    teacher = response.json()
    assert "password" not in teacher and "password_hash" not in teacher
    assert teacher["teach_subjects"] == [maths]

    response = await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "teach_subjects": [physics],
    })
    assert sorted(response.json()["teach_subjects"]) == sorted([maths, physics])

    listing = (await client.get(f"/teachers/school/{school_id}")).json()
    assert len(listing) == 1
    assert "password_hash" not in listing[0]

    detail = (await client.get(f"/teachers/{teacher['id']}")).json()
    assert "password_hash" not in detail
    assert {s["id"] for s in detail["subjects"]} == {maths, physics}


async def test_login(client):
    await client.post("/teachers/register", json={"name": "Ada", "email": "ada@hillside.edu", "password": "pw"})

    ok = await client.post("/teachers/login", json={"email": "ada@hillside.edu", "password": "pw"})
    bad = await client.post("/teachers/login", json={"email": "ada@hillside.edu", "password": "nope"})
    missing = await client.post("/teachers/login", json={"email": "nobody@hillside.edu", "password": "pw"})

    assert ok.status_code == 200
    assert "password_hash" not in ok.json()
    assert bad.status_code == 401
    assert missing.status_code == 404


async def test_register_without_password_is_rejected(client):
    response = await client.post("/teachers/register", json={"name": "Ada", "email": "ada@hillside.edu"})

    assert response.status_code == 422


async def test_subject_detail_and_free_list(client):
    school_id, class_id = await _setup_school(client)
    maths, physics = await _create_subjects(client, school_id, class_id, "MTH101", "PHY101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw", "teach_subjects": [maths],
    })).json()

    detail = (await client.get(f"/subjects/{maths}")).json()
    assert detail["class_ref"] == {"id": class_id, "name": "7A"}
    assert detail["teacher"] == {"id": teacher["id"], "name": "Ada"}

    free = (await client.get(f"/subjects/class/{class_id}/free")).json()
    assert [subject["id"] for subject in free] == [physics]

    assert (await client.get(f"/subjects/{uuid4()}")).status_code == 404


async def test_append_subjects_endpoint(client):
    school_id, class_id = await _setup_school(client)
    maths, physics = await _create_subjects(client, school_id, class_id, "MTH101", "PHY101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw", "teach_subjects": [maths],
    })).json()

    response = await client.put("/teachers/subjects", json={"teacher_id": teacher["id"], "teach_subjects": [physics]})

    assert response.status_code == 200
    assert sorted(response.json()["teach_subjects"]) == sorted([maths, physics])
    assert (await client.get(f"/subjects/{physics}")).json()["teacher_id"] == teacher["id"]

    missing = await client.put("/teachers/subjects", json={"teacher_id": str(uuid4()), "teach_subjects": [physics]})
    assert missing.status_code == 404


async def test_subject_deletion_cascades_through_api(client):
    school_id, class_id = await _setup_school(client)
    maths, physics = await _create_subjects(client, school_id, class_id, "MTH101", "PHY101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw", "teach_subjects": [maths, physics],
    })).json()
    student = (await client.post("/students", json={
        "name": "Sam", "roll_num": 1, "school_id": school_id, "class_id": class_id,
    })).json()
    for subject_id in (maths, physics):
        await client.put(f"/students/{student['id']}/exam-result", json={"subject_id": subject_id, "marks_obtained": 70})
        await client.put(f"/students/{student['id']}/attendance", json={
            "subject_id": subject_id, "date": "2024-03-04", "status": "Present",
        })

    response = await client.delete(f"/subjects/{maths}")
    assert response.status_code == 200
    assert response.json()["id"] == maths

    teacher = (await client.get(f"/teachers/{teacher['id']}")).json()
    assert teacher["teach_subjects"] == [physics]
    student = (await client.get(f"/students/{student['id']}")).json()
    assert [r["subject_id"] for r in student["exam_results"]] == [physics]
    assert [a["subject_id"] for a in student["attendance"]] == [physics]

    assert (await client.delete(f"/subjects/{maths}")).status_code == 404

    summary = (await client.delete(f"/subjects/class/{class_id}")).json()
    assert summary["deleted_count"] == 1
    student = (await client.get(f"/students/{student['id']}")).json()
    assert student["exam_results"] == [] and student["attendance"] == []


async def test_teacher_deletion_endpoints(client):
    school_id, class_id = await _setup_school(client)
    maths, = await _create_subjects(client, school_id, class_id, "MTH101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw",
        "school_id": school_id, "teach_subjects": [maths],
    })).json()

    assert (await client.delete(f"/teachers/school/{uuid4()}")).json() == {"message": "No teachers found to delete"}

    response = await client.delete(f"/teachers/{teacher['id']}")
    assert response.status_code == 200
    assert "password_hash" not in response.json()
    assert (await client.get(f"/subjects/{maths}")).json()["teacher_id"] is None
    assert (await client.delete(f"/teachers/{teacher['id']}")).status_code == 404


async def test_teacher_attendance_endpoint(client):
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw",
    })).json()

    await client.post(f"/teachers/{teacher['id']}/attendance", json={"date": "2024-05-06T08:00:00", "status": "Present"})
    response = await client.post(f"/teachers/{teacher['id']}/attendance", json={"date": "2024-05-06T16:00:00", "status": "Absent"})

    assert response.status_code == 200
    assert response.json()["attendance"] == [{"date": "2024-05-06", "status": "Absent"}]

    missing = await client.post(f"/teachers/{uuid4()}/attendance", json={"date": "2024-05-06", "status": "Present"})
    assert missing.status_code == 404


async def test_listings_carry_class_and_subject_names(client):
    school_id, class_id = await _setup_school(client)
    maths, = await _create_subjects(client, school_id, class_id, "MTH101")
    await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw",
        "school_id": school_id, "teach_class_id": class_id, "teach_subjects": [maths],
    })

    subjects = (await client.get(f"/subjects/school/{school_id}")).json()
    assert subjects[0]["class_name"] == "7A"

    listing = (await client.get(f"/teachers/school/{school_id}")).json()
    assert listing[0]["school_name"] == "Hillside High"
    assert listing[0]["class_name"] == "7A"
    assert listing[0]["subjects"] == [{
        "id": maths, "sub_name": "Subject MTH101", "sessions": 12, "class_id": class_id, "class_name": "7A",
    }]
    assert "password_hash" not in listing[0]


async def test_delete_school_subjects_endpoint(client):
    school_id, class_id = await _setup_school(client)
    maths, physics = await _create_subjects(client, school_id, class_id, "MTH101", "PHY101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw", "teach_subjects": [maths, physics],
    })).json()

    response = await client.delete(f"/subjects/school/{school_id}")

    assert response.status_code == 200
    summary = response.json()
    assert summary["deleted_count"] == 2
    assert sorted(summary["deleted_ids"]) == sorted([maths, physics])
    assert summary["teachers_updated"] == 1
    assert (await client.get(f"/subjects/school/{school_id}")).json() == {"message": "No subjects found"}
    assert (await client.get(f"/teachers/{teacher['id']}")).json()["teach_subjects"] == []


async def test_delete_class_teachers_endpoint(client):
    school_id, class_id = await _setup_school(client)
    maths, = await _create_subjects(client, school_id, class_id, "MTH101")
    teacher = (await client.post("/teachers/register", json={
        "name": "Ada", "email": "ada@hillside.edu", "password": "pw",
        "teach_class_id": class_id, "teach_subjects": [maths],
    })).json()

    response = await client.delete(f"/teachers/class/{class_id}")

    assert response.status_code == 200
    assert response.json()["deleted_ids"] == [teacher["id"]]
    assert response.json()["subjects_updated"] == 1
    assert (await client.get(f"/subjects/{maths}")).json()["teacher_id"] is None
    assert (await client.delete(f"/teachers/class/{class_id}")).json() == {"message": "No teachers found to delete"}
