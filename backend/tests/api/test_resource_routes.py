"""Student, company, representative and project routes: access rules and behaviour."""


async def test_student_edits_own_profile(client, signup_student, sign_in):
    student = await signup_student()
    headers, _ = await sign_in("student@uni.nl")
    res = await client.put(
        f"/api/v1/students/{student['id']}",
        headers=headers,
        json={
            "email": "new@uni.nl",
            "first_name": "Ann",
            "last_name": "de Vries",
            "university": "TU Delft",
            "skills": ["rust"],
            "status": "unavailable",
        },
    )
    assert res.status_code == 200, res.text
    assert res.json()["university"] == "TU Delft"
    assert res.json()["user"]["email"] == "new@uni.nl"
    await sign_in("new@uni.nl")


async def test_student_cannot_edit_other_student(client, signup_student, sign_in):
    await signup_student("one@uni.nl")
    other = await signup_student("two@uni.nl")
    headers, _ = await sign_in("one@uni.nl")
    res = await client.delete(f"/api/v1/students/{other['id']}", headers=headers)
    assert res.status_code == 403


async def test_student_deletes_own_profile(client, signup_student, sign_in):
    student = await signup_student()
    headers, _ = await sign_in("student@uni.nl")
    res = await client.delete(f"/api/v1/students/{student['id']}", headers=headers)
    assert res.status_code == 204
    res = await client.post(
        "/api/v1/auth/signin", json={"email": "student@uni.nl", "password": "secret-pw"},
    )
    assert res.status_code == 401


async def test_company_name_is_public(client, signup_company):
    company = await signup_company()
    res = await client.get(f"/api/v1/companies/{company['id']}/name")
    assert res.status_code == 200
    assert res.json() == {"id": company["id"], "name": "acme"}


async def test_unknown_company_is_404(client, signup_student, sign_in):
    await signup_student()
    headers, _ = await sign_in("student@uni.nl")
    res = await client.get("/api/v1/companies/missing", headers=headers)
    assert res.status_code == 404
    assert res.json()["error"]["context"]["entity"] == "Company"


async def test_company_edit_is_additive(client, signup_company, sign_in):
    company = await signup_company()
    headers, _ = await sign_in("boss@acme.nl")
    res = await client.put(
        f"/api/v1/companies/{company['id']}",
        headers=headers,
        json={
            "name": "Acme",
            "information": "Bridges and tunnels",
            "description": "Civil engineering firm",
            "locations": [
                {"street": "Dock street", "zipcode": "4321 BA", "city": "Rotterdam", "number": "5"},
            ],
            "projects": [
                {"description": "Tunnel survey", "compensation": "€300", "duration": "2 months"},
            ],
        },
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["information"] == "Bridges and tunnels"
    assert [a["street"] for a in body["locations"]] == ["Main street", "Dock street"]
    assert [p["description"] for p in body["projects"]] == ["Tunnel survey"]


async def test_company_edit_rejects_oversized_fields(client, signup_company, sign_in):
    company = await signup_company()
    headers, _ = await sign_in("boss@acme.nl")
    res = await client.put(
        f"/api/v1/companies/{company['id']}",
        headers=headers,
        json={
            "name": "Acme",
            "information": "Bridges and tunnels",
            "description": "Civil engineering firm",
            "locations": [
                {
                    "id": "x" * 40, "street": "Dock street", "zipcode": "4321 BA",
                    "city": "Rotterdam", "number": "5",
                },
            ],
            "projects": [
                {"description": "Tunnel survey", "compensation": "€" * 201, "duration": "2 months"},
            ],
        },
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {d["field"] for d in error["details"]} == {
        "body.locations.0.id", "body.projects.0.compensation",
    }


async def test_student_cannot_edit_company(client, signup_company, signup_student, sign_in):
    company = await signup_company()
    await signup_student()
    headers, _ = await sign_in("student@uni.nl")
    res = await client.put(
        f"/api/v1/companies/{company['id']}",
        headers=headers,
        json={"name": "Hijack", "information": "x", "description": "y"},
    )
    assert res.status_code == 403


async def test_representative_of_other_company_cannot_edit(client, signup_company, sign_in):
    acme = await signup_company("Acme", "boss@acme.nl")
    await signup_company("Globex", "boss@globex.nl")
    headers, _ = await sign_in("boss@globex.nl")
    res = await client.put(
        f"/api/v1/companies/{acme['id']}",
        headers=headers,
        json={"name": "Acme", "information": "x", "description": "y"},
    )
    assert res.status_code == 403


async def test_project_lifecycle(client, signup_company, signup_student, sign_in):
    company = await signup_company()
    rep_headers, _ = await sign_in("boss@acme.nl")
    res = await client.post(
        "/api/v1/representatives/projects",
        headers=rep_headers,
        json={
            "description": "Sensor dashboard",
            "compensation": "€450",
            "duration": "3 months",
            "recommendations": ["python"],
        },
    )
    assert res.status_code == 201, res.text
    project = res.json()
    assert project["company_id"] == company["id"]

    await signup_student()
    student_headers, _ = await sign_in("student@uni.nl")
    listed = await client.get("/api/v1/projects", headers=student_headers)
    assert [p["id"] for p in listed.json()] == [project["id"]]

    res = await client.delete(f"/api/v1/projects/{project['id']}", headers=student_headers)
    assert res.status_code == 403
    res = await client.delete(f"/api/v1/projects/{project['id']}", headers=rep_headers)
    assert res.status_code == 204
    assert (await client.get("/api/v1/projects", headers=rep_headers)).json() == []


async def test_representative_profile(client, signup_company, sign_in):
    company = await signup_company()
    rep_id = company["representatives"][0]["id"]
    headers, _ = await sign_in("boss@acme.nl")
    res = await client.get(f"/api/v1/representatives/{rep_id}", headers=headers)
    assert res.status_code == 200
    assert res.json()["company_id"] == company["id"]
