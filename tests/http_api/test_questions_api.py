# tests/http_api/test_questions_api.py
from tests.helpers import auth_headers
from tests.http_api.test_conferences_api import _seed


async def test_published_answers_scenario(client, admin, alice, bob):
    _, _, article = await _seed(client, admin)
    questions_path = f"/api/v1/articles/{article['id']}/questions"

    asked = await client.post(
        questions_path, json={"question": "When is the next talk?"}, headers=auth_headers(alice)
    )
    assert asked.status_code == 201
    assert asked.json()["status"] == "pending"
    await client.post(questions_path, json={"question": "Slides?"}, headers=auth_headers(bob))

    answered = await client.patch(
        f"/api/v1/questions/{asked.json()['id']}",
        json={"answer": "Tomorrow at 10am"},
        headers=auth_headers(admin),
    )
    assert answered.status_code == 200
    assert answered.json()["status"] == "answered"

    public = await client.get(questions_path)
    assert public.status_code == 200
    assert [(q["question"], q["answer"]) for q in public.json()] == [
        ("When is the next talk?", "Tomorrow at 10am")
    ]
    count = await client.get(f"{questions_path}/count")
    assert count.json() == {"article_id": article["id"], "count": 1}


async def test_answering_twice_conflicts(client, admin, alice):
    _, _, article = await _seed(client, admin)
    asked = await client.post(
        f"/api/v1/articles/{article['id']}/questions", json={"question": "Q?"}, headers=auth_headers(alice)
    )
    path = f"/api/v1/questions/{asked.json()['id']}"

    await client.patch(path, json={"answer": "First"}, headers=auth_headers(admin))
    second = await client.patch(path, json={"answer": "Second"}, headers=auth_headers(admin))

    assert second.status_code == 409
    assert (await client.get(path, headers=auth_headers(admin))).json()["answer"] == "First"


async def test_question_administration_is_admin_only(client, admin, alice):
    _, _, article = await _seed(client, admin)
    asked = await client.post(
        f"/api/v1/articles/{article['id']}/questions", json={"question": "Q?"}, headers=auth_headers(alice)
    )
    path = f"/api/v1/questions/{asked.json()['id']}"

    assert (await client.patch(path, json={"answer": "Me"}, headers=auth_headers(alice))).status_code == 403
    assert (await client.delete(path, headers=auth_headers(alice))).status_code == 403
    assert (await client.get("/api/v1/questions", headers=auth_headers(alice))).status_code == 403
    everything = await client.get("/api/v1/questions", headers=auth_headers(admin))
    assert everything.json()[0]["user"]["id"] == alice.id
    assert (await client.delete(path, headers=auth_headers(admin))).status_code == 204
    assert (await client.get(path, headers=auth_headers(admin))).status_code == 404


async def test_asking_needs_login(client, admin):
    _, _, article = await _seed(client, admin)

    response = await client.post(f"/api/v1/articles/{article['id']}/questions", json={"question": "Q?"})

    assert response.status_code == 401


async def test_question_length_is_bounded(client, admin, alice):
    _, _, article = await _seed(client, admin)

    response = await client.post(
        f"/api/v1/articles/{article['id']}/questions",
        json={"question": "x" * 256},
        headers=auth_headers(alice),
    )

    assert response.status_code == 422


async def test_role_scoped_article_questions(client, admin, alice, bob):
    _, _, article = await _seed(client, admin)
    path = f"/api/v1/articles/{article['id']}/questions"
    await client.post(path, json={"question": "Alice"}, headers=auth_headers(alice))
    await client.post(path, json={"question": "Bob"}, headers=auth_headers(bob))

    alice_view = await client.get(f"{path}/all", headers=auth_headers(alice))
    admin_view = await client.get(f"{path}/all", headers=auth_headers(admin))

    assert [q["question"] for q in alice_view.json()] == ["Alice"]
    assert [q["question"] for q in admin_view.json()] == ["Alice", "Bob"]


async def test_conference_requests_flow(client, admin, alice, bob):
    conference, _, _ = await _seed(client, admin)
    path = f"/api/v1/conferences/{conference['id']}/requests"

    mine = (await client.post(path, json={"question": "Parking?"}, headers=auth_headers(alice))).json()
    await client.post(path, json={"question": "Wifi?"}, headers=auth_headers(bob))

    alice_view = await client.get(path, headers=auth_headers(alice))
    admin_view = await client.get(path, headers=auth_headers(admin))
    assert [r["question"] for r in alice_view.json()] == ["Parking?"]
    assert [r["question"] for r in admin_view.json()] == ["Parking?", "Wifi?"]

    own = await client.get(f"{path}/{mine['id']}", headers=auth_headers(alice))
    foreign = await client.get(f"{path}/{mine['id']}", headers=auth_headers(bob))
    assert own.status_code == 200
    assert foreign.status_code == 403

    answered = await client.patch(
        f"/api/v1/requests/{mine['id']}", json={"answer": "Level -1"}, headers=auth_headers(admin)
    )
    assert answered.json()["answer"] == "Level -1"
    assert (await client.get(f"{path}/{mine['id']}", headers=auth_headers(alice))).json()["status"] == "answered"

    everything = await client.get("/api/v1/requests", headers=auth_headers(admin))
    assert {r["conference"]["id"] for r in everything.json()} == {conference["id"]}


async def test_request_under_wrong_conference_is_404(client, admin, alice):
    conference, _, _ = await _seed(client, admin)
    mine = (
        await client.post(
            f"/api/v1/conferences/{conference['id']}/requests",
            json={"question": "Parking?"},
            headers=auth_headers(alice),
        )
    ).json()

    response = await client.get(
        f"/api/v1/conferences/{conference['id'] + 1}/requests/{mine['id']}", headers=auth_headers(alice)
    )

    assert response.status_code == 404


async def test_request_on_missing_conference_is_404(client, alice):
    response = await client.post(
        "/api/v1/conferences/77/requests", json={"question": "Anyone?"}, headers=auth_headers(alice)
    )

    assert response.status_code == 404


async def test_deleting_conference_removes_its_requests(client, admin, alice):
    conference, _, _ = await _seed(client, admin)
    request = (
        await client.post(
            f"/api/v1/conferences/{conference['id']}/requests",
            json={"question": "Parking?"},
            headers=auth_headers(alice),
        )
    ).json()

    await client.delete(f"/api/v1/conferences/{conference['id']}", headers=auth_headers(admin))

    response = await client.get(f"/api/v1/requests/{request['id']}", headers=auth_headers(admin))
    assert response.status_code == 404
