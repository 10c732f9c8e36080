import uuid

import pytest

from tests.conftest import OTHER_USER_ID, auth_headers

API = "/api/v1/diary"


@pytest.fixture
def notebook(client):
    response = client.post(f"{API}/notebooks", json={}, headers=auth_headers())
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def page(client, notebook):
    response = client.post(
        f"{API}/notebooks/{notebook['id']}/pages",
        json={"title": "Winter exchange", "semester": "2025-W"},
        headers=auth_headers(),
    )
    assert response.status_code == 201
    return response.json()


def _add_item(client, page_id, **fields):
    payload = {"item_type": "note", "content": "todo"}
    payload.update(fields)
    response = client.post(f"{API}/pages/{page_id}/items", json=payload, headers=auth_headers())
    assert response.status_code == 201, response.text
    return response.json()


def _item_ids(client, page_id):
    return [item["id"] for item in client.get(f"{API}/pages/{page_id}/items", headers=auth_headers()).json()]


# ---- Notebooks and pages ----


def test_diary_requires_a_user(client):
    assert client.get(f"{API}/notebooks").status_code == 401


def test_notebook_defaults_and_rename(client, notebook):
    assert notebook["name"] == "My Semester Planner"

    renamed = client.patch(f"{API}/notebooks/{notebook['id']}", json={"name": "Exchange 2025"}, headers=auth_headers())
    assert renamed.json()["name"] == "Exchange 2025"
    assert [n["id"] for n in client.get(f"{API}/notebooks", headers=auth_headers()).json()] == [notebook["id"]]


def test_notebooks_of_other_users_are_hidden(client, notebook):
    other = auth_headers(OTHER_USER_ID)

    assert client.get(f"{API}/notebooks", headers=other).json() == []
    assert client.get(f"{API}/notebooks/{notebook['id']}/pages", headers=other).status_code == 404
    assert client.patch(f"{API}/notebooks/{notebook['id']}", json={"name": "x"}, headers=other).status_code == 404


def test_pages_are_numbered_in_creation_order(client, notebook, page):
    second = client.post(f"{API}/notebooks/{notebook['id']}/pages", json={"page_type": "notes"}, headers=auth_headers())

    assert page["page_number"] == 0
    assert second.json()["page_number"] == 1
    assert page["page_type"] == "semester_planner"


def test_reorder_pages(client, notebook, page):
    second = client.post(f"{API}/notebooks/{notebook['id']}/pages", json={}, headers=auth_headers()).json()

    reordered = client.post(
        f"{API}/notebooks/{notebook['id']}/pages/reorder",
        json={"pages": [{"id": page["id"], "page_number": 1}, {"id": second["id"], "page_number": 0}]},
        headers=auth_headers(),
    )

    assert reordered.status_code == 200
    assert [p["id"] for p in reordered.json()] == [second["id"], page["id"]]


def test_update_and_delete_page(client, notebook, page):
    updated = client.patch(f"{API}/pages/{page['id']}", json={"title": "Summer"}, headers=auth_headers())
    assert updated.json()["title"] == "Summer"
    assert updated.json()["semester"] == "2025-W"

    assert client.delete(f"{API}/pages/{page['id']}", headers=auth_headers()).status_code == 204
    assert client.get(f"{API}/notebooks/{notebook['id']}/pages", headers=auth_headers()).json() == []


def test_deleting_a_notebook_removes_its_pages_and_items(client, notebook, page):
    item = _add_item(client, page["id"])

    assert client.delete(f"{API}/notebooks/{notebook['id']}", headers=auth_headers()).status_code == 204
    assert client.get(f"{API}/pages/{page['id']}/items", headers=auth_headers()).status_code == 404
    assert client.patch(f"{API}/items/{item['id']}", json={"content": "x"}, headers=auth_headers()).status_code == 404


# ---- Items ----


def test_item_defaults(client, page):
    item = _add_item(client, page["id"])

    assert (item["position_x"], item["position_y"]) == (0, 0)
    assert (item["width"], item["height"]) == (200, 100)
    assert item["color"] == "yellow"
    assert item["is_completed"] is False


def test_dropping_a_course_validates_the_reference(client, catalog, page):
    dropped = _add_item(
        client, page["id"], item_type="course", reference_id=str(catalog.machine_learning.id), zone="winter"
    )
    assert dropped["reference_id"] == str(catalog.machine_learning.id)
    assert dropped["zone"] == "winter"

    unknown = client.post(
        f"{API}/pages/{page['id']}/items",
        json={"item_type": "lab", "reference_id": str(uuid.uuid4())},
        headers=auth_headers(),
    )
    assert unknown.status_code == 422

    missing = client.post(f"{API}/pages/{page['id']}/items", json={"item_type": "course"}, headers=auth_headers())
    assert missing.status_code == 422


def test_items_are_kept_on_the_page(client, page):
    item = _add_item(client, page["id"], position_x=5000, position_y=10, width=10, height=10)

    assert item["position_x"] == 1200 - 40
    assert (item["width"], item["height"]) == (40, 40)


def test_update_item(client, page):
    item = _add_item(client, page["id"])

    updated = client.patch(
        f"{API}/items/{item['id']}",
        json={"is_completed": True, "color": "blue", "content": "Send learning agreement"},
        headers=auth_headers(),
    ).json()

    assert updated["is_completed"] is True
    assert updated["color"] == "blue"
    assert updated["content"] == "Send learning agreement"
    assert updated["position_x"] == 0


def test_update_item_geometry_is_kept_on_the_page(client, page):
    item = _add_item(client, page["id"])

    updated = client.patch(
        f"{API}/items/{item['id']}",
        json={"width": 1, "height": 1, "position_x": 99999, "position_y": 99999},
        headers=auth_headers(),
    ).json()

    assert (updated["width"], updated["height"]) == (40, 40)
    assert (updated["position_x"], updated["position_y"]) == (1200 - 40, 1600 - 40)


def test_partial_geometry_update_uses_the_current_size(client, page):
    item = _add_item(client, page["id"], position_x=100, position_y=100)

    updated = client.patch(
        f"{API}/items/{item['id']}", json={"position_x": 1190, "content": "moved"}, headers=auth_headers()
    ).json()

    assert (updated["position_x"], updated["position_y"]) == (1200 - 200, 100)
    assert (updated["width"], updated["height"]) == (200, 100)
    assert updated["content"] == "moved"


def test_items_of_other_users_are_hidden(client, page):
    item = _add_item(client, page["id"])
    other = auth_headers(OTHER_USER_ID)

    assert client.get(f"{API}/pages/{page['id']}/items", headers=other).status_code == 404
    assert client.delete(f"{API}/items/{item['id']}", headers=other).status_code == 404
    assert client.post(f"{API}/items/{item['id']}/move", json={"position_x": 1, "position_y": 1}, headers=other).status_code == 404


# ---- Snapping ----


def test_move_snaps_to_sibling_edges_and_returns_guides(client, page):
    _add_item(client, page["id"], position_x=310, position_y=405, width=200, height=100)
    item = _add_item(client, page["id"], width=100, height=50)

    response = client.post(
        f"{API}/items/{item['id']}/move", json={"position_x": 514, "position_y": 401}, headers=auth_headers()
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["item"]["position_x"], body["item"]["position_y"]) == (510, 405)
    assert 510 in body["guides"]["vertical"]
    assert 405 in body["guides"]["horizontal"]


def test_move_without_snapping_only_clamps(client, page):
    item = _add_item(client, page["id"], width=100, height=50)

    body = client.post(
        f"{API}/items/{item['id']}/move",
        json={"position_x": 514, "position_y": 401, "snap": False},
        headers=auth_headers(),
    ).json()

    assert (body["item"]["position_x"], body["item"]["position_y"]) == (514, 401)


def test_move_falls_back_to_the_grid(client, page):
    item = _add_item(client, page["id"], width=100, height=50)

    body = client.post(
        f"{API}/items/{item['id']}/move", json={"position_x": 103, "position_y": 205}, headers=auth_headers()
    ).json()

    assert (body["item"]["position_x"], body["item"]["position_y"]) == (100, 200)
    assert body["guides"] == {"vertical": [], "horizontal": []}


def test_resize_snaps_and_enforces_minimum(client, page):
    item = _add_item(client, page["id"], position_x=100, position_y=100)

    snapped = client.post(
        f"{API}/items/{item['id']}/resize", json={"width": 195, "height": 97}, headers=auth_headers()
    ).json()
    assert (snapped["item"]["width"], snapped["item"]["height"]) == (200, 100)

    tiny = client.post(f"{API}/items/{item['id']}/resize", json={"width": 5, "height": 3}, headers=auth_headers()).json()
    assert (tiny["item"]["width"], tiny["item"]["height"]) == (40, 40)


# ---- Removal history ----


def test_remove_undo_redo_cycle(client, page):
    item = _add_item(client, page["id"], position_x=140, position_y=60, content="Visa appointment")

    removed = client.delete(f"{API}/items/{item['id']}", headers=auth_headers())
    assert removed.status_code == 200
    assert removed.json()["can_undo"] is True
    assert _item_ids(client, page["id"]) == []

    undone = client.post(f"{API}/pages/{page['id']}/undo", headers=auth_headers())
    assert undone.status_code == 200
    body = undone.json()
    assert body["action"] == "restored"
    assert body["item"]["id"] == item["id"]
    assert (body["item"]["position_x"], body["item"]["content"]) == (140, "Visa appointment")
    assert (body["can_undo"], body["can_redo"]) == (False, True)
    assert _item_ids(client, page["id"]) == [item["id"]]

    redone = client.post(f"{API}/pages/{page['id']}/redo", headers=auth_headers())
    assert redone.json()["action"] == "removed"
    assert redone.json()["item_id"] == item["id"]
    assert (redone.json()["can_undo"], redone.json()["can_redo"]) == (True, False)
    assert _item_ids(client, page["id"]) == []


def test_undo_and_redo_on_empty_history_conflict(client, page):
    assert client.post(f"{API}/pages/{page['id']}/undo", headers=auth_headers()).status_code == 409
    assert client.post(f"{API}/pages/{page['id']}/redo", headers=auth_headers()).status_code == 409


def test_new_removal_discards_redo(client, page):
    first = _add_item(client, page["id"])
    second = _add_item(client, page["id"])

    client.delete(f"{API}/items/{first['id']}", headers=auth_headers())
    client.post(f"{API}/pages/{page['id']}/undo", headers=auth_headers())
    client.delete(f"{API}/items/{second['id']}", headers=auth_headers())

    status = client.get(f"{API}/pages/{page['id']}/history", headers=auth_headers()).json()
    assert (status["can_undo"], status["can_redo"]) == (True, False)
    assert client.post(f"{API}/pages/{page['id']}/redo", headers=auth_headers()).status_code == 409


def test_history_of_another_users_page_is_404(client, page):
    assert client.post(f"{API}/pages/{page['id']}/undo", headers=auth_headers(OTHER_USER_ID)).status_code == 404


# ---- Analytics ----


def test_page_analytics_from_course_items(client, catalog, page):
    _add_item(client, page["id"], item_type="course", reference_id=str(catalog.machine_learning.id))
    _add_item(client, page["id"], item_type="course", reference_id=str(catalog.analysis.id))
    _add_item(client, page["id"], item_type="note", content="not a course")

    analytics = client.get(f"{API}/pages/{page['id']}/analytics", headers=auth_headers()).json()

    assert analytics["total_ects"] == 12
    assert analytics["exam_types"] == {"written": 1, "oral": 0, "during_semester": 1, "other": 0}
    assert analytics["levels"] == {"bachelor": 1, "master": 1}
    assert analytics["terms"] == {"winter": 1, "summer": 1}
    assert analytics["topics"] == ["Machine Learning", "Statistics", "Mathematics"]
    assert analytics["software"] == ["Python", "PyTorch", "Matlab"]
