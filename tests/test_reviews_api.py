import uuid

import pytest

from tests.conftest import OTHER_USER_ID, USER_ID, auth_headers


@pytest.fixture
def review(client, catalog):
    response = client.post(
        f"/api/v1/courses/{catalog.machine_learning.id}/reviews",
        json={"rating": 5, "difficulty": "hard", "workload": "high", "comment": "Great projects"},
        headers=auth_headers(),
    )
    assert response.status_code == 201
    return response.json()


def test_create_review(client, catalog, review):
    assert review["rating"] == 5
    assert review["user_id"] == str(USER_ID)
    assert review["upvote_count"] == 0
    assert review["has_upvoted"] is False


def test_one_review_per_user_per_course(client, catalog, review):
    response = client.post(
        f"/api/v1/courses/{catalog.machine_learning.id}/reviews",
        json={"rating": 3},
        headers=auth_headers(),
    )

    assert response.status_code == 409


def test_rating_must_be_between_one_and_five(client, catalog):
    url = f"/api/v1/courses/{catalog.algorithms.id}/reviews"

    assert client.post(url, json={"rating": 0}, headers=auth_headers()).status_code == 422
    assert client.post(url, json={"rating": 6}, headers=auth_headers()).status_code == 422


def test_review_unknown_course_is_404(client, catalog):
    response = client.post(f"/api/v1/courses/{uuid.uuid4()}/reviews", json={"rating": 4}, headers=auth_headers())

    assert response.status_code == 404


def test_creating_a_review_requires_a_user(client, catalog):
    response = client.post(f"/api/v1/courses/{catalog.algorithms.id}/reviews", json={"rating": 4})

    assert response.status_code == 401


def test_reviews_ordered_by_upvotes_with_viewer_flag(client, catalog, review):
    other = client.post(
        f"/api/v1/courses/{catalog.machine_learning.id}/reviews",
        json={"rating": 2, "comment": "Too much maths"},
        headers=auth_headers(OTHER_USER_ID),
    ).json()
    client.post(f"/api/v1/reviews/{other['id']}/upvote", headers=auth_headers())

    as_user = client.get(f"/api/v1/courses/{catalog.machine_learning.id}/reviews", headers=auth_headers()).json()
    assert [r["id"] for r in as_user] == [other["id"], review["id"]]
    assert [r["has_upvoted"] for r in as_user] == [True, False]

    anonymous = client.get(f"/api/v1/courses/{catalog.machine_learning.id}/reviews").json()
    assert [r["has_upvoted"] for r in anonymous] == [False, False]


def test_review_lists_author_username(client, catalog, review):
    client.put("/api/v1/users/me", json={"username": "ada"}, headers=auth_headers())

    reviews = client.get(f"/api/v1/courses/{catalog.machine_learning.id}/reviews").json()

    assert reviews[0]["username"] == "ada"


def test_upvote_toggles(client, catalog, review):
    url = f"/api/v1/reviews/{review['id']}/upvote"

    first = client.post(url, headers=auth_headers(OTHER_USER_ID)).json()
    assert first == {"review_id": review["id"], "upvoted": True, "upvote_count": 1}

    second = client.post(url, headers=auth_headers(OTHER_USER_ID)).json()
    assert second["upvoted"] is False
    assert second["upvote_count"] == 0


def test_upvote_unknown_review_is_404(client, catalog):
    assert client.post(f"/api/v1/reviews/{uuid.uuid4()}/upvote", headers=auth_headers()).status_code == 404


def test_rating_summary(client, catalog, review):
    client.post(
        f"/api/v1/courses/{catalog.machine_learning.id}/reviews",
        json={"rating": 2},
        headers=auth_headers(OTHER_USER_ID),
    )

    summary = client.get(f"/api/v1/courses/{catalog.machine_learning.id}/rating").json()

    assert summary["count"] == 2
    assert summary["average"] == pytest.approx(3.5)


def test_rating_summary_without_reviews(client, catalog):
    summary = client.get(f"/api/v1/courses/{catalog.analysis.id}/rating").json()

    assert summary == {"course_id": str(catalog.analysis.id), "average": None, "count": 0}


def test_only_the_author_can_edit_or_delete(client, catalog, review):
    url = f"/api/v1/reviews/{review['id']}"

    assert client.patch(url, json={"rating": 1}, headers=auth_headers(OTHER_USER_ID)).status_code == 403
    assert client.delete(url, headers=auth_headers(OTHER_USER_ID)).status_code == 403

    updated = client.patch(url, json={"rating": 4, "comment": "Still great"}, headers=auth_headers())
    assert updated.status_code == 200
    assert updated.json()["rating"] == 4
    assert updated.json()["difficulty"] == "hard"


def test_delete_review_with_upvotes(client, catalog, review):
    client.post(f"/api/v1/reviews/{review['id']}/upvote", headers=auth_headers(OTHER_USER_ID))

    assert client.delete(f"/api/v1/reviews/{review['id']}", headers=auth_headers()).status_code == 204
    assert client.get(f"/api/v1/courses/{catalog.machine_learning.id}/reviews").json() == []
