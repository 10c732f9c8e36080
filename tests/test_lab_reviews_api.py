import uuid

import pytest

from studyatlas.services.reviews import average_label
from tests.conftest import OTHER_USER_ID, USER_ID, auth_headers


@pytest.fixture
def lab_review(client, catalog):
    response = client.post(
        "/api/v1/labs/mlo/reviews",
        json={"rating": 5, "research_quality": "Excellent", "mentorship": "Good", "comment": "Great supervision"},
        headers=auth_headers(),
    )
    assert response.status_code == 201
    return response.json()


def test_create_lab_review(lab_review, catalog):
    assert lab_review["lab_id"] == str(catalog.mlo.id)
    assert lab_review["user_id"] == str(USER_ID)
    assert lab_review["research_quality"] == "Excellent"
    assert lab_review["upvote_count"] == 0


def test_one_review_per_user_per_lab(client, lab_review):
    response = client.post("/api/v1/labs/mlo/reviews", json={"rating": 2}, headers=auth_headers())

    assert response.status_code == 409


def test_lab_review_validation(client, catalog):
    assert client.post("/api/v1/labs/mlo/reviews", json={"rating": 6}, headers=auth_headers()).status_code == 422
    assert (
        client.post(
            "/api/v1/labs/mlo/reviews", json={"rating": 4, "mentorship": "Superb"}, headers=auth_headers()
        ).status_code
        == 422
    )
    assert client.post("/api/v1/labs/missing/reviews", json={"rating": 4}, headers=auth_headers()).status_code == 404
    assert client.post("/api/v1/labs/mlo/reviews", json={"rating": 4}).status_code == 401


def test_lab_reviews_newest_first_with_viewer_flag(client, lab_review):
    newer = client.post(
        "/api/v1/labs/mlo/reviews", json={"rating": 3}, headers=auth_headers(OTHER_USER_ID)
    ).json()
    client.post(f"/api/v1/lab-reviews/{lab_review['id']}/upvote", headers=auth_headers(OTHER_USER_ID))

    as_other = client.get("/api/v1/labs/mlo/reviews", headers=auth_headers(OTHER_USER_ID)).json()
    assert [r["id"] for r in as_other] == [newer["id"], lab_review["id"]]
    assert [r["has_upvoted"] for r in as_other] == [False, True]

    anonymous = client.get("/api/v1/labs/mlo/reviews").json()
    assert [r["has_upvoted"] for r in anonymous] == [False, False]


def test_lab_review_upvote_toggles(client, lab_review):
    url = f"/api/v1/lab-reviews/{lab_review['id']}/upvote"

    assert client.post(url, headers=auth_headers(OTHER_USER_ID)).json()["upvote_count"] == 1
    second = client.post(url, headers=auth_headers(OTHER_USER_ID)).json()
    assert (second["upvoted"], second["upvote_count"]) == (False, 0)
    assert client.post(f"/api/v1/lab-reviews/{uuid.uuid4()}/upvote", headers=auth_headers()).status_code == 404


def test_only_the_author_can_edit_or_delete_a_lab_review(client, lab_review):
    url = f"/api/v1/lab-reviews/{lab_review['id']}"

    assert client.patch(url, json={"rating": 1}, headers=auth_headers(OTHER_USER_ID)).status_code == 403
    assert client.delete(url, headers=auth_headers(OTHER_USER_ID)).status_code == 403

    updated = client.patch(url, json={"work_environment": "Fair"}, headers=auth_headers()).json()
    assert updated["work_environment"] == "Fair"
    assert updated["research_quality"] == "Excellent"

    assert client.delete(url, headers=auth_headers()).status_code == 204
    assert client.get("/api/v1/labs/mlo/reviews").json() == []


def test_lab_review_summary(client, lab_review):
    client.post(
        "/api/v1/labs/mlo/reviews",
        json={"rating": 3, "research_quality": "Good", "mentorship": "Poor"},
        headers=auth_headers(OTHER_USER_ID),
    )

    summary = client.get("/api/v1/labs/mlo/reviews/summary").json()

    assert summary["count"] == 2
    assert summary["average"] == pytest.approx(4.0)
    assert summary["research_quality"] == "Excellent"
    assert summary["mentorship"] == "Fair"
    assert summary["work_environment"] is None


def test_lab_review_summary_without_reviews(client, catalog):
    summary = client.get("/api/v1/labs/robotic-systems-lab/reviews/summary").json()

    assert (summary["average"], summary["count"], summary["mentorship"]) == (None, 0, None)


@pytest.mark.parametrize(
    "labels, expected",
    [
        ([], None),
        (["Good"], "Good"),
        (["Good", "Excellent"], "Excellent"),
        (["Poor", "Fair"], "Fair"),
        (["Poor", "Poor", "Excellent"], "Fair"),
    ],
)
def test_average_label_rounds_half_up(labels, expected):
    assert average_label(labels) == expected
