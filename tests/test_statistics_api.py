def test_statistics_on_empty_catalog(client):
    body = client.get("/api/v1/statistics").json()

    assert body["courses"] == 0
    assert body["top_languages"] == []
    assert body["top_research_topics"] == []


def test_statistics(client, catalog):
    response = client.get("/api/v1/statistics")

    assert response.status_code == 200
    body = response.json()
    assert (body["universities"], body["courses"], body["programs"], body["labs"], body["teachers"]) == (2, 3, 1, 2, 2)
    assert body["bachelor_courses"] == 2
    assert body["master_courses"] == 1
    assert body["top_languages"] == [{"name": "English", "count": 2}, {"name": "French", "count": 1}]
    assert body["terms"] == [{"name": "Winter", "count": 2}, {"name": "Summer", "count": 1}]
    assert body["top_research_topics"] == [
        {"name": "Machine Learning", "count": 2},
        {"name": "Optimization", "count": 1},
    ]
