"""Tests for replacing a report's tags."""

from fastapi import status


def _tag_names(response) -> list[str]:
    return [tag["name"] for tag in response.json()["tags"]]


def test_owner_replaces_tags_from_list(client, report, normal_user, headers_for) -> None:
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": ["pothole", " road ", ""]},
        headers=headers_for(normal_user),
    )

    assert response.status_code == status.HTTP_200_OK
    assert _tag_names(response) == ["pothole", "road"]


def test_string_form_matches_list_form(client, report, normal_user, headers_for) -> None:
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": "pothole, road ,"},
        headers=headers_for(normal_user),
    )
    assert _tag_names(response) == ["pothole", "road"]


def test_replace_overwrites_previous_tags(client, report, normal_user, headers_for) -> None:
    headers = headers_for(normal_user)
    url = f"/api/v1/reports/{report.id}/tags"
    client.put(url, json={"tags": ["a", "b"]}, headers=headers)

    response = client.put(url, json={"tags": "c"}, headers=headers)

    assert _tag_names(response) == ["c"]
    fetched = client.get(f"/api/v1/reports/{report.id}", headers=headers)
    assert _tag_names(fetched) == ["c"]


def test_empty_string_clears_tags(client, report, normal_user, headers_for) -> None:
    headers = headers_for(normal_user)
    url = f"/api/v1/reports/{report.id}/tags"
    client.put(url, json={"tags": "a, b"}, headers=headers)

    response = client.put(url, json={"tags": ""}, headers=headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["tags"] == []


def test_malformed_tags_are_rejected(client, report, normal_user, headers_for) -> None:
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": {"name": "pothole"}},
        headers=headers_for(normal_user),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "ValidationError"


def test_non_owner_cannot_replace_tags(client, report, other_user, headers_for) -> None:
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": "spam"},
        headers=headers_for(other_user),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_moderator_can_replace_tags(client, report, moderator_user, headers_for) -> None:
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": ["verified"]},
        headers=headers_for(moderator_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert _tag_names(response) == ["verified"]


def test_tags_on_missing_report(client, normal_user, headers_for) -> None:
    response = client.put(
        "/api/v1/reports/424242/tags",
        json={"tags": "a"},
        headers=headers_for(normal_user),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_banned_owner_cannot_replace_tags(client, make_report, banned_user, headers_for) -> None:
    report = make_report(banned_user)
    response = client.put(
        f"/api/v1/reports/{report.id}/tags",
        json={"tags": "a"},
        headers=headers_for(banned_user),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
