"""End-to-end tests for the HTTP routes."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from blog_api.app.api.deps import get_post_repository
from blog_api.app.core.config import Settings
from blog_api.app.core.db import Store
from blog_api.app.main import create_app


def _create_user(client: TestClient, name: str = "Ada", email: str = "ada@example.com") -> dict:
    response = client.post("/users", json={"name": name, "email": email})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def _create_post(client: TestClient, author_id: int, title: str = "Hello", content: str = "World") -> dict:
    response = client.post("/posts", json={"title": title, "content": content, "authorId": author_id})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def test_root_says_hello(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.text == "Hello World"
    assert response.headers["content-type"].startswith("text/plain")


def test_create_user(client: TestClient) -> None:
    body = _create_user(client)
    assert isinstance(body["id"], int) and body["id"] > 0
    assert body["name"] == "Ada"
    assert body["email"] == "ada@example.com"


@pytest.mark.parametrize("payload", [{"email": "ada@example.com"}, {"name": "", "email": "ada@example.com"}])
def test_create_user_without_name(client: TestClient, payload: dict) -> None:
    response = client.post("/users", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": [{"field": "name", "message": "Name is required"}]}


@pytest.mark.parametrize("email", ["nope", "ada@", "ada@example"])
def test_create_user_with_bad_email(client: TestClient, email: str) -> None:
    response = client.post("/users", json={"name": "Ada", "email": email})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == [{"field": "email", "message": "Invalid email address"}]


def test_create_user_with_duplicate_email(client: TestClient) -> None:
    _create_user(client)
    response = client.post("/users", json={"name": "Ada", "email": "ada@example.com"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert isinstance(response.json()["error"], str)


def test_malformed_json_is_a_validation_error(client: TestClient) -> None:
    response = client.post("/users", content="{not json", headers={"content-type": "application/json"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert isinstance(response.json()["error"], list)


def test_list_users_includes_posts(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])

    response = client.get("/users")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {
            "id": user["id"],
            "name": "Ada",
            "email": "ada@example.com",
            "posts": [post],
        }
    ]


def test_create_post(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])
    assert post == {
        "id": post["id"],
        "title": "Hello",
        "content": "World",
        "published": False,
        "authorId": user["id"],
    }


def test_create_post_for_unknown_author(client: TestClient) -> None:
    response = client.post("/posts", json={"title": "T", "content": "C", "authorId": 999})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "FOREIGN KEY" in response.json()["error"]


def test_invalid_author_id_never_reaches_the_store(app: FastAPI) -> None:
    class _Untouchable:
        def __getattr__(self, name):
            raise AssertionError(f"repository accessed: {name}")

    app.dependency_overrides[get_post_repository] = lambda: _Untouchable()
    with TestClient(app) as client:
        response = client.post("/posts", json={"title": "T", "content": "C", "authorId": -1})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": [{"field": "authorId", "message": "Invalid author ID"}]}


def test_list_posts_includes_author(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])

    response = client.get("/posts")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [{**post, "author": user}]


def test_update_post_with_empty_body_changes_nothing(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])

    response = client.put(f"/posts/{post['id']}", json={})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == post


def test_update_post_partial(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])

    response = client.put(f"/posts/{post['id']}", json={"published": True, "title": "Renamed"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {**post, "published": True, "title": "Renamed"}


def test_update_post_rejects_wrong_types(client: TestClient) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])
    response = client.put(f"/posts/{post['id']}", json={"published": "yes"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"][0]["field"] == "published"


def test_update_missing_post(client: TestClient) -> None:
    response = client.put("/posts/12345", json={"title": "x"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Post 12345 not found"}


def test_non_numeric_id_is_rejected(client: TestClient) -> None:
    response = client.delete("/posts/abc")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": [{"field": "id", "message": "Invalid ID"}]}


def test_delete_post_removes_it_from_listing(client: TestClient) -> None:
    user = _create_user(client)
    keep = _create_post(client, user["id"], title="Keep")
    gone = _create_post(client, user["id"], title="Gone")

    response = client.delete(f"/posts/{gone['id']}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == gone
    assert [post["id"] for post in client.get("/posts").json()] == [keep["id"]]
    assert client.delete(f"/posts/{gone['id']}").status_code == status.HTTP_400_BAD_REQUEST


def test_delete_user(client: TestClient) -> None:
    user = _create_user(client)
    response = client.delete(f"/users/{user['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == user
    assert client.get("/users").json() == []


def test_delete_user_with_posts_is_rejected(client: TestClient) -> None:
    user = _create_user(client)
    _create_post(client, user["id"])
    response = client.delete(f"/users/{user['id']}")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert len(client.get("/users").json()) == 1


def test_repeated_reads_are_identical(client: TestClient) -> None:
    user = _create_user(client)
    _create_post(client, user["id"])
    assert client.get("/users").json() == client.get("/users").json()
    assert client.get("/posts").json() == client.get("/posts").json()


def test_store_failure_on_read_is_500(tmp_path: Path) -> None:
    broken = Store(str(tmp_path))
    app = create_app(Settings(database_url=str(tmp_path)), store=broken)
    # No lifespan: the schema cannot be created on a directory either.
    client = TestClient(app)
    response = client.get("/users")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert isinstance(response.json()["error"], str)


@pytest.mark.parametrize("author_id", [10**20, 2**63, 1e20])
def test_create_post_with_out_of_range_author(client: TestClient, author_id) -> None:
    response = client.post("/posts", json={"title": "T", "content": "C", "authorId": author_id})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": [{"field": "authorId", "message": "Invalid author ID"}]}


@pytest.mark.parametrize("path", ["/posts/99999999999999999999", "/users/99999999999999999999", "/posts/" + "9" * 5000])
def test_delete_with_out_of_range_id(client: TestClient, path: str) -> None:
    response = client.delete(path)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": [{"field": "id", "message": "Invalid ID"}]}


def test_update_with_out_of_range_id(client: TestClient) -> None:
    response = client.put("/posts/9223372036854775808", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == [{"field": "id", "message": "Invalid ID"}]


def test_largest_id_is_looked_up(client: TestClient) -> None:
    response = client.delete("/posts/9223372036854775807")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Post 9223372036854775807 not found"}


def test_create_user_on_test_domain(client: TestClient) -> None:
    body = _create_user(client, email="ada@site.test")
    assert body["email"] == "ada@site.test"
