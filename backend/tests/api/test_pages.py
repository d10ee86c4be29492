# backend/tests/api/test_pages.py
from fastapi import status

from flipbook.models import Block, Page


def test_list_default_pages(client):
    """A fresh database is seeded with four pages"""
    response = client.get("/api/pages")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [p["title"] for p in data] == ["Page 1", "Page 2", "Page 3", "The End"]
    assert [p["sortOrder"] for p in data] == [1, 2, 3, 4]
    assert {"id", "title", "sortOrder", "createdAt", "updatedAt"} <= set(data[0])


def test_create_pages_increase_sort_order(client):
    """Each new page sorts after the current maximum"""
    created = []
    for title in ["Intro", "Middle", "Outro"]:
        response = client.post("/api/pages", json={"title": title})
        assert response.status_code == status.HTTP_201_CREATED
        created.append(response.json())

    orders = [p["sortOrder"] for p in created]
    assert orders == [5, 6, 7]


def test_create_page_after_manual_high_sort_order(client, sample_page):
    response = client.post("/api/pages", json={"title": "Next"})
    assert response.json()["sortOrder"] == sample_page.sort_order + 1


def test_create_page_trims_title(client):
    response = client.post("/api/pages", json={"title": "   Chapter One  "})

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["title"] == "Chapter One"


def test_create_page_without_title(client):
    """Empty titles are allowed"""
    response = client.post("/api/pages", json={})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["title"] == ""

    response = client.post("/api/pages")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["title"] == ""


def test_list_orders_by_sort_order_then_id(client):
    pages = client.get("/api/pages").json()
    last = pages[-1]

    # Move the last page into a tie with the first one
    client.put(f"/api/pages/{last['id']}", json={"sortOrder": 1})

    data = client.get("/api/pages").json()
    assert [p["id"] for p in data] == [pages[0]["id"], last["id"], pages[1]["id"], pages[2]["id"]]


def test_update_page_title_only(client, sample_page):
    response = client.put(f"/api/pages/{sample_page.id}", json={"title": "  Renamed "})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["sortOrder"] == sample_page.sort_order


def test_update_page_sort_order_only(client, sample_page):
    response = client.put(f"/api/pages/{sample_page.id}", json={"sortOrder": 2})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == sample_page.title
    assert data["sortOrder"] == 2


def test_update_page_ignores_non_integer_sort_order(client, sample_page):
    for value in ["abc", 1.5, None, True]:
        response = client.put(f"/api/pages/{sample_page.id}", json={"sortOrder": value})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["sortOrder"] == sample_page.sort_order


def test_update_page_null_title_clears_it(client, sample_page):
    response = client.put(f"/api/pages/{sample_page.id}", json={"title": None})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == ""


def test_update_page_empty_body_keeps_fields(client, sample_page):
    response = client.put(f"/api/pages/{sample_page.id}", json={})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == sample_page.title
    assert data["sortOrder"] == sample_page.sort_order


def test_update_page_invalid_id(client):
    for page_id in ["abc", "0", "-3", "1.5"]:
        response = client.put(f"/api/pages/{page_id}", json={"title": "x"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "invalid page id"}


def test_update_nonexistent_page(client):
    response = client.put("/api/pages/99999", json={"title": "x"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "page not found"}


def test_delete_page(client, sample_page):
    response = client.delete(f"/api/pages/{sample_page.id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""

    assert sample_page.id not in [p["id"] for p in client.get("/api/pages").json()]

    response = client.delete(f"/api/pages/{sample_page.id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "page not found"}


def test_delete_page_removes_blocks(client, sample_page, sample_blocks, db_session):
    page_id = sample_page.id
    response = client.delete(f"/api/pages/{page_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = client.get(f"/api/pages/{page_id}/blocks")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []

    db_session.expire_all()
    assert db_session.query(Block).filter(Block.page_id == page_id).count() == 0
    assert db_session.query(Page).filter(Page.id == page_id).first() is None


def test_delete_page_invalid_id(client):
    response = client.delete("/api/pages/abc")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "invalid page id"}
