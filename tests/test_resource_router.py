"""
HTTP surface of the resource endpoints.
"""

from resource_backend.types.response.response_code import ResponseCode
from tests.conftest import OWNER_ID


def _resource_body(**overrides):
    body = {
        "title": "GATE CSE previous papers",
        "description": "Ten years of solved papers",
        "examCategory": "GATE",
        "section": "Previous Papers",
        "fileUrl": "https://blob.example.com/gate-cse.pdf",
        "fileName": "gate-cse.pdf",
        "fileSize": 2048,
        "fileType": "pdf",
        "tags": ["gate", "cse", "gate"],
    }
    body.update(overrides)
    return body


def test_health_needs_no_token(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_resource(client, auth_headers):
    response = client.post("/v1/resources", json=_resource_body(), headers=auth_headers("uploader"))

    assert response.status_code == 200
    resource = response.json()["resource"]
    assert resource["uploadedBy"] == "uploader"
    assert resource["stars"] == 0
    assert resource["totalRatings"] == 0
    assert resource["downloadCount"] == 0
    assert resource["tags"] == ["gate", "cse"]


def test_create_resource_requires_token(client):
    response = client.post("/v1/resources", json=_resource_body())

    assert response.status_code == 401


def test_create_resource_validation(client, auth_headers):
    headers = auth_headers("uploader")

    bad_category = client.post("/v1/resources", json=_resource_body(examCategory="MBA"), headers=headers)
    blank_title = client.post("/v1/resources", json=_resource_body(title="   "), headers=headers)

    assert bad_category.status_code == 400
    assert blank_title.status_code == 400
    assert bad_category.json()["code"] == ResponseCode.VALIDATION_ERROR.code


def test_list_resources_filters(client, make_resource):
    make_resource(title="Ancient history", exam_category="UPSC", section="Notes")
    make_resource(title="Thermodynamics", exam_category="JEE", section="Books")
    make_resource(title="Medieval history", exam_category="UPSC", section="Books")

    by_category = client.get("/v1/resources", params={"examCategory": "UPSC"}).json()
    by_section = client.get("/v1/resources", params={"examCategory": "UPSC", "section": "Books"}).json()
    by_search = client.get("/v1/resources", params={"search": "HISTORY"}).json()

    assert by_category["pagination"]["totalResources"] == 2
    assert [r["title"] for r in by_section["resources"]] == ["Medieval history"]
    assert {r["title"] for r in by_search["resources"]} == {"Ancient history", "Medieval history"}


def test_list_resources_sorted_by_stars(client, auth_headers, make_resource):
    plain = make_resource(title="Plain")
    liked = make_resource(title="Liked")
    client.post("/v1/ratings", json={"resourceId": liked, "stars": 5}, headers=auth_headers("alice"))
    client.post("/v1/ratings", json={"resourceId": plain, "stars": 2}, headers=auth_headers("alice"))

    body = client.get("/v1/resources", params={"sort": "stars"}).json()

    assert [r["resourceId"] for r in body["resources"]] == [liked, plain]
    assert body["resources"][0]["stars"] == 5.0


def test_list_resources_rejects_unknown_sort(client):
    assert client.get("/v1/resources", params={"sort": "random"}).status_code == 400


def test_categories(client):
    body = client.get("/v1/resources/categories").json()

    assert "UPSC" in body["examCategories"]
    assert "Previous Papers" in body["sections"]
    assert "pdf" in body["fileTypes"]


def test_my_resources(client, auth_headers, make_resource):
    make_resource(owner="uploader", title="Mine")
    make_resource(owner="someone-else", title="Theirs")

    body = client.get("/v1/resources/my-resources", headers=auth_headers("uploader")).json()

    assert [r["title"] for r in body["resources"]] == ["Mine"]


def test_get_unknown_resource(client):
    response = client.get("/v1/resources/no-such-resource")

    assert response.status_code == 404
    assert response.json()["code"] == ResponseCode.RESOURCE_NOT_FOUND.code


def test_download_increments_count(client, make_resource):
    resource_id = make_resource()

    first = client.post(f"/v1/resources/{resource_id}/download").json()
    second = client.post(f"/v1/resources/{resource_id}/download").json()

    assert first["downloadCount"] == 1
    assert second["downloadCount"] == 2
    assert second["fileUrl"].startswith("https://blob.example.com/")


def test_delete_resource_permissions(client, auth_headers, make_resource):
    resource_id = make_resource()

    forbidden = client.delete(f"/v1/resources/{resource_id}", headers=auth_headers("stranger"))
    deleted = client.delete(f"/v1/resources/{resource_id}", headers=auth_headers(OWNER_ID))

    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == ResponseCode.RESOURCE_ACCESS_DENIED.code
    assert deleted.status_code == 200
    assert client.get(f"/v1/resources/{resource_id}").status_code == 404
    # 비활성 리소스도 통계는 조회 가능
    assert client.get(f"/v1/ratings/stats/{resource_id}").status_code == 200


def test_admin_can_delete_any_resource(client, auth_headers, make_resource):
    resource_id = make_resource()

    response = client.delete(f"/v1/resources/{resource_id}", headers=auth_headers("moderator", role="admin"))

    assert response.status_code == 200
    assert response.json()["message"] == "리소스가 삭제되었습니다."
