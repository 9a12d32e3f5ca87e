"""Category Routes — /category, /category/reorder and /category/{id} through the full app.

Tests:
    - Create defaults color and description
    - includeArchived query text is coerced to a boolean
    - /category/reorder is not captured by /category/{id}
    - Path id wins over a body id
    - Default-category protection raised by the procedure surfaces as 400
    - order 0 is rejected before any procedure call
    - Concurrent archive requests both succeed
"""

import asyncio

from taskboard.core.domain_types import DEFAULT_CATEGORY_COLOR
from tests.procedure_stub import procedure_error
from tests.tokens import bearer

CREATE = "[functional].[spCategoryCreate]"
LIST = "[functional].[spCategoryList]"
GET = "[functional].[spCategoryGet]"
UPDATE = "[functional].[spCategoryUpdate]"
DELETE = "[functional].[spCategoryDelete]"
ARCHIVE = "[functional].[spCategoryArchive]"
REORDER = "[functional].[spCategoryReorder]"


# --- /category ------------------------------------------------------------------

async def test_create_category_defaults(client, api, auth_headers, procedures):
    procedures.results[CREATE] = [[{"idCategory": 12}]]
    resp = await client.post(f"{api}/category", json={"name": "Work"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {"idCategory": 12}
    parameters = procedures.parameters(CREATE)
    assert parameters["color"] == DEFAULT_CATEGORY_COLOR
    assert parameters["description"] == ""
    assert parameters["idCategoryParent"] is None


async def test_create_category_duplicate_name(client, api, auth_headers, procedures):
    procedures.results[CREATE] = procedure_error("categoryNameAlreadyExists")
    resp = await client.post(f"{api}/category", json={"name": "Work"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "categoryNameAlreadyExists"


async def test_create_category_bad_color(client, api, auth_headers, procedures):
    resp = await client.post(
        f"{api}/category", json={"name": "Work", "color": "blue"}, headers=auth_headers,
    )
    assert resp.status_code == 400
    detail = resp.json()["error"]["details"][0]
    assert (detail["field"], detail["reason"]) == ("color", "wrong_format")
    assert procedures.calls == []


async def test_list_categories(client, api, auth_headers, procedures):
    await client.get(f"{api}/category", headers=auth_headers)
    assert procedures.parameters(LIST)["includeArchived"] is False

    await client.get(f"{api}/category?includeArchived=true&status=1", headers=auth_headers)
    parameters = procedures.parameters(LIST)
    assert parameters["includeArchived"] is True
    assert parameters["status"] == 1


async def test_list_categories_requires_read(client, api, procedures):
    resp = await client.get(f"{api}/category", headers=bearer(permissions=["TASK:READ"]))
    assert resp.status_code == 403


# --- /category/reorder ----------------------------------------------------------

async def test_reorder_categories(client, api, auth_headers, procedures):
    resp = await client.put(f"{api}/category/reorder", headers=auth_headers, json={
        "orderData": [{"idCategory": 3, "order": 1}, {"idCategory": 4, "order": 2}],
    })
    assert resp.status_code == 200
    assert procedures.routines == [REORDER]
    assert procedures.parameters(REORDER)["orderJson"] == (
        '[{"idCategory": 3, "order": 1}, {"idCategory": 4, "order": 2}]'
    )


async def test_reorder_requires_entries(client, api, auth_headers, procedures):
    resp = await client.put(
        f"{api}/category/reorder", json={"orderData": []}, headers=auth_headers,
    )
    assert resp.status_code == 400
    assert procedures.calls == []


# --- /category/{id} -------------------------------------------------------------

async def test_get_category(client, api, auth_headers, procedures):
    procedures.results[GET] = [[{"idCategory": 3}], [{"idCategory": 5}]]
    resp = await client.get(f"{api}/category/3", headers=auth_headers)
    assert resp.json()["data"] == {
        "category": {"idCategory": 3}, "subcategories": [{"idCategory": 5}],
    }


async def test_update_category(client, api, auth_headers, procedures):
    resp = await client.put(f"{api}/category/3", headers=auth_headers, json={
        "name": "Work", "color": "#112233", "order": 2,
    })
    assert resp.status_code == 200
    assert procedures.parameters(UPDATE) == {
        "idAccount": 1,
        "idCategory": 3,
        "name": "Work",
        "color": "#112233",
        "description": "",
        "idCategoryParent": None,
        "order": 2,
    }


async def test_update_category_rejects_order_zero(client, api, auth_headers, procedures):
    resp = await client.put(f"{api}/category/3", headers=auth_headers, json={
        "name": "Work", "color": "#112233", "order": 0,
    })
    assert resp.status_code == 400
    detail = resp.json()["error"]["details"][0]
    assert (detail["field"], detail["reason"]) == ("order", "out_of_range")
    assert procedures.calls == []


async def test_update_default_category(client, api, auth_headers, procedures):
    procedures.results[UPDATE] = procedure_error("cannotModifyDefaultCategory")
    resp = await client.put(f"{api}/category/1", headers=auth_headers, json={
        "name": "General", "color": "#112233", "order": 1,
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "cannotModifyDefaultCategory"


async def test_delete_default_category(client, api, auth_headers, procedures):
    procedures.results[DELETE] = procedure_error("cannotDeleteDefaultCategory")
    resp = await client.request(
        "DELETE", f"{api}/category/1", json={}, headers=auth_headers,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == {"code": "ERROR", "message": "cannotDeleteDefaultCategory"}


async def test_delete_category_without_body(client, api, auth_headers, procedures):
    resp = await client.delete(f"{api}/category/5", headers=auth_headers)
    assert resp.status_code == 200
    assert procedures.parameters(DELETE) == {
        "idAccount": 1, "idCategory": 5, "idCategoryTarget": None, "deleteTasks": False,
    }


async def test_delete_category_moving_tasks(client, api, auth_headers, procedures):
    await client.request("DELETE", f"{api}/category/5", headers=auth_headers, json={
        "idCategoryTarget": 2, "deleteTasks": False,
    })
    assert procedures.parameters(DELETE)["idCategoryTarget"] == 2


async def test_delete_requires_delete_permission(client, api, procedures):
    resp = await client.delete(
        f"{api}/category/5", headers=bearer(permissions=["CATEGORY:UPDATE"]),
    )
    assert resp.status_code == 403
    assert procedures.calls == []


async def test_archive_path_id_wins(client, api, auth_headers, procedures):
    await client.patch(
        f"{api}/category/3/archive", json={"id": 99, "archive": True}, headers=auth_headers,
    )
    assert procedures.parameters(ARCHIVE) == {
        "idAccount": 1, "idCategory": 3, "archive": True,
    }


async def test_archive_requires_boolean(client, api, auth_headers, procedures):
    resp = await client.patch(
        f"{api}/category/3/archive", json={"archive": "yes"}, headers=auth_headers,
    )
    assert resp.status_code == 400
    detail = resp.json()["error"]["details"][0]
    assert (detail["field"], detail["reason"]) == ("archive", "wrong_type")


async def test_concurrent_archive_requests(client, api, auth_headers, procedures):
    procedures.results[ARCHIVE] = [[{"idCategory": 3, "status": 1}]]
    responses = await asyncio.gather(*(
        client.patch(
            f"{api}/category/3/archive", json={"archive": True}, headers=auth_headers,
        )
        for _ in range(2)
    ))
    assert [r.status_code for r in responses] == [200, 200]
    assert procedures.routines == [ARCHIVE, ARCHIVE]
