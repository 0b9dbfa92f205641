"""
tests.test_api

End-to-end tests through the REST surface (httpx ASGITransport, no network).

Responsibilities:
- Boot the app against a temporary sqlite database and run the blog lifecycle.
- Check HTTP rendering of RPC statuses and the NDJSON list stream.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from blogapi.api.app import create_app
from blogapi.clients.http import BlogApiClient
from blogapi.clients.__main__ import run as run_scenario
from blogapi.domain.errors import StorageConnectionError
from blogapi.rpc.messages import Blog
from blogapi.rpc.status import RpcError, StatusCode
from blogapi.settings import Settings


async def _serve(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


@pytest_asyncio.fixture
async def http(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    async for client in _serve(create_app(settings=settings)):
        yield client


@pytest_asyncio.fixture
async def memory_http(settings: Settings, memory_gateway) -> AsyncIterator[httpx.AsyncClient]:
    async for client in _serve(create_app(settings=settings, gateway=memory_gateway)):
        yield client


@pytest.mark.asyncio
async def test_health_endpoints(http: httpx.AsyncClient) -> None:
    r = await http.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await http.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_readyz_reports_unavailable_storage(memory_http, memory_gateway) -> None:
    memory_gateway.connected = False
    r = await memory_http.get("/readyz")
    assert r.status_code == 503


@pytest.mark.asyncio
async def test_client_scenario(http: httpx.AsyncClient) -> None:
    await run_scenario(BlogApiClient(http=http))


@pytest.mark.asyncio
async def test_rest_lifecycle(http: httpx.AsyncClient) -> None:
    r = await http.post(
        "/v1/blogs",
        json={
            "blog": {
                "authorId": "Dillon Nys",
                "title": "Blog Post #1",
                "content": "My very first blog!",
            }
        },
    )
    assert r.status_code == 200
    blog = r.json()["blog"]
    assert len(blog["id"]) == 24
    assert blog["authorId"] == "Dillon Nys"

    r = await http.get(f"/v1/blogs/{blog['id']}")
    assert r.status_code == 200
    assert r.json() == {"blog": blog, "status": "FOUND"}

    # Path id wins over the body.
    r = await http.put(
        f"/v1/blogs/{blog['id']}",
        json={"blog": {**blog, "id": "ignored", "title": "Blog Post #1 (edited)"}},
    )
    assert r.status_code == 200
    assert r.json() == {"status": "UPDATED"}

    r = await http.get(f"/v1/blogs/{blog['id']}")
    assert r.json()["blog"]["title"] == "Blog Post #1 (edited)"

    r = await http.delete(f"/v1/blogs/{blog['id']}")
    assert r.json() == {"status": "DELETED"}

    r = await http.delete(f"/v1/blogs/{blog['id']}")
    assert r.status_code == 200
    assert r.json() == {"status": "NOT_DELETED"}

    r = await http.get(f"/v1/blogs/{blog['id']}")
    assert r.status_code == 404
    assert r.json()["code"] == StatusCode.NOT_FOUND


@pytest.mark.asyncio
async def test_snake_case_body_is_accepted(http: httpx.AsyncClient) -> None:
    r = await http.post("/v1/blogs", json={"blog": {"author_id": "x"}})
    assert r.status_code == 200
    assert r.json()["blog"]["authorId"] == "x"


@pytest.mark.asyncio
async def test_malformed_id_is_bad_request(http: httpx.AsyncClient) -> None:
    r = await http.get("/v1/blogs/not-hex")
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == StatusCode.INVALID_ARGUMENT
    assert body["details"] == []


@pytest.mark.asyncio
async def test_malformed_body_is_bad_request(http: httpx.AsyncClient) -> None:
    r = await http.post("/v1/blogs", json={"blog": "nope"})
    assert r.status_code == 400
    assert r.json()["code"] == StatusCode.INVALID_ARGUMENT


@pytest.mark.asyncio
async def test_malformed_deadline_header(http: httpx.AsyncClient) -> None:
    r = await http.get("/v1/blogs/0123456789abcdef01234567", headers={"grpc-timeout": "soon"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_deadline_exceeded_is_gateway_timeout(memory_http, memory_gateway) -> None:
    memory_gateway.delay = 1.0
    r = await memory_http.post(
        "/v1/blogs", json={"blog": {"title": "slow"}}, headers={"grpc-timeout": "10m"}
    )
    assert r.status_code == 504
    assert r.json()["code"] == StatusCode.DEADLINE_EXCEEDED


@pytest.mark.asyncio
async def test_internal_errors_hide_backend_detail(memory_http, memory_gateway) -> None:
    memory_gateway.fail_writes = True
    r = await memory_http.post("/v1/blogs", json={"blog": {"title": "x"}})
    assert r.status_code == 500
    assert r.json() == {"code": 13, "message": "Error inserting document", "details": []}


@pytest.mark.asyncio
async def test_list_streams_ndjson(http: httpx.AsyncClient) -> None:
    client = BlogApiClient(http=http)
    a = await client.create_blog(Blog(title="A"))
    b = await client.create_blog(Blog(title="B"))
    c = await client.create_blog(Blog(title="C"))
    await client.delete_blog(b.id)

    r = await http.get("/v1/blogs")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/x-ndjson")
    lines = [json.loads(line) for line in r.text.splitlines() if line]
    assert {line["result"]["blog"]["id"] for line in lines} == {a.id, c.id}

    listed = [blog async for blog in client.list_blogs()]
    assert sorted(listed, key=lambda blog: blog.title) == [a, c]


@pytest.mark.asyncio
async def test_list_empty(http: httpx.AsyncClient) -> None:
    r = await http.get("/v1/blogs")
    assert r.status_code == 200
    assert r.text == ""


@pytest.mark.asyncio
async def test_list_failure_midstream_ends_with_error_line(memory_http, memory_gateway) -> None:
    client = BlogApiClient(http=memory_http)
    for title in ("A", "B", "C"):
        await client.create_blog(Blog(title=title))
    memory_gateway.fail_list_after = 2

    r = await memory_http.get("/v1/blogs")
    lines = [json.loads(line) for line in r.text.splitlines() if line]
    assert [line["result"]["blog"]["title"] for line in lines[:-1]] == ["A", "B"]
    assert lines[-1] == {"error": {"code": 13, "message": "Error listing documents", "details": []}}

    received = []
    with pytest.raises(RpcError) as exc:
        async for blog in client.list_blogs():
            received.append(blog.title)
    assert received == ["A", "B"]
    assert exc.value.code is StatusCode.INTERNAL


@pytest.mark.asyncio
async def test_list_failure_before_first_item_gets_http_status(memory_http, memory_gateway) -> None:
    await BlogApiClient(http=memory_http).create_blog(Blog(title="A"))
    memory_gateway.fail_list_after = 0

    r = await memory_http.get("/v1/blogs")
    assert r.status_code == 500
    assert r.json()["code"] == StatusCode.INTERNAL


@pytest.mark.asyncio
async def test_request_id_is_echoed(http: httpx.AsyncClient) -> None:
    r = await http.get("/healthz", headers={"x-request-id": "abc"})
    assert r.headers["x-request-id"] == "abc"


@pytest.mark.asyncio
async def test_stream_abort_log_keeps_request_id(memory_http, memory_gateway, caplog) -> None:
    client = BlogApiClient(http=memory_http)
    for title in ("A", "B", "C"):
        await client.create_blog(Blog(title=title))
    memory_gateway.fail_list_after = 2
    caplog.set_level(logging.WARNING)

    r = await memory_http.get("/v1/blogs", headers={"x-request-id": "req-list-7"})
    assert "error" in r.text.splitlines()[-1]

    messages = [record.getMessage() for record in caplog.records]
    aborted = [m for m in messages if "list_blogs.stream_aborted" in m]
    assert aborted
    assert all("req-list-7" in message for message in aborted)


@pytest.mark.asyncio
async def test_startup_fails_without_storage(tmp_path) -> None:
    settings = Settings(
        env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'blogs.db'}"
    )
    app = create_app(settings=settings)
    with pytest.raises(StorageConnectionError):
        async with app.router.lifespan_context(app):
            pass
