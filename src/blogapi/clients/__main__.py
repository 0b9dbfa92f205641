"""
blogapi.clients.__main__

Walk a running server through one blog's lifecycle:
create -> read -> update -> read -> delete -> read (expects NOT_FOUND).

Usage: `python -m blogapi.clients [base_url]`
"""

from __future__ import annotations

import asyncio
import sys

import httpx

from blogapi.clients.http import BlogApiClient
from blogapi.observability.logging import configure_logging, get_logger
from blogapi.rpc.messages import Blog
from blogapi.rpc.status import RpcError, StatusCode

log = get_logger("blogapi.clients")


async def run(client: BlogApiClient) -> None:
    created = await client.create_blog(
        Blog(author_id="Dillon Nys", title="Blog Post #1", content="My very first blog!"),
        timeout=10,
    )
    log.info("blog.created", id=created.id)

    read = await client.read_blog(created.id)
    log.info("blog.read", blog=read.blog.model_dump() if read.blog else None)

    edited = created.model_copy(update={"title": "Blog Post #1 (edited)"})
    updated = await client.update_blog(edited)
    log.info("blog.updated", status=updated.status.value)

    read = await client.read_blog(created.id)
    log.info("blog.read", blog=read.blog.model_dump() if read.blog else None)

    deleted = await client.delete_blog(created.id)
    log.info("blog.deleted", status=deleted.status.value)

    try:
        await client.read_blog(created.id)
    except RpcError as e:
        if e.code is not StatusCode.NOT_FOUND:
            raise
        log.info("blog.gone", id=created.id)
    else:
        raise RuntimeError(f"blog {created.id} still readable after delete")


async def main(base_url: str) -> None:
    configure_logging(service_name="blogapi-client", level="INFO", json=False)
    async with httpx.AsyncClient(base_url=base_url) as http:
        await run(BlogApiClient(http=http))


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8081"))
