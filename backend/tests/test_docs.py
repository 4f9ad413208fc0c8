import asyncio
import logging

import pytest

from elmdoc.services.docs import DocsNotFound, load_docs_file


@pytest.mark.asyncio
async def test_load_docs_file_reads_bytes(config) -> None:
    docs_file = await load_docs_file(config, "/~docs/alice/lib/1.0.0/docs.json")
    assert docs_file.content == b'[{"name":"Lib","comment":""}]'
    assert docs_file.media_type == "application/json"
    assert docs_file.request.author == "alice"


@pytest.mark.asyncio
async def test_traversal_is_refused_when_strict(config, caplog: pytest.LogCaptureFixture) -> None:
    escaped = config.packages_root / ".." / ".." / ".." / "secret.txt"
    assert escaped.is_file()
    with caplog.at_level(logging.ERROR):
        with pytest.raises(DocsNotFound):
            await load_docs_file(config, "/~docs/../../../secret.txt")
    assert "refusing" in caplog.text


@pytest.mark.asyncio
async def test_traversal_is_allowed_when_lax(config) -> None:
    lax = config.with_overrides(strict_paths=False)
    docs_file = await load_docs_file(lax, "/~docs/../../../secret.txt")
    assert docs_file.content == b"outside the cache"
    assert docs_file.media_type == "text/plain"


@pytest.mark.asyncio
async def test_directory_is_not_a_docs_file(config) -> None:
    with pytest.raises(DocsNotFound):
        await load_docs_file(config, "/~docs/alice/lib/1.0.0/")


@pytest.mark.asyncio
async def test_concurrent_reads_do_not_interfere(config) -> None:
    paths = ["/~docs/alice/lib/1.0.0/docs.json", "/~docs/alice/lib/1.0.0/README.md"] * 5
    results = await asyncio.gather(*(load_docs_file(config, path) for path in paths))
    assert [result.request.file for result in results] == [path.rsplit("/", 1)[1] for path in paths]


@pytest.mark.asyncio
async def test_nul_byte_in_file_name_is_not_found(config, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        with pytest.raises(DocsNotFound):
            await load_docs_file(config, "/~docs/alice/lib/1.0.0/docs\x00.json")
    assert "null" in caplog.text
