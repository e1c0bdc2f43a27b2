"""Tests for async dispatch."""

import pytest

from mockx import AsyncImplementationError, Mockx, mock_of

from tests.interfaces import Embedder


@pytest.fixture
def embedder() -> Mockx:
    mock = Mockx()
    mock.init(Embedder)
    return mock


class TestAcall:
    """Tests for Mockx.acall."""

    async def test_default_zero(self, embedder: Mockx) -> None:
        assert await embedder.acall("embed", "text") == [[]]

    async def test_coroutine_impl_awaited(self, embedder: Mockx) -> None:
        async def embed(text: str) -> list[float]:
            return [float(len(text))]

        embedder.impl("embed", embed)

        assert await embedder.acall("embed", "four") == [[4.0]]
        assert embedder.args("embed") == ["four"]

    async def test_sync_impl_accepted(self, embedder: Mockx) -> None:
        embedder.impl("embed", lambda text: [1.0])

        assert await embedder.acall("embed", "x") == [[1.0]]

    async def test_returns(self, embedder: Mockx) -> None:
        embedder.returns("embed_batch", [[0.5], [0.25]])

        assert await embedder.acall("embed_batch", ["a", "b"]) == [[[0.5], [0.25]]]

    def test_call_rejects_coroutine_impl(self, embedder: Mockx) -> None:
        async def embed(text: str) -> list[float]:
            return []

        embedder.impl("embed", embed)

        with pytest.raises(AsyncImplementationError, match="acall"):
            embedder.call("embed", "x")


class TestAsyncAdapter:
    """Tests for synthesized async methods."""

    async def test_async_method(self) -> None:
        embedder = mock_of(Embedder)

        async def embed_batch(texts: list[str]) -> list[list[float]]:
            return [[1.0] for _ in texts]

        embedder.impl("embed_batch", embed_batch)

        assert await embedder.embed_batch(["a", "b"]) == [[1.0], [1.0]]
        assert embedder.args("embed_batch") == [["a", "b"]]

    async def test_async_default(self) -> None:
        embedder = mock_of(Embedder)

        assert await embedder.embed("hello") == []
