"""Testing fakes – InMemoryCollectionDriver."""
from __future__ import annotations

import copy
import uuid
from collections import Counter
from datetime import UTC, datetime
from typing import Any


def _matches(doc: dict[str, Any], filter: dict[str, Any] | None) -> bool:  # noqa: A002
    return all(doc.get(key) == value for key, value in (filter or {}).items())


def _page(docs: list[dict[str, Any]], options: dict[str, Any] | None) -> list[dict[str, Any]]:
    options = options or {}
    skip = options.get("skip", 0)
    limit = options.get("limit")
    docs = docs[skip:]
    return docs if limit is None else docs[:limit]


class InMemoryCollectionDriver:
    """Dict-backed :class:`~mizzle_pipeline.pipeline.CollectionDriver`.

    Filters are top-level equality matches.  Aggregation understands
    ``$match``, ``$skip`` and ``$limit``.  :attr:`calls` counts driver calls
    by method name so tests can assert how often storage was reached.
    """

    def __init__(self, docs: list[dict[str, Any]] | None = None) -> None:
        self._docs: list[dict[str, Any]] = [copy.deepcopy(d) for d in docs or []]
        self.calls: Counter[str] = Counter()

    @property
    def docs(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(d) for d in self._docs]

    async def find_one(self, filter: Any, options: Any = None) -> dict[str, Any] | None:  # noqa: A002
        self.calls["find_one"] += 1
        for doc in self._docs:
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def find_many(self, filter: Any, options: Any = None) -> list[dict[str, Any]]:  # noqa: A002
        self.calls["find_many"] += 1
        found = [copy.deepcopy(d) for d in self._docs if _matches(d, filter)]
        return _page(found, options)

    async def count(self, filter: Any) -> int:  # noqa: A002
        self.calls["count"] += 1
        return sum(1 for d in self._docs if _matches(d, filter))

    async def aggregate(self, pipeline: list[Any]) -> list[Any]:
        self.calls["aggregate"] += 1
        docs = [copy.deepcopy(d) for d in self._docs]
        for stage in pipeline:
            if "$match" in stage:
                docs = [d for d in docs if _matches(d, stage["$match"])]
            elif "$skip" in stage:
                docs = docs[stage["$skip"]:]
            elif "$limit" in stage:
                docs = docs[: stage["$limit"]]
            else:
                raise NotImplementedError(f"Unsupported aggregation stage: {sorted(stage)}")
        return docs

    async def create(self, data: Any) -> dict[str, Any]:
        self.calls["create"] += 1
        doc = {"_id": uuid.uuid4().hex, **copy.deepcopy(data)}
        self._docs.append(doc)
        return copy.deepcopy(doc)

    async def update(self, filter: Any, data: Any) -> dict[str, Any] | None:  # noqa: A002
        self.calls["update"] += 1
        for doc in self._docs:
            if _matches(doc, filter):
                doc.update(copy.deepcopy(data))
                return copy.deepcopy(doc)
        return None

    async def update_many(self, filter: Any, data: Any) -> int:  # noqa: A002
        self.calls["update_many"] += 1
        matched = [d for d in self._docs if _matches(d, filter)]
        for doc in matched:
            doc.update(copy.deepcopy(data))
        return len(matched)

    async def delete(self, filter: Any) -> bool:  # noqa: A002
        self.calls["delete"] += 1
        for i, doc in enumerate(self._docs):
            if _matches(doc, filter):
                del self._docs[i]
                return True
        return False

    async def delete_many(self, filter: Any) -> int:  # noqa: A002
        self.calls["delete_many"] += 1
        before = len(self._docs)
        self._docs = [d for d in self._docs if not _matches(d, filter)]
        return before - len(self._docs)

    async def soft_delete(self, filter: Any) -> dict[str, Any] | None:  # noqa: A002
        self.calls["soft_delete"] += 1
        for doc in self._docs:
            if _matches(doc, filter):
                doc["deletedAt"] = datetime.now(UTC)
                return copy.deepcopy(doc)
        return None


__all__ = ["InMemoryCollectionDriver"]
