"""Pytest configuration and shared fakes for the test suite."""

import re
from collections import deque
from typing import Any, Optional, Sequence

import pytest

TIMESTAMP_SET = re.compile(r"SET n\.`([^`]+)` = timestamp\(\)")


class FakeSessionProvider:
    """Records every call and replays queued result rows."""

    def __init__(self, *responses: list[dict[str, Any]]) -> None:
        self.responses = deque(responses)
        self.calls: list[tuple[str, dict[str, Any], bool]] = []
        self.transactions: list[list[str]] = []
        self.error: Optional[Exception] = None

    async def run(self, query, parameters=None, *, write=False):
        self.calls.append((query, parameters or {}, write))
        if self.error is not None:
            raise self.error
        return self.responses.popleft() if self.responses else []

    async def run_in_transaction(self, queries: Sequence[str]) -> None:
        if self.error is not None:
            raise self.error
        self.transactions.append(list(queries))


class InMemoryNodeStore:
    """Applies CREATE and MERGE statements to a list of property bags.

    Only the statements produced by the create/merge builders are understood;
    ``timestamp()`` is a monotonically increasing counter.
    """

    def __init__(self) -> None:
        self.nodes: list[dict[str, Any]] = []
        self.clock = 1_700_000_000_000

    def _now(self) -> int:
        self.clock += 1
        return self.clock

    async def run(self, query, parameters=None, *, write=False):
        props = dict((parameters or {}).get("props", {}))
        stamp = TIMESTAMP_SET.search(query)
        if query.startswith("CREATE"):
            node = dict(props)
            if stamp:
                node[stamp.group(1)] = self._now()
            self.nodes.append(node)
            return [{"created": dict(node)}]
        if query.startswith("MERGE"):
            for node in self.nodes:
                if all(node.get(k) == v for k, v in props.items()):
                    return [{"merged": dict(node)}]
            node = dict(props)
            if stamp:
                node[stamp.group(1)] = self._now()
            self.nodes.append(node)
            return [{"merged": dict(node)}]
        raise NotImplementedError(query)

    async def run_in_transaction(self, queries: Sequence[str]) -> None:
        raise NotImplementedError


@pytest.fixture
def fake_provider() -> FakeSessionProvider:
    return FakeSessionProvider()


@pytest.fixture
def node_store() -> InMemoryNodeStore:
    return InMemoryNodeStore()
