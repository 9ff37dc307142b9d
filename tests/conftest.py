"""
Shared test fixtures: in-memory result store, stub strategies, test client
"""
import os

# Settings are read at import time
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("ENABLE_REQUEST_LOGGING", "true")
os.environ.setdefault("ENABLE_RATE_LIMITING", "false")

import copy
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_domain_service
from core.availability import AvailabilityResolver, AvailabilityResult, ResolutionStrategy
from core.heuristics import HeuristicStrategy
from database.repositories.domain_repository import DomainRepository
from database.repositories.search_repository import SearchRepository
from main import app
from services.domain_service import DomainService


# ----------------------------------------------------------------------
# In-memory Supabase query builder
# ----------------------------------------------------------------------

def _compare(stored, bound) -> int:
    """Numeric comparison for price-like columns; missing values sort lowest"""
    if stored is None:
        return -1
    left, right = Decimal(str(stored)), Decimal(str(bound))
    return (left > right) - (left < right)


def _condition(row, column, operator, value) -> bool:
    if operator == "ilike":
        return value.strip("%").lower() in str(row.get(column) or "").lower()
    if operator == "cs":
        return set(value.strip("{}").split(",")) <= set(row.get(column) or [])
    raise ValueError(f"Unsupported filter operator: {operator}")


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    """Subset of the postgrest builder used by the repositories"""

    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table_name = table
        self.operation = "select"
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.order_by: Optional[tuple] = None
        self.row_limit: Optional[int] = None

    def select(self, *columns, count=None):
        self.operation = "select"
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def upsert(self, data, on_conflict=None):
        self.operation = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: _compare(row.get(column), value) >= 0)
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: _compare(row.get(column), value) <= 0)
        return self

    def or_(self, expression):
        """Supports `column.ilike.%term%` and `column.cs.{value}` alternatives"""
        conditions = [part.split(".", 2) for part in expression.split(",")]
        self.filters.append(lambda row: any(_condition(row, *c) for c in conditions))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def _matches(self, row):
        return all(check(row) for check in self.filters)

    def execute(self) -> FakeResponse:
        if self.table_name in self.client.failing_tables:
            raise ConnectionError(f"relation {self.table_name} is unavailable")

        rows = self.client.tables.setdefault(self.table_name, [])

        if self.operation == "insert":
            return FakeResponse([copy.deepcopy(self.client.insert(self.table_name, self.payload))])

        if self.operation == "upsert":
            for row in rows:
                if row.get(self.on_conflict) == self.payload.get(self.on_conflict):
                    row.update(copy.deepcopy(self.payload))
                    return FakeResponse([copy.deepcopy(row)])
            return FakeResponse([copy.deepcopy(self.client.insert(self.table_name, self.payload))])

        if self.operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self.payload))
                    updated.append(copy.deepcopy(row))
            return FakeResponse(updated)

        selected = [copy.deepcopy(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(key=lambda row: (row.get(column) is None, row.get(column)), reverse=desc)
        if self.row_limit is not None:
            selected = selected[:self.row_limit]
        return FakeResponse(selected, count=len(selected))


class FakeSupabase:
    """Table store with auto-increment ids"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failing_tables = set()
        self._next_ids: Dict[str, int] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def insert(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        row = copy.deepcopy(data)
        row_id = self._next_ids.get(table, 1)
        self._next_ids[table] = row_id + 1
        row.setdefault("id", row_id)
        self.tables.setdefault(table, []).append(row)
        return row


# ----------------------------------------------------------------------
# Stub resolution strategies
# ----------------------------------------------------------------------

class StaticStrategy(ResolutionStrategy):
    """Answers from a function and records every domain it sees"""

    name = "static"

    def __init__(self, answer: Callable[[str], Optional[AvailabilityResult]]):
        self.answer = answer
        self.seen: List[str] = []

    async def attempt(self, domain: str) -> Optional[AvailabilityResult]:
        self.seen.append(domain)
        return self.answer(domain)


class FixedRandom:
    """random.Random stand-in whose uniform() returns a fixed value"""

    def __init__(self, value: float):
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return self.value


def available_unless(prefix: str) -> Callable[[str], AvailabilityResult]:
    """Everything is available except domains starting with prefix"""

    def answer(domain: str) -> AvailabilityResult:
        if domain.startswith(prefix):
            return AvailabilityResult(domain=domain, available=False, source_label="DNS Active")
        return AvailabilityResult(domain=domain, available=True, source_label="No DNS Records")

    return answer


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------

@pytest.fixture
def fake_db():
    """Empty in-memory result store"""
    return FakeSupabase()


@pytest.fixture
def domain_repo(fake_db):
    return DomainRepository(db=fake_db)


@pytest.fixture
def search_repo(fake_db):
    return SearchRepository(db=fake_db)


@pytest.fixture
def static_strategy():
    """Strategy that marks every domain available except get* names"""
    return StaticStrategy(available_unless("get"))


@pytest.fixture
def static_resolver(static_strategy):
    return AvailabilityResolver([static_strategy], batch_size=3)


@pytest.fixture
def heuristic_resolver():
    return AvailabilityResolver([HeuristicStrategy(seed=0)], batch_size=3)


@pytest.fixture
def domain_service(static_resolver, domain_repo, search_repo):
    """Service over the in-memory store with a deterministic resolver"""
    return DomainService(
        resolver=static_resolver,
        domain_repo=domain_repo,
        search_repo=search_repo
    )


@pytest.fixture
def heuristic_service(heuristic_resolver, domain_repo, search_repo):
    return DomainService(
        resolver=heuristic_resolver,
        domain_repo=domain_repo,
        search_repo=search_repo
    )


@pytest.fixture
def client(domain_service):
    """Test client with the service dependency overridden"""
    app.dependency_overrides[get_domain_service] = lambda: domain_service
    yield TestClient(app)
    app.dependency_overrides.clear()
