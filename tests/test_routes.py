"""
HTTP API tests
"""
from decimal import Decimal

from api.dependencies import get_domain_service
from main import app


class TestGenerateRoute:
    """Tests for POST /api/domains/generate"""

    def test_generate_returns_camel_case(self, client):
        """Test response shape for a successful generation"""
        response = client.post("/api/domains/generate", json={
            "query": "tech startup",
            "filters": {"extensions": [".com"], "availableOnly": True, "targetCount": 3}
        })

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3

        first = body["domains"][0]
        assert first["name"] == "tech.com"
        assert first["isAvailable"] is True
        assert first["registrar"] == "Porkbun"
        assert Decimal(str(first["price"])) == Decimal("10.73")
        assert first["bestAffiliateLink"] == "https://porkbun.com/checkout/search?q=tech.com"
        assert first["registrarQuotes"]["GoDaddy"]["registrarName"] == "GoDaddy"
        assert first["availabilitySource"] == "No DNS Records"
        assert "is_available" not in first

        for domain in body["domains"]:
            assert domain["extension"] == ".com"
            assert domain["isAvailable"] is True
            quote_prices = [Decimal(str(q["price"])) for q in domain["registrarQuotes"].values()]
            assert Decimal(str(domain["price"])) == min(quote_prices)

    def test_generate_without_filters(self, client):
        """Test that filters are optional"""
        response = client.post("/api/domains/generate", json={
            "query": "tech",
            "filters": {"targetCount": 2}
        })

        assert response.status_code == 200
        assert response.json()["total"] == 2

    def test_empty_query(self, client):
        """Test 400 for a query without keywords"""
        response = client.post("/api/domains/generate", json={"query": "!!!"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "empty_query"
        assert "request_id" in error

    def test_invalid_filters(self, client):
        """Test 400 for an inverted price range"""
        response = client.post("/api/domains/generate", json={
            "query": "tech",
            "filters": {"minPrice": 30, "maxPrice": 10}
        })

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "invalid_filter"
        assert error["details"]["field"] == "minPrice"

    def test_unknown_extension(self, client):
        """Test 400 for an extension outside the catalog"""
        response = client.post("/api/domains/generate", json={
            "query": "tech",
            "filters": {"extensions": [".xyz"]}
        })

        assert response.status_code == 400
        assert response.json()["error"]["details"]["extensions"] == [".xyz"]

    def test_missing_query(self, client):
        """Test schema validation"""
        response = client.post("/api/domains/generate", json={})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["type"] == "validation_error"
        assert error["details"][0]["field"] == "query"

    def test_store_unavailable(self, client, fake_db):
        """Test 503 when the result store fails"""
        fake_db.failing_tables.add("domains")

        response = client.post("/api/domains/generate", json={
            "query": "tech",
            "filters": {"targetCount": 1}
        })

        assert response.status_code == 503
        assert response.json()["error"]["type"] == "database_error"


class TestCheckRoute:
    """Tests for POST /api/domains/check"""

    def test_available(self, client):
        """Test a free domain with its price"""
        response = client.post("/api/domains/check", json={"domain": "acmewidgets"})

        assert response.status_code == 200
        body = response.json()
        assert body["domain"] == "acmewidgets.com"
        assert body["isAvailable"] is True
        assert Decimal(str(body["price"])) == Decimal("10.73")
        assert body["record"] is None

    def test_registered(self, client):
        """Test a taken domain has no price"""
        response = client.post("/api/domains/check", json={"domain": "https://getacme.com/"})

        body = response.json()
        assert body["isAvailable"] is False
        assert body["registrar"] == "DNS Active"
        assert body["price"] is None

    def test_well_known_brand(self, client, heuristic_service):
        """Test that google.com is reported registered"""
        app.dependency_overrides[get_domain_service] = lambda: heuristic_service

        response = client.post("/api/domains/check", json={"domain": "google.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["isAvailable"] is False
        assert body["verified"] is False
        assert body["price"] is None

    def test_invalid_domain(self, client):
        """Test 400 for malformed input"""
        response = client.post("/api/domains/check", json={"domain": "bad domain!"})

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "invalid_domain"


class TestStoredRoutes:
    """Tests for search, lookup, metrics and history"""

    def _generate(self, client):
        response = client.post("/api/domains/generate", json={
            "query": "tech",
            "filters": {"extensions": [".com", ".io"], "targetCount": 4}
        })
        assert response.status_code == 200
        return response.json()["domains"]

    def test_search(self, client):
        """Test stored search with filters and sort"""
        self._generate(client)

        response = client.get("/api/domains/search", params={
            "q": "tech",
            "extensions": ".io",
            "sortBy": "price-asc"
        })

        assert response.status_code == 200
        names = [d["name"] for d in response.json()["domains"]]
        assert names and all(name.endswith(".io") for name in names)

    def test_search_comma_separated_extensions(self, client):
        """Test both extension list styles"""
        self._generate(client)

        response = client.get("/api/domains/search?extensions=.com,.io&maxPrice=20")

        assert response.status_code == 200
        assert {d["extension"] for d in response.json()["domains"]} == {".com"}

    def test_search_bad_sort(self, client):
        """Test that an unknown sort is rejected"""
        response = client.get("/api/domains/search", params={"sortBy": "random"})
        assert response.status_code == 422

    def test_get_domain_and_metrics(self, client):
        """Test lookup and metrics by id"""
        domain = self._generate(client)[0]

        response = client.get(f"/api/domains/{domain['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == domain["name"]

        response = client.get(f"/api/domains/{domain['id']}/metrics")
        assert response.status_code == 200
        metrics = response.json()
        assert metrics["domain"] == domain["name"]
        assert 0 <= metrics["seoScore"] <= 100
        assert metrics["isTypable"] is True

    def test_missing_domain(self, client):
        """Test 404 for an unknown id"""
        response = client.get("/api/domains/999")

        assert response.status_code == 404
        assert response.json()["error"]["type"] == "not_found"

    def test_recent_searches(self, client):
        """Test the generation history"""
        self._generate(client)

        response = client.get("/api/searches/recent", params={"limit": 5})

        assert response.status_code == 200
        searches = response.json()
        assert len(searches) == 1
        assert searches[0]["query"] == "tech"
        assert searches[0]["resultsCount"] == 4
        assert searches[0]["filters"]["targetCount"] == 4

    def test_recent_limit_bounds(self, client):
        """Test the history limit range"""
        assert client.get("/api/searches/recent", params={"limit": 0}).status_code == 422
        assert client.get("/api/searches/recent", params={"limit": 101}).status_code == 422


class TestHealthRoutes:
    """Tests for health and request tracing"""

    def test_liveness(self, client):
        """Test the liveness probe"""
        response = client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_health_reports_store(self, client, monkeypatch):
        """Test the health summary with a failing store"""

        async def down():
            return False

        monkeypatch.setattr("api.routes.health_routes.check_connection", down)

        response = client.get("/api/health/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        services = {s["service"]: s for s in body["services"]}
        assert services["database"]["status"] == "unhealthy"
        assert services["availability_resolver"]["details"]["heuristic"] is True

    def test_request_id_is_echoed(self, client):
        """Test that a caller-supplied request id comes back"""
        response = client.get("/api/health/live", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    def test_request_id_is_generated(self, client):
        """Test that every response carries a request id"""
        response = client.post("/api/domains/check", json={"domain": "acme.com"})
        assert response.headers.get("X-Request-ID")

    def test_root(self, client):
        """Test the root endpoint"""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"
