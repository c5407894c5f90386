"""Search API tests — GET /api/v1/search end to end over a seeded SQLite catalog.

Tests cover:
    - URL-like query finds the site with all of its technologies
    - Explicit tech: substring rows, exact-name count in debug.totalFound
    - Typo vs. prefix query: suggestions only on a substring hit
    - Category + https filter: both constraints hold on every row
    - Default strategy paging: short last page, totalPages
    - Combined ordering: domain matches before technology-only matches
    - camelCase envelope, malformed parameters coerced (never 4xx)
    - A page number far past the end returns an empty page, not an error
    - Store failure → 500 DATABASE_ERROR envelope
"""

SEARCH = "/api/v1/search"


async def test_url_like_query_returns_site_with_technologies(client, seed):
    await seed([
        {"domain": "shopify.com", "technologies": [
            ("Shopify", "Content Management"), ("Cloudflare", "CDN"),
        ]},
        {"domain": "github.com", "technologies": ["Ruby on Rails"]},
    ])
    response = await client.get(SEARCH, params={"q": "shopify.com"})
    assert response.status_code == 200
    body = response.json()
    assert [r["url"] for r in body["results"]] == ["shopify.com"]
    assert {t["name"] for t in body["results"][0]["technologies"]} == {
        "Shopify", "Cloudflare",
    }
    assert body["pagination"]["total"] == 1
    assert body["debug"]["urlLike"] is True
    assert body["debug"]["searchType"] == "combined"


async def test_tech_search_rows_by_substring_count_by_exact_name(client, seed):
    await seed([
        {"domain": "one.com", "technologies": ["React"]},
        {"domain": "two.com", "technologies": ["React"]},
        {"domain": "three.com", "technologies": ["React"]},
        {"domain": "native.com", "technologies": ["React Native"]},
    ])
    body = (await client.get(SEARCH, params={"tech": "React"})).json()
    assert len(body["results"]) == 4
    assert body["debug"]["totalFound"] == 3
    assert body["pagination"]["total"] >= len(body["results"])
    assert body["debug"]["searchType"] == "technology"


async def test_typo_query_has_no_suggestions(client, seed):
    await seed([{"domain": "a.com", "technologies": ["React"]}])
    body = (await client.get(SEARCH, params={"q": "reakt"})).json()
    assert body["results"] == []
    assert body["suggestions"] == []


async def test_partial_name_query_suggests_technology(client, seed):
    await seed([{"domain": "a.com", "technologies": [("React", "JavaScript Framework")]}])
    # Narrow to an impossible facet so the substring hit yields no rows
    body = (await client.get(
        SEARCH, params={"q": "reac", "https": "true"},
    )).json()
    assert body["results"] == []
    assert body["suggestions"] == [{
        "type": "technology",
        "name": "React",
        "category": "JavaScript Framework",
        "suggestion": "Search for websites using React",
    }]


async def test_category_with_https_filter(client, seed):
    await seed([
        {"domain": "secure-cdn.com", "technologies": [("Cloudflare", "CDN")],
         "metadata": {"is_https": True}},
        {"domain": "plain-cdn.com", "technologies": [("Fastly", "CDN")],
         "metadata": {"is_https": False}},
        {"domain": "secure-other.com", "technologies": [("jQuery", "JavaScript Library")],
         "metadata": {"is_https": True}},
    ])
    body = (await client.get(
        SEARCH, params={"category": "CDN", "https": "true"},
    )).json()
    assert [r["url"] for r in body["results"]] == ["secure-cdn.com"]
    for row in body["results"]:
        assert row["metadata"]["is_https"] is True
        assert any(t["category"] == "CDN" for t in row["technologies"])


async def test_default_strategy_second_page(client, seed):
    await seed([{"domain": f"site{i:02d}.com"} for i in range(15)])
    body = (await client.get(SEARCH, params={"page": "2", "limit": "10"})).json()
    assert len(body["results"]) == 5
    assert body["pagination"] == {
        "page": 2, "limit": 10, "total": 15, "totalPages": 2,
    }


async def test_combined_puts_domain_matches_first(client, seed):
    await seed([
        {"domain": "react.dev", "technologies": ["Next.js"], "minutes": 0},
        {"domain": "shop-one.com", "technologies": ["React"], "minutes": 10},
    ])
    body = (await client.get(SEARCH, params={"q": "react"})).json()
    assert [r["url"] for r in body["results"]] == ["react.dev", "shop-one.com"]
    assert body["suggestions"] == []


async def test_result_row_shape_is_camel_case(client, seed):
    await seed([{
        "domain": "example.com", "technologies": ["React"],
        "metadata": {"is_responsive": True, "page_load_time": 812.5},
    }])
    [row] = (await client.get(SEARCH)).json()["results"]
    assert set(row) == {"id", "url", "technologies", "lastScraped", "metadata"}
    assert row["technologies"] == [{"name": "React", "category": "Other"}]
    assert row["metadata"] == {"is_responsive": True, "page_load_time": 812.5}


async def test_malformed_params_are_coerced(client, seed):
    await seed([{"domain": "example.com"}])
    response = await client.get(SEARCH, params={
        "page": "abc", "limit": "-5", "sort": "popularity", "order": "sideways",
        "https": "maybe",
    })
    assert response.status_code == 200
    pagination = response.json()["pagination"]
    assert pagination["page"] == 1
    assert pagination["limit"] == 20


async def test_limit_is_capped(client, seed):
    await seed([{"domain": "example.com"}])
    body = (await client.get(SEARCH, params={"limit": "5000"})).json()
    assert body["pagination"]["limit"] == 100


async def test_empty_catalog_returns_empty_envelope(client):
    body = (await client.get(SEARCH)).json()
    assert body["results"] == []
    assert body["suggestions"] == []
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 0, "totalPages": 0}


async def test_store_failure_returns_database_error(client, drop_tables):
    await drop_tables()
    response = await client.get(SEARCH, params={"q": "react"})
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "DATABASE_ERROR"


async def test_huge_page_is_an_empty_page(client, seed):
    await seed([{"domain": "example.com"}])
    for params in (
        {"page": "99999999999999999999"},
        {"page": "99999999999999999999", "q": "example"},
    ):
        response = await client.get(SEARCH, params=params)
        assert response.status_code == 200
        body = response.json()
        assert body["results"] == []
        assert body["pagination"]["total"] == 1
