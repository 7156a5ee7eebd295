import json

import pytest

from recipe_ingest.config import Settings
from recipe_ingest.exceptions import FetchError
from recipe_ingest.services import recipe_service

RECIPE_HTML = (
    "<html><head><title>Pancakes | Site</title>"
    '<script type="application/ld+json">{broken</script>'
    '<script type="application/ld+json">'
    + json.dumps({
        "@type": "Recipe",
        "name": "Pancakes",
        "recipeIngredient": ["1 cup flour", "2 eggs", "1 cup milk"],
        "recipeInstructions": ["Mix.", "Cook."],
        "recipeYield": "4 servings",
    })
    + "</script></head><body></body></html>"
)


@pytest.fixture
def fetched_urls(monkeypatch):
    urls = []

    def fake_fetch(url, settings):
        urls.append(url)
        return RECIPE_HTML

    monkeypatch.setattr(recipe_service, "fetch_html", fake_fetch)
    return urls


def test_fetch_and_extract(fetched_urls):
    settings = Settings(max_ingredient_lines=1, max_instruction_lines=5)
    url = "www.Example.com/pancakes/?utm_source=newsletter"

    result = recipe_service.fetch_and_extract(url, settings)

    assert fetched_urls == ["https://www.Example.com/pancakes/?utm_source=newsletter"]
    assert result.cache_key == "https://example.com/pancakes"
    assert result.source_url == url
    assert result.content.title == "Pancakes"
    assert result.content.ingredients_text == "1 cup flour\n\n[CONTENT TRUNCATED]"
    assert result.content.instructions_text == "Mix.\nCook."
    assert result.content.recipe_yield_text == "4 servings"
    assert len(result.warnings) == 1


@pytest.mark.parametrize(
    "url",
    [
        "https://www.Example.com/Recipes/Pie?tag=apple&id=3",
        "https://example.com:abc/Path/Pie",
    ],
)
def test_fetch_uses_url_as_given(fetched_urls, url):
    result = recipe_service.fetch_and_extract(f"  {url} ", Settings())

    assert fetched_urls == [url]
    assert result.cache_key != url


def test_fetch_errors_propagate(monkeypatch):
    def failing_fetch(url, settings):
        raise FetchError(url, "blocked")

    monkeypatch.setattr(recipe_service, "fetch_html", failing_fetch)

    with pytest.raises(FetchError):
        recipe_service.fetch_and_extract("https://example.com/r", Settings())
