import json

from recipe_ingest.extractors import (
    JsonLdStrategy,
    RecipeContentExtractor,
    extract_recipe_content,
    extract_recipe_content_with_warnings,
    merge_missing,
)
from recipe_ingest.extractors.base import ContentStrategy
from recipe_ingest.models import ExtractedContent, Outcome


def _page(json_ld=None, body="", title="Page Title"):
    script = ""
    if json_ld is not None:
        payload = json_ld if isinstance(json_ld, str) else json.dumps(json_ld)
        script = f'<script type="application/ld+json">{payload}</script>'
    return f"<html><head><title>{title}</title>{script}</head><body>{body}</body></html>"


PANCAKES = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Pancakes",
    "description": "Fluffy pancakes",
    "prepTime": "PT10M",
    "recipeIngredient": ["1 cup flour", "2 eggs"],
    "recipeInstructions": [
        {"@type": "HowToStep", "text": "Mix."},
        {"@type": "HowToStep", "text": "Cook."},
    ],
    "recipeYield": ["4", "4 servings"],
}

SELECTOR_BODY = """
<ul class="wprm-recipe-ingredients">
  <li class="wprm-recipe-ingredient">1 lb beef</li>
  <li class="wprm-recipe-ingredient">2 carrots</li>
</ul>
<div class="wprm-recipe-instructions"><ul><li>Brown beef.</li><li>Simmer.</li></ul></div>
<span class="wprm-recipe-servings">6</span>
"""


def test_json_ld_recipe():
    content = extract_recipe_content(_page(PANCAKES))

    assert content.title == "Pancakes"
    assert content.ingredients_text == "1 cup flour\n2 eggs"
    assert content.instructions_text == "Mix.\nCook."
    assert content.recipe_yield_text == "4, 4 servings"
    assert content.description == "Fluffy pancakes"
    assert content.prep_time == "PT10M"


def test_json_ld_wins_over_selector_markup():
    body = '<ul class="ingredients"><li>3 cups sugar</li></ul>' + SELECTOR_BODY
    content = extract_recipe_content(_page(PANCAKES, body=body))

    assert content.ingredients_text == "1 cup flour\n2 eggs"
    assert content.instructions_text == "Mix.\nCook."
    assert content.recipe_yield_text == "4, 4 servings"


def test_json_ld_inside_graph():
    data = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebPage", "name": "Not a recipe"},
            {"@type": ["Recipe", "NewsArticle"], "name": "Soup",
             "recipeIngredient": ["water"], "recipeInstructions": "Boil.",
             "recipeYield": 2},
        ],
    }
    content = extract_recipe_content(_page(data))

    assert content.title == "Soup"
    assert content.instructions_text == "Boil."
    assert content.recipe_yield_text == "2"


def test_json_ld_inside_top_level_array():
    data = [{"@type": "Organization", "name": "Site"}, dict(PANCAKES, name="Waffles")]
    assert extract_recipe_content(_page(data)).title == "Waffles"


def test_instruction_sections_are_flattened_in_order():
    recipe = dict(PANCAKES, recipeInstructions=[
        {"@type": "HowToSection", "name": "Dough", "itemListElement": [
            {"@type": "HowToStep", "text": "Knead."},
            {"@type": "HowToStep", "text": "Rest."},
        ]},
        "Bake.",
    ])
    content = extract_recipe_content(_page(recipe))
    assert content.instructions_text == "Knead.\nRest.\nBake."


def test_malformed_json_ld_falls_back_to_selectors():
    outcome = extract_recipe_content_with_warnings(
        _page("{not json", body=SELECTOR_BODY, title="Stew"))
    content = outcome.value

    assert content.title == "Stew"
    assert set(content.ingredients_text.split("\n")) == {"1 lb beef", "2 carrots"}
    assert content.instructions_text == "Brown beef.\nSimmer."
    assert content.recipe_yield_text == "6"
    assert any("Malformed JSON-LD" in warning for warning in outcome.warnings)


def test_malformed_block_does_not_hide_a_later_recipe():
    html = (
        '<html><head><script type="application/ld+json">{oops</script>'
        f'<script type="application/ld+json">{json.dumps(PANCAKES)}</script>'
        "</head><body></body></html>"
    )
    assert extract_recipe_content(html).title == "Pancakes"


def test_block_selector_fallback_splits_lines():
    body = '<div class="directions">\nPreheat oven.\n\nBake 20 minutes.\n</div>'
    content = extract_recipe_content(_page(body=body))
    assert content.instructions_text == "Preheat oven.\nBake 20 minutes."


def test_yield_keyword_line():
    body = "<div><p><strong>Servings:</strong> 4 people</p></div>"
    content = extract_recipe_content(_page(body=body))
    assert content.recipe_yield_text == "Servings: 4 people"


def test_page_without_recipe_markup():
    content = extract_recipe_content(_page(body="<p>Nothing here</p>", title="Hello"))

    assert content.title == "Hello"
    assert content.ingredients_text is None
    assert content.instructions_text is None
    assert content.recipe_yield_text is None


def test_heading_used_when_title_missing():
    html = "<html><body><h1>My Cake</h1></body></html>"
    assert extract_recipe_content(html).title == "My Cake"


def test_empty_html_never_raises():
    outcome = extract_recipe_content_with_warnings("")
    assert outcome.value == ExtractedContent()
    assert outcome.warnings


def test_merge_missing_only_fills_unset_fields():
    base = ExtractedContent(title="A")
    partial = ExtractedContent(title="B", ingredients_text="x")

    merged = merge_missing(base, partial)

    assert merged.title == "A"
    assert merged.ingredients_text == "x"
    assert base.ingredients_text is None


class RecordingStrategy(ContentStrategy):
    name = "recording"

    def __init__(self):
        self.calls = 0

    def extract(self, soup, current):
        self.calls += 1
        return Outcome(ExtractedContent(title="ignored"))


def test_later_tiers_skipped_when_complete():
    recorder = RecordingStrategy()
    extractor = RecipeContentExtractor([JsonLdStrategy(), recorder])

    extractor.extract(_page(PANCAKES))

    assert recorder.calls == 0


def test_later_tiers_run_when_incomplete():
    recorder = RecordingStrategy()
    extractor = RecipeContentExtractor([JsonLdStrategy(), recorder])

    content = extractor.extract(_page(body="<p>no recipe</p>")).value

    assert recorder.calls == 1
    assert content.title == "ignored"
