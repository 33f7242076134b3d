"""
Tests for heuristic (markup-based) recipe extraction.
Run with: pytest tests/test_heuristic.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bs4 import BeautifulSoup

from services.heuristic import (
    extract_heuristic_recipe,
    extract_title,
    find_all_matching_class_substring,
)

URL = 'https://example.com/blog/soup'


def _soup(body, head=''):
    return BeautifulSoup(f'<html><head>{head}</head><body>{body}</body></html>', 'html.parser')


def test_title_from_recipe_title_class():
    soup = _soup('<div class="wprm-recipe-title">Tomato Soup</div>', '<title>Ignored - Blog</title>')
    assert extract_title(soup) == 'Tomato Soup'


def test_title_from_h1():
    soup = _soup('<h1> Lentil Stew </h1>', '<title>Ignored - Blog</title>')
    assert extract_title(soup) == 'Lentil Stew'


def test_title_falls_back_to_page_title_without_site_name():
    assert extract_title(_soup('', '<title>Best Pancakes - My Blog</title>')) == 'Best Pancakes'
    assert extract_title(_soup('', '<title>Best Pancakes | My Blog</title>')) == 'Best Pancakes'
    assert extract_title(_soup('', '<title>Best Pancakes</title>')) == 'Best Pancakes'


def test_title_placeholder_when_nothing_found():
    assert extract_title(_soup('<p>hello</p>')) == 'Imported Recipe'
    assert extract_title(_soup('', '<title> - My Blog</title>')) == 'Imported Recipe'


def test_empty_title_element_is_skipped():
    soup = _soup('<h1></h1>', '<title>Garden Salad - Blog</title>')
    assert extract_title(soup) == 'Garden Salad'


def test_description_from_meta():
    soup = _soup('', '<meta name="description" content="A warming soup.">')
    assert extract_heuristic_recipe(soup, URL).description == 'A warming soup.'
    assert extract_heuristic_recipe(_soup(''), URL).description == ''


def test_ingredients_from_class_names():
    body = (
        '<ul>'
        '<li class="Recipe-Ingredient">2 carrots</li>'
        '<li class="ingredient-item">1 onion</li>'
        '<li class="ingredient"></li>'
        '<li class="other">not me</li>'
        '</ul>'
    )
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert [i.name for i in recipe.ingredients] == ['2 carrots', '1 onion']
    assert all(i.amount is None and i.unit is None for i in recipe.ingredients)


def test_long_ingredient_text_is_excluded():
    long_text = 'x' * 201
    body = f'<p class="ingredients">{long_text}</p><span class="ingredient">{"y" * 200}</span>'
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert [i.name for i in recipe.ingredients] == ['y' * 200]


def test_ingredients_are_capped():
    body = ''.join(f'<li class="ingredient">item {n}</li>' for n in range(60))
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert len(recipe.ingredients) == 50
    assert recipe.ingredients[0].name == 'item 0'
    assert recipe.ingredients[-1].name == 'item 49'


def test_steps_from_class_names():
    body = (
        '<div class="instructions-text">Bring the stock to a boil.</div>'
        '<div class="step-number">Step 1</div>'
        '<div class="Direction">Add the lentils and simmer.</div>'
        '<div class="recipe-step">Serve hot with bread.</div>'
    )
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert [s.instruction for s in recipe.steps] == [
        'Bring the stock to a boil.',
        'Add the lentils and simmer.',
        'Serve hot with bread.',
    ]
    assert all(s.timer_seconds is None for s in recipe.steps)


def test_short_step_text_is_excluded():
    body = '<p class="step">0123456789</p><p class="step">0123456789A</p>'
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert [s.instruction for s in recipe.steps] == ['0123456789A']


def test_steps_are_capped():
    body = ''.join(f'<p class="step">Do the thing number {n}.</p>' for n in range(40))
    recipe = extract_heuristic_recipe(_soup(body), URL)
    assert len(recipe.steps) == 30


def test_sparse_page_defaults():
    recipe = extract_heuristic_recipe(_soup(''), URL)
    assert recipe.title == 'Imported Recipe'
    assert recipe.prep_time_minutes is None
    assert recipe.cook_time_minutes is None
    assert recipe.servings == 4
    assert recipe.ingredients == ()
    assert recipe.steps == ()
    assert recipe.source_url == URL


def test_find_all_matching_class_substring():
    soup = _soup(
        '<div class="A-Instruction">one</div>'
        '<div class="other">two</div>'
        '<div class="step direction">three</div>'
        '<div>four</div>'
    )
    matches = find_all_matching_class_substring(soup, ['instruction', 'step', 'direction'])
    assert [tag.get_text() for tag in matches] == ['one', 'three']
