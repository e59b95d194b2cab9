"""
Tests for the meal composer: best single fit, bounded pair search,
over-budget fallback and snapshot copies.
"""

import pytest
from dataclasses import replace

from app.exceptions import NoCandidatesError
from domain.enums import MealSlot
from services.meal_composer import compose_slot
from test_fixtures import make_record


def calories(selections):
    return [s.calories for s in selections]


def test_pair_over_budget_falls_back_to_best_single():
    # 300 + 250 = 550 does not fit a 528 budget, so the single 300 dish wins
    pool = [make_record("Overnight Oats", 300), make_record("Yogurt Parfait", 250)]

    chosen = compose_slot(pool, 528, MealSlot.BREAKFAST)

    assert calories(chosen) == [300]
    assert not chosen[0].over_budget


def test_pair_beating_single_is_selected():
    pool = [
        make_record("Lentil Soup", 330),
        make_record("Caprese Sandwich", 450),
        make_record("Edamame", 120),
    ]

    chosen = compose_slot(pool, 500, MealSlot.LUNCH)

    # best single is 450; best pair under 500 is 330 + 120 = 450, not better
    assert calories(chosen) == [450]

    chosen = compose_slot(pool, 600, MealSlot.LUNCH)
    # 450 + 120 = 570 beats the single 450
    assert sorted(calories(chosen)) == [120, 450]


def test_pair_never_worse_than_best_single():
    pool = [make_record(f"Dish {c}", c) for c in (180, 220, 260, 310, 400, 90)]

    for budget in range(200, 900, 37):
        chosen = compose_slot(pool, budget, MealSlot.DINNER)
        fits = [r.calories for r in pool if r.calories <= budget]
        assert sum(calories(chosen)) <= budget
        assert sum(calories(chosen)) >= max(fits)


def test_no_pair_search_below_two_hundred():
    pool = [make_record("Edamame", 120), make_record("Dark Chocolate", 60)]

    chosen = compose_slot(pool, 199, MealSlot.SNACK)

    assert calories(chosen) == [120]


def test_pair_search_at_two_hundred():
    pool = [make_record("Edamame", 120), make_record("Dark Chocolate", 60)]

    chosen = compose_slot(pool, 200, MealSlot.SNACK)

    assert sorted(calories(chosen)) == [60, 120]


def test_nothing_fits_uses_cheapest_and_flags_it():
    pool = [
        make_record("Shrimp Pasta", 610),
        make_record("Vegetable Curry", 430),
        make_record("Beef Stir Fry", 580),
    ]

    chosen = compose_slot(pool, 400, MealSlot.DINNER)

    assert calories(chosen) == [430]
    assert chosen[0].over_budget is True


def test_non_positive_calories_are_discarded():
    pool = [make_record("Water", 0), make_record("Broken Entry", -50), make_record("Trail Mix", 210)]

    chosen = compose_slot(pool, 300, MealSlot.SNACK)

    assert calories(chosen) == [210]


def test_empty_pool_raises_no_candidates_naming_slot_and_tag():
    with pytest.raises(NoCandidatesError) as exc_info:
        compose_slot([make_record("Water", 0)], 500, MealSlot.DINNER)

    assert exc_info.value.slot == "Dinner"
    assert exc_info.value.tag == "evening"
    assert exc_info.value.http_status == 422


def test_ties_keep_first_candidate():
    first = make_record("Turkey Wrap", 390, recipe_id="first")
    second = make_record("Chicken Wrap", 390, recipe_id="second")

    chosen = compose_slot([first, second], 395, MealSlot.LUNCH)

    assert [s.recipe_id for s in chosen] == ["first"]


def test_tied_pairs_keep_first_pair():
    pool = [
        make_record("A", 100, recipe_id="a"),
        make_record("B", 200, recipe_id="b"),
        make_record("C", 150, recipe_id="c"),
        make_record("D", 150, recipe_id="d"),
    ]

    chosen = compose_slot(pool, 300, MealSlot.LUNCH)

    # (a, b) and (c, d) both reach 300; (a, b) comes first
    assert [s.recipe_id for s in chosen] == ["a", "b"]


def test_selection_is_a_snapshot():
    record = make_record(
        "Baked Salmon",
        520,
        protein=40,
        fat=34,
        ingredients=[("salmon fillet", "180 g"), ("asparagus", "1 bunch")],
    )

    chosen = compose_slot([record], 600, MealSlot.DINNER)
    edited = replace(record, calories=900)

    selection = chosen[0]
    assert edited.calories == 900
    assert selection.calories == 520
    assert selection.macros.protein == 40
    assert selection.macros.carbs == 0
    assert selection.label == "Dinner"
    assert [i.name for i in selection.ingredients] == ["salmon fillet", "asparagus"]
