"""
Realistic test constants for the NutriPlan test suite.

Body metrics, recipe nutrition and goal settings based on real-world values so
the calorie arithmetic in tests reads like actual meal plans.
"""

from datetime import date

# =============================================================================
# USER PROFILES - Body metrics with hand-checked energy targets
# =============================================================================

REALISTIC_PROFILES = {
    # BMR 10*70 + 6.25*175 - 5*30 + 5 = 1648.75; x1.55 = 2555.56 -> 2556
    "michael": {
        "weight_kg": 70.0,
        "height_cm": 175.0,
        "age": 30,
        "sex": "male",
        "activity": "moderate",
        "meals": ["breakfast", "lunch", "dinner"],
        "expected_bmr": 1648.75,
        "expected_daily": 2556,
    },
    # BMR 10*60 + 6.25*160 - 5*25 - 161 = 1314; x1.2 = 1576.8 -> 1577
    "sarah": {
        "weight_kg": 60.0,
        "height_cm": 160.0,
        "age": 25,
        "sex": "female",
        "activity": "sedentary",
        "meals": ["breakfast", "lunch", "dinner"],
        "expected_bmr": 1314.0,
        "expected_daily": 1577,
    },
    # BMR 10*85 + 6.25*182 - 5*42 + 5 = 1782.5; x1.9 = 3386.75 -> 3387
    "raj": {
        "weight_kg": 85.0,
        "height_cm": 182.0,
        "age": 42,
        "sex": "male",
        "activity": "very_active",
        "meals": ["dinner", "snack", "breakfast", "lunch"],
        "expected_bmr": 1782.5,
        "expected_daily": 3387,
    },
}

# =============================================================================
# RECIPES - Nutrition per serving, grouped by meal-time tag
# =============================================================================

MORNING_RECIPES = [
    ("Overnight Oats with Berries", 320, {"protein": 11, "carbs": 52, "fat": 8, "fiber": 7, "sugar": 14}),
    ("Greek Yogurt Parfait", 250, {"protein": 17, "carbs": 30, "fat": 6, "fiber": 3, "sugar": 18}),
    ("Spinach Mushroom Omelette", 280, {"protein": 20, "carbs": 4, "fat": 20, "fiber": 1, "sugar": 2}),
    ("Avocado Toast", 310, {"protein": 8, "carbs": 32, "fat": 17, "fiber": 8, "sugar": 3}),
    ("Banana Peanut Smoothie", 290, {"protein": 12, "carbs": 40, "fat": 10, "fiber": 5, "sugar": 24}),
    ("Buckwheat Pancakes", 360, {"protein": 10, "carbs": 58, "fat": 9, "fiber": 4, "sugar": 12}),
    ("Cottage Cheese Bowl", 210, {"protein": 24, "carbs": 12, "fat": 6, "fiber": 1, "sugar": 9}),
    ("Chia Pudding", 230, {"protein": 7, "carbs": 22, "fat": 13, "fiber": 10, "sugar": 8}),
]

MIDDAY_RECIPES = [
    ("Grilled Chicken Quinoa Bowl", 540, {"protein": 42, "carbs": 48, "fat": 18, "fiber": 7, "sugar": 5}),
    ("Lentil Soup", 330, {"protein": 18, "carbs": 48, "fat": 6, "fiber": 15, "sugar": 6}),
    ("Tuna Nicoise Salad", 420, {"protein": 32, "carbs": 20, "fat": 22, "fiber": 5, "sugar": 4}),
    ("Turkey Wrap", 390, {"protein": 28, "carbs": 36, "fat": 14, "fiber": 4, "sugar": 3}),
    ("Falafel Pita", 480, {"protein": 16, "carbs": 60, "fat": 19, "fiber": 10, "sugar": 5}),
    ("Caprese Sandwich", 450, {"protein": 19, "carbs": 42, "fat": 22, "fiber": 3, "sugar": 6}),
    ("Chickpea Buddha Bowl", 510, {"protein": 20, "carbs": 66, "fat": 17, "fiber": 14, "sugar": 9}),
]

AFTERNOON_RECIPES = [
    ("Apple with Almond Butter", 190, {"protein": 4, "carbs": 25, "fat": 9, "fiber": 5, "sugar": 19}),
    ("Hummus and Carrots", 150, {"protein": 5, "carbs": 16, "fat": 8, "fiber": 5, "sugar": 5}),
    ("Trail Mix", 210, {"protein": 6, "carbs": 18, "fat": 14, "fiber": 3, "sugar": 10}),
    ("Rice Cakes with Ricotta", 140, {"protein": 7, "carbs": 18, "fat": 4, "fiber": 1, "sugar": 2}),
    ("Edamame", 120, {"protein": 11, "carbs": 9, "fat": 5, "fiber": 5, "sugar": 2}),
    ("Protein Bar", 200, {"protein": 20, "carbs": 22, "fat": 7, "fiber": 3, "sugar": 6}),
    ("Dark Chocolate Square", 110, {"protein": 1, "carbs": 9, "fat": 8, "fiber": 2, "sugar": 6}),
]

EVENING_RECIPES = [
    ("Baked Salmon with Asparagus", 520, {"protein": 40, "carbs": 10, "fat": 34, "fiber": 4, "sugar": 3}),
    ("Beef Stir Fry", 580, {"protein": 38, "carbs": 45, "fat": 24, "fiber": 5, "sugar": 9}),
    ("Vegetable Curry", 430, {"protein": 12, "carbs": 55, "fat": 17, "fiber": 11, "sugar": 12}),
    ("Chicken Fajitas", 490, {"protein": 36, "carbs": 40, "fat": 19, "fiber": 6, "sugar": 6}),
    ("Shrimp Pasta", 610, {"protein": 32, "carbs": 72, "fat": 20, "fiber": 4, "sugar": 6}),
    ("Stuffed Bell Peppers", 400, {"protein": 24, "carbs": 35, "fat": 16, "fiber": 7, "sugar": 10}),
    ("Tofu Teriyaki", 450, {"protein": 22, "carbs": 48, "fat": 18, "fiber": 5, "sugar": 14}),
]

RECIPES_BY_TAG = {
    "morning": MORNING_RECIPES,
    "midday": MIDDAY_RECIPES,
    "afternoon": AFTERNOON_RECIPES,
    "evening": EVENING_RECIPES,
}

# =============================================================================
# DATES
# =============================================================================

PLAN_DATE = date(2024, 3, 4)
WEEK_START = date(2024, 3, 11)
