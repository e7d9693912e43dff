"""
Starter food database used when the food store is empty.
"""
from diet_tracker.models.food import BasicFood, CompositeFood

# (id, name, keywords, calories per serving)
BASIC_FOODS = [
    # Dairy
    ("milk_whole", "Whole Milk (1 cup)", "milk,dairy,drink", 150),
    ("milk_skim", "Skim Milk (1 cup)", "milk,dairy,drink,skim", 90),
    ("cheese_cheddar", "Cheddar Cheese (1 oz)", "cheese,dairy,cheddar", 110),
    ("yogurt_plain", "Plain Yogurt (1 cup)", "yogurt,dairy", 120),
    # Meat & protein
    ("chicken_breast", "Chicken Breast (4 oz)", "chicken,meat,protein", 170),
    ("beef_ground", "Ground Beef 85% (4 oz)", "beef,meat,protein", 240),
    ("eggs", "Eggs (1 large)", "eggs,protein", 70),
    ("tuna", "Tuna (1 can)", "tuna,fish,protein", 180),
    # Fruits
    ("apple", "Apple (medium)", "apple,fruit", 95),
    ("banana", "Banana (medium)", "banana,fruit,sweet", 105),
    ("orange", "Orange (medium)", "orange,fruit,citrus", 65),
    ("strawberries", "Strawberries (1 cup)", "strawberry,fruit,berries,sweet", 50),
    # Vegetables
    ("broccoli", "Broccoli (1 cup)", "broccoli,vegetable,veggie", 55),
    ("carrot", "Carrot (medium)", "carrot,vegetable,veggie", 25),
    ("spinach", "Spinach (1 cup)", "spinach,vegetable,veggie,leafy", 7),
    ("potato", "Potato (medium)", "potato,vegetable,starchy", 110),
    # Grains & starches
    ("bread_wheat", "Wheat Bread (1 slice)", "bread,grain,wheat", 80),
    ("rice_white", "White Rice (1 cup cooked)", "rice,grain,white", 200),
    ("pasta", "Pasta (1 cup cooked)", "pasta,grain", 220),
    ("oatmeal", "Oatmeal (1 cup cooked)", "oatmeal,grain,breakfast", 160),
    # Other
    ("peanut_butter", "Peanut Butter (2 tbsp)", "peanut,butter,spread", 190),
    ("jelly", "Grape Jelly (1 tbsp)", "jelly,grape,spread,sweet", 50),
    ("olive_oil", "Olive Oil (1 tbsp)", "oil,fat", 120),
    ("soda", "Soda (12 oz can)", "soda,drink,sugar,sweet", 150),
]

# (id, name, keywords, [(component id, servings), ...]) in dependency order
COMPOSITE_FOODS = [
    ("pb_sandwich", "Peanut Butter Sandwich", "sandwich,peanut butter,lunch",
     [("bread_wheat", 2), ("peanut_butter", 1)]),
    ("pbj_sandwich", "PB&J Sandwich", "sandwich,peanut butter,jelly,lunch",
     [("pb_sandwich", 1), ("jelly", 1)]),
]


def seed_foods(food_repo) -> int:
    """
    Populate an empty food repository with the starter foods.

    Seeding bypasses the undo history: it is start-up initialization,
    not a user action.

    Returns:
        Number of foods added (0 if the repository already had foods)
    """
    if len(food_repo) > 0:
        return 0

    for food_id, name, keywords, calories in BASIC_FOODS:
        food_repo.upsert(BasicFood(food_id, name, set(keywords.split(",")), calories))

    for food_id, name, keywords, components in COMPOSITE_FOODS:
        food_repo.upsert(CompositeFood(food_id, name, set(keywords.split(",")), components))

    return len(BASIC_FOODS) + len(COMPOSITE_FOODS)
