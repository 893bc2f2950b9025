"""Built-in recipe catalog.

Always available, needs no credentials, and keeps recommendations working
when every remote source is disabled or failing. Loaded once; read-only.
"""

from recipe_matcher.models.models import Recipe

_CATALOG = [
    {
        "id": "local-1",
        "name": "Classic Chicken Stir Fry",
        "ingredients": ["chicken breast", "soy sauce", "garlic", "ginger", "bell pepper", "onion", "rice"],
        "instructions": [
            "Slice the chicken into thin strips.",
            "Stir fry the chicken in a hot wok until golden.",
            "Add garlic, ginger, onion and bell pepper; cook for 3 minutes.",
            "Stir in soy sauce and serve over rice.",
        ],
        "cook_time": 25,
        "servings": 4,
        "cuisine": "Chinese",
        "difficulty": "easy",
    },
    {
        "id": "local-2",
        "name": "Greek Salad",
        "ingredients": ["tomato", "cucumber", "red onion", "feta cheese", "olives", "olive oil", "oregano"],
        "instructions": [
            "Chop the tomato, cucumber and red onion.",
            "Add olives and crumbled feta cheese.",
            "Dress with olive oil and oregano.",
        ],
        "cook_time": 10,
        "servings": 2,
        "cuisine": "Greek",
        "difficulty": "easy",
    },
    {
        "id": "local-3",
        "name": "Vegetable Soup",
        "ingredients": ["carrot", "celery", "onion", "potato", "vegetable broth", "garlic", "thyme"],
        "instructions": [
            "Sweat onion, carrot and celery in a pot.",
            "Add garlic, potato, thyme and broth.",
            "Simmer for 30 minutes and season to taste.",
        ],
        "cook_time": 45,
        "servings": 6,
        "cuisine": "American",
        "difficulty": "easy",
    },
    {
        "id": "local-4",
        "name": "Spaghetti Aglio e Olio",
        "ingredients": ["spaghetti", "garlic", "olive oil", "red pepper flakes", "parsley", "parmesan cheese"],
        "instructions": [
            "Cook the spaghetti until al dente.",
            "Gently fry sliced garlic and pepper flakes in olive oil.",
            "Toss with pasta, parsley and parmesan.",
        ],
        "cook_time": 20,
        "servings": 2,
        "cuisine": "Italian",
        "difficulty": "easy",
    },
    {
        "id": "local-5",
        "name": "Beef Tacos",
        "ingredients": ["ground beef", "taco shells", "lettuce", "tomato", "cheddar cheese", "sour cream", "onion"],
        "instructions": [
            "Brown the ground beef with chopped onion.",
            "Warm the taco shells.",
            "Fill with beef, lettuce, tomato, cheese and sour cream.",
        ],
        "cook_time": 20,
        "servings": 4,
        "cuisine": "Mexican",
        "difficulty": "easy",
    },
    {
        "id": "local-6",
        "name": "Mushroom Risotto",
        "ingredients": ["arborio rice", "mushrooms", "onion", "white wine", "vegetable broth", "butter", "parmesan cheese"],
        "instructions": [
            "Saute onion and mushrooms in butter.",
            "Toast the rice, then deglaze with white wine.",
            "Add broth a ladle at a time, stirring, until creamy.",
            "Finish with butter and parmesan.",
        ],
        "cook_time": 40,
        "servings": 4,
        "cuisine": "Italian",
        "difficulty": "medium",
    },
    {
        "id": "local-7",
        "name": "Shakshuka",
        "ingredients": ["eggs", "tomato", "bell pepper", "onion", "garlic", "cumin", "paprika"],
        "instructions": [
            "Cook onion and bell pepper until soft.",
            "Add garlic, spices and chopped tomato; simmer into a sauce.",
            "Make wells in the sauce and poach the eggs until set.",
        ],
        "cook_time": 30,
        "servings": 3,
        "cuisine": "Middle Eastern",
        "difficulty": "easy",
    },
    {
        "id": "local-8",
        "name": "Salmon with Lemon and Dill",
        "ingredients": ["salmon fillet", "lemon", "dill", "butter", "garlic", "asparagus"],
        "instructions": [
            "Season the salmon and top with lemon slices and dill.",
            "Roast with asparagus at 200C for 15 minutes.",
            "Spoon over garlic butter before serving.",
        ],
        "cook_time": 25,
        "servings": 2,
        "cuisine": "Scandinavian",
        "difficulty": "easy",
    },
    {
        "id": "local-9",
        "name": "Chickpea Curry",
        "ingredients": ["chickpeas", "coconut milk", "onion", "garlic", "ginger", "curry powder", "spinach", "rice"],
        "instructions": [
            "Fry onion, garlic and ginger with curry powder.",
            "Add chickpeas and coconut milk; simmer for 15 minutes.",
            "Wilt in the spinach and serve with rice.",
        ],
        "cook_time": 35,
        "servings": 4,
        "cuisine": "Indian",
        "difficulty": "easy",
    },
    {
        "id": "local-10",
        "name": "Cauliflower Fried Rice",
        "ingredients": ["cauliflower rice", "eggs", "peas", "carrot", "soy sauce", "green onion", "sesame oil"],
        "instructions": [
            "Scramble the eggs and set aside.",
            "Stir fry carrot and peas in sesame oil.",
            "Add cauliflower rice and soy sauce, then fold in eggs and green onion.",
        ],
        "cook_time": 20,
        "servings": 2,
        "cuisine": "Asian",
        "difficulty": "easy",
    },
    {
        "id": "local-11",
        "name": "Beef Bourguignon",
        "ingredients": ["beef chuck", "red wine", "bacon", "carrot", "onion", "mushrooms", "garlic", "thyme", "beef broth"],
        "instructions": [
            "Brown bacon and beef in batches.",
            "Add vegetables, wine and broth.",
            "Braise in the oven for 3 hours.",
        ],
        "cook_time": 210,
        "servings": 6,
        "cuisine": "French",
        "difficulty": "hard",
    },
    {
        "id": "local-12",
        "name": "Banana Pancakes",
        "ingredients": ["banana", "eggs", "flour", "milk", "baking powder", "butter", "maple syrup"],
        "instructions": [
            "Mash the banana and whisk with eggs and milk.",
            "Fold in flour and baking powder.",
            "Cook in butter and serve with maple syrup.",
        ],
        "cook_time": 20,
        "servings": 3,
        "cuisine": "American",
        "difficulty": "easy",
    },
]

LOCAL_RECIPES: tuple[Recipe, ...] = tuple(Recipe(**entry) for entry in _CATALOG)


def get_local_recipes() -> list[Recipe]:
    """All recipes of the built-in catalog, in catalog order."""
    return list(LOCAL_RECIPES)
