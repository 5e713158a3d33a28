from ..schemas import UnitSystem, UnitSystemOut

UNIT_SYSTEMS = [
    UnitSystemOut(
        system=UnitSystem.METRIC,
        label="Metric",
        description="Celsius, grams, liters, centimeters",
    ),
    UnitSystemOut(
        system=UnitSystem.IMPERIAL,
        label="Imperial (US)",
        description="Fahrenheit, ounces, cups, inches",
    ),
]


def unit_system_rules(unit_system: UnitSystem) -> str:
    if UnitSystem.coerce(unit_system) == UnitSystem.METRIC:
        return """Use METRIC units only:
- Weights: grams (g), kilograms (kg)
- Volumes: milliliters (ml), liters (L), tablespoons, teaspoons
- Temperature: Celsius (°C)
- Example: "250g flour", "500ml milk", "2 tablespoons olive oil", "180°C\""""

    return """Use IMPERIAL (US) units only:
- Weights: ounces (oz), pounds (lbs)
- Volumes: cups, fluid ounces (fl oz), tablespoons (tbsp), teaspoons (tsp)
- Temperature: Fahrenheit (°F)
- Example: "2 cups flour", "1 cup milk", "2 tablespoons olive oil", "350°F\""""


def build_recipe_prompt(unit_system: UnitSystem) -> str:
    return f"""
Analyze this food image and generate a complete recipe.
IMPORTANT: Respond ONLY with a valid JSON object. Do not include any markdown formatting, code fences, explanations, or other text.

The JSON object must contain exactly these fields:
{{
  "title": "Name of the dish",
  "description": "Brief description (1-2 sentences)",
  "ingredients": [
    {{
      "name": "ingredient name",
      "quantity": "amount",
      "unit": "measurement unit"
    }}
  ],
  "instructions": ["step 1", "step 2", "step 3"],
  "cookingTime": 30,
  "servings": 4
}}

{unit_system_rules(unit_system)}

Make reasonable assumptions about quantities and cooking methods based on what you can see in the image.
Response must be valid JSON only.
""".strip()
