from ..schemas import Recipe


def format_recipe_text(recipe: Recipe) -> str:
    """Plain-text rendering used for copy/paste and sharing."""
    text = f"{recipe.title}\n\n"

    if recipe.description:
        text += f"{recipe.description}\n\n"

    if recipe.servings or recipe.cooking_time:
        text += "DETAILS:\n"
        if recipe.servings:
            text += f"Servings: {recipe.servings}\n"
        if recipe.cooking_time:
            text += f"Cooking Time: {recipe.cooking_time} minutes\n"
        text += "\n"

    text += "INGREDIENTS:\n"
    for ing in recipe.ingredients:
        line = " ".join(part for part in (ing.quantity, ing.unit, ing.name) if part)
        text += f"• {line}\n"

    text += "\nINSTRUCTIONS:\n"
    for i, step in enumerate(recipe.instructions, start=1):
        text += f"{i}. {step}\n"

    return text
