"""
Recipe catalog mappers.
Turns MongoDB recipe documents into the engine's RecipeNutritionRecord values.
"""

from typing import Any, Dict, Mapping

from domain.nutrition import Ingredient, MacroVector, RecipeNutritionRecord, nutrient_amount


class RecipeMapper:
    """Mapper for recipe documents."""

    @staticmethod
    def to_record(doc: Mapping[str, Any]) -> RecipeNutritionRecord:
        """
        Convert a catalog document to a RecipeNutritionRecord.

        Missing nutrition fields count as 0. Ingredients keep name and amount
        only; entries without a name are dropped.
        """
        nutrition: Dict[str, Any] = doc.get("nutrition") or {}
        ingredients = []
        for item in doc.get("ingredients") or []:
            if isinstance(item, Mapping):
                name = item.get("name")
                amount = item.get("amount")
            else:
                name, amount = item, ""
            if not name:
                continue
            ingredients.append(Ingredient(str(name), "" if amount is None else str(amount)))

        return RecipeNutritionRecord(
            recipe_id=str(doc.get("_id") or doc.get("id")),
            name=doc.get("name") or doc.get("title") or "",
            calories=nutrient_amount(nutrition.get("calories")),
            macros=MacroVector.from_mapping(nutrition),
            image_url=doc.get("image") or doc.get("image_url"),
            ingredients=tuple(ingredients),
        )
