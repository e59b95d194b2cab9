"""
Recipe Repository - Read-only access to the recipe catalog (MongoDB)
"""

from typing import List, Optional, Sequence
from adapters import mongo_adapter
from domain.mappers.recipe_mapper import RecipeMapper
from domain.nutrition import RecipeNutritionRecord


class RecipeRepository:
    """
    Repository for recipe data access from MongoDB.
    Wraps mongo_adapter functions and returns engine records instead of
    raw documents.
    """

    def fetch_candidates(
        self,
        required_tag: str,
        optional_tag: Optional[str] = None,
        excluded_ingredient_names: Optional[Sequence[str]] = None,
        sample_size: int = 20,
    ) -> List[RecipeNutritionRecord]:
        """Random sample of published recipes carrying the given tags

        Args:
            required_tag: Meal-time tag every candidate carries
            optional_tag: Diet tag every candidate also carries, if set
            excluded_ingredient_names: Allergen names no candidate may contain
            sample_size: Upper bound on the number of candidates

        Returns:
            List of recipe records
        """
        docs = mongo_adapter.sample_recipes(
            required_tag,
            optional_tag=optional_tag,
            excluded_ingredient_names=excluded_ingredient_names,
            sample_size=sample_size,
        )
        return [RecipeMapper.to_record(doc) for doc in docs]

    def get_record_by_id(self, recipe_id: str) -> Optional[RecipeNutritionRecord]:
        """Get one recipe as a record, or None if the catalog has no such ID"""
        doc = mongo_adapter.get_recipe(recipe_id)
        return RecipeMapper.to_record(doc) if doc else None
