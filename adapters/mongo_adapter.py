"""MongoDB adapter for the recipe catalog.
"""

from typing import Optional, Dict, List, Any, Sequence
import logging
from bson import ObjectId
from pymongo import MongoClient

from app.config import settings

logger = logging.getLogger("nutriplan.mongo")

_client = None
_db = None

# Strength 2 compares case-insensitively, so tag and ingredient matches are
# exact apart from case.
CASE_INSENSITIVE = {"locale": "en", "strength": 2}

PUBLISHED = "published"


# ------------------ Connection ------------------
def _get_db():
    """Lazy init DB connection."""
    global _client, _db
    if _db is not None:
        return _db
    _client = MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )
    _db = _client[settings.mongo_db_name]
    return _db


def connect(uri: str, db_name: str):
    global _client, _db
    try:
        _client = MongoClient(
            uri, serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms
        )
        _db = _client[db_name]
        _client.admin.command("ping")
        logger.info(f"Connected to MongoDB {uri} (database: {db_name})")
    except Exception as exc:
        _client = None
        _db = None
        logger.warning(f"Could not initialize MongoDB client: {exc}, will retry lazily")


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    except Exception:
        logger.exception("Error closing MongoDB client")
    finally:
        _client = None
        _db = None


def ping() -> bool:
    """Return True when the catalog answers a ping."""
    try:
        _get_db().client.admin.command("ping")
        return True
    except Exception as exc:
        logger.warning(f"MongoDB ping failed: {exc}")
        return False


# ------------------ Queries ------------------
def build_candidate_match(
        required_tag: str,
        optional_tag: Optional[str] = None,
        excluded_ingredient_names: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Build the $match stage for candidate sampling.

    Args:
        required_tag: Meal-time tag the recipe must carry
        optional_tag: Diet tag the recipe must also carry, if any
        excluded_ingredient_names: Ingredient names that disqualify a recipe

    Returns:
        MongoDB filter document
    """
    match: Dict[str, Any] = {"status": PUBLISHED}

    if optional_tag:
        match["tags"] = {"$all": [required_tag, optional_tag]}
    else:
        match["tags"] = required_tag

    names = [n.strip() for n in excluded_ingredient_names or [] if n and n.strip()]
    if names:
        match["ingredients.name"] = {"$nin": names}

    return match


def sample_recipes(
        required_tag: str,
        optional_tag: Optional[str] = None,
        excluded_ingredient_names: Optional[Sequence[str]] = None,
        sample_size: int = 20,
) -> List[Dict[str, Any]]:
    """Randomly sample published recipes matching the tag filters.

    Errors from the driver propagate to the caller.

    Returns:
        List of recipe documents (at most sample_size)
    """
    pipeline = [
        {"$match": build_candidate_match(required_tag, optional_tag, excluded_ingredient_names)},
        {"$sample": {"size": sample_size}},
    ]
    recipes = list(_get_db().recipes.aggregate(pipeline, collation=CASE_INSENSITIVE))
    logger.info(
        f"Sampled {len(recipes)} recipes for tag={required_tag} diet={optional_tag} "
        f"excluded={len(excluded_ingredient_names or [])}"
    )
    return recipes


def _id_filter(recipe_id: str) -> Dict[str, Any]:
    if ObjectId.is_valid(recipe_id):
        return {"_id": {"$in": [ObjectId(recipe_id), recipe_id]}}
    return {"_id": recipe_id}


def get_recipe(recipe_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a single recipe by ID.

    Args:
        recipe_id: ObjectId hex string or string key

    Returns:
        Recipe document or None if not found
    """
    recipe = _get_db().recipes.find_one(_id_filter(str(recipe_id)))
    if recipe:
        logger.debug(f"Recipe found: {recipe_id}")
    else:
        logger.debug(f"Recipe not found: {recipe_id}")
    return recipe
