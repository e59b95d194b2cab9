"""
Tests for the recipe catalog boundary: the candidate $match filter, the
sampling pipeline and document mapping. MongoDB itself is replaced by a
recording stub collection.
"""

from types import SimpleNamespace

from bson import ObjectId

from adapters import mongo_adapter
from domain.mappers import RecipeMapper
from repositories import RecipeRepository


class RecordingCollection:
    def __init__(self, docs=None):
        self.docs = docs or []
        self.aggregate_calls = []
        self.find_one_calls = []

    def aggregate(self, pipeline, **kwargs):
        self.aggregate_calls.append((pipeline, kwargs))
        return iter(self.docs)

    def find_one(self, query):
        self.find_one_calls.append(query)
        return self.docs[0] if self.docs else None


def use_collection(monkeypatch, collection):
    monkeypatch.setattr(mongo_adapter, "_get_db", lambda: SimpleNamespace(recipes=collection))


def test_match_requires_published_and_meal_time_tag():
    match = mongo_adapter.build_candidate_match("morning")

    assert match == {"status": "published", "tags": "morning"}


def test_match_with_diet_tag_requires_both_tags():
    match = mongo_adapter.build_candidate_match("evening", "vegan")

    assert match["tags"] == {"$all": ["evening", "vegan"]}


def test_match_excludes_allergen_ingredients():
    match = mongo_adapter.build_candidate_match("midday", None, ["Peanuts", " shrimp ", ""])

    assert match["ingredients.name"] == {"$nin": ["Peanuts", "shrimp"]}


def test_sample_recipes_pipeline_and_collation(monkeypatch):
    collection = RecordingCollection([{"_id": "r1", "name": "Lentil Soup"}])
    use_collection(monkeypatch, collection)

    docs = mongo_adapter.sample_recipes("midday", "vegetarian", ["celery"], sample_size=20)

    assert docs == [{"_id": "r1", "name": "Lentil Soup"}]
    pipeline, kwargs = collection.aggregate_calls[0]
    assert pipeline[0]["$match"]["tags"] == {"$all": ["midday", "vegetarian"]}
    assert pipeline[1] == {"$sample": {"size": 20}}
    # case-insensitive exact matching, no regular expressions
    assert kwargs["collation"] == {"locale": "en", "strength": 2}


def test_get_recipe_accepts_object_id_strings(monkeypatch):
    oid = ObjectId()
    collection = RecordingCollection([{"_id": oid, "name": "Beef Stir Fry"}])
    use_collection(monkeypatch, collection)

    mongo_adapter.get_recipe(str(oid))

    assert collection.find_one_calls[0] == {"_id": {"$in": [oid, str(oid)]}}


def test_get_recipe_accepts_plain_string_ids(monkeypatch):
    collection = RecordingCollection()
    use_collection(monkeypatch, collection)

    assert mongo_adapter.get_recipe("tofu-teriyaki") is None
    assert collection.find_one_calls[0] == {"_id": "tofu-teriyaki"}


def test_mapper_defaults_missing_nutrition_to_zero():
    record = RecipeMapper.to_record(
        {
            "_id": ObjectId("65f1c0ffee0000000000abcd"),
            "name": "Chickpea Buddha Bowl",
            "image": "https://img.example.com/bowl.jpg",
            "nutrition": {"calories": 510, "protein": 20, "fat": None},
            "ingredients": [
                {"name": "chickpeas", "amount": "1 cup"},
                {"name": "tahini"},
                {"amount": "orphan"},
                "spinach",
            ],
        }
    )

    assert record.recipe_id == "65f1c0ffee0000000000abcd"
    assert record.calories == 510
    assert record.macros.protein == 20
    assert record.macros.fat == 0
    assert record.macros.sugar == 0
    assert [i.name for i in record.ingredients] == ["chickpeas", "tahini", "spinach"]
    assert record.ingredients[1].amount == ""


def test_mapper_without_nutrition_has_zero_calories():
    record = RecipeMapper.to_record({"_id": "x", "title": "Mystery Stew"})

    assert record.name == "Mystery Stew"
    assert record.calories == 0


def test_repository_returns_records(monkeypatch):
    collection = RecordingCollection(
        [{"_id": "r1", "name": "Trail Mix", "nutrition": {"calories": 210}}]
    )
    use_collection(monkeypatch, collection)

    records = RecipeRepository().fetch_candidates("afternoon", sample_size=10)

    assert [(r.recipe_id, r.calories) for r in records] == [("r1", 210)]
    assert RecipeRepository().get_record_by_id("r1").name == "Trail Mix"
