from airsense.repositories.profile_repo import InMemoryProfileStore, MongoProfileStore


class FakeCollection:
    """Just enough of a pymongo collection for the profile store."""

    def __init__(self):
        self.docs = {}

    def find_one(self, filter, projection=None):
        doc = self.docs.get(filter["_id"])
        if doc is None:
            return None
        doc = dict(doc)
        if projection and projection.get("_id") == 0:
            doc.pop("_id", None)
        return doc

    def update_one(self, filter, update, upsert=False):
        doc = self.docs.get(filter["_id"])
        if doc is None:
            if not upsert:
                return
            doc = {"_id": filter["_id"]}
            self.docs[filter["_id"]] = doc
        doc.update(update["$set"])

    def delete_one(self, filter):
        self.docs.pop(filter["_id"], None)


def test_in_memory_store_returns_copies():
    store = InMemoryProfileStore()
    store.upsert_profile("u1", {"healthData": {"conditions": ["asthma"]}})
    profile = store.get_profile("u1")
    profile["healthData"]["conditions"].append("copd")
    assert store.get_profile("u1")["healthData"]["conditions"] == ["asthma"]


def test_in_memory_store_merges_top_level_keys():
    store = InMemoryProfileStore()
    store.upsert_profile("u1", {"name": "Ada"})
    merged = store.upsert_profile("u1", {"preferences": {"alertsEnabled": False}})
    assert merged == {"name": "Ada", "preferences": {"alertsEnabled": False}}
    store.delete_profile("u1")
    assert store.get_profile("u1") is None
    store.delete_profile("u1")


def test_mongo_store_upserts_and_hides_id():
    collection = FakeCollection()
    store = MongoProfileStore(collection)
    assert store.get_profile("42") is None

    store.upsert_profile("42", {"name": "Ada"})
    merged = store.upsert_profile("42", {"healthData": {"sensitivity": "low"}})

    assert merged == {"name": "Ada", "healthData": {"sensitivity": "low"}}
    assert collection.docs["42"]["_id"] == "42"


def test_mongo_store_empty_patch_is_a_read():
    collection = FakeCollection()
    store = MongoProfileStore(collection)
    assert store.upsert_profile("42", {}) == {}
    assert collection.docs == {}


def test_mongo_store_delete():
    collection = FakeCollection()
    store = MongoProfileStore(collection)
    store.upsert_profile("42", {"name": "Ada"})
    store.delete_profile("42")
    assert store.get_profile("42") is None
