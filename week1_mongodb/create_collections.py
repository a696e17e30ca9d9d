from pymongo.errors import CollectionInvalid, OperationFailure

from week1_mongodb.connect_db import Settings, get_database
from week1_mongodb.schema import books_schema


def create_collections(db, collection_name: str = "books"):
    collections = {
        collection_name: books_schema,
    }

    for name, schema in collections.items():
        try:
            db.create_collection(name)
        except CollectionInvalid:
            # create_collection raises if it already exists; ignore that
            pass

        try:
            db.command("collMod", name, validator={"$jsonSchema": schema})
            print(f"✅ Created/updated collection '{name}' with validation.")
        except OperationFailure as e:
            print(f"⚠️ Failed to apply validator to '{name}': {e}")


def main():
    settings = Settings.from_env()
    db = get_database(settings)
    try:
        create_collections(db, settings.collection_name)
    finally:
        db.client.close()


if __name__ == "__main__":
    main()
