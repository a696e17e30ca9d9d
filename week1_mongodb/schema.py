# schema.py
import jsonschema

books_schema = {
    "bsonType": "object",
    "required": ["title", "author", "genre", "published_year", "price", "in_stock", "pages", "publisher"],
    "properties": {
        "title": {"bsonType": "string"},
        "author": {"bsonType": "string"},
        "genre": {"bsonType": "string"},
        "published_year": {"bsonType": "int"},
        "price": {"bsonType": "number"},
        "in_stock": {"bsonType": "bool"},
        "pages": {"bsonType": "int"},
        "publisher": {"bsonType": "string"}
    }
}

_BSON_TO_JSON_TYPES = {
    "string": "string",
    "int": "integer",
    "number": "number",
    "bool": "boolean",
}

_JSON_SCHEMA_CACHE: dict = {}


def bson_to_jsonschema(bson_schema: dict) -> dict:
    props = {}
    for key, prop in bson_schema.get("properties", {}).items():
        bson_type = prop.get("bsonType")
        if bson_type not in _BSON_TO_JSON_TYPES:
            raise ValueError(f"Unsupported bsonType {bson_type!r} for field '{key}'")
        props[key] = {"type": _BSON_TO_JSON_TYPES[bson_type]}

    json_schema = {"type": "object", "properties": props}
    if "required" in bson_schema:
        json_schema["required"] = bson_schema["required"]
    return json_schema


def validate_book(doc: dict) -> bool:
    """Check a book document against `books_schema` before it is written.

    Raises ValueError carrying the validator message when the document
    does not fit, so bad inserts fail before reaching the server.
    """
    if "books" not in _JSON_SCHEMA_CACHE:
        _JSON_SCHEMA_CACHE["books"] = bson_to_jsonschema(books_schema)
    json_sch = _JSON_SCHEMA_CACHE["books"]

    try:
        jsonschema.validate(instance=doc, schema=json_sch)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Schema validation error: {e.message}") from e
    return True
