# schema.py
from typing import Any, Dict, List

import jsonschema
from pymongo import ASCENDING

customers_schema = {
    "bsonType": "object",
    "required": ["name", "email", "address"],
    "properties": {
        "name": {"bsonType": "string"},
        "email": {"bsonType": "string"},
        "address": {
            "bsonType": "object",
            "required": ["street", "city", "country"],
            "properties": {
                "street": {"bsonType": "string"},
                "city": {"bsonType": "string"},
                "country": {"bsonType": "string"},
            },
        },
    },
}

customer_indexes: List[Dict[str, Any]] = [
    {"keys": [("address.country", ASCENDING)], "unique": False},
    {"keys": [("email", ASCENDING)], "unique": True},
]


def to_jsonschema(bson_schema: dict) -> dict:
    """Translate a `$jsonSchema` validator into a plain JSON Schema.

    Only the bsonTypes used by the customer validator are mapped; anything
    else falls back to "string". Nested objects are converted recursively.
    """
    props = {}
    for key, prop in bson_schema.get("properties", {}).items():
        bsonType = prop.get("bsonType")
        types = bsonType if isinstance(bsonType, list) else [bsonType]
        if types == ["object"]:
            props[key] = to_jsonschema(prop)
            continue
        json_types = []
        for t in types:
            if t == "string":
                json_types.append("string")
            elif t == "int":
                json_types.append("integer")
            elif t == "bool":
                json_types.append("boolean")
            elif t == "null":
                json_types.append("null")
            else:
                json_types.append("string")
        props[key] = {"type": json_types[0] if len(json_types) == 1 else json_types}

    json_schema = {"type": "object", "properties": props}
    if "required" in bson_schema:
        json_schema["required"] = bson_schema["required"]
    return json_schema


customers_jsonschema = to_jsonschema(customers_schema)


def validate_customer(doc: dict) -> None:
    """Raise jsonschema.ValidationError if `doc` does not fit the validator."""
    jsonschema.validate(instance=doc, schema=customers_jsonschema)
