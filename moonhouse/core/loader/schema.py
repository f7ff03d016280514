"""JSON schema definitions for world tables and save files.

Structural checks only; references between tags are verified by
``world_loader.validate_world_data``.
"""

_ITEM_REF = {"$ref": "#/definitions/item"}

_DEFINITIONS = {
    "item": {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "description": {"type": "string"},
            "weight": {"type": "number", "minimum": 0},
            "volume": {"type": "number", "minimum": 0},
            "is_new": {"type": "boolean"},
            # contenitori
            "max_weight": {"type": "number", "exclusiveMinimum": 0},
            "max_volume": {"type": "number", "exclusiveMinimum": 0},
            "contents": {"type": "array", "items": _ITEM_REF},
            "on_shot": {
                "type": "object",
                "required": ["message"],
                "properties": {
                    "message": {"type": "string", "minLength": 1},
                    "spawn": _ITEM_REF,
                    "reveal": {
                        "type": "object",
                        "required": ["direction", "target"],
                        "properties": {
                            "direction": {"type": "string", "minLength": 1},
                            "target": {"type": "string", "minLength": 1},
                        },
                        "additionalProperties": False,
                    },
                    "failure_message": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
        "additionalProperties": False,
    },
}

WORLD_SCHEMA = {
    "type": "object",
    "required": ["locations", "entrance"],
    "definitions": _DEFINITIONS,
    "properties": {
        "name": {"type": "string"},
        "entrance": {"type": "string", "minLength": 1},
        "exit": {"type": "string", "minLength": 1},
        "safe_location": {"type": "string", "minLength": 1},
        "checkpoints": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "escape_items": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "locations": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["tag"],
                "properties": {
                    "tag": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                    "exits": {
                        "type": "object",
                        "additionalProperties": {"type": "string", "minLength": 1},
                    },
                    "items": {"type": "array", "items": _ITEM_REF},
                    "access": {
                        "type": "object",
                        "required": ["kind"],
                        "properties": {
                            "kind": {"type": "string", "enum": ["locked", "echo", "pass_through"]},
                            "required_items": {"type": "array", "items": {"type": "string", "minLength": 1}},
                            "guards": {"type": "string", "minLength": 1},
                            "unlock_message": {"type": "string"},
                            "locked_message": {"type": "string"},
                        },
                        "additionalProperties": False,
                    },
                },
                "additionalProperties": False,
            },
        },
        "agents": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "home"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "home": {"type": "string", "minLength": 1},
                    "aggression_radius": {"type": "integer", "minimum": 0},
                    "cooldown": {"type": "integer", "minimum": 0},
                    "ward_items": {"type": "array", "items": {"type": "string", "minLength": 1}},
                },
                "additionalProperties": False,
            },
        },
        "events": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["trigger", "from", "to", "to_direction", "from_direction"],
                "properties": {
                    "trigger": {"type": "string", "minLength": 1},
                    "from": {"type": "string", "minLength": 1},
                    "to": {"type": "string", "minLength": 1},
                    "to_direction": {"type": "string", "minLength": 1},
                    "from_direction": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}

SAVE_SCHEMA = {
    "type": "object",
    "required": ["_save_metadata", "location", "inventory"],
    "definitions": _DEFINITIONS,
    "properties": {
        "_save_metadata": {
            "type": "object",
            "required": ["version"],
            "properties": {
                "version": {"type": "integer", "minimum": 0},
                "timestamp": {"type": "number"},
                "date_saved": {"type": "string"},
            },
        },
        "location": {"type": "string", "minLength": 1},
        "inventory": {"type": "array", "items": _ITEM_REF},
        "created_at": {"type": "string"},
        "checkpoint": {
            "type": ["object", "null"],
            "required": ["location", "inventory"],
            "properties": {
                "location": {"type": "string", "minLength": 1},
                "inventory": {"type": "array", "items": _ITEM_REF},
            },
        },
    },
}
