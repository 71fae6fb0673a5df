from flask import jsonify, request
from pydantic import ValidationError


class InvalidPayload(Exception):
    """Request body failed schema validation; rendered as a 400."""

    def __init__(self, entity: str, error: str):
        super().__init__(error)
        self.message = f"Invalid {entity} data"
        self.error = error


def parse_payload(schema, entity: str):
    """Validate the JSON body against a pydantic schema."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidPayload(entity, "Request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidPayload(entity, _describe(e))


def _describe(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def not_found(entity: str):
    return jsonify({"message": f"{entity} not found"}), 404


def success():
    return jsonify({"success": True})
