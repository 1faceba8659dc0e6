from pydantic import ValidationError

MISSING_ERROR_TYPES = {'missing', 'string_too_short'}


def parse_payload(schema_cls, data):
    """Validate a JSON body against schema_cls.

    Returns (model, None) on success or (None, error_body) where error_body
    is ready to be passed to jsonify with a 400 status.
    """
    if not isinstance(data, dict):
        return None, {"error": "Invalid JSON payload"}

    try:
        return schema_cls.model_validate(data), None
    except ValidationError as e:
        errors = e.errors()
        fields = sorted({str(err['loc'][0]) for err in errors if err.get('loc')})
        if any(err['type'] in MISSING_ERROR_TYPES for err in errors):
            message = "Missing required fields"
        else:
            message = "Invalid field values"
        return None, {"error": message, "fields": fields}
