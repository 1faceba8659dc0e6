from flask import request


def int_arg(name):
    """Optional integer query parameter; returns (value, error_message)."""
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None, None
    try:
        return int(raw), None
    except ValueError:
        return None, f"'{name}' must be an integer"
