# services/option_text.py
import json
from typing import Any

# Checked in this order on mapping-shaped options
OPTION_TEXT_FIELDS = ("text", "label", "value", "answer", "_id")


def get_option_text(option: Any) -> str:
    """Reduce an option, answer key or submitted value to a canonical string.

    Accepts plain strings, numbers, booleans, option objects carrying one
    of `OPTION_TEXT_FIELDS`, and sequences of any of these (joined with
    ", "). `None` becomes the empty string.
    """
    if option is None:
        return ""
    if isinstance(option, str):
        return option
    if isinstance(option, bool):
        return "true" if option else "false"
    if isinstance(option, (int, float)):
        return _number_text(option)
    if hasattr(option, "model_dump"):
        option = option.model_dump()
    if isinstance(option, dict):
        for field in OPTION_TEXT_FIELDS:
            if option.get(field) is not None:
                return get_option_text(option[field]) if field != "_id" else str(option[field])
        return json.dumps(option, default=str, sort_keys=True)
    if isinstance(option, (list, tuple)):
        return ", ".join(get_option_text(item) for item in option)
    return str(option)


def _number_text(value) -> str:
    # 4.0 and 4 must read the same
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def option_texts(value: Any) -> list:
    """Normalize a multi-valued answer into a list of stripped option texts."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [get_option_text(item).strip() for item in value]
    return [get_option_text(value).strip()]
