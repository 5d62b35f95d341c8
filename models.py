import uuid
from typing import Any, Dict

Order = Dict[str, Any]


def generate_order_id() -> str:
    return uuid.uuid4().hex


def make_order(fields: Dict[str, Any]) -> Order:
    """
    Build a new order from caller-supplied fields. The generated ``id``
    always wins over an ``id`` present in ``fields``.
    """
    return {**fields, "id": generate_order_id()}
