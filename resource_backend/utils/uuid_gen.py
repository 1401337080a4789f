import uuid


__all__ = [
    "gen",
]


def gen() -> str:
    return str(uuid.uuid4())
