# daogen/naming.py
from __future__ import annotations


def cap_first(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def uncap_first(value: str) -> str:
    if not value:
        return value
    return value[0].lower() + value[1:]


def db_name(name: str) -> str:
    """
    Derive a storage name from a property or class name.
    An underscore goes before each upper-case char that follows a non-upper
    char, then everything is upper-cased:
      firstName -> FIRST_NAME, userID -> USER_ID, URLPath -> URLPATH, id -> ID
    """
    out = []
    prev_upper = False
    for i, ch in enumerate(name):
        is_upper = ch.isupper()
        if i > 0 and is_upper and not prev_upper:
            out.append("_")
        out.append(ch)
        prev_upper = is_upper
    return "".join(out).upper()
