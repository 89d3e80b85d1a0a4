import re

_first_cap_re = re.compile(r"(.)([A-Z][a-z]+)")
_all_cap_re = re.compile(r"([a-z0-9])([A-Z])")
_camel_word_re = re.compile(r"[^0-9A-Za-z]+")


def to_column(name: str) -> str:
    """
    Convert a camelCase property name to its snake_case column name.
    Example: 'developmentAreaId' -> 'development_area_id'
    Names that are already snake_case come back unchanged.
    """
    # Underscore before a capitalised word ('fooBar' -> 'foo_Bar')
    s1 = _first_cap_re.sub(r"\1_\2", name)
    # Underscore between a lower-case letter or digit and a capital ('aB' -> 'a_B')
    return _all_cap_re.sub(r"\1_\2", s1).lower()


def to_camel(name: str) -> str:
    cleaned = _camel_word_re.sub(" ", str(name)).strip()
    if not cleaned:
        return str(name)
    parts = cleaned.split()
    head = parts[0][:1].lower() + parts[0][1:]
    tail = [p[:1].upper() + p[1:] for p in parts[1:]]
    return head + "".join(tail)
