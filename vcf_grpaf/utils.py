"""Small INFO-column helpers used across the vcf_grpaf package.

Pure-Python, no heavy dependencies, easy to unit-test.
"""
from typing import Dict, Iterable, Mapping, Optional, Union


def parse_info_field(info: Optional[str]) -> Dict[str, Optional[str]]:
    """Parse a VCF INFO column (key[=value];... ) into an ordered dict.

    Values are returned as strings; flag keys (no ``=``) map to None.
    An INFO field of '.' returns an empty dict.
    """
    out: Dict[str, Optional[str]] = {}
    if not info or info == ".":
        return out
    for token in info.split(";"):
        if not token:
            continue
        if "=" in token:
            k, v = token.split("=", 1)
            out[k] = v
        else:
            out[token] = None
    return out


def format_info_value(value: Union[int, float, str]) -> str:
    """Render a typed INFO value: ints as-is, floats with ``%g``."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_info_field(fields: Mapping[str, Optional[Union[int, float, str]]]) -> str:
    """Inverse of ``parse_info_field``; an empty mapping gives '.'."""
    if not fields:
        return "."
    parts = []
    for k, v in fields.items():
        parts.append(k if v is None else f"{k}={format_info_value(v)}")
    return ";".join(parts)


def update_info_field(
    info: Optional[str],
    values: Mapping[str, Union[int, float]],
    drop: Iterable[str] = (),
) -> str:
    """Remove ``drop`` keys from ``info`` and append ``values`` at the end.

    Keys in ``values`` are always removed first so they are never duplicated.
    """
    fields: Dict[str, Optional[Union[int, float, str]]] = dict(parse_info_field(info))
    for k in set(drop) | set(values):
        fields.pop(k, None)
    fields.update(values)
    return format_info_field(fields)


__all__ = [
    "parse_info_field",
    "format_info_value",
    "format_info_field",
    "update_info_field",
]
