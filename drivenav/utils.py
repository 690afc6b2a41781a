# utils.py
import csv
import io
import json
from collections.abc import Mapping
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched, on top of quote()'s own.
_URI_COMPONENT_SAFE = "!*'()"


def unique(values):
    """Removes duplicates from a list, keeping the first occurrence of each value."""
    if isinstance(values, list) and values:
        return list(dict.fromkeys(values))
    return values


def _encode(value) -> str:
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def build_query_params(params: dict) -> str:
    """
    Converts a dict into a URL query string. List values repeat the key.

    >>> build_query_params({"q": "a b", "id": [1, 2]})
    '?q=a%20b&id=1&id=2'
    """
    pairs = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend(f"{key}={_encode(item)}" for item in value)
        else:
            pairs.append(f"{key}={_encode(value)}")
    return "?" + "&".join(pairs) if pairs else ""


def flatten_object(obj) -> dict:
    """Flattens nested dicts and lists to one level, joining keys with '_'."""
    if isinstance(obj, Mapping):
        items = obj.items()
    else:
        items = enumerate(obj)

    flat = {}
    for key, value in items:
        if isinstance(value, (Mapping, list, tuple)):
            for sub_key, sub_value in flatten_object(value).items():
                flat[f"{key}_{sub_key}"] = sub_value
        else:
            flat[key] = value
    return flat


def _csv_cell(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (Mapping, list, tuple)):
        value = json.dumps(value)
    if isinstance(value, str):
        return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    return value


def object_to_csv(rows: list) -> str:
    """
    Converts a list of one-level dicts to a CSV string.
    Headings are the sorted union of all keys; string cells are quoted.
    """
    headings = sorted({str(key) for row in rows for key in row})
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\r\n")
    buffer.write(",".join(headings) + "\r\n")
    for row in rows:
        row = {str(key): value for key, value in row.items()}
        writer.writerow([_csv_cell(row.get(heading)) for heading in headings])
    return buffer.getvalue().strip()
