from typing import Any, Dict, Iterable, Mapping, Optional


def extract_fields(form_data: Mapping[str, Any], names: Iterable[str]) -> Dict[str, Optional[Any]]:
    """
    Pull exactly the named fields out of a submitted form.

    Works for a plain dict as well as Starlette's FormData. When a field is
    repeated the first value wins, as in a browser's FormData.get. Missing
    fields come back as None so the validator can report them; nothing is
    coerced here.
    """
    getlist = getattr(form_data, "getlist", None)
    if getlist is None:
        return {name: form_data.get(name) for name in names}
    return {name: next(iter(getlist(name)), None) for name in names}
