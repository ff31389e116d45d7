"""Read CRMP credentials from the environment or a local `.env` file.

Only the subset of the dotenv format needed for a base URI and a token is
understood: `KEY=VALUE` lines, an optional `export ` prefix, a matching pair of
quotes around the value, and `#` comments (whole-line, or trailing after an
unquoted value).
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_URI_KEY = "CRMP_BASE_URI"
API_TOKEN_KEY = "CRMP_API_TOKEN"


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Return `(key, value)` for an assignment line, or None for anything else."""
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    if key.startswith("export "):
        key = key[len("export ") :].strip()
    if not key:
        return None

    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    elif " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return key, value


def load_env_file_if_present(path: str | Path = ".env", override: bool = False) -> dict[str, str]:
    """Copy the assignments in `path` into `os.environ`, if the file exists.

    Variables already set in the environment are kept unless `override` is set.
    Returns every assignment read from the file.
    """
    env_path = Path(path)
    if not env_path.exists():
        return {}

    loaded: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = parse_env_line(line)
        if parsed is None:
            continue
        key, value = parsed
        if override:
            os.environ[key] = value
        else:
            os.environ.setdefault(key, value)
        loaded[key] = value
    return loaded


def read_credentials(
    uri_key: str = BASE_URI_KEY,
    token_key: str = API_TOKEN_KEY,
    dotenv: bool | str | Path = True,
) -> tuple[str | None, str | None]:
    """Return `(base_uri, api_token)` from the environment.

    `dotenv=True` reads `./.env` first; a path reads that file instead; False
    reads the process environment only. Missing values come back as None so the
    caller decides how to report them.
    """
    if dotenv:
        load_env_file_if_present(".env" if dotenv is True else dotenv)
    return os.getenv(uri_key), os.getenv(token_key)
