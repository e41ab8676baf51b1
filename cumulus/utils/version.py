"""Versioning utility module"""

import json
import pathlib

from pydantic import BaseModel, ConfigDict, HttpUrl


class Version(BaseModel):
    """Model for version.json data"""

    model_config = ConfigDict(extra="forbid")

    source: HttpUrl
    version: str
    commit: str
    build: str


def fetch_app_version_from_file(
    root_path: pathlib.Path | None = None,
) -> Version:
    """Fetch the content of the version.json file written at deployment time, which
    holds the commit hash, repo source url, version and CI build of this release.

    Raises:
        FileNotFoundError if file cannot be found.
        JSONDecodeError if the file cannot be processed.
        ValidationError if Pydantic model validation for Version fails.
    """
    version_file: pathlib.Path = (root_path or pathlib.Path.cwd()) / "version.json"
    version_file_content: dict = json.loads(version_file.read_text())
    return Version(**version_file_content)
