"""Data models for wikihome."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wikihome.core.naming import MARKDOWN_SUFFIX


class Document(BaseModel):
    """A markdown file found during the walk."""

    model_config = ConfigDict(frozen=True)

    raw_name: str
    base_name: str
    display_name: str
    link: str
    absolute_path: Path

    def link_line(self) -> str:
        return f"[{self.display_name}]({self.link})"


class Folder(BaseModel):
    """A directory with its direct documents and subfolders.

    Any document named ``<subfolder>.md`` is moved out of ``documents`` and
    into ``override_home_files`` at construction time: it becomes the
    dedicated home file of that subfolder instead of a regular entry.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    link: str = ""
    absolute_path: Path
    documents: dict[str, Document] = Field(default_factory=dict)
    override_home_files: dict[str, Document] = Field(default_factory=dict)
    subfolders: dict[str, "Folder"] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _relocate_override_home_files(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        documents = dict(data.get("documents") or {})
        overrides = dict(data.get("override_home_files") or {})
        for folder_name in data.get("subfolders") or {}:
            document = documents.pop(f"{folder_name}{MARKDOWN_SUFFIX}", None)
            if document is not None:
                overrides[folder_name] = document
        return {**data, "documents": documents, "override_home_files": overrides}

    @model_validator(mode="after")
    def _check_override_keys(self) -> "Folder":
        orphans = set(self.override_home_files) - set(self.subfolders)
        if orphans:
            raise ValueError(
                f"override home files without a matching subfolder: {sorted(orphans)}"
            )
        return self

    @property
    def has_documents(self) -> bool:
        return bool(self.documents)

    def heading_line(self) -> str:
        return f"# [{self.display_name}]({self.link})"


class WriteFailure(BaseModel):
    """A home file that could not be written."""

    path: Path
    error: str


class SynthesisReport(BaseModel):
    """Outcome of one synthesis run."""

    root: Path
    check: bool = False
    written: list[Path] = Field(default_factory=list)
    stale: list[Path] = Field(default_factory=list)
    failures: list[WriteFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every home file was written (or, in check mode, is current)."""
        return not self.failures and not self.stale
