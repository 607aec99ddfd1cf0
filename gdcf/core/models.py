"""Data models for dead code detection."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FunctionDefinition(BaseModel):
    """A function declaration found in a GDScript file."""

    model_config = ConfigDict(frozen=True)

    name: str
    file: Path
    line: int
    is_static: bool = False
    # Tagged with e.g. `# gdcf-ignore` or `# TODO: dead-code`
    ignore_dead_code: bool = False


class ReferenceSite(BaseModel):
    """A location where a name is used in a call-like or value-like shape."""

    model_config = ConfigDict(frozen=True)

    path: Path
    line: int


class ScanResult(BaseModel):
    """Definitions and references collected from a whole tree."""

    definitions: list[FunctionDefinition] = Field(default_factory=list)
    references: dict[str, set[ReferenceSite]] = Field(default_factory=dict)
    files_scanned: int = 0

    def add_reference(self, name: str, path: Path, line: int) -> None:
        self.references.setdefault(name, set()).add(ReferenceSite(path=path, line=line))

    def references_to(self, name: str) -> set[ReferenceSite]:
        return self.references.get(name, set())

    @property
    def total_references(self) -> int:
        return sum(len(sites) for sites in self.references.values())


class AnalysisResult(BaseModel):
    """Functions never referenced and functions referenced only from tests."""

    unused: list[FunctionDefinition]
    test_only: list[FunctionDefinition]


class DetectionReport(BaseModel):
    """Results of scanning a project for dead code."""

    root: Path
    unused: list[FunctionDefinition]
    test_only: list[FunctionDefinition]
    files_scanned: int
    total_functions: int
    total_references: int
    scan_duration: float

    @property
    def has_findings(self) -> bool:
        return bool(self.unused or self.test_only)
