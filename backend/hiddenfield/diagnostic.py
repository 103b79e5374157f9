"""
Report records.
Violation is what the evaluator emits; Diagnostic is what callers receive.
"""
from __future__ import annotations
from dataclasses import dataclass

RULE_CODE = "hidden-field"


@dataclass(frozen=True)
class Violation:
    line: int
    column: int
    name: str

    @property
    def message(self) -> str:
        return f"'{self.name}' hides a field."


@dataclass
class Diagnostic:
    file: str
    line: int
    severity: str  # ERROR, WARNING
    message: str
    code: str = ""
    column: int = 0

    @classmethod
    def from_violation(cls, violation: Violation, file: str, severity: str = "WARNING") -> "Diagnostic":
        return cls(
            file=file,
            line=violation.line,
            severity=severity,
            message=violation.message,
            code=RULE_CODE,
            column=violation.column,
        )

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
            "message": self.message,
            "code": self.code or "",
        }
