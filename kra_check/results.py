"""
Resultados de validación
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "passed": self.passed, "message": self.message}


@dataclass
class ValidationResult:
    """Lista ordenada de checks de un TestCase"""

    test_id: str
    checks: List[CheckResult] = field(default_factory=list)

    def add(self, name: str, passed: bool, message: Optional[str] = None) -> CheckResult:
        check = CheckResult(name=name, passed=bool(passed), message=message)
        self.checks.append(check)
        return check

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failures(self) -> List[CheckResult]:
        return [c for c in self.checks if not c.passed]

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.checks if c.passed)

    @property
    def total(self) -> int:
        return len(self.checks)

    def get(self, name: str) -> Optional[CheckResult]:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def names(self) -> List[str]:
        return [c.name for c in self.checks]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_id": self.test_id,
            "passed": self.passed,
            "passed_count": self.passed_count,
            "total": self.total,
            "checks": [c.to_dict() for c in self.checks],
        }
