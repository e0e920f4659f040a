"""
Admission Gate — единая точка допуска документов token system

Два этапа:
1. Contract stage — JSON Schema (iter_errors, собираются ВСЕ ошибки)
2. Model stage — pydantic парсинг (cross-field refinements); выполняется
   только если contract stage чист

Результат — либо полностью валидная модель, либо SchemaViolationError со
списком path-qualified SchemaIssue. Частичный результат не возвращается.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal, TypeVar

from jsonschema import ValidationError as ContractError
from pydantic import TypeAdapter
from pydantic import ValidationError as ModelError

from src.core.contracts.validators import (
    ContractValidator,
    PlatformExtensionValidator,
    ThemeOverrideFileValidator,
    ThemeOverridesValidator,
    TokenSystemValidator,
)
from src.core.domain import (
    PlatformExtension,
    ThemeOverride,
    ThemeOverrideFile,
    ThemeOverrides,
    TokenSystem,
)


T = TypeVar("T")

ROOT_PATH = "<root>"


# =============================================================================
# ISSUES
# =============================================================================


@dataclass(frozen=True)
class SchemaIssue:
    """
    Нарушение контракта документа.

    Attributes:
        path: Путь к значению ('tokens.0.valuesByMode' или '<root>')
        message: Человекочитаемое описание
        source: Этап, обнаруживший нарушение ('contract' | 'model')
    """

    path: str
    message: str
    source: Literal["contract", "model"]

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SchemaViolationError(Exception):
    """Документ не прошёл admission gate."""

    def __init__(self, document: str, issues: list[SchemaIssue]):
        self.document = document
        self.issues = issues
        details = "; ".join(str(issue) for issue in issues)
        super().__init__(f"{document} failed schema validation ({len(issues)} issues): {details}")


def _format_path(parts: Iterable[Any]) -> str:
    path = ".".join(str(part) for part in parts)
    return path or ROOT_PATH


def _contract_issue(error: ContractError) -> SchemaIssue:
    return SchemaIssue(
        path=_format_path(error.absolute_path),
        message=error.message,
        source="contract",
    )


def _model_issues(error: ModelError) -> list[SchemaIssue]:
    return [
        SchemaIssue(path=_format_path(item["loc"]), message=item["msg"], source="model")
        for item in error.errors()
    ]


# =============================================================================
# ADMISSION GATE
# =============================================================================


class AdmissionGate:
    """
    Admission gate для одного типа документа.

    Args:
        document: Имя документа в сообщениях об ошибках
        validator: JSON Schema валидатор контракта
        adapter: pydantic TypeAdapter целевой модели
    """

    def __init__(self, document: str, validator: ContractValidator, adapter: TypeAdapter):
        self.document = document
        self.validator = validator
        self.adapter = adapter

    def collect_issues(self, raw: Any) -> list[SchemaIssue]:
        """Все нарушения документа (пустой список = документ допустим)."""
        issues, _ = self._run(raw)
        return issues

    def admit(self, raw: Any) -> Any:
        """
        Допуск документа.

        Raises:
            SchemaViolationError: При любом нарушении контракта или модели
        """
        issues, model = self._run(raw)
        if issues:
            raise SchemaViolationError(self.document, issues)
        return model

    def _run(self, raw: Any) -> tuple[list[SchemaIssue], Any]:
        contract_issues = sorted(
            (_contract_issue(error) for error in self.validator.iter_errors(raw)),
            key=lambda issue: (issue.path, issue.message),
        )
        if contract_issues:
            return contract_issues, None

        try:
            model = self.adapter.validate_python(raw)
        except ModelError as e:
            return _model_issues(e), None
        return [], model


_TOKEN_SYSTEM_GATE = AdmissionGate(
    "TokenSystem", TokenSystemValidator(), TypeAdapter(TokenSystem)
)
_PLATFORM_EXTENSION_GATE = AdmissionGate(
    "PlatformExtension", PlatformExtensionValidator(), TypeAdapter(PlatformExtension)
)
_THEME_OVERRIDES_GATE = AdmissionGate(
    "ThemeOverrides", ThemeOverridesValidator(), TypeAdapter(dict[str, list[ThemeOverride]])
)
_THEME_OVERRIDE_FILE_GATE = AdmissionGate(
    "ThemeOverrideFile", ThemeOverrideFileValidator(), TypeAdapter(ThemeOverrideFile)
)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_token_system(raw: Any) -> TokenSystem:
    """
    Допуск core каталога.

    Returns:
        Полностью валидный TokenSystem

    Raises:
        SchemaViolationError: Со списком всех нарушений
    """
    return _TOKEN_SYSTEM_GATE.admit(raw)


def collect_token_system_issues(raw: Any) -> list[SchemaIssue]:
    return _TOKEN_SYSTEM_GATE.collect_issues(raw)


def validate_platform_extension(raw: Any) -> PlatformExtension:
    """
    Допуск platform extension.

    Raises:
        SchemaViolationError: Со списком всех нарушений
    """
    return _PLATFORM_EXTENSION_GATE.admit(raw)


def collect_platform_extension_issues(raw: Any) -> list[SchemaIssue]:
    return _PLATFORM_EXTENSION_GATE.collect_issues(raw)


def validate_theme_overrides(raw: Any) -> ThemeOverrides:
    return _THEME_OVERRIDES_GATE.admit(raw)


def collect_theme_overrides_issues(raw: Any) -> list[SchemaIssue]:
    return _THEME_OVERRIDES_GATE.collect_issues(raw)


def validate_theme_override_file(raw: Any) -> ThemeOverrideFile:
    return _THEME_OVERRIDE_FILE_GATE.admit(raw)


def collect_theme_override_file_issues(raw: Any) -> list[SchemaIssue]:
    return _THEME_OVERRIDE_FILE_GATE.collect_issues(raw)
