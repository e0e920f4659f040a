"""
JSON Schema Contract Validators

Модуль для валидации JSON документов token system согласно формальным
JSON Schema контрактам (Draft 2020-12). Использует библиотеку jsonschema.

Схемы (package data, src/core/contracts/schema/):
- token_system.json        — core каталог; содержит общие $defs
- platform_extension.json  — platform overlay
- theme_overrides.json     — mapping theme id → overrides
- theme_override_file.json — standalone файл overrides темы

Схемы overlay ссылаются на $defs из token_system.json, поэтому все схемы
регистрируются в общем referencing.Registry.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from referencing import Registry, Resource


SCHEMA_NAMES = (
    "token_system",
    "platform_extension",
    "theme_overrides",
    "theme_override_file",
)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Находит схемы в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._registry: Registry | None = None

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'token_system')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema

    def registry(self) -> Registry:
        """Registry всех схем (для разрешения $ref между файлами)."""
        if self._registry is None:
            resources = []
            for name in SCHEMA_NAMES:
                schema = self.load_schema(name)
                resources.append((schema["$id"], Resource.from_contents(schema)))
            self._registry = Registry().with_resources(resources)
        return self._registry


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(
            self.schema, registry=_SCHEMA_LOADER.registry()
        )

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class TokenSystemValidator(ContractValidator):
    """Валидатор core каталога."""

    def __init__(self):
        super().__init__("token_system")


class PlatformExtensionValidator(ContractValidator):
    """Валидатор platform extension overlay."""

    def __init__(self):
        super().__init__("platform_extension")


class ThemeOverridesValidator(ContractValidator):
    def __init__(self):
        super().__init__("theme_overrides")


class ThemeOverrideFileValidator(ContractValidator):
    def __init__(self):
        super().__init__("theme_override_file")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_token_system_contract(data: Dict[str, Any]) -> None:
    """
    Валидация core каталога по контракту.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    TokenSystemValidator().validate(data)


def validate_platform_extension_contract(data: Dict[str, Any]) -> None:
    """
    Валидация platform extension по контракту.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PlatformExtensionValidator().validate(data)


def validate_theme_overrides_contract(data: Dict[str, Any]) -> None:
    ThemeOverridesValidator().validate(data)


def validate_theme_override_file_contract(data: Dict[str, Any]) -> None:
    ThemeOverrideFileValidator().validate(data)
