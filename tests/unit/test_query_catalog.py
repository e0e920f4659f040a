"""
Тесты query layer: TokenCatalog и platform accessors
"""

import pytest

from src.core.domain import ThemeOverrideFile, TokenSystem, TokenTier
from src.integrity import MissingFigmaFileKeyError
from src.query import (
    DEFAULT_FIGMA_FILE_KEY,
    MissingThemeFileKeyError,
    QueryIssue,
    TokenCatalog,
    get_figma_file_key_for_platform,
    get_figma_file_key_for_theme_override,
    get_syntax_patterns_for_platform,
    get_value_formatters_for_platform,
)


@pytest.fixture
def catalog(core_system) -> TokenCatalog:
    return TokenCatalog(core_system)


def ids(items) -> list[str]:
    return [item.id for item in items]


# =============================================================================
# RELATIONSHIPS
# =============================================================================


class TestRelationships:
    def test_tokens_by_collection(self, catalog) -> None:
        assert ids(catalog.tokens_by_collection("colors")) == ["color-brand", "color-surface", "color-accent"]
        assert ids(catalog.tokens_by_collection("spacing")) == ["spacing-small"]
        assert catalog.tokens_by_collection("gradients") == []

    def test_tokens_by_value_type(self, catalog) -> None:
        assert len(catalog.tokens_by_value_type("color")) == 3
        assert catalog.tokens_by_value_type("font-weight") == []

    def test_compatible_collections(self, catalog) -> None:
        assert ids(catalog.compatible_collections("dimension")) == ["spacing"]

    def test_modes_by_dimension(self, catalog) -> None:
        assert ids(catalog.modes_by_dimension("color-scheme")) == ["mode-light", "mode-dark"]
        assert catalog.modes_by_dimension("density") == []

    def test_tokens_by_tier(self, catalog) -> None:
        assert ids(catalog.tokens_by_tier("SEMANTIC")) == ["color-surface", "color-accent"]
        assert ids(catalog.tokens_by_tier(TokenTier.PRIMITIVE)) == ["color-brand", "spacing-small"]
        assert catalog.tokens_by_tier(TokenTier.COMPONENT) == []

    def test_unknown_tier(self, catalog) -> None:
        with pytest.raises(ValueError):
            catalog.tokens_by_tier("BASE")

    def test_private_and_public(self, catalog) -> None:
        assert ids(catalog.private_tokens()) == ["spacing-small"]
        assert len(catalog.public_tokens()) == 3


# =============================================================================
# SEARCH
# =============================================================================


class TestSearch:
    def test_search_tokens_case_insensitive(self, catalog) -> None:
        assert ids(catalog.search_tokens("BRAND")) == ["color-brand"]
        assert ids(catalog.search_tokens("spacing")) == ["spacing-small"]

    def test_search_uses_description(self, catalog) -> None:
        assert ids(catalog.search_collections("surface")) == ["colors"]
        assert ids(catalog.search_dimensions("dark")) == ["color-scheme"]

    def test_no_match(self, catalog) -> None:
        assert catalog.search_tokens("gradient") == []


# =============================================================================
# STRUCTURAL VALIDATION
# =============================================================================


class TestCandidateValidation:
    def test_existing_token_is_valid(self, catalog, core_system) -> None:
        result = catalog.validate_token(core_system.find_token("color-brand"))
        assert result.is_valid
        assert result.warnings == []

    def test_empty_token_candidate(self, catalog) -> None:
        result = catalog.validate_token({})
        assert not result.is_valid
        assert [issue.path for issue in result.errors] == [
            "id",
            "displayName",
            "resolvedValueTypeId",
            "tokenTier",
        ]

    def test_token_candidate_problems(self, catalog) -> None:
        result = catalog.validate_token(
            {
                "id": "bad id",
                "displayName": "X",
                "resolvedValueTypeId": "dimension",
                "tokenTier": "PRIMITIVE",
                "tokenCollectionId": "colors",
            }
        )
        messages = [issue.message for issue in result.errors]
        assert "Collection 'Colors' does not support value type 'dimension'" in messages
        assert "Token ID must contain only letters, numbers, hyphens, and underscores" in messages
        assert result.warnings == [
            QueryIssue(
                "displayName",
                "Token display name should be at least 2 characters long",
                suggested_fix="Use a more descriptive name",
            )
        ]

    def test_token_unknown_references(self, catalog) -> None:
        result = catalog.validate_token(
            {
                "id": "color-new",
                "displayName": "New",
                "resolvedValueTypeId": "gradient",
                "tokenTier": "PRIMITIVE",
                "tokenCollectionId": "gradients",
            }
        )
        assert [issue.message for issue in result.errors] == [
            "Resolved value type 'gradient' does not exist",
            "Token collection 'gradients' does not exist",
        ]

    def test_collection_candidate(self, catalog, core_system) -> None:
        assert catalog.validate_collection(core_system.token_collections[0]).is_valid

        result = catalog.validate_collection({"id": "effects", "resolvedValueTypeIds": ["shadow"]})
        assert [issue.path for issue in result.errors] == ["name", "resolvedValueTypeIds"]
        assert catalog.validate_collection({"id": "x", "name": "X"}).errors[0].message == (
            "Collection must support at least one resolved value type"
        )

    def test_dimension_candidate(self, catalog, core_system) -> None:
        assert catalog.validate_dimension(core_system.dimensions[0]).is_valid

        result = catalog.validate_dimension(
            {
                "id": "density",
                "displayName": "Density",
                "modes": [{"id": "compact", "name": "Compact", "dimensionId": "density"}],
                "defaultMode": "comfortable",
            }
        )
        assert [issue.message for issue in result.errors] == [
            "Default mode must be one of the dimension modes"
        ]
        assert len(catalog.validate_dimension({}).errors) == 4

    def test_non_string_fields_reported(self, catalog) -> None:
        """Нестроковые значения дают issues, а не TypeError"""
        token = catalog.validate_token(
            {"id": 42, "displayName": 7, "resolvedValueTypeId": "color", "tokenTier": "PRIMITIVE"}
        )
        assert not token.is_valid
        assert [issue.message for issue in token.errors] == [
            "Token ID must contain only letters, numbers, hyphens, and underscores"
        ]
        assert token.warnings == []

        collection = catalog.validate_collection({"id": 7, "name": "Effects", "resolvedValueTypeIds": [["color"]]})
        assert [issue.path for issue in collection.errors] == ["resolvedValueTypeIds", "id"]

        dimension = catalog.validate_dimension(
            {"id": "density", "displayName": "Density", "modes": ["compact"], "defaultMode": "compact"}
        )
        assert [issue.message for issue in dimension.errors] == [
            "Default mode must be one of the dimension modes"
        ]


def test_system_info(catalog) -> None:
    info = catalog.system_info()
    assert info.system_name == "Acme Design System"
    assert info.system_id == "acme-ds"
    assert (info.token_count, info.collection_count, info.dimension_count, info.value_type_count) == (
        4,
        2,
        1,
        3,
    )


# =============================================================================
# PLATFORM ACCESSORS
# =============================================================================


class TestPlatformAccessors:
    def test_rules_from_extension(self, ios_extension) -> None:
        patterns = get_syntax_patterns_for_platform([ios_extension], "platform-ios")
        assert patterns.capitalization == "camel"
        assert get_value_formatters_for_platform([ios_extension], "platform-ios").number_precision == 2

    def test_rules_without_extension(self, ios_extension) -> None:
        assert get_syntax_patterns_for_platform([ios_extension], "platform-web") is None
        assert get_value_formatters_for_platform([], "platform-ios") is None

    def test_core_file_key(self, core_system, core_system_data) -> None:
        assert get_figma_file_key_for_platform(core_system, [], None) == "core-file-key"

        del core_system_data["figmaConfiguration"]
        bare = TokenSystem.model_validate(core_system_data)
        assert get_figma_file_key_for_platform(bare, [], None) == DEFAULT_FIGMA_FILE_KEY

    def test_platform_file_key(self, core_system, ios_extension) -> None:
        assert get_figma_file_key_for_platform(core_system, [ios_extension], "platform-ios") == "ios-file-key"
        with pytest.raises(MissingFigmaFileKeyError):
            get_figma_file_key_for_platform(core_system, [ios_extension], "platform-web")

    def test_theme_file_key(self) -> None:
        theme_file = ThemeOverrideFile(system_id="acme-ds", theme_id="theme-sunset", figma_file_key="sunset")
        assert get_figma_file_key_for_theme_override(theme_file) == "sunset"

        with pytest.raises(MissingThemeFileKeyError, match="theme-sunset"):
            get_figma_file_key_for_theme_override(
                ThemeOverrideFile(system_id="acme-ds", theme_id="theme-sunset")
            )
