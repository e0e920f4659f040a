"""
Тесты TokenMergeEngine

Проверяет:
- Platform layer: метаданные платформы, token overrides, omit, новые токены
- Theme layer: выбор buckets, исключения, platformOverrides
- Фильтры target_platform_id / target_theme_id, include_omitted
- Fatal precondition figmaFileKey
- Analytics и to_dict
"""

import logging

import pytest

from src.core.domain import (
    AliasValue,
    LiteralValue,
    PlatformExtension,
    PlatformSyntaxPatterns,
    ThemeOverride,
)
from src.integrity import DuplicateFigmaFileKeyError, MissingFigmaFileKeyError
from src.merge import MergeOptions, TokenMergeEngine, merge_data


def theme_override(token_id: str, value, **fields) -> ThemeOverride:
    return ThemeOverride.model_validate({"tokenId": token_id, "value": {"value": value}, **fields})


@pytest.fixture
def engine() -> TokenMergeEngine:
    return TokenMergeEngine()


@pytest.fixture
def sunset_overrides() -> dict:
    return {
        "theme-sunset": [
            theme_override("color-brand", "#FF7F50"),
            theme_override("spacing-small", "8px"),
            theme_override("color-ghost", "#000000"),
        ]
    }


def values_of(token) -> list:
    return [(entry.mode_ids, entry.value) for entry in token.values_by_mode]


# =============================================================================
# PLATFORM LAYER
# =============================================================================


class TestPlatformLayer:
    def test_core_only_merge_is_identity(self, engine, core_system) -> None:
        merged = engine.merge(core_system)
        assert merged.merged_tokens == core_system.tokens
        assert merged.merged_platforms == core_system.platforms
        assert merged.omitted_modes == []
        assert merged.analytics.overridden_tokens == 0

    def test_platform_metadata_replaced(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(core_system, [ios_extension])
        ios = next(p for p in merged.merged_platforms if p.id == "platform-ios")

        # camel отсутствует в словаре платформы
        assert ios.syntax_patterns == PlatformSyntaxPatterns(delimiter="", capitalization="none")
        assert ios.value_formatters.dimension == "pt"
        assert ios.extension_source is None

    def test_other_platforms_untouched(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(core_system, [ios_extension])
        assert merged.merged_platforms[0] == core_system.platforms[0]

    def test_existing_token_override(self, engine, core_system, ios_extension) -> None:
        surface = engine.merge(core_system, [ios_extension]).find_token("color-surface")

        assert surface.display_name == "iOS Surface"
        assert surface.token_tier == core_system.find_token("color-surface").token_tier
        assert values_of(surface) == [
            (["mode-light"], LiteralValue(value="#FFFFFF")),
            (["mode-dark"], LiteralValue(value="#1C1C1E")),
        ]

    def test_omitted_token_removed(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(core_system, [ios_extension])
        assert merged.find_token("spacing-small") is None
        assert merged.analytics.omitted_tokens == 1

    def test_new_token_appended(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(core_system, [ios_extension])
        assert [t.id for t in merged.merged_tokens] == [
            "color-brand",
            "color-surface",
            "color-accent",
            "color-ios-tint",
        ]
        tint = merged.find_token("color-ios-tint")
        assert tint.display_name == "iOS Tint"
        assert tint.values_by_mode[0].is_global()

    def test_new_token_display_name_defaults_to_id(self, engine, core_system, ios_extension_data) -> None:
        del ios_extension_data["tokenOverrides"][2]["displayName"]
        merged = engine.merge(core_system, [PlatformExtension.model_validate(ios_extension_data)])
        assert merged.find_token("color-ios-tint").display_name == "color-ios-tint"

    def test_invalid_new_token_rejected(self, engine, core_system, ios_extension_data, caplog) -> None:
        ios_extension_data["tokenOverrides"].append({"id": "color-broken"})
        extension = PlatformExtension.model_validate(ios_extension_data)

        with caplog.at_level(logging.WARNING):
            merged = engine.merge(core_system, [extension])

        assert merged.find_token("color-broken") is None
        assert merged.analytics.rejected_new_tokens == 1
        assert "color-broken" in caplog.text

    def test_omit_of_unknown_token_ignored(self, engine, core_system, ios_extension_data) -> None:
        ios_extension_data["tokenOverrides"] = [{"id": "color-ghost", "omit": True}]
        merged = engine.merge(core_system, [PlatformExtension.model_validate(ios_extension_data)])
        assert len(merged.merged_tokens) == len(core_system.tokens)

    def test_omitted_modes_accumulated_without_duplicates(self, engine, core_system, ios_extension_data) -> None:
        second = {
            **ios_extension_data,
            "platformId": "platform-web",
            "figmaFileKey": "web-file-key",
            "tokenOverrides": [],
            "omittedModes": ["mode-dark", "mode-light"],
            "omittedDimensions": ["color-scheme"],
        }
        merged = engine.merge(
            core_system,
            [PlatformExtension.model_validate(ios_extension_data), PlatformExtension.model_validate(second)],
        )
        assert merged.omitted_modes == ["mode-dark", "mode-light"]
        assert merged.omitted_dimensions == ["color-scheme"]

    def test_later_extension_wins(self, engine, core_system, ios_extension_data) -> None:
        second = {
            **ios_extension_data,
            "figmaFileKey": "ios-file-key-2",
            "tokenOverrides": [{"id": "color-surface", "displayName": "Second"}],
        }
        merged = engine.merge(
            core_system,
            [PlatformExtension.model_validate(ios_extension_data), PlatformExtension.model_validate(second)],
        )
        assert merged.find_token("color-surface").display_name == "Second"

    def test_inputs_not_mutated(self, engine, core_system, ios_extension, sunset_overrides) -> None:
        before = core_system.to_dict()
        engine.merge(core_system, [ios_extension], sunset_overrides)
        assert core_system.to_dict() == before
        assert len(sunset_overrides["theme-sunset"]) == 3


# =============================================================================
# THEME LAYER
# =============================================================================


class TestThemeLayer:
    def test_theme_value_applied(self, engine, core_system, sunset_overrides) -> None:
        merged = engine.merge(core_system, theme_overrides=sunset_overrides)
        brand = merged.find_token("color-brand")
        assert values_of(brand) == [([], LiteralValue(value="#FF7F50"))]

    def test_theme_on_mode_specific_token_hits_default_mode(self, engine, core_system) -> None:
        overrides = {"theme-sunset": [theme_override("color-surface", "#FFF5EE")]}
        surface = engine.merge(core_system, theme_overrides=overrides).find_token("color-surface")
        assert values_of(surface) == [
            (["mode-light"], LiteralValue(value="#FFF5EE")),
            (["mode-dark"], LiteralValue(value="#000000")),
        ]

    def test_platform_omitted_and_missing_tokens_excluded(
        self, engine, core_system, ios_extension, sunset_overrides
    ) -> None:
        merged = engine.merge(core_system, [ios_extension], sunset_overrides)
        analytics = merged.analytics

        assert analytics.total_theme_overrides == 3
        assert analytics.excluded_theme_overrides == 2
        assert analytics.valid_theme_overrides == 1
        assert merged.find_token("spacing-small") is None

    def test_alias_value(self, engine, core_system) -> None:
        overrides = {
            "theme-sunset": [
                ThemeOverride.model_validate(
                    {"tokenId": "color-accent", "value": {"value": "#000000", "tokenId": "color-surface"}}
                )
            ]
        }
        accent = engine.merge(core_system, theme_overrides=overrides).find_token("color-accent")
        assert accent.values_by_mode[0].value == AliasValue(token_id="color-surface")

    def test_first_platform_override_used(self, engine, core_system) -> None:
        overrides = {
            "theme-sunset": [
                theme_override(
                    "color-brand",
                    "#FF7F50",
                    platformOverrides=[
                        {"platformId": "platform-ios", "value": {"value": "#FF6347"}},
                        {"platformId": "platform-web", "value": {"value": "#FF4500"}},
                    ],
                )
            ]
        }
        brand = engine.merge(core_system, theme_overrides=overrides).find_token("color-brand")
        assert brand.values_by_mode[0].value == LiteralValue(value="#FF6347")

    def test_empty_platform_overrides_fall_back_to_value(self, engine, core_system) -> None:
        overrides = {"theme-sunset": [theme_override("color-brand", "#FF7F50", platformOverrides=[])]}
        brand = engine.merge(core_system, theme_overrides=overrides).find_token("color-brand")
        assert brand.values_by_mode[0].value == LiteralValue(value="#FF7F50")

    def test_invalid_bucket_skipped(self, engine, core_system, sunset_overrides) -> None:
        overrides = {**sunset_overrides, "theme-default": "not-a-list"}
        merged = engine.merge(core_system, theme_overrides=overrides)

        assert merged.analytics.invalid_theme_buckets == 1
        assert merged.analytics.theme_count == 2
        assert merged.analytics.total_theme_overrides == 3
        assert list(merged.to_dict()["themeOverrides"]) == ["theme-sunset"]


# =============================================================================
# OPTIONS
# =============================================================================


class TestMergeOptions:
    def test_target_platform_filter(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(
            core_system, [ios_extension], options=MergeOptions(target_platform_id="platform-web")
        )
        assert merged.platform_extensions == []
        assert merged.merged_tokens == core_system.tokens
        assert merged.analytics.platform_count == 1  # до фильтра

    def test_engine_default_options(self, core_system, ios_extension) -> None:
        engine = TokenMergeEngine(MergeOptions(target_platform_id="platform-web"))
        assert engine.merge(core_system, [ios_extension]).merged_tokens == core_system.tokens
        per_call = engine.merge(core_system, [ios_extension], options=MergeOptions())
        assert per_call.find_token("color-ios-tint") is not None

    def test_target_theme_filter(self, engine, core_system, sunset_overrides) -> None:
        overrides = {**sunset_overrides, "theme-default": [theme_override("color-brand", "#123456")]}

        sunset = engine.merge(
            core_system, theme_overrides=overrides, options=MergeOptions(target_theme_id="theme-sunset")
        )
        assert sunset.find_token("color-brand").values_by_mode[0].value == LiteralValue(value="#FF7F50")
        assert sunset.analytics.theme_count == 2

    def test_unknown_target_theme_applies_nothing(self, engine, core_system, sunset_overrides) -> None:
        merged = engine.merge(
            core_system, theme_overrides=sunset_overrides, options=MergeOptions(target_theme_id="theme-neon")
        )
        assert merged.merged_tokens == core_system.tokens
        assert merged.analytics.total_theme_overrides == 0

    def test_include_omitted(self, engine, core_system, ios_extension) -> None:
        merged = engine.merge(core_system, [ios_extension], options=MergeOptions(include_omitted=True))
        assert merged.find_token("spacing-small") == core_system.find_token("spacing-small")
        assert merged.analytics.omitted_tokens == 0


# =============================================================================
# PRECONDITION
# =============================================================================


class TestFigmaFileKeyPrecondition:
    def test_duplicate_key_is_fatal(self, engine, core_system, ios_extension_data) -> None:
        second = PlatformExtension.model_validate({**ios_extension_data, "platformId": "platform-web"})
        with pytest.raises(DuplicateFigmaFileKeyError):
            engine.merge(core_system, [PlatformExtension.model_validate(ios_extension_data), second])

    def test_missing_key_is_fatal_even_when_filtered_out(self, engine, core_system, ios_extension_data) -> None:
        del ios_extension_data["figmaFileKey"]
        with pytest.raises(MissingFigmaFileKeyError):
            engine.merge(
                core_system,
                [PlatformExtension.model_validate(ios_extension_data)],
                options=MergeOptions(target_platform_id="platform-web"),
            )


# =============================================================================
# RESULT
# =============================================================================


class TestMergedData:
    def test_analytics(self, core_system, ios_extension, sunset_overrides) -> None:
        analytics = merge_data(core_system, [ios_extension], sunset_overrides).analytics

        assert analytics.total_tokens == 4
        assert analytics.overridden_tokens == 2  # color-surface (platform), color-brand (theme)
        assert analytics.new_tokens == 1
        assert analytics.omitted_tokens == 1
        assert analytics.platform_count == 1
        assert analytics.theme_count == 1

    def test_to_dict(self, core_system, ios_extension, sunset_overrides) -> None:
        data = merge_data(core_system, [ios_extension], sunset_overrides).to_dict()

        assert data["core"]["systemId"] == "acme-ds"
        assert [t["id"] for t in data["mergedTokens"]][-1] == "color-ios-tint"
        assert data["omittedModes"] == ["mode-dark"]
        assert data["analytics"]["newTokens"] == 1
        assert data["platformExtensions"][0]["figmaFileKey"] == "ios-file-key"
        assert data["themeOverrides"]["theme-sunset"][0]["tokenId"] == "color-brand"

    def test_summary_logged(self, core_system, ios_extension, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="src.merge.engine"):
            merge_data(core_system, [ios_extension])
        assert "Merged acme-ds" in caplog.text
