"""
Общие fixtures: валидные JSON документы token system (camelCase wire форма).

Фабрики возвращают новые dict на каждый вызов, тесты могут их изменять.
"""

import copy

import pytest

from src.core.domain import PlatformExtension, TokenSystem


# =============================================================================
# RAW DOCUMENTS
# =============================================================================


CORE_SYSTEM_DATA = {
    "systemName": "Acme Design System",
    "systemId": "acme-ds",
    "description": "Core token catalog",
    "figmaConfiguration": {
        "fileKey": "core-file-key",
        "syntaxPatterns": {"delimiter": "/", "capitalization": "capitalize"},
    },
    "version": "1.0.0",
    "versionHistory": [
        {"version": "1.0.0", "dimensions": ["color-scheme"], "date": "2024-01-01"}
    ],
    "resolvedValueTypes": [
        {"id": "color", "displayName": "Color", "type": "COLOR"},
        {"id": "dimension", "displayName": "Dimension", "type": "DIMENSION"},
        {
            "id": "font-weight",
            "displayName": "Font Weight",
            "type": "FONT_WEIGHT",
            "validation": {"minimum": 100, "maximum": 900},
        },
    ],
    "dimensions": [
        {
            "id": "color-scheme",
            "displayName": "Color Scheme",
            "description": "Light and dark appearance",
            "modes": [
                {"id": "mode-light", "name": "Light", "dimensionId": "color-scheme"},
                {"id": "mode-dark", "name": "Dark", "dimensionId": "color-scheme"},
            ],
            "required": True,
            "defaultMode": "mode-light",
        }
    ],
    "dimensionOrder": ["color-scheme"],
    "tokenCollections": [
        {
            "id": "colors",
            "name": "Colors",
            "description": "Brand and surface colors",
            "resolvedValueTypeIds": ["color"],
        },
        {
            "id": "spacing",
            "name": "Spacing",
            "resolvedValueTypeIds": ["dimension"],
            "private": True,
        },
    ],
    "tokens": [
        {
            "id": "color-brand",
            "displayName": "Brand Color",
            "description": "Primary brand color",
            "tokenCollectionId": "colors",
            "resolvedValueTypeId": "color",
            "themeable": True,
            "tokenTier": "PRIMITIVE",
            "taxonomies": [{"taxonomyId": "category", "termId": "brand"}],
            "valuesByMode": [{"modeIds": [], "value": {"value": "#FF0000"}}],
        },
        {
            "id": "color-surface",
            "displayName": "Surface",
            "tokenCollectionId": "colors",
            "resolvedValueTypeId": "color",
            "themeable": True,
            "tokenTier": "SEMANTIC",
            "valuesByMode": [
                {"modeIds": ["mode-light"], "value": {"value": "#FFFFFF"}},
                {"modeIds": ["mode-dark"], "value": {"value": "#000000"}},
            ],
        },
        {
            "id": "color-accent",
            "displayName": "Accent",
            "tokenCollectionId": "colors",
            "resolvedValueTypeId": "color",
            "tokenTier": "SEMANTIC",
            "valuesByMode": [{"modeIds": [], "value": {"tokenId": "color-brand"}}],
        },
        {
            "id": "spacing-small",
            "displayName": "Small Spacing",
            "tokenCollectionId": "spacing",
            "resolvedValueTypeId": "dimension",
            "private": True,
            "tokenTier": "PRIMITIVE",
            "valuesByMode": [{"modeIds": [], "value": {"value": "4px"}}],
        },
    ],
    "platforms": [
        {
            "id": "platform-web",
            "displayName": "Web",
            "syntaxPatterns": {"prefix": "--", "delimiter": "-", "capitalization": "lowercase"},
        },
        {
            "id": "platform-ios",
            "displayName": "iOS",
            "extensionSource": {"repositoryUri": "acme/ios-tokens", "filePath": "ios.json"},
        },
    ],
    "platformExtensions": [
        {"platformId": "platform-ios", "repositoryUri": "acme/ios-tokens", "filePath": "ios.json"}
    ],
    "themes": [
        {"id": "theme-default", "displayName": "Default", "isDefault": True},
        {"id": "theme-sunset", "displayName": "Sunset", "isDefault": False},
    ],
    "taxonomies": [
        {
            "id": "category",
            "name": "Category",
            "description": "Token category",
            "terms": [{"id": "brand", "name": "Brand"}, {"id": "surface", "name": "Surface"}],
        }
    ],
    "taxonomyOrder": ["category"],
}


IOS_EXTENSION_DATA = {
    "systemId": "acme-ds",
    "platformId": "platform-ios",
    "version": "1.0.0",
    "figmaFileKey": "ios-file-key",
    "syntaxPatterns": {"delimiter": "", "capitalization": "camel"},
    "valueFormatters": {"color": "hex", "dimension": "pt", "numberPrecision": 2},
    "tokenOverrides": [
        {
            "id": "color-surface",
            "displayName": "iOS Surface",
            "valuesByMode": [{"modeIds": ["mode-dark"], "value": {"value": "#1C1C1E"}}],
        },
        {"id": "spacing-small", "omit": True},
        {
            "id": "color-ios-tint",
            "displayName": "iOS Tint",
            "resolvedValueTypeId": "color",
            "tokenTier": "SEMANTIC",
            "valuesByMode": [{"modeIds": [], "value": {"value": "#007AFF"}}],
        },
    ],
    "omittedModes": ["mode-dark"],
    "omittedDimensions": [],
}


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def core_system_data() -> dict:
    """Валидный core каталог (raw JSON)."""
    return copy.deepcopy(CORE_SYSTEM_DATA)


@pytest.fixture
def ios_extension_data() -> dict:
    """Валидный platform extension iOS (raw JSON)."""
    return copy.deepcopy(IOS_EXTENSION_DATA)


@pytest.fixture
def core_system(core_system_data: dict) -> TokenSystem:
    return TokenSystem.model_validate(core_system_data)


@pytest.fixture
def ios_extension(ios_extension_data: dict) -> PlatformExtension:
    return PlatformExtension.model_validate(ios_extension_data)
