"""
Token Merge Engine — разрешение core → platform extensions → theme overrides

Порядок merge:
1. Precondition: figmaFileKey каждого extension задан и уникален
   (иначе ConfigurationIntegrityError, merge не выполняется)
2. Фильтр: target_platform_id / target_theme_id
3. Layer 2 — platform extensions в порядке передачи (поздний побеждает):
   - метаданные платформы (syntaxPatterns/valueFormatters) заменяются целиком
   - token overrides: omit → удаление; иначе скалярные поля override побеждают,
     если заданы, valuesByMode — через mode combination merge;
     новый токен добавляется, если образует валидный Token
   - omittedModes / omittedDimensions накапливаются без дубликатов
4. Layer 3 — theme overrides: токен должен существовать после platform layer
   и не быть удалён платформой; значение применяется как {modeIds: []}
5. Analytics

Фатален только шаг 1. Остальные аномалии логируются, считаются и пропускаются.
Входные модели не изменяются; каждый вызов строит новый MergedData.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from pydantic import ValidationError

from src.core.domain import (
    GLOBAL_MODE_IDS,
    Dimension,
    Platform,
    PlatformExtension,
    ThemeOverrides,
    Token,
    TokenOverride,
    TokenSystem,
    ValueByMode,
    override_scalar_updates,
)
from src.integrity.file_keys import ensure_unique_figma_file_keys
from src.merge.analytics import ThemeLayerCounters, compute_analytics
from src.merge.modes import merge_values_by_mode
from src.merge.results import MergedData, MergeOptions


logger = logging.getLogger(__name__)


# =============================================================================
# TOKEN LAYER
# =============================================================================


class _TokenLayer:
    """Рабочий список токенов с индексом id → позиция."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self._reindex()

    def _reindex(self) -> None:
        self._index = {token.id: i for i, token in enumerate(self.tokens)}

    def get(self, token_id: str) -> Optional[Token]:
        index = self._index.get(token_id)
        return None if index is None else self.tokens[index]

    def replace(self, token: Token) -> None:
        self.tokens[self._index[token.id]] = token

    def remove(self, token_id: str) -> None:
        del self.tokens[self._index[token_id]]
        self._reindex()

    def append(self, token: Token) -> None:
        self._index[token.id] = len(self.tokens)
        self.tokens.append(token)


@dataclass
class _MergeState:
    """Изменяемое состояние одного вызова merge."""

    layer: _TokenLayer
    platforms: list[Platform]
    dimensions: Sequence[Dimension]
    include_omitted: bool
    platform_omitted: set[str] = field(default_factory=set)
    omitted_modes: list[str] = field(default_factory=list)
    omitted_dimensions: list[str] = field(default_factory=list)
    rejected_new_tokens: int = 0


def _extend_unique(target: list[str], values: Optional[Sequence[str]]) -> None:
    for value in values or []:
        if value not in target:
            target.append(value)


# =============================================================================
# ENGINE
# =============================================================================


class TokenMergeEngine:
    """
    Merge engine token system.

    Не хранит состояния между вызовами: dimensions берутся из core каталога
    каждого вызова и передаются в mode merge явно.
    """

    def __init__(self, options: MergeOptions | None = None):
        """
        Args:
            options: Параметры merge по умолчанию (default: MergeOptions())
        """
        self.options = options or MergeOptions()

    def merge(
        self,
        core: TokenSystem,
        extensions: Sequence[PlatformExtension] = (),
        theme_overrides: Optional[ThemeOverrides] = None,
        options: Optional[MergeOptions] = None,
    ) -> MergedData:
        """
        Merge core каталога с platform extensions и theme overrides.

        Args:
            core: Schema-valid core каталог
            extensions: Platform extensions в порядке применения
            theme_overrides: Mapping theme id → overrides
            options: Параметры вызова (default: self.options)

        Returns:
            MergedData

        Raises:
            DuplicateFigmaFileKeyError: figmaFileKey встречается повторно
            MissingFigmaFileKeyError: extension без figmaFileKey
        """
        options = options or self.options
        extensions = list(extensions)

        ensure_unique_figma_file_keys(extensions)

        relevant = [
            extension
            for extension in extensions
            if not options.target_platform_id
            or extension.platform_id == options.target_platform_id
        ]

        state = _MergeState(
            layer=_TokenLayer(core.tokens),
            platforms=list(core.platforms),
            dimensions=core.dimensions,
            include_omitted=options.include_omitted,
        )

        for extension in relevant:
            self._apply_platform_extension(state, extension)

        theme_counters = self._apply_theme_overrides(
            state, self._select_theme_buckets(theme_overrides, options)
        )

        analytics = compute_analytics(
            core.tokens,
            state.layer.tokens,
            extensions,
            theme_overrides,
            theme_counters,
            rejected_new_tokens=state.rejected_new_tokens,
        )

        logger.info(
            "Merged %s: %d tokens (%d overridden, %d new, %d omitted), "
            "%d/%d theme overrides applied",
            core.system_id,
            len(state.layer.tokens),
            analytics.overridden_tokens,
            analytics.new_tokens,
            analytics.omitted_tokens,
            analytics.valid_theme_overrides,
            analytics.total_theme_overrides,
        )

        return MergedData(
            core=core,
            platform_extensions=relevant,
            theme_overrides=theme_overrides,
            merged_tokens=state.layer.tokens,
            merged_platforms=state.platforms,
            omitted_modes=state.omitted_modes,
            omitted_dimensions=state.omitted_dimensions,
            analytics=analytics,
        )

    # -------------------------------------------------------------------------
    # Layer 2: platform extensions
    # -------------------------------------------------------------------------

    def _apply_platform_extension(self, state: _MergeState, extension: PlatformExtension) -> None:
        self._apply_platform_metadata(state, extension)

        for override in extension.token_overrides or []:
            existing = state.layer.get(override.id)
            omitted = override.is_omitted() and not state.include_omitted

            if existing is not None and omitted:
                state.layer.remove(override.id)
                state.platform_omitted.add(override.id)
                logger.debug("Platform %s omits token %s", extension.platform_id, override.id)
            elif existing is not None:
                state.layer.replace(self._merge_token(existing, override, state.dimensions))
            elif not omitted:
                self._add_token(state, extension, override)

        _extend_unique(state.omitted_modes, extension.omitted_modes)
        _extend_unique(state.omitted_dimensions, extension.omitted_dimensions)

    def _apply_platform_metadata(self, state: _MergeState, extension: PlatformExtension) -> None:
        """syntaxPatterns / valueFormatters платформы заменяются целиком."""
        for index, platform in enumerate(state.platforms):
            if platform.id != extension.platform_id:
                continue

            syntax_patterns = (
                extension.syntax_patterns.to_platform_patterns()
                if extension.syntax_patterns is not None
                else None
            )
            updates = {
                "syntax_patterns": syntax_patterns,
                "value_formatters": extension.value_formatters,
            }
            # Локальные правила и extensionSource взаимоисключающие
            if syntax_patterns is not None or extension.value_formatters is not None:
                updates["extension_source"] = None

            state.platforms[index] = platform.model_copy(update=updates)
            return

    @staticmethod
    def _merge_token(
        token: Token, override: TokenOverride, dimensions: Sequence[Dimension]
    ) -> Token:
        updates = override_scalar_updates(override)
        if override.values_by_mode:
            updates["values_by_mode"] = merge_values_by_mode(
                token.values_by_mode, override.values_by_mode, dimensions
            )
        return token.model_copy(update=updates)

    @staticmethod
    def _add_token(state: _MergeState, extension: PlatformExtension, override: TokenOverride) -> None:
        payload = override_scalar_updates(override)
        payload.setdefault("display_name", override.id)
        payload["id"] = override.id
        payload["values_by_mode"] = override.values_by_mode

        try:
            token = Token.model_validate(payload)
        except ValidationError as e:
            state.rejected_new_tokens += 1
            logger.warning(
                "Platform %s adds token %s that is not a valid token (%d errors), skipped",
                extension.platform_id,
                override.id,
                e.error_count(),
            )
            return

        state.layer.append(token)
        state.platform_omitted.discard(token.id)

    # -------------------------------------------------------------------------
    # Layer 3: theme overrides
    # -------------------------------------------------------------------------

    @staticmethod
    def _select_theme_buckets(
        theme_overrides: Optional[ThemeOverrides], options: MergeOptions
    ) -> dict:
        if not theme_overrides:
            return {}
        if not options.target_theme_id:
            return dict(theme_overrides)
        if options.target_theme_id not in theme_overrides:
            return {}
        return {options.target_theme_id: theme_overrides[options.target_theme_id]}

    @staticmethod
    def _apply_theme_overrides(state: _MergeState, buckets: dict) -> ThemeLayerCounters:
        total = 0
        excluded = 0
        invalid_buckets = 0

        for theme_id, overrides in buckets.items():
            if not isinstance(overrides, list):
                invalid_buckets += 1
                logger.warning("Theme %s overrides are not a list, skipped", theme_id)
                continue

            for override in overrides:
                total += 1
                token = state.layer.get(override.token_id)
                if token is None or override.token_id in state.platform_omitted:
                    excluded += 1
                    logger.debug(
                        "Theme %s override for %s excluded: token missing or omitted by platform",
                        theme_id,
                        override.token_id,
                    )
                    continue

                entry = ValueByMode(
                    mode_ids=list(GLOBAL_MODE_IDS),
                    value=override.effective_value().to_token_value(),
                )
                state.layer.replace(
                    token.model_copy(
                        update={
                            "values_by_mode": merge_values_by_mode(
                                token.values_by_mode, [entry], state.dimensions
                            )
                        }
                    )
                )

        return ThemeLayerCounters(total=total, excluded=excluded, invalid_buckets=invalid_buckets)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def merge_data(
    core: TokenSystem,
    extensions: Sequence[PlatformExtension] = (),
    theme_overrides: Optional[ThemeOverrides] = None,
    options: Optional[MergeOptions] = None,
) -> MergedData:
    """Merge с параметрами по умолчанию (см. TokenMergeEngine.merge)."""
    return TokenMergeEngine().merge(core, extensions, theme_overrides, options)
