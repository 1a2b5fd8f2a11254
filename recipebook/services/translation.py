"""Fill a recipe's mirror-language fields through the translator.

Direction is decided from the title alone: any CJK Unified Ideograph means
the text was entered in Chinese, anything else (including an empty title) is
treated as English.

- Chinese input: the text is copied into the ``*_zh`` mirrors as-is, then each
  non-empty field is translated to English and replaces the primary value.
  A field whose translation fails keeps its original text.
- English input: each non-empty primary field is translated to Chinese into
  its mirror. A field whose translation fails gets a null mirror.

When the translator is not configured nothing is touched at all.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..core.translator_client import TranslationResult, TranslatorClient
from ..models import MIRROR_FIELDS, Recipe

logger = logging.getLogger("recipebook.translation")

CJK_PATTERN = re.compile(r"[\u4e00-\u9fff]")

TRANSLATED_FIELDS = ("title", "description", "ingredients", "instructions", "category")


def contains_chinese(text: Optional[str]) -> bool:
    return bool(text) and CJK_PATTERN.search(text) is not None


@dataclass
class TranslationReport:
    direction: Optional[str] = None  # "zh->en", "en->zh" or None when skipped
    results: dict[str, TranslationResult] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return self.direction is None

    @property
    def failed_fields(self) -> list[str]:
        return [name for name, result in self.results.items() if not result.ok]


def apply_translations(recipe: Recipe, translator: TranslatorClient) -> TranslationReport:
    """Populate mirror fields (and, for Chinese input, the primary fields).

    Mutates ``recipe`` in place and never raises for translation problems.
    """
    if not translator.is_available():
        return TranslationReport()

    if contains_chinese(recipe.title):
        report = _translate_from_chinese(recipe, translator)
    else:
        report = _translate_from_english(recipe, translator)

    if report.failed_fields:
        logger.warning(
            f"Recipe '{recipe.title}' ({report.direction}): untranslated fields {report.failed_fields}"
        )
    return report


def _translate_from_chinese(recipe: Recipe, translator: TranslatorClient) -> TranslationReport:
    report = TranslationReport(direction="zh->en")
    for name in TRANSLATED_FIELDS:
        original = getattr(recipe, name)
        setattr(recipe, MIRROR_FIELDS[name], original)
        if not original or not original.strip():
            continue
        result = translator.translate(original, "zh", "en")
        report.results[name] = result
        if result.ok:
            setattr(recipe, name, result.text)
    return report


def _translate_from_english(recipe: Recipe, translator: TranslatorClient) -> TranslationReport:
    report = TranslationReport(direction="en->zh")
    for name in TRANSLATED_FIELDS:
        original = getattr(recipe, name)
        mirror = MIRROR_FIELDS[name]
        if not original or not original.strip():
            setattr(recipe, mirror, None)
            continue
        result = translator.translate(original, "en", "zh")
        report.results[name] = result
        setattr(recipe, mirror, result.text if result.ok else None)
    return report
