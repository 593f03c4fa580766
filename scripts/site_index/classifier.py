"""Icon classification for catalog entries.

The icon table is an ordered list of keyword rules. Order is priority:
specific names are listed before generic terms, so adding a rule anywhere
but the end can reclassify existing pages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class IconRule:
    """A keyword pattern and the icon it selects."""

    pattern: str  # regex alternation, matched case-insensitively as a substring
    icon: str

    def matches(self, haystack: str) -> bool:
        return re.search(self.pattern, haystack, re.IGNORECASE) is not None


DEFAULT_ICON = "🅿️🚗"

ICON_RULES: tuple[IconRule, ...] = (
    IconRule(r"barber", "💈"),
    IconRule(r"blueParking", "🅿️🚗"),
    IconRule(r"pdf|documento|document", "🔎📄"),
    IconRule(r"busHour|onibus|bus", "🔎🚌"),
    IconRule(r"comanda|espetinho", "🍢"),
    IconRule(r"denta", "🦷"),
    IconRule(r"doctor", "🩺"),
    IconRule(r"dog|DogGuest|Cães|Hotel", "🐶"),
    IconRule(r"pawgel|Pawgel|Anjo|Patas", "🔎🐾🪽"),
    IconRule(r"fit|fitness|motivation", "🏋️‍♂️💪"),
    IconRule(r"encomenduai", "🍞🧀"),
    IconRule(r"Tracking|meet|MeetMotions|evento|online", "🎤"),
    IconRule(r"motoboy", "⚠️🛵"),
    IconRule(r"nurse", "🩹"),
    IconRule(r"peregrin", "🔎🗺️🚴‍♂️"),
    IconRule(r"pedreiro|construcao", "🧱"),
    IconRule(r"supermercado|compras|mercado", "🛒"),
    IconRule(r"plant|agricultura", "🛰️🌱"),
    IconRule(r"qr|pix", "🔒🔳"),
    IconRule(r"carro|auto|veiculo|inspecao", "🔎🚗"),
    IconRule(r"ronda|seguranca", "⚠️👮‍♂️📝"),
    IconRule(r"busca|search|finder|pesquisa", "🔍"),
    IconRule(r"bot|automation|automacao", "🤖"),
    IconRule(r"chart|grafico|graph|stats|analytics|analise|dashboard", "📊"),
    IconRule(r"config|settings|option|preference|configuracao", "⚙️"),
    IconRule(r"doc|document|text|note|texto|anotacao", "📝"),
    IconRule(r"code|script|program|codigo|programacao|desenvolvimento", "💻"),
    IconRule(r"[rR]adio|[rR]etro|music|audio|sound|musica|som", "📻"),
    IconRule(r"video|movie|clip|filme", "🎬"),
    IconRule(r"photo|image|picture|img|foto|imagem", "🖼️"),
    IconRule(r"map|location|gps|mapa|localizacao", "🗺️"),
    IconRule(r"mail|email|message|chat|mensagem|contato", "✉️"),
    IconRule(r"calendar|schedule|agenda|calendario", "📅"),
    IconRule(r"lock|secure|security|password|seguranca|senha", "🔒"),
    IconRule(r"marmit", "🍱"),
    IconRule(r"tool|ferramenta|utilitario", "🔧"),
    IconRule(r"math|matematica|calculo|formula", "🧮"),
    IconRule(r"[dD]engue|[dD]engueAI", "🔎🦟"),
)


def classification_key(relative_path: str, category: str) -> str:
    """Build the lowercased text the icon rules are matched against."""
    return f"{relative_path} {category}".lower()


def match_rule(
    relative_path: str,
    category: str,
    rules: Iterable[IconRule] = ICON_RULES,
) -> Optional[IconRule]:
    """Return the first rule matching a page, or None.

    Args:
        relative_path: Page path relative to the published root.
        category: The page's resolved category.
        rules: Ordered rules to scan.
    """
    haystack = classification_key(relative_path, category)
    for rule in rules:
        if rule.matches(haystack):
            return rule
    return None


def classify(
    relative_path: str,
    category: str,
    rules: Iterable[IconRule] = ICON_RULES,
) -> str:
    """Choose the display icon for a page.

    Args:
        relative_path: Page path relative to the published root,
            e.g. "utilities/barbershop-queue.html".
        category: The page's resolved category.
        rules: Ordered rules to scan; defaults to the built-in table.

    Returns:
        The icon of the first matching rule, or DEFAULT_ICON.
    """
    rule = match_rule(relative_path, category, rules)
    return rule.icon if rule else DEFAULT_ICON


def build_rules(extra_rules: Iterable[IconRule] = ()) -> tuple[IconRule, ...]:
    """Prepend configured rules to the built-in table."""
    return tuple(extra_rules) + ICON_RULES
