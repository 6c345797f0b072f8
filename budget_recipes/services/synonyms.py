"""Synonym tables that widen matching beyond literal word overlap.

Each table maps a canonical base term to the product-name variants shops
use for it. Extending a table never requires touching the matching rules.
"""

from collections.abc import Iterable, Mapping

from budget_recipes.models.enums import SynonymTableName
from budget_recipes.services.text import normalize_text

BASIC_SYNONYMS: dict[str, tuple[str, ...]] = {
    "gehakt": ("rundergehakt", "half om half", "halfomhalf", "kipgehakt", "gehakt"),
    "kip": ("kipfilet", "kipdrumstick", "kippenbout", "kip"),
    "tomaat": ("tomaten", "tomatenblokjes", "passata", "tomatenpuree"),
    "bonen": ("kidneybonen", "witte bonen", "zwarte bonen", "bruine bonen"),
    "pasta": ("spaghetti", "penne", "macaroni", "fusilli", "lasagne"),
    "rijst": ("basmatirijst", "jasmijnrijst", "witte rijst", "risottorijst"),
    "kaas": ("geraspte kaas", "goudse kaas", "mozzarella", "parmezaan"),
    "melk": ("halfvolle melk", "volle melk", "magere melk"),
    "worst": ("rookworst", "braadworst"),
    "varken": ("varkensschouder", "varkenshaas", "spek", "varkensvlees"),
    "rund": ("rundvlees", "runderstoofvlees", "biefstuk", "rundergehakt"),
    "linzen": ("rode linzen", "bruine linzen", "linzen"),
    "pompoen": ("flespompoen", "hokkaido", "butternut", "pompoen"),
}

EXTENDED_SYNONYMS: dict[str, tuple[str, ...]] = {
    **BASIC_SYNONYMS,
    "gehakt": BASIC_SYNONYMS["gehakt"] + ("varkensgehakt",),
    "kip": BASIC_SYNONYMS["kip"] + ("kippendij", "kippenvleugel", "kippenborst"),
    "tomaat": BASIC_SYNONYMS["tomaat"] + ("cherrytomaat", "roma tomaat", "trostomaat"),
    "pasta": BASIC_SYNONYMS["pasta"] + ("tagliatelle", "linguine"),
    "rijst": BASIC_SYNONYMS["rijst"] + ("zilvervliesrijst",),
    "bonen": BASIC_SYNONYMS["bonen"] + ("cannellinibonen",),
    "kaas": BASIC_SYNONYMS["kaas"] + ("jonge kaas", "belegen kaas", "oude kaas"),
    "paprika": ("rode paprika", "groene paprika", "gele paprika", "paprika mix"),
    "aardappel": ("aardappelen", "kruimige aardappelen", "vastkokende aardappelen"),
    "wortel": ("wortelen", "winterwortel", "bospeen"),
    "room": ("slagroom", "kookroom", "creme fraiche"),
}


class SynonymTable:
    """Normalized base-term to variants mapping."""

    def __init__(self, groups: Mapping[str, Iterable[str]]):
        self.groups: dict[str, tuple[str, ...]] = {}
        for base, variants in groups.items():
            normalized_base = normalize_text(base)
            if not normalized_base:
                continue
            terms = {normalized_base}
            terms.update(normalize_text(v) for v in variants if normalize_text(v))
            # Longest first so the most specific variant is reported
            self.groups[normalized_base] = tuple(sorted(terms, key=len, reverse=True))

    def __len__(self) -> int:
        return len(self.groups)

    def bases_for(self, normalized: str) -> set[str]:
        """Base terms whose base or any variant occurs in the normalized text."""
        if not normalized:
            return set()
        return {
            base
            for base, terms in self.groups.items()
            if any(term in normalized for term in terms)
        }

    def matches(self, normalized_ingredient: str, normalized_product: str) -> bool:
        """True when ingredient and product share at least one synonym group."""
        ingredient_bases = self.bases_for(normalized_ingredient)
        if not ingredient_bases:
            return False
        return bool(ingredient_bases & self.bases_for(normalized_product))

    def extended(self, groups: Mapping[str, Iterable[str]]) -> "SynonymTable":
        """Return a new table with extra groups merged in."""
        merged: dict[str, list[str]] = {base: list(terms) for base, terms in self.groups.items()}
        for base, variants in groups.items():
            merged.setdefault(normalize_text(base), []).extend(variants)
        return SynonymTable(merged)


def get_synonym_table(name: SynonymTableName | str = SynonymTableName.EXTENDED) -> SynonymTable:
    """Build one of the built-in tables."""
    if SynonymTableName(name) == SynonymTableName.BASIC:
        return SynonymTable(BASIC_SYNONYMS)
    return SynonymTable(EXTENDED_SYNONYMS)
