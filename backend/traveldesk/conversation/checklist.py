"""
The fixed checklist staff work through with a customer before searching.

Items 1-8 are essential; 9-12 are optional but helpful. Keyword patterns
drive the rule-based fallbacks used when no LLM key is configured.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChecklistItem:
    number: int
    label: str
    hint: str
    essential: bool
    patterns: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, text: str) -> bool:
        return any(re.search(p, text, re.IGNORECASE) for p in self.patterns)


_MONTHS = r"\b(jan(uary)?|feb(ruary)?|mar(ch)?|apr(il)?|may|june?|july?|aug(ust)?|sep(t(ember)?)?|oct(ober)?|nov(ember)?|dec(ember)?)\b"
_NUMBER_WORDS = r"(\d+|two|three|four|five|six|seven|eight|nine|ten)"

CHECKLIST: tuple[ChecklistItem, ...] = (
    ChecklistItem(
        1,
        "Destination",
        "Where? City, region, country",
        True,
        (
            r"\bdestination\b",
            r"\b(going|travel(l)?ing|trip|headed|heading|fly(ing)?|visit(ing)?)\s+(to|in)\b",
            r"\bwill be in\b",
            r"\bvisit(ing)?\s+[A-Z]",
        ),
    ),
    ChecklistItem(
        2,
        "Travel Dates / Duration",
        "When? How many days?",
        True,
        (
            _MONTHS,
            rf"\b{_NUMBER_WORDS}\s*(days?|nights?|weeks?)\b",
            r"\b\d{1,2}(st|nd|rd|th)\b",
            r"\b(next|this)\s+(week|weekend|month|summer|winter|spring|autumn|fall)\b",
        ),
    ),
    ChecklistItem(
        3,
        "Number of Travelers",
        "How many people?",
        True,
        (
            rf"\b{_NUMBER_WORDS}\s+(people|persons|of us|adults|travell?ers|guests)\b",
            rf"\bfamily of\s+{_NUMBER_WORDS}\b",
            rf"\b(we are|there are|there will be)\s+{_NUMBER_WORDS}\b",
            r"\b(just me|by myself|alone|solo)\b",
        ),
    ),
    ChecklistItem(
        4,
        "Traveler Profile",
        "Age groups: Adults, Seniors, Kids; Special needs: Accessibility, Child-friendly",
        True,
        (
            r"\b(kids?|child(ren)?|sons?|daughters?|toddlers?|teen(ager)?s?|grade)\b",
            r"\b(seniors?|elderly|grand(parents|mother|father))\b",
            r"\b\d+\s*(years? old|yo)\b",
            r"\b(adults? only|wheelchair)\b",
        ),
    ),
    ChecklistItem(
        5,
        "Activity Type / Interests",
        "Culture, Adventure, Food, Entertainment, Relaxation, Nature",
        True,
        (
            r"\b(museums?|temples?|historical|history|culture|tours?|sightseeing)\b",
            r"\b(hiking|diving|skiing|snorkel(l)?ing|surfing|water sports?|adventure)\b",
            r"\b(food|cooking|pastry|wine|tasting|dining)\b",
            r"\b(theme parks?|disney(land)?|shows?|nightlife|concerts?)\b",
            r"\b(spa|hot springs?|onsen|beach(es)?|relax(ing|ation)?)\b",
            r"\b(parks?|safari|aquarium|wildlife|whale watching|nature)\b",
        ),
    ),
    ChecklistItem(
        6,
        "Budget per Person",
        "How much per activity or per day?",
        True,
        (
            r"[$€£¥]\s*\d",
            r"\b\d+\s*(dollars|usd|euros?|eur|yen|jpy|pounds)\b",
            r"\bbudget\b",
            r"\bper (person|head)\b",
        ),
    ),
    ChecklistItem(
        7,
        "Time Preference",
        "Morning, Afternoon, Evening, Full-day, Half-day",
        True,
        (
            r"\b(mornings?|afternoons?|evenings?|nights?)\b",
            r"\b(full|half)[- ]day\b",
            r"\bmulti[- ]day\b",
        ),
    ),
    ChecklistItem(
        8,
        "Physical Activity Level",
        "Easy, Moderate, Challenging",
        True,
        (
            r"\b(easy|moderate|challenging|strenuous|demanding)\b",
            r"\b(lots of|a lot of|minimal|not much|little)\s+walking\b",
            r"\b(physically|fitness|active|relaxed pace)\b",
        ),
    ),
    ChecklistItem(
        9,
        "Group Type",
        "Solo, Couple, Family, Friends",
        False,
        (r"\b(solo|couple|family|friends|group tour|honeymoon)\b",),
    ),
    ChecklistItem(
        10,
        "Language Preference",
        "English guide, Japanese guide, Self-guided",
        False,
        (r"\b(english|japanese|spanish|french|chinese)[- ]speaking\b", r"\b(guide|self[- ]guided|audio guide)\b"),
    ),
    ChecklistItem(
        11,
        "Transportation",
        "Pick-up service, Meet at location, Own transportation",
        False,
        (r"\b(pick[- ]?up|transfer|shuttle|meet at|rental car|own car|drive|driving)\b",),
    ),
    ChecklistItem(
        12,
        "Special Requirements",
        "Dietary restrictions, Allergies, Accessibility",
        False,
        (r"\b(dietary|allerg(y|ies|ic)|vegetarian|vegan|halal|kosher|gluten|accessib(le|ility))\b",),
    ),
)

ESSENTIAL_ITEMS = tuple(item for item in CHECKLIST if item.essential)


def checklist_lines(include_hints: bool = True) -> str:
    """Numbered checklist text for prompts."""
    lines = []
    for item in CHECKLIST:
        suffix = f" ({item.hint})" if include_hints else ""
        optional = "" if item.essential else " - optional"
        lines.append(f"{item.number}. {item.label}{suffix}{optional}")
    return "\n".join(lines)


def missing_items(transcript: str, items: tuple[ChecklistItem, ...] = ESSENTIAL_ITEMS) -> list[ChecklistItem]:
    """Checklist items with no keyword evidence in the transcript."""
    return [item for item in items if not item.matches(transcript or "")]
