"""
Kitchen feature options and prompt merging.

A prompt is a comma separated list of phrases. Phrases equal to the prompt
text of a known option count as "selected options"; everything else is the
user's own description and is kept in front, in its original order.
"""

from dataclasses import dataclass
from typing import List, Optional

PROMPT_STORAGE_KEY = "promptDraft"
ASPECT_RATIO_STORAGE_KEY = "aspectRatio"


@dataclass(frozen=True)
class FeatureOption:
    label: str
    prompt_text: str


@dataclass(frozen=True)
class FeatureCategory:
    name: str
    options: List[FeatureOption]


STYLE_FEATURE_OPTIONS = [
    FeatureOption("Nowoczesna", "Kuchnia nowoczesna"),
    FeatureOption("Klasyczna", "Kuchnia klasyczna"),
    FeatureOption("Skandynawska", "Kuchnia w stylu skandynawskim"),
    FeatureOption("Loft / Industrial", "Kuchnia w stylu loft / industrialnym"),
    FeatureOption("Rustykalna", "Kuchnia rustykalna"),
    FeatureOption("Minimalistyczna", "Kuchnia minimalistyczna"),
    FeatureOption("Glamour", "Kuchnia w stylu glamour"),
    FeatureOption("Retro", "Kuchnia retro"),
    FeatureOption("Boho", "Kuchnia boho"),
    FeatureOption("Japandi", "Kuchnia w stylu japandi"),
]

LAYOUT_FEATURE_OPTIONS = [
    FeatureOption("I", "Kuchnia na jednej ścianie"),
    FeatureOption("L", "Kuchnia w literę L"),
    FeatureOption("U", "Kuchnia w literę U"),
    FeatureOption(
        "I I",
        "Kuchnia na dwóch równoległych ścianach nie połączonych ze sobą meblami",
    ),
    FeatureOption("Wyspa", "Kuchnia z wyspą"),
    FeatureOption(
        "Barek",
        "Kuchnia z podwyższonym wąski blatem jako barkiem pod hokery "
        "dostawiona do blatu roboczego",
    ),
]

APPLIANCE_FEATURE_OPTIONS = [
    FeatureOption(
        "Lod zab.",
        "Kuchnia z jedną lodówką w zabudowie dwoje drzwi na dole front do "
        "wysokości blatu drugi front jak pasuje",
    ),
    FeatureOption("Lod. woln.", "Kuchnia z lodówką pojedynczą szerokości 60cm wysoką"),
    FeatureOption("Lod. side", "Kuchnia z lodówką side by side dwoje drzwi szeroka"),
    FeatureOption(
        "Piek pod pł.",
        "Kuchnia z piekarnikiem pod płytą grzewczą 60cm nad okap wolnowiszący "
        "lub w zabudowie",
    ),
    FeatureOption(
        "Piek w słup.",
        "Kuchnia z piekarnikiem w słupku zazwyczaj razem z mikrofalą też w zabudowie",
    ),
    FeatureOption(
        "Zlew okno",
        "Kuchnia ze zlewozmywakiem pod oknem najczęściej półtorakomory z małym "
        "ociekaczem w kuchni tylko jeden zlew",
    ),
]

SIZE_FEATURE_OPTIONS = [
    FeatureOption("XS", "Mała kuchnia ciasna w bloku"),
    FeatureOption("S", "Niezaduża kuchnia w mieszkaniu"),
    FeatureOption("Medium", "Średnia kuchnia do mieszkania"),
    FeatureOption("Large", "Kuchnia duża do domu"),
    FeatureOption("XL", "Bardzo duża kuchnia najczęściej z wyspą do domu"),
]

FEATURE_CATEGORIES = [
    FeatureCategory("Styl kuchni", STYLE_FEATURE_OPTIONS),
    FeatureCategory("Układ kuchni", LAYOUT_FEATURE_OPTIONS),
    FeatureCategory("AGD", APPLIANCE_FEATURE_OPTIONS),
    FeatureCategory("Rozmiar", SIZE_FEATURE_OPTIONS),
]

FEATURE_OPTIONS = [option for category in FEATURE_CATEGORIES for option in category.options]

_PROMPT_BY_LABEL = {option.label: option.prompt_text for option in FEATURE_OPTIONS}
_OPTION_TEXTS = frozenset(_PROMPT_BY_LABEL.values())
_CATALOG_INDEX = {option.label: index for index, option in enumerate(FEATURE_OPTIONS)}


def _split_prompt(value: str) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def option_prompt_by_label(label: str) -> Optional[str]:
    return _PROMPT_BY_LABEL.get(label)


def is_option_prompt_text(text: str) -> bool:
    return text in _OPTION_TEXTS


def extract_option_labels_from_prompt(value: str) -> List[str]:
    """Labels of the options whose prompt text appears in ``value``, in catalog order."""
    parts = set(_split_prompt(value))
    return [option.label for option in FEATURE_OPTIONS if option.prompt_text in parts]


def merge_prompt_with_selected_options(current_prompt: str, selected_labels: List[str]) -> str:
    """Replace the option phrases of ``current_prompt`` with those of ``selected_labels``.

    The user's own phrases come first, then the option phrases in the order the
    labels were given. Unknown labels are ignored.
    """
    base_parts = [part for part in _split_prompt(current_prompt) if not is_option_prompt_text(part)]
    option_parts = [
        text for text in (option_prompt_by_label(label) for label in selected_labels) if text
    ]
    return ", ".join(base_parts + option_parts)


def toggle_option(current_prompt: str, label: str) -> str:
    """Select ``label`` if it is not selected yet, otherwise deselect it.

    Option phrases stay in catalog order, so toggling the same label twice
    gives back a prompt produced by this function.
    """
    selected = extract_option_labels_from_prompt(current_prompt)
    if label in selected:
        selected.remove(label)
    elif label in _CATALOG_INDEX:
        selected.append(label)
        selected.sort(key=_CATALOG_INDEX.__getitem__)
    return merge_prompt_with_selected_options(current_prompt, selected)


def compose_generation_prompt(prompt: str, labels: List[str]) -> str:
    """Prompt sent for generation: user text merged with the chosen options.

    Labels that are not in the catalog are passed through verbatim so a client
    may send free-form options too.
    """
    selected = extract_option_labels_from_prompt(prompt)
    for label in labels:
        if option_prompt_by_label(label) and label not in selected:
            selected.append(label)
    unknown = [label.strip() for label in labels if not option_prompt_by_label(label) and label.strip()]
    merged = merge_prompt_with_selected_options(prompt, selected)
    return ", ".join(part for part in [merged, ", ".join(unknown)] if part)
