# revisualise_bot/data/texts/__init__.py
from .en import texts as en_texts
from .dto import LocaleTexts

ALL_TEXTS: dict[str, LocaleTexts] = {
    "en": en_texts,
}

DEFAULT_LOCALE = "en"
