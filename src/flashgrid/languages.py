"""Per-language helpers: special-character palette and speech codes."""
import re

LANGUAGES = (
    "none", "english", "spanish", "french", "german",
    "japanese", "korean", "vietnamese", "chinese",
)

SPECIAL_CHARACTERS = {
    "none": [],
    "english": [],
    "chinese": [],
    "japanese": [],
    "korean": [],
    "french": ["à", "â", "ä", "æ", "ç", "é", "è", "ê", "ë", "ï", "î", "ô", "ù", "û", "ü", "œ"],
    "vietnamese": [
        "à", "á", "ả", "ã", "ạ", "ă", "ằ", "ắ", "ẳ", "ẵ", "ặ", "â", "ầ", "ấ", "ẩ",
        "ẫ", "ậ", "đ", "è", "é", "ẻ", "ẽ", "ẹ", "ê", "ề", "ế", "ể", "ễ", "ệ",
    ],
    "spanish": ["á", "é", "í", "ó", "ú", "ñ", "ü", "¿", "¡", "Á", "É", "Í", "Ó", "Ú", "Ñ", "Ü"],
    "german": ["ä", "ö", "ü", "ß", "Ä", "Ö", "Ü"],
}

SPEECH_CODES = {
    "none": "en-US",
    "english": "en-US",
    "french": "fr-FR",
    "spanish": "es-ES",
    "german": "de-DE",
    "vietnamese": "vi-VN",
    "chinese": "zh-CN",
    "japanese": "ja-JP",
    "korean": "ko-KR",
}

DEFAULT_SPEECH_CODE = "en-US"

FRENCH_WORDS = (
    "le", "la", "les", "un", "une", "des", "de", "du", "au", "aux", "ce", "cette",
    "je", "tu", "il", "elle", "nous", "vous", "ils", "elles", "être", "avoir",
    "avec", "dans", "pour", "sur", "sous", "chez", "sans", "mais", "et", "donc",
)


def _char_ranges(*bounds) -> str:
    return "[" + "".join(f"{chr(lo)}-{chr(hi)}" for lo, hi in bounds) + "]"


# Checked in order; French comes first so its accents win over Spanish/German.
DETECTION_RULES = (
    ("fr-FR", re.compile(
        r"[àâäæçéèêëïîôùûü]|\b(?:l|d|j|m|t|s|c|n|qu)'|\b(?:" + "|".join(FRENCH_WORDS) + r")\b",
        re.IGNORECASE,
    )),
    ("es-ES", re.compile(r"[áéíóúñü¿¡]", re.IGNORECASE)),
    ("de-DE", re.compile(r"[äöüß]", re.IGNORECASE)),
    ("ja-JP", re.compile(_char_ranges((0x3040, 0x309F), (0x30A0, 0x30FF), (0x31F0, 0x31FF), (0xFF65, 0xFF9F)))),
    ("zh-CN", re.compile(_char_ranges((0x4E00, 0x9FFF), (0x3400, 0x4DBF), (0xF900, 0xFAFF), (0x2E80, 0x2EFF)))),
    ("ko-KR", re.compile(_char_ranges((0xAC00, 0xD7AF)))),
    ("vi-VN", re.compile(
        r"[àáảãạăằắẳẵặâầấẩẫậèéẻẽẹêềếểễệìíỉĩịòóỏõọôồốổỗộơờớởỡợùúủũụưừứửữựỳýỷỹỵđ]",
        re.IGNORECASE,
    )),
)


def characters_for(language: str | None) -> list[str]:
    """Palette of special characters for a language tag; unknown tags get none."""
    return list(SPECIAL_CHARACTERS.get(language or "none", []))


def has_palette(language: str | None) -> bool:
    """Whether a character palette is offered for this language."""
    return language not in (None, "english", "chinese") and bool(characters_for(language))


def palette_for(language: str | None) -> list[str]:
    return characters_for(language) if has_palette(language) else []


def insert_character(text: str, char: str, position: int | None = None) -> str:
    """Insert `char` at `position` (end of text by default)."""
    if position is None or position > len(text):
        position = len(text)
    return text[:position] + char + text[position:]


def detect_language(text: str) -> str:
    """Guess a speech code from the characters and words in `text`."""
    if not text:
        return DEFAULT_SPEECH_CODE
    for code, pattern in DETECTION_RULES:
        if pattern.search(text):
            return code
    return DEFAULT_SPEECH_CODE


def speech_code(language: str | None, text: str = "") -> str:
    """Speech code for a card's language, detected from the text when unset."""
    if language and language != "none":
        return SPEECH_CODES.get(language, DEFAULT_SPEECH_CODE)
    return detect_language(text)
