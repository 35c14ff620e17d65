#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Language Support - locale catalogue and language picker options
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LanguageInfo:
    """Language information"""
    code: str
    name: str
    native_name: str = ""

    @property
    def label(self) -> str:
        return self.native_name or self.name


def _catalogue(*entries: Tuple[str, str, str]) -> Dict[str, LanguageInfo]:
    return {code: LanguageInfo(code, name, native) for code, name, native in entries}


# Locale tags accepted by Google Translate
LANGUAGES: Dict[str, LanguageInfo] = _catalogue(
    ("af", "Afrikaans", "Afrikaans"),
    ("sq", "Albanian", "Shqip"),
    ("am", "Amharic", "አማርኛ"),
    ("ar", "Arabic", "العربية"),
    ("hy", "Armenian", "Հայերեն"),
    ("az", "Azerbaijani", "Azərbaycan"),
    ("eu", "Basque", "Euskara"),
    ("be", "Belarusian", "Беларуская"),
    ("bn", "Bengali", "বাংলা"),
    ("bs", "Bosnian", "Bosanski"),
    ("bg", "Bulgarian", "Български"),
    ("ca", "Catalan", "Català"),
    ("ceb", "Cebuano", "Cebuano"),
    ("zh-CN", "Chinese (Simplified)", "简体中文"),
    ("zh-TW", "Chinese (Traditional)", "繁體中文"),
    ("co", "Corsican", "Corsu"),
    ("hr", "Croatian", "Hrvatski"),
    ("cs", "Czech", "Čeština"),
    ("da", "Danish", "Dansk"),
    ("nl", "Dutch", "Nederlands"),
    ("en", "English", "English"),
    ("eo", "Esperanto", "Esperanto"),
    ("et", "Estonian", "Eesti"),
    ("fi", "Finnish", "Suomi"),
    ("fr", "French", "Français"),
    ("fy", "Frisian", "Frysk"),
    ("gl", "Galician", "Galego"),
    ("ka", "Georgian", "ქართული"),
    ("de", "German", "Deutsch"),
    ("el", "Greek", "Ελληνικά"),
    ("gu", "Gujarati", "ગુજરાતી"),
    ("ht", "Haitian Creole", "Kreyòl ayisyen"),
    ("ha", "Hausa", "Hausa"),
    ("haw", "Hawaiian", "ʻŌlelo Hawaiʻi"),
    ("he", "Hebrew", "עברית"),
    ("hi", "Hindi", "हिन्दी"),
    ("hmn", "Hmong", "Hmong"),
    ("hu", "Hungarian", "Magyar"),
    ("is", "Icelandic", "Íslenska"),
    ("ig", "Igbo", "Igbo"),
    ("id", "Indonesian", "Bahasa Indonesia"),
    ("ga", "Irish", "Gaeilge"),
    ("it", "Italian", "Italiano"),
    ("ja", "Japanese", "日本語"),
    ("jv", "Javanese", "Basa Jawa"),
    ("kn", "Kannada", "ಕನ್ನಡ"),
    ("kk", "Kazakh", "Қазақ"),
    ("km", "Khmer", "ខ្មែរ"),
    ("rw", "Kinyarwanda", "Kinyarwanda"),
    ("ko", "Korean", "한국어"),
    ("ku", "Kurdish", "Kurdî"),
    ("ky", "Kyrgyz", "Кыргызча"),
    ("lo", "Lao", "ລາວ"),
    ("la", "Latin", "Latina"),
    ("lv", "Latvian", "Latviešu"),
    ("lt", "Lithuanian", "Lietuvių"),
    ("lb", "Luxembourgish", "Lëtzebuergesch"),
    ("mk", "Macedonian", "Македонски"),
    ("mg", "Malagasy", "Malagasy"),
    ("ms", "Malay", "Bahasa Melayu"),
    ("ml", "Malayalam", "മലയാളം"),
    ("mt", "Maltese", "Malti"),
    ("mi", "Maori", "Māori"),
    ("mr", "Marathi", "मराठी"),
    ("mn", "Mongolian", "Монгол"),
    ("my", "Myanmar (Burmese)", "မြန်မာ"),
    ("ne", "Nepali", "नेपाली"),
    ("no", "Norwegian", "Norsk"),
    ("ny", "Nyanja (Chichewa)", "Chichewa"),
    ("or", "Odia (Oriya)", "ଓଡ଼ିଆ"),
    ("ps", "Pashto", "پښتو"),
    ("fa", "Persian", "فارسی"),
    ("pl", "Polish", "Polski"),
    ("pt", "Portuguese", "Português"),
    ("pa", "Punjabi", "ਪੰਜਾਬੀ"),
    ("ro", "Romanian", "Română"),
    ("ru", "Russian", "Русский"),
    ("sm", "Samoan", "Gagana Samoa"),
    ("gd", "Scots Gaelic", "Gàidhlig"),
    ("sr", "Serbian", "Српски"),
    ("st", "Sesotho", "Sesotho"),
    ("sn", "Shona", "chiShona"),
    ("sd", "Sindhi", "سنڌي"),
    ("si", "Sinhala", "සිංහල"),
    ("sk", "Slovak", "Slovenčina"),
    ("sl", "Slovenian", "Slovenščina"),
    ("so", "Somali", "Soomaali"),
    ("es", "Spanish", "Español"),
    ("su", "Sundanese", "Basa Sunda"),
    ("sw", "Swahili", "Kiswahili"),
    ("sv", "Swedish", "Svenska"),
    ("tl", "Tagalog (Filipino)", "Tagalog"),
    ("tg", "Tajik", "Тоҷикӣ"),
    ("ta", "Tamil", "தமிழ்"),
    ("tt", "Tatar", "Татар"),
    ("te", "Telugu", "తెలుగు"),
    ("th", "Thai", "ไทย"),
    ("tr", "Turkish", "Türkçe"),
    ("tk", "Turkmen", "Türkmen"),
    ("uk", "Ukrainian", "Українська"),
    ("ur", "Urdu", "اردو"),
    ("ug", "Uyghur", "ئۇيغۇرچە"),
    ("uz", "Uzbek", "Oʻzbek"),
    ("vi", "Vietnamese", "Tiếng Việt"),
    ("cy", "Welsh", "Cymraeg"),
    ("xh", "Xhosa", "isiXhosa"),
    ("yi", "Yiddish", "ייִדיש"),
    ("yo", "Yoruba", "Yorùbá"),
    ("zu", "Zulu", "isiZulu"),
)

GOOGLE_SUPPORTED_LANGUAGES = frozenset(LANGUAGES) | {"zh", "iw", "jw", "fil"}


def get_language_info(code: str) -> Optional[LanguageInfo]:
    return LANGUAGES.get(code)


def get_language_name(code: str) -> str:
    """English name of a language code, the code itself when unknown"""
    info = LANGUAGES.get(code)
    return info.name if info else code


def language_options(supported: Optional[frozenset] = None) -> List[Tuple[str, str]]:
    """(label, tag) pairs for language pickers, optionally limited to `supported` tags"""
    return [
        (info.label, info.code)
        for info in LANGUAGES.values()
        if supported is None or info.code in supported
    ]
