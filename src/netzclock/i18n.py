"""Simple two-language (he/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "he": "שעון הנץ",
        "en": "Sunrise Countdown",
    },
    "countdown_until": {
        "he": "זמן נותר עד {name}",
        "en": "Time left until {name}",
    },
    "done_today": {
        "he": "הסתיים להיום",
        "en": "Done for today",
    },
    "schedule_title": {
        "he": "זמני היום",
        "en": "Today's times",
    },
    "btn_edit": {
        "he": "עריכה",
        "en": "Edit",
    },
    "btn_done": {
        "he": "סיום",
        "en": "Done",
    },
    "before_sunrise": {
        "he": "לפני הנץ",
        "en": "before sunrise",
    },
    "label_minutes": {
        "he": "ד'",
        "en": "min",
    },
    "label_seconds": {
        "he": "ש'",
        "en": "sec",
    },
    "label_manual": {
        "he": "הזן שעת נץ ידנית",
        "en": "Enter sunrise time manually",
    },
    "btn_update": {
        "he": "עדכן",
        "en": "Update",
    },
    "loading_title": {
        "he": "מחשב זמני נץ...",
        "en": "Calculating sunrise times...",
    },
    "loading_body": {
        "he": "מאתר את מיקומך כדי לקבוע את שעת הזריחה",
        "en": "Finding your location to determine sunrise",
    },
    "no_sunrise_title": {
        "he": "הזן שעת נץ",
        "en": "Enter sunrise time",
    },
    "no_sunrise_body": {
        "he": "לא ניתן היה לקבוע את שעת הנץ אוטומטית.",
        "en": "Sunrise could not be determined automatically.",
    },
    "error_location": {
        "he": "נדרש אישור מיקום. ניתן להזין את שעת הנץ ידנית.",
        "en": "Location permission is required. You can enter sunrise manually.",
    },
    "error_api": {
        "he": "שגיאה בקבלת נתוני זריחה. נסה להזין ידנית.",
        "en": "Could not get sunrise data. Try entering it manually.",
    },
    "error_network": {
        "he": "שגיאה ברשת. בדוק את החיבור ונסה שוב.",
        "en": "Network error. Check your connection and try again.",
    },
    "error_format": {
        "he": "פורמט שעה לא תקין",
        "en": "Invalid time format",
    },
    "stage_Opening": {
        "he": "פתיחה",
        "en": "Opening",
    },
    "stage_Thanksgiving": {
        "he": "הודו",
        "en": "Thanksgiving",
    },
    "stage_Praised": {
        "he": "ישתבח",
        "en": "Praised",
    },
    "stage_Hear": {
        "he": "שמע",
        "en": "Hear",
    },
    "stage_Truth": {
        "he": "אמת",
        "en": "Truth",
    },
    "stage_Sunrise": {
        "he": "נץ",
        "en": "Sunrise",
    },
}

RTL_LANGS = frozenset({"he"})


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def stage_label(name: str, lang: str) -> str:
    """Display name for a stage. Built-in stages are translated; user names pass through."""
    entry = _STRINGS.get(f"stage_{name}")
    if entry is None:
        return name
    return entry.get(lang) or name


def text_direction(lang: str) -> str:
    return "rtl" if lang in RTL_LANGS else "ltr"
