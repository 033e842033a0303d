"""Display names for stored category and source codes.

Codes missing from a table are shown as-is.
"""

CATEGORY_LABELS = {
    "note": "Note",
    "reminder": "Reminder",
    "event": "Event",
    "task": "Task",
    "todo": "Task",
}

SOURCE_LABELS = {
    "apple-shortcuts-dictation": "Apple Shortcuts Dictation",
    "test-dictation": "Test Dictation",
}


def category_label(category: str | None) -> str:
    if category is None:
        return ""
    code = category.lower()
    return CATEGORY_LABELS.get(code, code)


def source_label(source: str | None) -> str:
    if source is None:
        return ""
    return SOURCE_LABELS.get(source, source)
