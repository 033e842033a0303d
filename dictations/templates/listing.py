"""HTML page listing a user's recent dictations."""

from datetime import datetime, timezone
from html import escape

from dictations.models.labels import category_label, source_label
from dictations.models.schemas import DictationRecord

_STYLE = """
    body { font-family: sans-serif; margin: 2rem; }
    h1 { color: #333; }
    .entry { margin-bottom: 1.5rem; padding: 1rem; border: 1px solid #ccc; border-radius: 8px; background: #f9f9f9; }
    .timestamp { font-size: 0.9em; color: #666; }
    .metadata { font-size: 0.9em; color: #666; margin-top: 0.5rem; }
    .text { margin-top: 0.5rem; }
"""


def format_timestamp(timestamp_ms: int | None, tz: timezone = timezone.utc) -> str:
    """``M/D/YYYY, h:mm:ss AM`` in ``tz``; empty when there is no timestamp.

    Timestamps outside the representable range render as ``Invalid Date``.
    """
    if timestamp_ms is None:
        return ""
    try:
        local = datetime.fromtimestamp(timestamp_ms / 1000, tz)
    except (ValueError, OverflowError, OSError):
        return "Invalid Date"
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _render_entry(entry: DictationRecord, tz: timezone) -> str:
    return f"""
    <div class="entry">
      <div class="timestamp">{format_timestamp(entry.timestamp, tz)}</div>
      <div class="text">{escape(entry.text)}</div>
      <div class="metadata">Category: {escape(category_label(entry.category))}</div>
      <div class="metadata">Source: {escape(source_label(entry.source))}</div>
    </div>"""


def render_listing(user: str, entries: list[DictationRecord], tz: timezone = timezone.utc) -> str:
    name = escape(user)
    if entries:
        count_line = f"<p>Found {len(entries)} dictations.</p>"
    else:
        count_line = "<p>No dictations found.</p>"
    body = "".join(_render_entry(e, tz) for e in entries)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{name}'s Recent Dictations</title>
  <style>{_STYLE}</style>
</head>
<body>
  <h1>Latest Dictations for "{name}"</h1>
  {count_line}
  {body}
</body>
</html>
"""
