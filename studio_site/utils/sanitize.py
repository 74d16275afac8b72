"""
HTML escaping for user-supplied text rendered into outbound email.
"""

# Ampersand must be replaced first so produced entities are not re-escaped
_HTML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(content: str) -> str:
    """
    Replace & < > " ' with their entities.

    Every user-supplied string (name, email, client key, message, honeypot)
    goes through this before it is concatenated into HTML.
    """
    if not content:
        return ""

    for char, entity in _HTML_ENTITIES:
        content = content.replace(char, entity)
    return content


def escape_multiline(content: str) -> str:
    """Escape, then turn newlines into <br/> so paragraphs survive in HTML."""
    return escape_html(content).replace("\r\n", "\n").replace("\n", "<br/>")
