"""
Builds the two emails sent for every accepted contact submission:
the owner notification and the submitter confirmation.
"""

from typing import Optional

from studio_site.domain.models import EmailMessage, ValidatedContact
from studio_site.utils.sanitize import escape_html, escape_multiline

SPAM_SUBJECT_PREFIX = "[Possible spam] "

_FONT_STACK = "ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial"
_MESSAGE_BOX_STYLE = "padding:12px 14px; border:1px solid #e5e7eb; border-radius:12px;"


def compose_owner_email(
    contact: ValidatedContact,
    to_email: str,
    from_email: str,
    client_key: str,
    elapsed_ms: Optional[int] = None,
    honeypot: str = "",
) -> EmailMessage:
    """
    Notification to the studio. Reply-To is the submitter so the owner can
    answer directly. A filled honeypot flags the subject and shows the value.
    """
    suspicious = bool(honeypot)
    subject = f"{SPAM_SUBJECT_PREFIX if suspicious else ''}New inquiry — {contact.name}"

    text = f"New inquiry from {contact.name}\nReply-to: {contact.email}\nIP: {client_key}"
    if elapsed_ms is not None:
        text += f"\nElapsed: {elapsed_ms}ms"
    if suspicious:
        text += f"\nHoneypot filled: {honeypot}"
    text += f"\n\n{contact.message}"

    details = (
        f"<strong>Name:</strong> {escape_html(contact.name)}<br/>\n"
        f"      <strong>Email:</strong> {escape_html(contact.email)}<br/>\n"
        f"      <strong>IP:</strong> {escape_html(client_key)}"
    )
    if elapsed_ms is not None:
        details += f"<br/><strong>Elapsed:</strong> {escape_html(str(elapsed_ms))}ms"
    if suspicious:
        details += (
            f'<br/><strong style="color:#b45309;">Honeypot filled:</strong> '
            f"{escape_html(honeypot)}"
        )

    html = f"""
<div style="font-family: {_FONT_STACK};">
  <h2 style="margin:0 0 12px;">New inquiry</h2>
  <p style="margin:0 0 12px;">{details}</p>
  <div style="{_MESSAGE_BOX_STYLE}">
    {escape_multiline(contact.message)}
  </div>
</div>
    """.strip()

    return EmailMessage(
        to=to_email,
        from_=from_email,
        subject=subject,
        reply_to=contact.email,
        text=text,
        html=html,
    )


def compose_confirmation_email(
    contact: ValidatedContact,
    owner_email: str,
    from_email: str,
    studio_name: str,
) -> EmailMessage:
    """Thank-you note to the submitter, echoing their message for their records."""
    subject = f"Thanks for reaching out — {studio_name}"

    text = (
        f"Hi {contact.name},\n\n"
        "Thanks for reaching out. We received your message and will reply as soon as possible.\n\n"
        f"— {studio_name}\n\n"
        "Your message:\n"
        f"{contact.message}\n"
    )

    html = f"""
<div style="font-family: {_FONT_STACK};">
  <p style="margin:0 0 12px;">Hi {escape_html(contact.name)},</p>
  <p style="margin:0 0 12px;">
    Thanks for reaching out. We received your message and will reply as soon as possible.
  </p>
  <p style="margin:0 0 12px;">— {escape_html(studio_name)}</p>
  <div style="margin-top:16px; {_MESSAGE_BOX_STYLE}">
    {escape_multiline(contact.message)}
  </div>
</div>
    """.strip()

    return EmailMessage(
        to=contact.email,
        from_=from_email,
        subject=subject,
        reply_to=owner_email,
        text=text,
        html=html,
    )
