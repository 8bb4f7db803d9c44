"""Report delivery over SMTP using yagmail."""
import logging

import yagmail

from .config import settings


def send_email(subject: str, html_body: str) -> bool:
    """Mail a rendered report. Returns False (and only warns) when credentials are missing."""
    if not settings.email_configured():
        logging.warning("Email not sent: email credentials not fully configured.")
        return False
    yag = yagmail.SMTP(settings.src_mail, settings.src_pwd, port=587, smtp_starttls=True, smtp_ssl=False)
    try:
        yag.send(to=settings.dst_mail, subject=subject, contents=html_body)
    finally:
        yag.close()
    logging.info("Email sent to %s", settings.dst_mail)
    return True
