import yagmail

from hikeclub.core.config import Settings, logger
from hikeclub.schemas.hike import ContactMessage

def send_contact_message(contact: ContactMessage, settings: Settings) -> bool:
    """
    Forwards a contact form message to the club inbox.
    Returns False when Gmail credentials are missing or delivery fails.
    """
    if not (settings.GMAIL_SENDER_EMAIL and settings.GMAIL_APP_PASSWORD):
        logger.error("Contact form delivery is disabled because Gmail credentials are not configured.")
        return False

    recipient = settings.CONTACT_RECIPIENT_EMAIL or settings.GMAIL_SENDER_EMAIL
    subject = f"Website message from {contact.name}"
    logger.info(f"Sending contact form message from {contact.email} to {recipient}")
    try:
        yag_client = yagmail.SMTP(
            user=settings.GMAIL_SENDER_EMAIL,
            password=settings.GMAIL_APP_PASSWORD
        )
        yag_client.send(
            to=recipient,
            subject=subject,
            contents=f"From: {contact.name} <{contact.email}>\n\n{contact.message}",
            headers={"Reply-To": contact.email},
        )
        logger.info("Contact form message sent successfully.")
        return True
    except Exception as e:
        logger.error(f"An unexpected error occurred while sending the contact message via yagmail: {e}", exc_info=True)
        return False
