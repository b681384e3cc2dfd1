import os

from aws_lambda_powertools import Logger

import contact_email
import mail_config
import stream_records
from contact_profiles import FailurePolicy, NotificationProfile, get_profile
from mail_transport import MailTransportError, SmtpTransport

logger = Logger(service="contact-notifier")

PROFILE = get_profile(os.environ["NOTIFIER_PROFILE"])
MAIL = mail_config.load()
smtp_transport = SmtpTransport(MAIL)


def on_contact_created(document, profile: NotificationProfile, transport, sender: str) -> None:
    email = contact_email.build_email(profile, document, sender)
    recipients = " y ".join(email.to)

    try:
        transport.send(email)
    except MailTransportError:
        logger.exception(f"❌ Error enviando correo a {recipients}")
        if profile.failure_policy is FailurePolicy.RAISE:
            raise
        return

    logger.info(f"✅ Correo enviado correctamente a {recipients}")


@logger.inject_lambda_context(clear_state=True)
def lambda_handler(event, context):
    handled = 0
    for record in event.get("Records", []):
        if not stream_records.is_insert(record):
            logger.debug(f"⚠️ Skipping {record.get('eventName')} event for {stream_records.record_key(record)}")
            continue

        logger.append_keys(collection=PROFILE.collection, contact_id=stream_records.record_key(record))
        on_contact_created(stream_records.new_image(record), PROFILE, smtp_transport, MAIL.sender)
        handled += 1

    return {"status": "contact notifications handled", "handled": handled}
