import html

from contact_profiles import BodyFormat, NotificationProfile
from mail_transport import OutboundEmail

DEFAULT_NAME = "Contacto"


def created_at(value):
    if value is None:
        return None
    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return to_datetime()
    return value


def as_text(value) -> str:
    # Same rule as a `value || ""` template: anything falsy renders empty
    return str(value) if value else ""


def build_subject(profile: NotificationProfile, document: dict) -> str:
    return profile.subject.format(name=as_text(document.get("name")) or DEFAULT_NAME)


def build_body(profile: NotificationProfile, document: dict) -> str:
    values = {field: as_text(document.get(field)) for field in profile.fields}
    values["createdAt"] = as_text(created_at(document.get("createdAt")))
    if profile.body_format is BodyFormat.HTML:
        values = {key: html.escape(value) for key, value in values.items()}
    return profile.template.format(**values)


def build_email(profile: NotificationProfile, document: dict, sender: str) -> OutboundEmail:
    body = build_body(profile, document)
    return OutboundEmail(
        sender=sender,
        to=tuple(profile.recipients),
        subject=build_subject(profile, document),
        html=body if profile.body_format is BodyFormat.HTML else None,
        text=body if profile.body_format is BodyFormat.TEXT else None,
    )
