from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class BodyFormat(str, Enum):
    HTML = "html"
    TEXT = "text"


class FailurePolicy(str, Enum):
    LOG = "log"  # the event counts as handled whatever the delivery outcome
    RAISE = "raise"  # the invocation fails and the stream redelivers it


class UnknownProfileError(ValueError):
    pass


@dataclass(frozen=True)
class NotificationProfile:
    name: str
    collection: str
    recipients: Tuple[str, ...]
    subject: str
    body_format: BodyFormat
    template: str
    fields: Tuple[str, ...]
    failure_policy: FailurePolicy


CONTACT_MESSAGES = NotificationProfile(
    name="contact_messages",
    collection="contact_messages",
    recipients=("info@geodos.es", "leoencero@gmail.com"),
    subject="📩 Nuevo mensaje de {name}",
    body_format=BodyFormat.HTML,
    template="""
<h2>Nuevo mensaje de contacto desde GEODOS</h2>
<p><b>Nombre:</b> {name}</p>
<p><b>Correo:</b> {email}</p>
<p><b>Mensaje:</b><br>{message}</p>
<hr/>
<p>📍 <b>Origen:</b> {source}</p>
<p>🕒 <b>Fecha:</b> {createdAt}</p>
""",
    fields=("name", "email", "message", "source"),
    failure_policy=FailurePolicy.LOG,
)

CONTACTS = NotificationProfile(
    name="contacts",
    collection="contacts",
    recipients=("admin@geodos.es",),
    subject="📩 Nuevo formulario de contacto: {name}",
    body_format=BodyFormat.TEXT,
    template="""Nuevo formulario de contacto desde GEODOS

Nombre: {name}
Correo: {email}
Tipo de proyecto: {projectType}

Mensaje:
{message}

Fecha: {createdAt}
""",
    fields=("name", "email", "message", "projectType"),
    failure_policy=FailurePolicy.RAISE,
)

PROFILES = {profile.name: profile for profile in (CONTACT_MESSAGES, CONTACTS)}


def get_profile(name: str) -> NotificationProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise UnknownProfileError(
            f"Unknown notification profile {name!r}, expected one of: {', '.join(sorted(PROFILES))}"
        ) from None
