import os
from dataclasses import dataclass, field

import boto3

PLACEHOLDERS = {"", "app_password", "change-me", "changeme"}


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class MailConfig:
    user: str
    password: str = field(repr=False)
    host: str = "smtp.gmail.com"
    port: int = 465
    sender_name: str = "GEODOS"

    @property
    def sender(self) -> str:
        return f"{self.sender_name} <{self.user}>"


def _required(environ, key):
    value = (environ.get(key) or "").strip()
    if value.lower() in PLACEHOLDERS:
        return None
    return value


def _password_from_ssm(parameter_name, ssm_client=None):
    ssm = ssm_client or boto3.client("ssm")
    response = ssm.get_parameter(Name=parameter_name, WithDecryption=True)
    return response["Parameter"]["Value"]


def load(environ=None, ssm_client=None) -> MailConfig:
    """Read the mail relay settings, failing fast when a credential is missing.

    The password comes from MAIL_PASS, or from the SSM SecureString named by
    MAIL_PASS_PARAMETER when MAIL_PASS is unset.
    """
    environ = os.environ if environ is None else environ

    user = _required(environ, "MAIL_USER")
    if not user:
        raise ConfigurationError("MAIL_USER is required to authenticate with the mail relay")

    password = _required(environ, "MAIL_PASS")
    parameter_name = _required(environ, "MAIL_PASS_PARAMETER")
    if not password and parameter_name:
        password = _password_from_ssm(parameter_name, ssm_client)
        if (password or "").strip().lower() in PLACEHOLDERS:
            password = None
    if not password:
        raise ConfigurationError("MAIL_PASS or MAIL_PASS_PARAMETER is required to authenticate with the mail relay")

    try:
        port = int(environ.get("MAIL_PORT") or 465)
    except ValueError:
        raise ConfigurationError(f"MAIL_PORT must be a port number, got {environ.get('MAIL_PORT')!r}") from None

    return MailConfig(
        user=user,
        password=password,
        host=environ.get("MAIL_HOST") or "smtp.gmail.com",
        port=port,
        sender_name=environ.get("MAIL_SENDER_NAME") or "GEODOS",
    )
