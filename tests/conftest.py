"""Environment and fixtures shared by the stack and the notifier tests."""
import os
from dataclasses import dataclass
from typing import Optional

import pytest

# The notifier reads its configuration at import time
os.environ["NOTIFIER_PROFILE"] = "contact_messages"
os.environ["MAIL_USER"] = "info@geodos.es"
os.environ["MAIL_PASS"] = "test-app-password"
os.environ["AWS_DEFAULT_REGION"] = os.environ.get("AWS_DEFAULT_REGION") or "eu-west-1"


@dataclass
class LambdaContext:
    function_name: str = "contact-notifier"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:contact-notifier"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"
    tenant_id: Optional[str] = None


@pytest.fixture
def lambda_context():
    return LambdaContext()


def stream_record(image, key="abc123", event_name="INSERT"):
    return {
        "eventID": "1",
        "eventName": event_name,
        "eventSource": "aws:dynamodb",
        "dynamodb": {
            "Keys": {"id": {"S": key}},
            "NewImage": image,
            "StreamViewType": "NEW_IMAGE",
        },
    }


@pytest.fixture
def make_stream_record():
    return stream_record
