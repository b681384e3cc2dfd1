from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from boto3.dynamodb.types import TypeDeserializer

deserializer = TypeDeserializer()

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Timestamp:
    """Document-store timestamp stored as seconds plus nanoseconds since the epoch."""

    seconds: int
    nanoseconds: int = 0

    def to_datetime(self) -> datetime:
        return EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanoseconds // 1000)

    @classmethod
    def from_value(cls, value):
        # Exported Firestore timestamps arrive as {"seconds": N, "nanoseconds": N}
        if isinstance(value, dict) and set(value) == {"seconds", "nanoseconds"}:
            return cls(int(value["seconds"]), int(value["nanoseconds"]))
        return value


def is_insert(record) -> bool:
    return record.get("eventName") == "INSERT"


def record_key(record):
    keys = record.get("dynamodb", {}).get("Keys", {})
    return ",".join(str(deserializer.deserialize(v)) for v in keys.values())


def new_image(record) -> dict:
    """Decode the typed NewImage of a stream record into plain Python values."""
    image = record.get("dynamodb", {}).get("NewImage") or {}
    document = {key: deserializer.deserialize(value) for key, value in image.items()}
    if "createdAt" in document:
        document["createdAt"] = Timestamp.from_value(document["createdAt"])
    return document
