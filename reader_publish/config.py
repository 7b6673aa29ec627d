# reader_publish/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_CDN_BASE_URL = "https://cdn.etopodtema.com"
DEFAULT_BUCKET = "podtema-cdn"
DEFAULT_ENDPOINT_URL = "https://storage.yandexcloud.net"
DEFAULT_REGION = "ru-central1"
DEFAULT_NOTIFY_API_BASE_URL = "https://api.telegram.org"


# Object storage connection settings
@dataclass(frozen=True)
class StorageConfig:
    bucket: str = DEFAULT_BUCKET
    endpoint_url: Optional[str] = DEFAULT_ENDPOINT_URL
    region: str = DEFAULT_REGION
    access_key_id: Optional[str] = None       # None -> boto3 default credential chain
    secret_access_key: Optional[str] = None
    path_style: bool = True


# Operator alert channel; only built when both token and chat id are set
@dataclass(frozen=True)
class NotifierConfig:
    bot_token: str
    chat_id: str
    api_base_url: str = DEFAULT_NOTIFY_API_BASE_URL
    timeout: Optional[float] = None


@dataclass(frozen=True)
class PublishConfig:
    """Process-wide settings, built once at start-up and passed to each component."""
    api_key: Optional[str] = None
    cdn_base_url: str = DEFAULT_CDN_BASE_URL
    storage: StorageConfig = field(default_factory=StorageConfig)
    notifier: Optional[NotifierConfig] = None
    conditional_put: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PublishConfig":
        env = os.environ if environ is None else environ

        storage = StorageConfig(
            bucket=env.get("STORAGE_BUCKET") or DEFAULT_BUCKET,
            endpoint_url=env.get("STORAGE_ENDPOINT_URL") or DEFAULT_ENDPOINT_URL,
            region=env.get("STORAGE_REGION") or DEFAULT_REGION,
            access_key_id=env.get("STORAGE_ACCESS_KEY_ID") or None,
            secret_access_key=env.get("STORAGE_SECRET_ACCESS_KEY") or None,
        )

        notifier = None
        token = env.get("NOTIFY_BOT_TOKEN")
        chat_id = env.get("NOTIFY_CHAT_ID")
        if token and chat_id:
            notifier = NotifierConfig(
                bot_token=token,
                chat_id=chat_id,
                api_base_url=(env.get("NOTIFY_API_BASE_URL") or DEFAULT_NOTIFY_API_BASE_URL).rstrip("/"),
            )

        return cls(
            api_key=env.get("PUBLISH_API_KEY") or None,
            cdn_base_url=(env.get("CDN_BASE_URL") or DEFAULT_CDN_BASE_URL).rstrip("/"),
            storage=storage,
            notifier=notifier,
            conditional_put=env.get("CONDITIONAL_PUT", "false").lower() == "true",
        )


__all__ = ["StorageConfig", "NotifierConfig", "PublishConfig"]
