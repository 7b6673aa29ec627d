import boto3
import pytest
from moto import mock_aws

from reader_publish.config import PublishConfig, StorageConfig
from reader_publish.utils.s3_handler import S3Handler

from .helpers import API_KEY, BUCKET, CDN


@pytest.fixture
def aws_env(monkeypatch):
    # keep boto3 away from any real credentials
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")


@pytest.fixture
def s3_client(aws_env):
    with mock_aws():
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket=BUCKET)
        yield s3


@pytest.fixture
def storage_config():
    return StorageConfig(bucket=BUCKET, endpoint_url=None, region="us-east-1")


@pytest.fixture
def s3_handler(s3_client, storage_config):
    return S3Handler(storage_config, client=s3_client)


@pytest.fixture
def publish_config(storage_config):
    return PublishConfig(api_key=API_KEY, cdn_base_url=CDN, storage=storage_config)


@pytest.fixture
def record():
    return {
        "recordId": "recA1b2C3",
        "contentType": "article",
        "title": "Как спать лучше",
        "summaryHtml": "<p>Short summary</p>",
        "date": "2025-03-14",
        "translationHtml": "<p>Full translation</p>",
        "sourceName": "Nature",
        "sourceUrl": "https://nature.example/a",
        "originalTitle": "How to sleep better",
        "originalUrl": "https://orig.example/a",
        "authors": [{"name": "A. Author", "affiliation": "Somewhere"}, "B. Author"],
    }
