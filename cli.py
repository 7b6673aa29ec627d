from reader_publish.config import PublishConfig
from reader_publish.lambdas.common import API_KEY_HEADER
from reader_publish.lambdas.publish_summary.app import PublishHandler
from reader_publish.services.blob_builder import object_key
from reader_publish.utils.s3_handler import S3Handler
import json
import argparse
import sys


# run pip install -e .
# settings come from the same env vars as the deployed function
def _load_json(filename: str) -> dict:
    with open(filename, 'r', encoding='utf-8') as f:
        return json.load(f)


def publish_record(args):
    """
    run a record file through the publish pipeline and print the response
    """
    try:
        body = _load_json(args.file)
    except (OSError, ValueError) as e:
        print(f"An error occurred reading {args.file}: {e}")
        sys.exit(1)

    config = PublishConfig.from_env()
    api_key = args.api_key or config.api_key
    handler = PublishHandler(config)
    response = handler.handle('POST', {API_KEY_HEADER: api_key}, body)

    print(json.dumps(json.loads(response['body']), indent=2, ensure_ascii=False))
    if not 200 <= response['statusCode'] < 300:
        sys.exit(1)


def check_exists(args):
    """
    report whether a record's summary object is already in the bucket
    """
    config = PublishConfig.from_env()
    key = object_key(args.record_id)
    try:
        present = S3Handler(config.storage).exists(key)
    except Exception as e:
        print(f"An error occurred checking {key}: {e}")
        sys.exit(1)

    print(f"{config.cdn_base_url}/{key}: {'present' if present else 'missing'}")
    if not present:
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        prog='rpublish',
        description='Publish reader summaries to object storage and '
        'check what has already been published'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    publish_parser = subparsers.add_parser(
        'publish',
        help='Publish a summary record from a JSON file'
    )
    publish_parser.add_argument('file', help='Path to the record JSON file')
    publish_parser.add_argument(
        '--api-key',
        help='API key to send (default: PUBLISH_API_KEY)'
    )
    publish_parser.set_defaults(func=publish_record)

    exists_parser = subparsers.add_parser(
        'exists',
        help='Check whether a record is already published'
    )
    exists_parser.add_argument('record_id', help='Record id to look up')
    exists_parser.set_defaults(func=check_exists)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # execute the passed function
    args.func(args)


if __name__ == '__main__':
    main()
