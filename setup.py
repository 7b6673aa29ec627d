from setuptools import setup, find_packages

setup(
    name="reader-publish",
    version="0.1.0",
    packages=find_packages(exclude=["reader_publish.tests"]),
    py_modules=["cli"],
    install_requires=[
        "boto3",
        "botocore",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "moto[s3]>=5",
        ],
    },
    entry_points={
        'console_scripts': [
            'rpublish=cli:main',
        ],
    },
    description="Idempotent publisher for reader summaries on S3-compatible storage",
    python_requires='>=3.8',
)
