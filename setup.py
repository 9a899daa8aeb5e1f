from setuptools import find_packages, setup

setup(
    name="allure-publisher",
    version="0.1.0",
    packages=find_packages(
        include=[
            "publisher_common",
            "publisher_common.*",
            "publisher_ci",
            "publisher_ci.*",
            "publisher_uploader",
            "publisher_uploader.*",
            "publisher_cli",
            "publisher_cli.*",
        ]
    ),
    install_requires=[
        "requests>=2.31.0",
        "click>=8.1.0",
        "boto3>=1.28.0",
        "botocore>=1.31.0",
        "google-cloud-storage>=2.10.0",
        "google-api-core>=2.11.0",
        "google-auth>=2.22.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-xdist>=3.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "allure-publisher=publisher_cli.cli:main",
        ],
    },
    python_requires=">=3.11",
)
