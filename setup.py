from setuptools import setup, find_packages

setup(
    name="ssm_edit",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "boto3>=1.26.0",
        "prompt_toolkit>=3.0.0",
        "ruamel.yaml>=0.17.0",
        "jsonschema>=3.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ssm-edit=ssm_edit.cli:main",
        ],
    },
    author="Jon Staples",
    author_email="example@example.com",
    description="An interactive terminal editor for AWS SSM Parameter Store",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
