from setuptools import setup, find_packages

setup(
    name="sendgrid-kit",
    version="0.1.0",
    description="Typed client and CLI for the SendGrid v3 mail send and email validation APIs",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "email-validator>=2.0.0",
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "requests>=2.28.0",
        "urllib3>=1.26.0",
        "rich>=12.0.0",
        "PyYAML>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sendgrid-kit=sendgrid_kit.cli:main",
        ],
    },
)
