# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- HTTP ---
    "httpx>=0.27.0",  # Async client for the authentication service

    # --- CONFIGURATION ---
    "pydantic>=2.6.0",  # coerce_numbers_to_str on response models
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- TERMINAL DRIVER ---
    "rich>=13.0.0",
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest-asyncio==1.3.0",
        "pytest",
    ],
}

setup(
    name="onboard",
    version="0.3.0",
    description="Onboard|Auth - client authentication onboarding flow",
    packages=find_packages(include=["onboard", "onboard.*"]),
    include_package_data=True,
    package_data={"onboard.shared.config": ["settings/*.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "onboard=onboard.client.main:main",
        ],
    },
    python_requires=">=3.11",
)
