from setuptools import find_packages, setup

setup(
    name="octrakit",
    version="0.0.0",
    packages=find_packages(include=["octrakit", "octrakit.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "cryptography",
        "requests",
        "click",
        "base58",
    ],
    extras_require={
        "test": [
            "pytest",
            "fastapi",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "octrakit=octrakit.cli:cli",
        ],
    },
)
