from setuptools import find_packages, setup

setup(
    name="qrhandshake",
    version="0.0.0",
    packages=find_packages(include=["qrhandshake", "qrhandshake.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "cryptography",
        "pydantic>=2",
        "click",
        "qrcode[pil]",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "qrhandshake=qrhandshake.cli:cli",
        ],
    },
)
