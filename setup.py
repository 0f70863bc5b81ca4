import re
from pathlib import Path
from setuptools import setup, find_packages


def read_readme() -> str:
    readme_path = Path(__file__).resolve().parent / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


def read_version() -> str:
    main_path = Path(__file__).resolve().parent / "fwxfpe" / "main.py"
    match = re.search(r'^\s*ENGINE_VERSION = "([^"]+)"', main_path.read_text(encoding="utf-8"), re.M)
    if not match:
        raise RuntimeError("ENGINE_VERSION not found in fwxfpe/main.py")
    return match.group(1)


setup(
    name="fwxfpe",
    version=read_version(),
    packages=find_packages(include=["fwxfpe", "fwxfpe.*"]),
    install_requires=[
        "cryptography>=41.0.0",
    ],
    python_requires=">=3.10",
    author="F1xGOD",
    author_email="f1xgodim@gmail.com",
    description="Format-preserving encryption of bounded integers over a Feistel network",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
