from setuptools import setup, find_packages
import re

# Read version from __init__.py
with open("apkgen/__init__.py", encoding="utf-8") as f:
    content = f.read()
    version_match = re.search(r"__version__\s*=\s*['\"]([^'\"]+)['\"]", content)
    if not version_match:
        raise RuntimeError("Unable to find version string in apkgen/__init__.py")
    version = version_match.group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="apkgen",
    version=version,
    description="An HTTP service that builds Android WebView APKs from a template project.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["apkgen", "apkgen.*"], exclude=["apkgen.test", "apkgen.test.*"]),
    package_data={
        "apkgen": [
            "templates/android-webview/*",
            "templates/android-webview/**/*",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "fastapi[all]>=0.100.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "click>=8.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "apkgen=apkgen.cli.main:cli",
        ],
    },
)
