import re
from pathlib import Path

from setuptools import setup

install_requires = [
    "multidict>=4.5,<7.0",
    "yarl>=1.9,<2.0",
    "pydantic>=2.0,<3.0",
]

extras_require = {
    "httpx": ["httpx>=0.23"],
    "aiohttp": ["aiohttp>=3.8"],
    "test": [
        "aiohttp>=3.8",
        "httpx>=0.23",
        "pytest>=7.0",
        "pytest-aiohttp>=1.0",
        "pytest-asyncio>=0.21",
        "typing_extensions>=4.6",
    ],
}


def read(*parts):
    return Path(__file__).resolve().parent.joinpath(*parts).read_text().strip()


def read_version():
    regexp = re.compile(r"^__version__\W*=\W*\"([\d.abrc]+)\"")
    for line in read("http_decodable", "__init__.py").splitlines():
        match = regexp.match(line)
        if match is not None:
            return match.group(1)
    else:
        raise RuntimeError("Cannot find version in http_decodable/__init__.py")


with open("README.md", "r") as fh:
    long_description = fh.read()


setup(
    name="http-decodable",
    version=read_version(),
    description="Typed decoding of HTTP responses and request building helpers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms=["macOS", "POSIX", "Windows"],
    python_requires=">=3.11",
    project_urls={},
    license="MIT",
    packages=["http_decodable"],
    package_dir={"http_decodable": "./http_decodable"},
    package_data={"http_decodable": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
