from setuptools import setup, find_packages
from pathlib import Path

HERE = Path(__file__).parent


def parse_requirements(filename):
    return [line.strip() for line in (HERE / filename).read_text().splitlines()
            if line.strip() and not line.startswith("#")]


setup(
    name="nodered-build",
    version="0.1.0",
    description="Builds Node-RED node packages with an external web bundler",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["nrbuild", "nrbuild.*"]),
    install_requires=parse_requirements("requirements.txt"),
    extras_require={"dev": parse_requirements("requirements-test.txt")},
    entry_points={"console_scripts": ["nrbuild = nrbuild.__main__:main"]},
)
