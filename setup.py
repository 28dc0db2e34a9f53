"""打包配置。"""

from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent
VERSION = "0.1.0"


setup(
    name="spoontrack",
    version=VERSION,
    description="Spoon-theory daily energy tracker",
    python_requires=">=3.9",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    package_data={
        "spoontrack.ui": [
            "static/*",
            "static/styles/*",
            "static/scripts/*",
        ],
    },
    install_requires=[
        "fastapi",
        "uvicorn",
        "starlette",
        "pydantic>=2",
        "httpx",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
