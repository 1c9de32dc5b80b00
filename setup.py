# setup.py
from setuptools import setup, find_packages

setup(
    name="vr_scout",
    version="0.1.0",
    description="Подбор пар reference/test URL для визуального регрессионного тестирования",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "vr-scout=vr_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
