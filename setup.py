# setup.py
from setuptools import setup, find_packages

setup(
    name="aeo_scout",
    version="0.1.0",
    description="AEO Scout: аудит веб-страницы на готовность к answer-engine",
    packages=find_packages(include=["aeo_scout", "aeo_scout.*"]),
    package_data={"aeo_scout.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "lxml_html_clean>=0.1",
        "readability-lxml>=0.8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
        "python-dateutil>=2.8",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "aeo-scout=aeo_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
