from setuptools import setup, find_packages

setup(
    name="notedex",
    version="0.1.0",
    packages=find_packages(include=["notedex", "notedex.*"]),
    include_package_data=True,
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0.1",
        "python-frontmatter>=1.0.0",
        "aiofiles>=23.2.1",
        "aiohttp>=3.9.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "notedex=notedex.cli:main",
        ],
    },
    python_requires=">=3.11",
)
