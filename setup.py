from setuptools import setup, find_packages

setup(
    name="ppomppu-linkhub-core",
    version="0.1.0",
    description="뽐뿌 게시판 크롤링 → linkhub 등록 核心功能庫",
    packages=find_packages(exclude=["tests.*", "tests"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.8.0",
        "beautifulsoup4>=4.9.3",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "playwright>=1.40.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-asyncio>=0.14.0",
            "black>=22.0.0",
            "isort>=5.0.0",
            "mypy>=0.900",
        ],
    },
    entry_points={
        "console_scripts": [
            "ppomppu-linkhub=ppomppu_linkhub_core.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="crawler, ppomppu, linkhub",
)
