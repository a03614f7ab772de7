from setuptools import setup, find_namespace_packages

CORE_DEPS = [
    "requests",
    "beautifulsoup4",
    "python-dotenv",
    "colorama",
]

TEST_DEPS = [
    "pytest",
]

setup(
    name="reelfetch",
    version="0.1.0",
    description="Resolve Facebook and Instagram posts to direct media links",
    packages=find_namespace_packages(include=["reelfetch", "reelfetch.*"]),
    python_requires=">=3.8",
    install_requires=CORE_DEPS,
    extras_require={
        "test": TEST_DEPS,
    },
    entry_points={
        "console_scripts": [
            "reelfetch=reelfetch.main:main",
        ],
    },
)
