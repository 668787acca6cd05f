from setuptools import setup, find_packages

# Runtime dependencies
install_requires = [
    "colorama>=0.4.6",
    "jsonschema>=4.19.0",
    # Comment-preserving edits of an existing config.toml
    "tomlkit>=0.12.0",
    # tomllib is part of the standard library from 3.11 on
    "tomli>=2.0.1; python_version < '3.11'",
]

# Development dependencies
extras_require = {
    'dev': [
        'pytest>=7.4.0',
        'pytest-cov>=4.1.0',
        'black>=23.7.0',
        'isort>=5.12.0',
        'mypy>=1.4.1',
        'flake8>=6.1.0',
    ],
    'test': [
        'pytest>=7.4.0',
        'pytest-cov>=4.1.0',
    ],
}

setup(
    name="zcf",
    version="1.0.0",
    author="Lucas Richert",
    license='GNU GPLv3',
    author_email="info@lucasrichert.tech",
    description="Persistent TOML preferences store for zcf with legacy JSON migration",
    packages=find_packages(include=["zcf", "zcf.*"]),
    python_requires='>=3.9',
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "zcf=zcf.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.9",
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
)
