import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    name="delegation-types",
    version="0.1.0",
    description="Delegation, caveat and permission context types of the delegation framework",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.10",
    packages=[
        "delegation_base_types",
        "delegation_base_types.tests",
        "delegation_exceptions",
        "delegation_types",
        "delegation_types.tests",
        "config",
        "config.tests",
        "cli",
        "cli.tests",
    ],
    py_modules=["logger"],
    install_requires=[
        "pydantic>=2.10,<3",
        "pycryptodome>=3.20,<4",
        "eth-abi>=5.1,<6",
        "eth-utils>=5,<6",
        "click>=8.2,<9",
        "PyYAML>=6,<7",
    ],
    extras_require={
        "test": [
            "pytest>=8,<9",
        ],
    },
    entry_points={
        "console_scripts": [
            "delegation = cli.delegation:delegation",
        ],
    },
)
