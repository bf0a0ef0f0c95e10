from setuptools import setup, find_packages

setup(
    name="value-validation-lib",
    version="0.1.0",
    description="Composable, stateless value validators with a strict e-mail grammar",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
