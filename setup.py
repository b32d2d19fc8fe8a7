from typing import Sequence

from setuptools import find_packages, setup


def get_requirements() -> Sequence[str]:
    with open("requirements.txt") as fp:
        return [x.strip() for x in fp if x.strip() and not x.startswith("#")]


setup(
    name="tributary",
    version="0.1.0",
    license="Apache-2.0",
    description="Coalesces Kafka consumer offset commits into batched commit calls.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    package_data={"tributary": ["py.typed"]},
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=get_requirements(),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
